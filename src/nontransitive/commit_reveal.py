from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from typing import Final

from protocol import EntropyUnavailable

KEY_BYTES: Final[int] = 32
DIGEST: Final[str] = "sha256"


@dataclass(frozen=True)
class Commitment:
    key: str
    tag: str


def new_key(num_bytes: int = KEY_BYTES) -> str:
    if num_bytes < KEY_BYTES:
        raise ValueError(f"key must be at least {KEY_BYTES} bytes, got {num_bytes}")
    try:
        raw = secrets.token_bytes(num_bytes)
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailable(f"secure random source failed: {exc}") from exc
    return raw.hex()


def compute_tag(key: str, message: str) -> str:
    # Keyed with the hex text itself so the revealed key can be pasted into any HMAC tool.
    return hmac.new(key.encode("utf-8"), message.encode("utf-8"), getattr(hashlib, DIGEST)).hexdigest()


def verify_tag(*, expected_tag: str, key: str, message: str) -> bool:
    return hmac.compare_digest(expected_tag, compute_tag(key, message))


def commit(move: str) -> Commitment:
    """Commit to ``move`` under a fresh single-use key."""
    key = new_key()
    return Commitment(key=key, tag=compute_tag(key, move))

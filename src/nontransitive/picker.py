from __future__ import annotations

import secrets
from typing import Sequence

from protocol import EmptyMoveSet, EntropyUnavailable


def pick_move(moves: Sequence[str]) -> str:
    if len(moves) == 0:
        raise EmptyMoveSet("cannot pick from an empty move set")
    try:
        index = secrets.randbelow(len(moves))
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailable(f"secure random source failed: {exc}") from exc
    return moves[index]

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "nontransitive"
sys.path.insert(0, str(APP_DIR))

import commit_reveal  # type: ignore[import-not-found]  # noqa: E402
from cli import MOVES_PROMPT, main  # type: ignore[import-not-found]  # noqa: E402
from commit_reveal import commit  # type: ignore[import-not-found]  # noqa: E402
from console import ScriptedIO  # type: ignore[import-not-found]  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_policy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NONTRANSITIVE_ON_INVALID", raising=False)


def test_play_with_argument_moves() -> None:
    io = ScriptedIO.from_lines(["1"])
    assert main(["play", "rock", "paper", "scissors"], io=io) == 0
    assert io.output[-1] in ("Win!", "Lose!", "Draw!")
    assert "Your move: rock" in io.output


def test_play_exit_token() -> None:
    io = ScriptedIO.from_lines(["0"])
    assert main(["play", "rock", "paper", "scissors"], io=io) == 0
    assert not any(line.startswith("HMAC key:") for line in io.output)


def test_play_prompts_for_moves() -> None:
    io = ScriptedIO.from_lines(["rock paper scissors lizard spock", "5"])
    assert main(["play"], io=io) == 0
    assert io.output[0] == MOVES_PROMPT
    assert "5 - spock" in io.output
    assert "Your move: spock" in io.output


@pytest.mark.parametrize(
    "moves, reason",
    [
        (["a", "b"], "at least 3"),
        (["a", "b", "c", "d"], "odd"),
        (["x", "y", "x"], "repeated"),
    ],
)
def test_invalid_moves_exit_before_round(moves: list[str], reason: str) -> None:
    io = ScriptedIO.from_lines(["1"])
    with pytest.raises(SystemExit) as exc:
        main(["play", *moves], io=io)
    assert str(exc.value.code).startswith("Invalid moves:")
    assert reason in str(exc.value.code)
    assert io.output == []


def test_invalid_prompted_moves_exit_before_round() -> None:
    io = ScriptedIO.from_lines(["rock paper"])
    with pytest.raises(SystemExit, match="Invalid moves"):
        main(["play"], io=io)
    assert io.output == [MOVES_PROMPT]


def test_no_prompted_moves() -> None:
    with pytest.raises(SystemExit, match="no moves entered"):
        main(["play"], io=ScriptedIO())


def test_on_invalid_exit_flag() -> None:
    io = ScriptedIO.from_lines(["nope", "1"])
    assert main(["play", "--on-invalid", "exit", "a", "b", "c"], io=io) == 1


def test_on_invalid_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NONTRANSITIVE_ON_INVALID", "exit")
    io = ScriptedIO.from_lines(["7"])
    assert main(["play", "a", "b", "c"], io=io) == 1


def test_unknown_on_invalid_policy() -> None:
    with pytest.raises(SystemExit, match="--on-invalid"):
        main(["play", "--on-invalid", "ignore", "a", "b", "c"], io=ScriptedIO())


def test_entropy_failure_exits_cleanly(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(num_bytes: int) -> bytes:
        raise OSError("entropy pool closed")

    monkeypatch.setattr(commit_reveal.secrets, "token_bytes", broken)
    with pytest.raises(SystemExit, match="entropy pool closed"):
        main(["play", "a", "b", "c"], io=ScriptedIO.from_lines(["1"]))


def test_table_command() -> None:
    io = ScriptedIO()
    assert main(["table", "rock", "paper", "scissors"], io=io) == 0
    assert " User/Computer | rock  | paper | scissors" in io.text


def test_verify_command() -> None:
    c = commit("lizard")
    ok = ScriptedIO()
    assert main(["verify", "--key", c.key, "--tag", c.tag, "lizard"], io=ok) == 0
    assert ok.output == ["Commitment verified: yes"]

    bad = ScriptedIO()
    assert main(["verify", "--key", c.key, "--tag", c.tag, "spock"], io=bad) == 1
    assert bad.output == ["Commitment verified: NO"]


class _InterruptedIO(ScriptedIO):
    def read_line(self, prompt: str) -> str:
        if prompt != MOVES_PROMPT and not self.lines:
            self.output.append(prompt)
            raise KeyboardInterrupt
        return super().read_line(prompt)


def test_ctrl_c_at_move_prompt_exits_quietly() -> None:
    io = _InterruptedIO()
    assert main(["play", "a", "b", "c"], io=io) == 0
    assert io.output[-1] == "Game interrupted."
    assert not any(line.startswith("HMAC key:") for line in io.output)
    assert not any(line.startswith("Computer move:") for line in io.output)

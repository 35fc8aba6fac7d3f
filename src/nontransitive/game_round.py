from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Literal, Sequence

from commit_reveal import Commitment, commit, compute_tag, verify_tag
from console import LineIO
from picker import pick_move
from protocol import InvalidMoveSelection, MoveSet, Outcome, determine_winner
from results_table import help_text

RoundStatus = Literal["idle", "committed", "awaiting_player_move", "resolved", "done", "aborted"]
AbortReason = Literal["player_exit", "invalid_selection", "end_of_input"]
InvalidPolicy = Literal["reprompt", "exit"]

INVALID_POLICIES: tuple[str, ...] = ("reprompt", "exit")
HELP_TOKENS = ("?", "help")
PROMPT = "Enter your move: "

# ASCII digits only; int() alone would also take "1_0" and non-Latin numerals.
_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Selection:
    kind: Literal["exit", "help", "move"]
    number: int = 0


def parse_selection(raw: str, num_moves: int) -> Selection:
    """Turn one line of player input into an exit, help, or 1-based move choice.

    Raises InvalidMoveSelection for non-numeric or out-of-range input.
    """
    token = raw.strip()
    if token.lower() in HELP_TOKENS:
        return Selection(kind="help")
    if not _NUMBER_RE.fullmatch(token):
        raise InvalidMoveSelection(f"{token!r} is not a move number")
    number = int(token)
    if number == 0:
        return Selection(kind="exit")
    if not 1 <= number <= num_moves:
        raise InvalidMoveSelection(f"move number must be between 1 and {num_moves}, got {number}")
    return Selection(kind="move", number=number)


@dataclass
class Round:
    move_set: MoveSet
    computer_move: str | None = None
    commitment: Commitment | None = None
    player_move: str | None = None
    outcome: Outcome | None = None
    status: RoundStatus = "idle"
    abort_reason: AbortReason | None = None


class RoundController:
    def __init__(
        self,
        move_set: MoveSet,
        io: LineIO,
        *,
        on_invalid: InvalidPolicy = "reprompt",
        pick: Callable[[Sequence[str]], str] = pick_move,
        commit_to: Callable[[str], Commitment] = commit,
    ) -> None:
        if on_invalid not in INVALID_POLICIES:
            raise ValueError(f"on_invalid must be one of {'|'.join(INVALID_POLICIES)}, got {on_invalid!r}")
        self.io = io
        self.on_invalid = on_invalid
        self._pick = pick
        self._commit_to = commit_to
        self.round = Round(move_set=move_set)

    @property
    def status(self) -> RoundStatus:
        return self.round.status

    def start(self) -> str:
        """Pick and commit to the computer's move; return only the tag."""
        self._require("idle")
        computer_move = self._pick(self.round.move_set.moves)
        self.round.computer_move = computer_move
        self.round.commitment = self._commit_to(computer_move)
        self.round.status = "committed"
        return self.round.commitment.tag

    def play(self) -> Round:
        if self.round.status == "idle":
            self.start()
        self._require("committed")
        _, commitment = self._committed()

        self._show_moves()
        self.io.write_line(f"HMAC: {commitment.tag}")
        self.round.status = "awaiting_player_move"

        while self.round.status == "awaiting_player_move":
            try:
                raw = self.io.read_line(PROMPT)
            except EOFError:
                self.abort("end_of_input")
                break
            try:
                selection = parse_selection(raw, len(self.round.move_set))
            except InvalidMoveSelection as exc:
                self.io.write_line(f"Invalid input: {exc}")
                if self.on_invalid == "exit":
                    self.abort("invalid_selection")
                continue

            if selection.kind == "exit":
                self.abort("player_exit")
            elif selection.kind == "help":
                self.io.write_line(help_text(self.round.move_set))
                self._show_moves()
            else:
                player_move = self.round.move_set.by_number(selection.number)
                self._report(player_move, self._resolve(player_move))
        return self.round

    def abort(self, reason: AbortReason) -> None:
        if self.round.status in ("done", "aborted"):
            raise RuntimeError(f"round already finished ({self.round.status})")
        self.round.status = "aborted"
        self.round.abort_reason = reason

    def _committed(self) -> tuple[str, Commitment]:
        computer_move, commitment = self.round.computer_move, self.round.commitment
        if computer_move is None or commitment is None:
            raise RuntimeError(f"round is {self.round.status} but has no commitment")
        return computer_move, commitment

    def _resolve(self, player_move: str) -> Outcome:
        self._require("awaiting_player_move")
        computer_move, _ = self._committed()
        outcome = determine_winner(self.round.move_set, player_move, computer_move)
        self.round.player_move = player_move
        self.round.outcome = outcome
        self.round.status = "resolved"
        return outcome

    def _report(self, player_move: str, outcome: Outcome) -> None:
        self._require("resolved")
        computer_move, commitment = self._committed()
        verified = verify_tag(expected_tag=commitment.tag, key=commitment.key, message=computer_move)

        self.io.write_line(f"Your move: {player_move}")
        self.io.write_line(f"HMAC key: {commitment.key}")
        self.io.write_line(f"Computer move: {computer_move}")
        self.io.write_line(f"Your move HMAC: {compute_tag(commitment.key, player_move)}")
        self.io.write_line(f"Commitment verified: {'yes' if verified else 'NO'}")
        self.io.write_line(outcome)
        self.round.status = "done"

    def _show_moves(self) -> None:
        self.io.write_line("Available moves:")
        for number, move in enumerate(self.round.move_set, start=1):
            self.io.write_line(f"{number} - {move}")
        self.io.write_line("0 - exit")
        self.io.write_line("? - help")

    def _require(self, status: RoundStatus) -> None:
        if self.round.status != status:
            raise RuntimeError(f"round is {self.round.status}, expected {status}")


def exit_code(round_: Round) -> int:
    if round_.status == "done":
        return 0
    if round_.status == "aborted":
        return 1 if round_.abort_reason == "invalid_selection" else 0
    raise ValueError(f"round has not finished ({round_.status})")

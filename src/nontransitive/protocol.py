from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator, Literal

Outcome = Literal["Win!", "Lose!", "Draw!"]

WIN: Outcome = "Win!"
LOSE: Outcome = "Lose!"
DRAW: Outcome = "Draw!"

MIN_MOVES = 3


class GameError(Exception):
    pass


class InputValidationError(GameError):
    """Move set has too few moves, an even count, or duplicates."""


class InvalidMoveSelection(GameError):
    """Player's choice is not a number or is out of range."""


class EntropyUnavailable(GameError):
    """The secure random source could not supply bytes."""


class EmptyMoveSet(GameError):
    pass


def validate_moves(tokens: Iterable[str]) -> tuple[str, ...]:
    moves = tuple(tokens)
    if len(moves) < MIN_MOVES:
        raise InputValidationError(f"at least {MIN_MOVES} moves are required, got {len(moves)}")
    if len(moves) % 2 == 0:
        raise InputValidationError(f"the number of moves must be odd, got {len(moves)}")
    duplicates = [move for move, count in Counter(moves).items() if count > 1]
    if duplicates:
        raise InputValidationError("moves must be distinct, repeated: " + ", ".join(duplicates))
    return moves


@dataclass(frozen=True)
class MoveSet:
    # Order is significant: each move is beaten by the one after it, cyclically.
    moves: tuple[str, ...]

    def __post_init__(self) -> None:
        validate_moves(self.moves)

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "MoveSet":
        return cls(moves=tuple(tokens))

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[str]:
        return iter(self.moves)

    def __getitem__(self, index: int) -> str:
        return self.moves[index]

    def __contains__(self, move: object) -> bool:
        return move in self.moves

    def index_of(self, move: str) -> int:
        try:
            return self.moves.index(move)
        except ValueError:
            raise ValueError(f"unknown move: {move!r}") from None

    def by_number(self, number: int) -> str:
        """Return the move shown to the player as ``number`` (1-based)."""
        if not 1 <= number <= len(self.moves):
            raise IndexError(f"move number must be in 1..{len(self.moves)}, got {number}")
        return self.moves[number - 1]

    def beats(self, move: str) -> str:
        i = self.index_of(move)
        return self.moves[(i + 1) % len(self.moves)]

    def beats_relation(self) -> dict[str, str]:
        return {move: self.beats(move) for move in self.moves}


def parse_move_line(line: str) -> MoveSet:
    return MoveSet.from_tokens(line.split())


def determine_winner(move_set: MoveSet, a: str, b: str) -> Outcome:
    """Resolve ``a`` against ``b`` from the perspective of ``a``."""
    if move_set.beats(b) == a:
        return WIN
    if move_set.beats(a) == b:
        return LOSE
    return DRAW

from __future__ import annotations

from typing import Callable

from protocol import MoveSet, Outcome, determine_winner

HEADER_CORNER = " User/Computer"

ResultsMatrix = tuple[tuple[str, ...], ...]
Resolver = Callable[[MoveSet, str, str], Outcome]

INSTRUCTIONS = (
    "This table shows the results for the user.\n"
    'To find out who wins, locate your move in the "User" column,\n'
    "then go to the corresponding row and column to see the result."
)


def build_matrix(move_set: MoveSet, resolver: Resolver = determine_winner) -> ResultsMatrix:
    rows: list[tuple[str, ...]] = [(HEADER_CORNER, *move_set.moves)]
    for row_move in move_set:
        rows.append((row_move, *(resolver(move_set, row_move, col_move) for col_move in move_set)))
    return tuple(rows)


def format_table(matrix: ResultsMatrix) -> str:
    widths = [max(len(row[col]) for row in matrix) for col in range(len(matrix[0]))]
    rule = "-+-".join("-" * w for w in widths)

    lines: list[str] = []
    for i, row in enumerate(matrix):
        if i == 1:
            lines.append(rule)
        lines.append(" | ".join(cell.ljust(widths[col]) for col, cell in enumerate(row)))
    lines.append(rule)
    return "\n".join(lines)


def help_text(move_set: MoveSet) -> str:
    return f"{INSTRUCTIONS}\n\nGame results (from the user's perspective):\n{format_table(build_matrix(move_set))}"

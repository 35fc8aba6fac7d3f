from __future__ import annotations

import argparse
import os

from commit_reveal import verify_tag
from console import ConsoleIO, LineIO
from game_round import INVALID_POLICIES, RoundController, exit_code
from protocol import EntropyUnavailable, InputValidationError, MoveSet, parse_move_line
from results_table import help_text

MOVES_PROMPT = "Enter moves (separated by spaces): "


def main(argv: list[str] | None = None, io: LineIO | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="nontransitive",
        description="Provably fair rock-paper-scissors over any odd number of moves.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play one round against the computer")
    play.add_argument("moves", nargs="*", help="Odd number (at least 3) of distinct moves; prompts if omitted")
    play.add_argument(
        "--on-invalid",
        default=_default_on_invalid(),
        help="What to do on a bad move number: reprompt|exit (env NONTRANSITIVE_ON_INVALID)",
    )

    table = sub.add_parser("table", help="Print the results table for a move set")
    table.add_argument("moves", nargs="+")

    verify = sub.add_parser("verify", help="Check a revealed key against a commitment tag")
    verify.add_argument("--key", required=True, help="Key revealed after the round")
    verify.add_argument("--tag", required=True, help="HMAC shown before you chose")
    verify.add_argument("move", help="Move the computer claims it played")

    args = parser.parse_args(argv)
    io = io if io is not None else ConsoleIO()

    if args.cmd == "verify":
        ok = verify_tag(expected_tag=args.tag.strip().lower(), key=args.key.strip(), message=args.move)
        io.write_line("Commitment verified: yes" if ok else "Commitment verified: NO")
        return 0 if ok else 1

    if args.cmd == "table":
        io.write_line(help_text(_load_moves(args.moves, io)))
        return 0

    if args.cmd == "play":
        if args.on_invalid not in INVALID_POLICIES:
            raise SystemExit(f"--on-invalid must be {'|'.join(INVALID_POLICIES)}")
        move_set = _load_moves(args.moves, io)
        controller = RoundController(move_set, io, on_invalid=args.on_invalid)
        try:
            return exit_code(controller.play())
        except EntropyUnavailable as exc:
            raise SystemExit(f"Error: {exc}")
        except KeyboardInterrupt:
            io.write_line("")
            io.write_line("Game interrupted.")
            return 0

    raise SystemExit("unhandled command")


def _load_moves(tokens: list[str], io: LineIO) -> MoveSet:
    try:
        if tokens:
            return MoveSet.from_tokens(tokens)
        try:
            line = io.read_line(MOVES_PROMPT)
        except (EOFError, KeyboardInterrupt):
            raise InputValidationError("no moves entered") from None
        return parse_move_line(line)
    except InputValidationError as exc:
        raise SystemExit(f"Invalid moves: {exc}")


def _default_on_invalid() -> str:
    return os.environ.get("NONTRANSITIVE_ON_INVALID", "reprompt").strip().lower()


if __name__ == "__main__":
    raise SystemExit(main())

"""CLI entry point: python -m dabble [show|check] ..."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console

from dabble.config import GameConfig, load_config
from dabble.core.parser import PlacementParser
from dabble.game.dictionary import WordDictionary
from dabble.game.session import SessionState, place_letter, submit
from dabble.puzzle.generator import generate_daily_puzzle
from dabble.render import build_puzzle_panel, format_result


def _load_game_config(path: Path | None) -> GameConfig:
    if path is None:
        return GameConfig()
    if not path.exists():
        print(f"Error: config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    return load_config(path)


def _generate(args: argparse.Namespace):
    config = _load_game_config(args.config)
    try:
        return generate_daily_puzzle(args.date, config), config
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def _cmd_show(args: argparse.Namespace, console: Console) -> None:
    puzzle, _ = _generate(args)
    if args.json:
        print(json.dumps(puzzle.to_dict(), indent=2))
        return
    console.print(build_puzzle_panel(puzzle))


def _cmd_check(args: argparse.Namespace, console: Console) -> int:
    puzzle, config = _generate(args)
    if not args.dict.exists():
        print(f"Error: word list not found: {args.dict}", file=sys.stderr)
        return 1
    dictionary = WordDictionary(args.dict).load()
    parser = PlacementParser()

    session = SessionState.start(puzzle)
    status = 0
    for n, raw in enumerate(args.tiles, 1):
        parsed = parser.parse(raw)
        if not parsed.success:
            console.print(f"[bold red]Submission {n}: {parsed.error}[/bold red]")
            return 1
        rack = session.rack
        try:
            for tile in parsed.tiles:
                rack = place_letter(rack, tile.letter, tile.row, tile.col)
        except ValueError as exc:
            console.print(f"[bold red]Submission {n}: {exc}[/bold red]")
            return 1
        session, result = submit(
            replace(session, rack=rack),
            dictionary,
            config.all_letters_bonus,
        )
        console.print(f"Submission {n}: ", format_result(result))
        if not result.valid:
            status = 2
            break

    if args.json:
        print(json.dumps(session.summary(), indent=2))
    else:
        console.print(build_puzzle_panel(puzzle, session.board))
        console.print(f"[bold]Score:[/bold] {session.total_score}")
    return status


def _add_puzzle_arguments(parser: argparse.ArgumentParser, default) -> None:
    parser.add_argument(
        "--date",
        default=default,
        help="Puzzle date as YYYY-MM-DD (default: today, UTC)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=default,
        help="Path to game YAML config file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False if default is None else default,
        help="Print JSON instead of a rendered board",
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="dabble",
        description="Deterministic daily word-placement puzzle",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging",
    )
    _add_puzzle_arguments(parser, default=None)
    # Subcommands accept the same options; SUPPRESS keeps them from
    # overwriting values given before the subcommand name
    common = argparse.ArgumentParser(add_help=False)
    _add_puzzle_arguments(common, default=argparse.SUPPRESS)

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("show", parents=[common], help="Print the day's puzzle")
    check = sub.add_parser(
        "check", parents=[common], help="Replay placements against the day's board"
    )
    check.add_argument(
        "--dict",
        type=Path,
        required=True,
        help="Word list file, one word per line",
    )
    check.add_argument(
        "--tiles",
        action="append",
        required=True,
        help='Placement JSON, e.g. \'{"tiles": [{"row": 4, "col": 4, "letter": "C"}]}\'; repeatable',
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    console = Console()

    if args.command == "check":
        sys.exit(_cmd_check(args, console))
    _cmd_show(args, console)


if __name__ == "__main__":
    main()

"""Autocomplete CLI: type a prefix, or replay a file of queries against the engine."""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from sidekick.autocomplete.engine import QuerySidekick
from sidekick.config.logging_config import setup_logging
from sidekick.config.settings import get_settings
from sidekick.preprocessing.normalizer import normalize_query


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query autocomplete tools.")
    parser.add_argument(
        "--log",
        type=Path,
        default=None,
        help="Historical query log (default: data/old_queries.txt).",
    )
    parser.add_argument("--no-cache", action="store_true", help="Disable the prefix cache.")
    sub = parser.add_subparsers(dest="command")

    suggest = sub.add_parser("suggest", help="Type a prefix and print the guesses.")
    suggest.add_argument("prefix", help="Prefix to type, one keystroke at a time.")

    replay = sub.add_parser("replay", help="Type every query of a file and send feedback.")
    replay.add_argument("queries", type=Path, help="File with one query per line.")

    return parser


def replay_queries(sidekick: QuerySidekick, path: Path) -> dict:
    """
    Type each query of *path* until it shows up among the guesses.

    Every query is then reported back through feedback, flagged correct
    if it was guessed before the last keystroke.
    """
    total = 0
    guessed = 0
    keystrokes = 0
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            query = normalize_query(line)
            if not query:
                continue
            total += 1
            hit = False
            for index, ch in enumerate(query):
                keystrokes += 1
                if query in sidekick.guess(ch, index):
                    hit = True
                    break
            guessed += hit
            sidekick.feedback(hit, query)

    return {
        "queries": total,
        "guessed": guessed,
        "keystrokes": keystrokes,
        "accuracy": round(guessed / total, 4) if total else 0.0,
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(log_dir=settings.logs_dir)

    if args.command is None:
        build_parser().print_help()
        return 1

    ac = settings.autocomplete
    if args.no_cache:
        ac = replace(ac, use_prefix_cache=False)

    sidekick = QuerySidekick(ac_settings=ac)
    sidekick.process_old_queries(args.log or settings.query_log_path)

    if args.command == "suggest":
        guesses: list[str] = []
        for index, ch in enumerate(args.prefix):
            guesses = sidekick.guess(ch, index)
        for rank, guess in enumerate(guesses, start=1):
            if guess:
                print(f"  {rank}. {guess}")

    elif args.command == "replay":
        summary = replay_queries(sidekick, args.queries)
        print(json.dumps(summary, indent=2))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

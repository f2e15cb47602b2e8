"""Recover a saved model response from a file or stdin.

Usage:
    python -m recovery.cli response.txt
    cat response.txt | python -m recovery.cli --backfill-week
"""

import argparse
import json
import logging
import sys

from .backfill import backfill_weekly_plan
from .recoverer import recover_json
from .repair import STACK, STRATEGIES


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Recover JSON from a truncated or wrapped LLM response.")
    parser.add_argument("path", nargs="?", help="Response file (reads stdin when omitted)")
    parser.add_argument("--strategy", choices=STRATEGIES, default=STACK, help="Closing strategy")
    parser.add_argument("--normalize-quotes", action="store_true", help="Rewrite single-quoted strings")
    parser.add_argument("--backfill-week", action="store_true", help="Copy existing days onto missing weekdays")
    parser.add_argument("--indent", type=int, default=None, help="Indent the printed JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.path:
        with open(args.path, encoding="utf-8") as handle:
            raw = handle.read()
    else:
        raw = sys.stdin.read()

    result = recover_json(raw, strategy=args.strategy, normalize_quotes=args.normalize_quotes)
    if not result.ok:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2), file=sys.stderr)
        return 1

    value = result.value
    if args.backfill_week and isinstance(value, dict):
        value = backfill_weekly_plan(value)

    print(json.dumps(value, ensure_ascii=False, indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())

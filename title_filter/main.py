"""Command line entry point for checking listing titles."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .config_loader import load_all_configs
from .regex_parser import PatternError
from .validators import filter_titles

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_CONFIG_ERROR = 2


def read_titles(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8") as f:
        return [line.rstrip("\n") for line in f if line.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check listing titles against the UEL filter settings")
    parser.add_argument("titles", nargs="*", help="Titles to check")
    parser.add_argument("--file", type=Path, help="Text file with one title per line")
    parser.add_argument("--card-set", help="Card set whose overrides are merged into the defaults")
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory holding uel_settings.yaml and card_sets.yaml (env: UEL_CONFIG_DIR)",
    )
    parser.add_argument("--debug", action="store_true", help="Log every diagnostic as it is found")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    debug = args.debug or os.getenv("UEL_DEBUG", "0") == "1"

    logging.basicConfig(
        level=logging.INFO if debug else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )

    titles = list(args.titles)
    if args.file:
        titles.extend(read_titles(args.file))
    if not titles:
        print("No titles given", file=sys.stderr)
        return EXIT_OK

    config_dir = args.config_dir or os.getenv("UEL_CONFIG_DIR", "config")
    try:
        configs = load_all_configs(config_dir)
        override = configs.override_for(args.card_set)
        results = filter_titles(titles, configs.rules, override, debug=debug)
    except (PatternError, KeyError, ValueError, OSError) as e:
        print(f"[ERROR] Invalid filter configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    rejected = 0
    for title, verdict in results:
        if verdict.is_valid:
            print(f"PASS {title}")
            continue
        rejected += 1
        print(f"FAIL {title}")
        for error in verdict.errors:
            print(f"  - {error}")

    return EXIT_REJECTED if rejected else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

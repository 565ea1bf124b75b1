"""
Run the incident analysis pipeline on a local CSV export from the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

from incident_analytics.services.analysis_service import (
    AnalysisInputError,
    UnknownColumnError,
    get_analysis_service,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Aggregate a maintenance incident CSV export.")
    parser.add_argument("path", type=Path, help="CSV export to analyse.")
    parser.add_argument(
        "--column",
        dest="column",
        default=None,
        help="Print the top values of this raw column instead of the full statistics.",
    )
    parser.add_argument(
        "--search",
        dest="search",
        default=None,
        help="Print matching records (paged) instead of the full statistics.",
    )
    parser.add_argument("--page", dest="page", type=int, default=1, help="Record page to print.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    service = get_analysis_service()
    try:
        content = service.decode(args.path.read_bytes())
    except OSError as exc:
        print(f"Cannot read {args.path}: {exc}", file=sys.stderr)
        return 1
    except AnalysisInputError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.column is not None:
        try:
            distribution = service.column_distribution(content, args.column)
        except UnknownColumnError as exc:
            print(json.dumps(exc.to_dict(), ensure_ascii=False, indent=2), file=sys.stderr)
            return 2
        payload: object = asdict(distribution)
    elif args.search is not None:
        payload = asdict(service.find_records(content, search=args.search, page=args.page))
    else:
        payload = asdict(service.analyze(content).statistics)

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

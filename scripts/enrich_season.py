#!/usr/bin/env python3
"""Fetch a TV season from TMDb and print the mapped entity as JSON."""

from __future__ import annotations

import argparse
import sys

from scripts._enrich_common import add_lookup_args, configure_logging, print_result
from tmdb_metadata.ingestion.season_metadata import resolve_and_map_season
from tmdb_metadata.models.lookup import LookupRequest
from tmdb_metadata.settings import load_settings
from tmdb_metadata.utils.cancellation import OperationCancelled


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="enrich_season",
        description="Fetch TMDb season metadata. --tmdb-id is the parent series id.",
    )
    add_lookup_args(parser)
    parser.add_argument("--season", type=int, required=True, help="Season number (0 for specials).")
    parser.add_argument("--series-name", default=None, help="Series name to search when --tmdb-id is missing.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.verbose)
    settings = load_settings()

    request = LookupRequest(
        display_name=args.name,
        existing_remote_id=args.tmdb_id,
        is_automated=args.automated,
        preferred_locale=args.language or settings.language,
        series_name=args.series_name,
    )

    try:
        result = resolve_and_map_season(request, args.season, settings=settings)
    except OperationCancelled:
        print("Cancelled.", file=sys.stderr)
        return 130
    except RuntimeError as exc:
        # TmdbClientError, or no TMDb credentials configured
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    return print_result(result)


if __name__ == "__main__":
    raise SystemExit(main())

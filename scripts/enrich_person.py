#!/usr/bin/env python3
"""Resolve a person on TMDb and print the mapped entity as JSON."""

from __future__ import annotations

import argparse
import sys

from scripts._enrich_common import add_lookup_args, configure_logging, print_result
from tmdb_metadata.ingestion.person_metadata import resolve_and_map_person, search_person_candidates
from tmdb_metadata.models.lookup import LookupRequest
from tmdb_metadata.settings import load_settings
from tmdb_metadata.utils.cancellation import OperationCancelled


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="enrich_person",
        description="Fetch TMDb person metadata for a library person.",
    )
    add_lookup_args(parser)
    parser.add_argument(
        "--candidates",
        action="store_true",
        help="List search previews instead of mapping a single person.",
    )
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
    )

    try:
        if args.candidates:
            for candidate in search_person_candidates(request, settings=settings):
                ids = ", ".join(f"{k}={v}" for k, v in candidate.provider_ids.items())
                print(f"{candidate.name}\t{ids}\t{candidate.image_url or ''}")
            return 0
        result = resolve_and_map_person(request, settings=settings)
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

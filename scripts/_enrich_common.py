from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, is_dataclass
from typing import Any

from tmdb_metadata.models.results import EnrichmentResult


def add_lookup_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", required=True, help="Display name the library already uses.")
    parser.add_argument("--tmdb-id", type=int, default=None, help="Known TMDb id, if any.")
    parser.add_argument("--language", default=None, help="Preferred metadata locale (default: TMDB_LANGUAGE).")
    parser.add_argument(
        "--automated",
        action="store_true",
        help="Behave like an automated refresh (no name search without an id).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _to_jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value


def print_result(result: EnrichmentResult) -> int:
    payload = {
        "status": result.status,
        "remote_id": result.remote_id,
        "reason": result.reason,
        "item": _to_jsonable(result.item),
    }
    print(json.dumps(payload, indent=2, default=str, ensure_ascii=False))
    return 0 if result.has_metadata else 1

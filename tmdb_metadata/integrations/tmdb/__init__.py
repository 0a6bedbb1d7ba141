"""
TMDb integration clients.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tmdb_metadata.integrations.tmdb.client import (
        TmdbClientError,
        fetch_image_response,
        fetch_person_details,
        fetch_tv_season_details,
        search_person,
        search_tv,
    )

__all__ = [
    "TmdbClientError",
    "fetch_image_response",
    "fetch_person_details",
    "fetch_tv_season_details",
    "search_person",
    "search_tv",
]


def __getattr__(name: str):
    if name in __all__:
        from tmdb_metadata.integrations.tmdb import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

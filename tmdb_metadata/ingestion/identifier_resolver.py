from __future__ import annotations

import logging
from typing import Callable

from tmdb_metadata.integrations.tmdb.records import TmdbSearchHit
from tmdb_metadata.models.lookup import LookupRequest
from tmdb_metadata.utils.cancellation import CancellationToken, raise_if_cancelled

logger = logging.getLogger(__name__)

SearchFn = Callable[[str], list[TmdbSearchHit]]


def resolve_remote_id(
    request: LookupRequest,
    search: SearchFn | None,
    *,
    query: str | None = None,
    cancel_token: CancellationToken | None = None,
) -> tuple[int | None, str]:
    """
    Work out which TMDb id a lookup refers to.

    Returns `(remote_id, reason)`; `remote_id` is None when unresolved.

    - an existing positive id is returned as-is, without any remote call
    - automated lookups never search by name, to keep request volume against
      TMDb down; they trade recall for fewer queries
    - otherwise one name search runs and its first hit wins (TMDb already
      orders results by relevance)

    At most one search call is made. Transport errors are not retried here.
    """

    if request.has_remote_id:
        return int(request.existing_remote_id), "existing_id"

    if request.is_automated:
        logger.debug(f"Skipping name search for automated lookup of {request.display_name!r}")
        return None, "automated_lookup"

    name = (query if query is not None else request.display_name) or ""
    name = name.strip()
    if not name or search is None:
        return None, "missing_name"

    raise_if_cancelled(cancel_token)
    hits = search(name)
    raise_if_cancelled(cancel_token)
    if not hits:
        logger.info(f"TMDb search for {name!r} returned no results")
        return None, "no_search_results"

    first = hits[0]
    logger.debug(f"Resolved {name!r} to TMDb id {first.tmdb_id} ({len(hits)} results)")
    return first.tmdb_id, "first_search_result"

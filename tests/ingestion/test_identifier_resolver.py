from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tmdb_metadata.ingestion.identifier_resolver import resolve_remote_id
from tmdb_metadata.integrations.tmdb.records import TmdbSearchHit
from tmdb_metadata.models.lookup import LookupRequest
from tmdb_metadata.utils.cancellation import CancellationToken, OperationCancelled


@pytest.mark.parametrize("is_automated", [True, False])
def test_existing_id_is_returned_without_search(is_automated: bool) -> None:
    search = MagicMock()
    request = LookupRequest(display_name="Jane Doe", existing_remote_id=42, is_automated=is_automated)

    assert resolve_remote_id(request, search) == (42, "existing_id")
    search.assert_not_called()


def test_automated_lookup_without_id_never_searches() -> None:
    search = MagicMock()
    request = LookupRequest(display_name="Jane Doe", is_automated=True)

    assert resolve_remote_id(request, search) == (None, "automated_lookup")
    search.assert_not_called()


@pytest.mark.parametrize("bad_id", [0, -3, None])
def test_non_positive_id_counts_as_missing(bad_id) -> None:
    search = MagicMock(return_value=[TmdbSearchHit(tmdb_id=7, name="Jane Doe")])
    request = LookupRequest(display_name="Jane Doe", existing_remote_id=bad_id)

    assert resolve_remote_id(request, search) == (7, "first_search_result")
    search.assert_called_once_with("Jane Doe")


def test_first_search_hit_wins() -> None:
    search = MagicMock(
        return_value=[TmdbSearchHit(tmdb_id=500, name="Jane Doe"), TmdbSearchHit(tmdb_id=777, name="Jane Doe")]
    )
    request = LookupRequest(display_name="  Jane Doe  ")

    assert resolve_remote_id(request, search) == (500, "first_search_result")
    search.assert_called_once_with("Jane Doe")


def test_zero_search_hits_is_unresolved() -> None:
    search = MagicMock(return_value=[])
    assert resolve_remote_id(LookupRequest(display_name="Nobody"), search) == (None, "no_search_results")
    assert search.call_count == 1


def test_blank_name_or_no_search_is_unresolved() -> None:
    search = MagicMock()
    assert resolve_remote_id(LookupRequest(display_name="   "), search) == (None, "missing_name")
    assert resolve_remote_id(LookupRequest(display_name="Jane Doe"), None) == (None, "missing_name")
    search.assert_not_called()


def test_query_overrides_display_name() -> None:
    search = MagicMock(return_value=[TmdbSearchHit(tmdb_id=12345)])
    request = LookupRequest(display_name="Season 1", series_name="Test Show")

    assert resolve_remote_id(request, search, query=request.series_name) == (12345, "first_search_result")
    search.assert_called_once_with("Test Show")


def test_search_errors_propagate() -> None:
    search = MagicMock(side_effect=RuntimeError("boom"))
    with pytest.raises(RuntimeError, match="boom"):
        resolve_remote_id(LookupRequest(display_name="Jane Doe"), search)


def test_cancelled_token_stops_before_search() -> None:
    token = CancellationToken()
    token.cancel()
    search = MagicMock()

    with pytest.raises(OperationCancelled):
        resolve_remote_id(LookupRequest(display_name="Jane Doe"), search, cancel_token=token)
    search.assert_not_called()

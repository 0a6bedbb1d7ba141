from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from tmdb_metadata.ingestion import person_metadata as mod
from tmdb_metadata.integrations.tmdb.client import TmdbClientError
from tmdb_metadata.models.lookup import LookupRequest
from tmdb_metadata.settings import Settings
from tmdb_metadata.utils.cancellation import CancellationToken, OperationCancelled

REPO_ROOT = Path(__file__).resolve().parents[2]


def _fixture(name: str) -> dict:
    return json.loads((REPO_ROOT / "tests" / "fixtures" / "tmdb" / name).read_text(encoding="utf-8"))


def test_resolve_and_map_person_end_to_end(monkeypatch: pytest.MonkeyPatch) -> None:
    search_mock = MagicMock()
    fetch_mock = MagicMock(return_value=_fixture("person_details_sample.json"))
    monkeypatch.setattr(mod, "search_person", search_mock)
    monkeypatch.setattr(mod, "fetch_person_details", fetch_mock)

    request = LookupRequest(display_name="Jane Doe", existing_remote_id=500, is_automated=False, preferred_locale="fr")
    result = mod.resolve_and_map_person(request, settings=Settings(api_key="fake"))

    assert result.status == "ok"
    assert result.has_metadata
    assert result.remote_id == 500
    assert result.item is not None
    assert result.item.external_ids["tmdb"] == 500
    assert [i.locale_tag for i in result.item.images] == ["fr", None, "en"]

    search_mock.assert_not_called()
    assert fetch_mock.call_count == 1
    call_args, call_kwargs = fetch_mock.call_args
    assert call_args == (500,)
    assert call_kwargs["language"] == "fr"
    assert call_kwargs["append_to_response"] == ["images", "external_ids"]
    assert call_kwargs["api_key"] == "fake"


def test_resolve_and_map_person_searches_by_name(monkeypatch: pytest.MonkeyPatch) -> None:
    search_mock = MagicMock(return_value=_fixture("search_person_sample.json")["results"])
    fetch_mock = MagicMock(return_value=_fixture("person_details_sample.json"))
    monkeypatch.setattr(mod, "search_person", search_mock)
    monkeypatch.setattr(mod, "fetch_person_details", fetch_mock)

    result = mod.resolve_and_map_person(LookupRequest(display_name="Jane Doe", preferred_locale="en"))

    assert result.status == "ok"
    assert result.reason == "first_search_result"
    assert search_mock.call_count == 1
    assert search_mock.call_args[0] == ("Jane Doe",)
    assert fetch_mock.call_args[0] == (500,)


def test_automated_person_lookup_without_id_is_unresolved(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        mod,
        "search_person",
        lambda *args, **kwargs: (_ for _ in ()).throw(AssertionError("search should not be invoked.")),
    )
    fetch_mock = MagicMock()
    monkeypatch.setattr(mod, "fetch_person_details", fetch_mock)

    result = mod.resolve_and_map_person(LookupRequest(display_name="Jane Doe", is_automated=True))

    assert result.status == "unresolved"
    assert result.reason == "automated_lookup"
    assert result.item is None
    fetch_mock.assert_not_called()


def test_stale_person_id_is_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(mod, "fetch_person_details", MagicMock(return_value=None))

    result = mod.resolve_and_map_person(LookupRequest(display_name="Jane Doe", existing_remote_id=404))

    assert result.status == "not_found"
    assert result.remote_id == 404
    assert result.item is None
    assert not result.has_metadata


def test_transport_errors_propagate(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        mod,
        "fetch_person_details",
        MagicMock(side_effect=TmdbClientError("TMDb request failed with HTTP 500.", status_code=500)),
    )
    with pytest.raises(TmdbClientError):
        mod.resolve_and_map_person(LookupRequest(display_name="Jane Doe", existing_remote_id=1))


def test_cancellation_propagates_distinctly(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(mod, "fetch_person_details", MagicMock(side_effect=OperationCancelled("cancelled")))
    token = CancellationToken()
    with pytest.raises(OperationCancelled):
        mod.resolve_and_map_person(LookupRequest(display_name="Jane Doe", existing_remote_id=1), cancel_token=token)


def test_get_person_images_ranks_profiles(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(mod, "fetch_person_details", MagicMock(return_value=_fixture("person_details_sample.json")))
    images = mod.get_person_images(500, "en")
    assert [i.locale_tag for i in images] == ["en", None, "fr"]


def test_get_person_images_without_id_or_record(monkeypatch: pytest.MonkeyPatch) -> None:
    fetch_mock = MagicMock(return_value=None)
    monkeypatch.setattr(mod, "fetch_person_details", fetch_mock)
    assert mod.get_person_images(0, "en") == []
    assert mod.get_person_images(None, "en") == []
    fetch_mock.assert_not_called()
    assert mod.get_person_images(12, "en") == []


def test_get_person_images_without_profiles(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(mod, "fetch_person_details", MagicMock(return_value={"id": 12, "name": "No Images"}))
    assert mod.get_person_images(12, "en") == []


def test_search_candidates_with_known_id_returns_single_preview(monkeypatch: pytest.MonkeyPatch) -> None:
    search_mock = MagicMock()
    monkeypatch.setattr(mod, "search_person", search_mock)
    monkeypatch.setattr(mod, "fetch_person_details", MagicMock(return_value=_fixture("person_details_sample.json")))

    results = mod.search_person_candidates(
        LookupRequest(display_name="Jane", existing_remote_id=500, is_automated=True, preferred_locale="fr")
    )

    assert len(results) == 1
    preview = results[0]
    assert preview.name == "Jane Doe"
    assert preview.provider_ids == {"tmdb": 500, "imdb": "nm0000500"}
    assert preview.overview == "Jane Doe is a reality television personality."
    assert preview.image_url == "https://image.tmdb.org/t/p/original/jane_fr.jpg"
    search_mock.assert_not_called()


def test_search_candidates_by_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(mod, "search_person", MagicMock(return_value=_fixture("search_person_sample.json")["results"]))

    results = mod.search_person_candidates(LookupRequest(display_name="Jane Doe"))

    assert [r.provider_ids for r in results] == [{"tmdb": 500}, {"tmdb": 777}]
    assert results[0].image_url == "https://image.tmdb.org/t/p/original/jane_primary.jpg"
    assert results[1].image_url is None


def test_search_candidates_automated_without_id_is_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    search_mock = MagicMock()
    monkeypatch.setattr(mod, "search_person", search_mock)
    assert mod.search_person_candidates(LookupRequest(display_name="Jane Doe", is_automated=True)) == []
    search_mock.assert_not_called()

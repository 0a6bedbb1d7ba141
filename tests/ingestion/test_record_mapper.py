from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from tmdb_metadata.ingestion.crew_roles import RoleClassifier, RoleClassifierConfig
from tmdb_metadata.ingestion.record_mapper import map_person, map_record, map_season
from tmdb_metadata.integrations.tmdb.records import (
    TmdbPersonRecord,
    parse_person_record,
    parse_season_record,
)
from tmdb_metadata.models.lookup import LookupRequest

REPO_ROOT = Path(__file__).resolve().parents[2]


def _fixture(name: str) -> dict:
    return json.loads((REPO_ROOT / "tests" / "fixtures" / "tmdb" / name).read_text(encoding="utf-8"))


def test_map_person_from_fixture_keeps_caller_name_and_ranks_images() -> None:
    record = parse_person_record(_fixture("person_details_sample.json"), tmdb_id=500)
    request = LookupRequest(display_name="Jane Doe (Host)", existing_remote_id=500, preferred_locale="fr")

    item = map_person(record, request)

    assert item.name == "Jane Doe (Host)"
    assert item.overview == "Jane Doe is a reality television personality."
    assert item.homepage_url == "https://janedoe.example.com"
    assert item.premiere_date == datetime(1980, 4, 12, tzinfo=timezone.utc)
    assert item.end_date is None
    assert item.production_locations == ["Lyon, France"]
    assert item.external_ids == {"tmdb": 500, "imdb": "nm0000500"}
    assert [i.locale_tag for i in item.images] == ["fr", None, "en"]
    assert item.primary_image_url == "https://image.tmdb.org/t/p/original/jane_fr.jpg"


@pytest.mark.parametrize("place", ["", "   ", None])
def test_blank_place_of_birth_leaves_locations_unset(place) -> None:
    record = TmdbPersonRecord(tmdb_id=1, place_of_birth=place)
    item = map_person(record, LookupRequest(display_name="X"))
    assert item.production_locations is None


def test_place_of_birth_is_kept_verbatim() -> None:
    record = TmdbPersonRecord(tmdb_id=1, place_of_birth=" Lyon ")
    item = map_person(record, LookupRequest(display_name="X"))
    assert item.production_locations == [" Lyon "]


def test_absent_fields_stay_absent() -> None:
    record = TmdbPersonRecord(tmdb_id=9)
    item = map_person(record, LookupRequest(display_name="X"))

    assert item.overview is None
    assert item.premiere_date is None
    assert item.end_date is None
    assert item.homepage_url is None
    assert item.images == []
    assert item.primary_image_url is None
    assert item.external_ids == {"tmdb": 9}


def test_empty_imdb_id_is_not_recorded() -> None:
    record = TmdbPersonRecord(tmdb_id=9, imdb_id="")
    item = map_person(record, LookupRequest(display_name="X"))
    assert "imdb" not in item.external_ids


def test_deathday_is_mapped_to_end_date() -> None:
    record = TmdbPersonRecord(tmdb_id=9, birthday=date(1930, 1, 2), deathday=date(2001, 3, 4))
    item = map_person(record, LookupRequest(display_name="X"))
    assert item.end_date == datetime(2001, 3, 4, tzinfo=timezone.utc)
    assert item.end_date.tzinfo is timezone.utc


def test_map_season_from_fixture() -> None:
    record = parse_season_record(_fixture("tv_season_details_sample.json"), series_id=12345, season_number=1)
    request = LookupRequest(display_name="Season 1", existing_remote_id=12345, preferred_locale="en-US")

    item = map_season(record, request)

    assert item.name == "Season 1"
    assert item.index_number == 1
    assert item.overview == "The first season."
    assert item.premiere_date == datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert item.production_year == 2024
    assert item.external_ids == {"tmdb_series": 12345, "tmdb": 101, "tvdb": "98765"}

    assert [p.name for p in item.cast] == ["First Billed", "Second Billed", "Third Billed", "Unordered"]
    assert [(p.name, p.person_type, p.role) for p in item.crew] == [
        ("Dana Director", "Director", "Director"),
        ("Pat Producer", "Producer", "Executive Producer"),
        ("Wren Writer", "Writer", "Executive Story Editor"),
    ]
    assert [p.person_type for p in item.people][:4] == ["Actor"] * 4

    assert [i.url.rsplit("/", 1)[-1] for i in item.images] == [
        "s1_poster_en.jpg",
        "s1_poster_null.jpg",
        "s1_poster_de.jpg",
    ]
    assert item.primary_image_url == "https://image.tmdb.org/t/p/original/s1_poster_en.jpg"


def test_map_season_uses_injected_classifier() -> None:
    record = parse_season_record(_fixture("tv_season_details_sample.json"), series_id=12345, season_number=1)
    classifier = RoleClassifier(RoleClassifierConfig(wanted=frozenset({"Cinematographer"}), max_cast_members=1))

    item = map_season(record, LookupRequest(display_name="Season 1"), role_classifier=classifier)

    assert [p.name for p in item.cast] == ["First Billed"]
    assert [(p.name, p.person_type) for p in item.crew] == [("Cam Lens", "Cinematographer")]


def test_map_season_without_air_date_has_no_year() -> None:
    record = parse_season_record({"season_number": 0}, series_id=5, season_number=0)
    item = map_season(record, LookupRequest(display_name="Specials"))
    assert item.index_number == 0
    assert item.premiere_date is None
    assert item.production_year is None
    assert item.people == []
    assert item.images == []
    assert item.external_ids == {"tmdb_series": 5}


def test_map_record_dispatches_on_kind() -> None:
    person = map_record(TmdbPersonRecord(tmdb_id=3), LookupRequest(display_name="P"))
    season = map_record(parse_season_record({}, series_id=4, season_number=2), LookupRequest(display_name="S"))
    assert person.kind == "person"
    assert season.kind == "season"
    assert season.index_number == 2

    with pytest.raises(TypeError):
        map_record(object(), LookupRequest(display_name="?"))  # type: ignore[arg-type]

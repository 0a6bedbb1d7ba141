"""
Map fetched TMDb records onto caller-owned entities.

Each field is decided on its own: absent remote values stay absent (None), they
are never defaulted to empty collections, epoch dates or zero ids.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from tmdb_metadata.ingestion.crew_roles import DEFAULT_ROLE_CLASSIFIER, RoleClassifier
from tmdb_metadata.ingestion.image_ranking import candidate_images_from_tmdb
from tmdb_metadata.integrations.tmdb.records import RemoteRecord, TmdbPersonRecord, TmdbSeasonRecord
from tmdb_metadata.models.entities import (
    IMDB_PROVIDER_KEY,
    TMDB_PROVIDER_KEY,
    TMDB_SERIES_PROVIDER_KEY,
    TVDB_PROVIDER_KEY,
    PersonEntity,
    SeasonEntity,
)
from tmdb_metadata.models.lookup import LookupRequest
from tmdb_metadata.settings import DEFAULT_IMAGE_BASE_URL


def _to_utc(value: date | None) -> datetime | None:
    if value is None:
        return None
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def _non_blank(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def map_person(
    record: TmdbPersonRecord,
    request: LookupRequest,
    *,
    image_base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> PersonEntity:
    # Name comes from the caller so an already-known person is never renamed.
    item = PersonEntity(
        name=request.display_name,
        overview=record.biography,
        homepage_url=_non_blank(record.homepage),
        premiere_date=_to_utc(record.birthday),
        end_date=_to_utc(record.deathday),
    )

    place_of_birth = _non_blank(record.place_of_birth)
    if place_of_birth is not None:
        item.production_locations = [place_of_birth]

    item.set_provider_id(TMDB_PROVIDER_KEY, record.tmdb_id)
    item.set_provider_id(IMDB_PROVIDER_KEY, record.imdb_id)

    item.images = candidate_images_from_tmdb(
        record.profiles,
        kind="profile",
        preferred_locale=request.preferred_locale,
        base_url=image_base_url,
    )
    if item.images:
        item.primary_image_url = item.images[0].url
    return item


def map_season(
    record: TmdbSeasonRecord,
    request: LookupRequest,
    *,
    role_classifier: RoleClassifier = DEFAULT_ROLE_CLASSIFIER,
    image_base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> SeasonEntity:
    premiere = _to_utc(record.air_date)
    item = SeasonEntity(
        name=request.display_name,
        index_number=record.season_number,
        overview=record.overview,
        premiere_date=premiere,
        production_year=premiere.year if premiere is not None else None,
    )

    item.set_provider_id(TMDB_SERIES_PROVIDER_KEY, record.series_id)
    item.set_provider_id(TMDB_PROVIDER_KEY, record.tmdb_season_id)
    item.set_provider_id(TVDB_PROVIDER_KEY, record.tvdb_id)

    item.people = role_classifier.build_people(record.cast, record.crew)

    item.images = candidate_images_from_tmdb(
        record.posters,
        kind="poster",
        preferred_locale=request.preferred_locale,
        base_url=image_base_url,
    )
    if item.images:
        item.primary_image_url = item.images[0].url
    return item


def map_record(
    record: RemoteRecord,
    request: LookupRequest,
    *,
    role_classifier: RoleClassifier = DEFAULT_ROLE_CLASSIFIER,
    image_base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> PersonEntity | SeasonEntity:
    if isinstance(record, TmdbPersonRecord):
        return map_person(record, request, image_base_url=image_base_url)
    if isinstance(record, TmdbSeasonRecord):
        return map_season(record, request, role_classifier=role_classifier, image_base_url=image_base_url)
    raise TypeError(f"Unsupported TMDb record type: {type(record).__name__}")

"""Caller-facing operations for TV seasons."""

from __future__ import annotations

import logging

import requests

from tmdb_metadata.ingestion.crew_roles import RoleClassifier, RoleClassifierConfig
from tmdb_metadata.ingestion.identifier_resolver import resolve_remote_id
from tmdb_metadata.ingestion.image_ranking import candidate_images_from_tmdb
from tmdb_metadata.ingestion.locale_matching import image_languages_param, normalize_language
from tmdb_metadata.ingestion.record_mapper import map_season
from tmdb_metadata.integrations.tmdb.client import fetch_tv_season_details, search_tv
from tmdb_metadata.integrations.tmdb.records import (
    TmdbSearchHit,
    TmdbSeasonRecord,
    parse_search_hits,
    parse_season_record,
)
from tmdb_metadata.models.entities import SeasonEntity
from tmdb_metadata.models.images import CandidateImage
from tmdb_metadata.models.lookup import LookupRequest
from tmdb_metadata.models.results import EnrichmentResult, RemoteSearchResult
from tmdb_metadata.settings import Settings
from tmdb_metadata.utils.cancellation import CancellationToken

logger = logging.getLogger(__name__)

SEASON_APPEND_TO_RESPONSE = ["credits", "external_ids", "images"]


def fetch_season_record(
    series_id: int,
    season_number: int,
    *,
    language: str | None = None,
    settings: Settings | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> TmdbSeasonRecord | None:
    settings = settings or Settings()
    payload = fetch_tv_season_details(
        series_id,
        season_number,
        language=normalize_language(language) or None,
        include_image_language=image_languages_param(language),
        append_to_response=SEASON_APPEND_TO_RESPONSE,
        api_key=settings.api_key,
        bearer_token=settings.bearer_token,
        session=session,
        cancel_token=cancel_token,
    )
    if payload is None:
        return None
    return parse_season_record(payload, series_id=series_id, season_number=season_number)


def resolve_and_map_season(
    request: LookupRequest,
    season_number: int | None,
    *,
    settings: Settings | None = None,
    role_classifier: RoleClassifier | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> EnrichmentResult[SeasonEntity]:
    """
    Map a TMDb season onto a `SeasonEntity`.

    `request.existing_remote_id` is the parent series id. Without it, the series
    is searched by `request.series_name` (never by the season's own name).
    """

    settings = settings or Settings()
    if role_classifier is None:
        role_classifier = RoleClassifier(RoleClassifierConfig(max_cast_members=settings.max_cast_members))

    if season_number is None or season_number < 0:
        return EnrichmentResult(status="unresolved", reason="missing_season_number")

    def _search_series(name: str) -> list[TmdbSearchHit]:
        results = search_tv(
            name,
            api_key=settings.api_key,
            bearer_token=settings.bearer_token,
            session=session,
            cancel_token=cancel_token,
        )
        return parse_search_hits(results, image_key="poster_path")

    has_series_name = bool(request.series_name and request.series_name.strip())
    series_id, reason = resolve_remote_id(
        request,
        _search_series if has_series_name else None,
        query=request.series_name,
        cancel_token=cancel_token,
    )
    if series_id is None:
        return EnrichmentResult(status="unresolved", reason=reason)

    record = fetch_season_record(
        series_id,
        season_number,
        language=request.preferred_locale,
        settings=settings,
        session=session,
        cancel_token=cancel_token,
    )
    if record is None:
        logger.info(f"TMDb season {season_number} of series {series_id} not found")
        return EnrichmentResult(status="not_found", remote_id=series_id, reason=reason)

    item = map_season(record, request, role_classifier=role_classifier, image_base_url=settings.image_base_url)
    return EnrichmentResult(status="ok", item=item, remote_id=series_id, reason=reason)


def get_season_images(
    series_id: int | None,
    season_number: int | None,
    preferred_locale: str | None,
    *,
    settings: Settings | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> list[CandidateImage]:
    """Ranked season posters; [] without a usable series id and season number."""

    if series_id is None or series_id <= 0 or season_number is None:
        return []
    settings = settings or Settings()
    record = fetch_season_record(
        series_id,
        season_number,
        language=preferred_locale,
        settings=settings,
        session=session,
        cancel_token=cancel_token,
    )
    if record is None:
        return []
    return candidate_images_from_tmdb(
        record.posters,
        kind="poster",
        preferred_locale=preferred_locale,
        base_url=settings.image_base_url,
    )


def search_season_candidates(request: LookupRequest) -> list[RemoteSearchResult]:
    """Seasons are addressed through their series; there is nothing to search."""
    return []

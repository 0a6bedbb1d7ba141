"""Caller-facing operations for TMDb people: metadata, images and search previews."""

from __future__ import annotations

import logging

import requests

from tmdb_metadata.ingestion.identifier_resolver import resolve_remote_id
from tmdb_metadata.ingestion.image_ranking import candidate_images_from_tmdb
from tmdb_metadata.ingestion.locale_matching import normalize_language
from tmdb_metadata.ingestion.record_mapper import map_person
from tmdb_metadata.integrations.tmdb.client import fetch_person_details, search_person
from tmdb_metadata.integrations.tmdb.records import (
    TmdbPersonRecord,
    TmdbSearchHit,
    parse_person_record,
    parse_search_hits,
)
from tmdb_metadata.integrations.tmdb.urls import build_image_url
from tmdb_metadata.models.entities import IMDB_PROVIDER_KEY, TMDB_PROVIDER_KEY, PersonEntity
from tmdb_metadata.models.images import CandidateImage
from tmdb_metadata.models.lookup import LookupRequest
from tmdb_metadata.models.results import EnrichmentResult, RemoteSearchResult
from tmdb_metadata.settings import Settings
from tmdb_metadata.utils.cancellation import CancellationToken

logger = logging.getLogger(__name__)

PERSON_APPEND_TO_RESPONSE = ["images", "external_ids"]


def _search_person_hits(
    name: str,
    *,
    settings: Settings,
    session: requests.Session | None,
    cancel_token: CancellationToken | None,
) -> list[TmdbSearchHit]:
    results = search_person(
        name,
        api_key=settings.api_key,
        bearer_token=settings.bearer_token,
        session=session,
        cancel_token=cancel_token,
    )
    return parse_search_hits(results, image_key="profile_path")


def fetch_person_record(
    tmdb_id: int,
    *,
    language: str | None = None,
    settings: Settings | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> TmdbPersonRecord | None:
    settings = settings or Settings()
    payload = fetch_person_details(
        tmdb_id,
        language=normalize_language(language) or None,
        append_to_response=PERSON_APPEND_TO_RESPONSE,
        api_key=settings.api_key,
        bearer_token=settings.bearer_token,
        session=session,
        cancel_token=cancel_token,
    )
    if payload is None:
        return None
    return parse_person_record(payload, tmdb_id=tmdb_id)


def resolve_and_map_person(
    request: LookupRequest,
    *,
    settings: Settings | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> EnrichmentResult[PersonEntity]:
    """
    Resolve the TMDb person for `request`, fetch it and map it to a `PersonEntity`.

    Returns status "unresolved" when no id could be determined and "not_found" when
    the id no longer exists on TMDb. Transport errors (`TmdbClientError`) and
    cancellation (`OperationCancelled`) propagate.
    """

    settings = settings or Settings()
    tmdb_id, reason = resolve_remote_id(
        request,
        lambda name: _search_person_hits(name, settings=settings, session=session, cancel_token=cancel_token),
        cancel_token=cancel_token,
    )
    if tmdb_id is None:
        return EnrichmentResult(status="unresolved", reason=reason)

    record = fetch_person_record(
        tmdb_id,
        language=request.preferred_locale,
        settings=settings,
        session=session,
        cancel_token=cancel_token,
    )
    if record is None:
        logger.info(f"TMDb person {tmdb_id} not found (resolved via {reason})")
        return EnrichmentResult(status="not_found", remote_id=tmdb_id, reason=reason)

    item = map_person(record, request, image_base_url=settings.image_base_url)
    return EnrichmentResult(status="ok", item=item, remote_id=tmdb_id, reason=reason)


def get_person_images(
    tmdb_id: int | None,
    preferred_locale: str | None,
    *,
    settings: Settings | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> list[CandidateImage]:
    """Ranked profile images for a person; [] when the id is unusable or the person has none."""

    if tmdb_id is None or tmdb_id <= 0:
        return []
    settings = settings or Settings()
    record = fetch_person_record(
        tmdb_id,
        language=preferred_locale,
        settings=settings,
        session=session,
        cancel_token=cancel_token,
    )
    if record is None:
        return []
    return candidate_images_from_tmdb(
        record.profiles,
        kind="profile",
        preferred_locale=preferred_locale,
        base_url=settings.image_base_url,
    )


def search_person_candidates(
    request: LookupRequest,
    *,
    settings: Settings | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> list[RemoteSearchResult]:
    """
    Preview records for disambiguation.

    A known id yields at most one preview built from the full record. Without an
    id, automated lookups get nothing and interactive ones get one preview per
    name-search hit, in TMDb's order.
    """

    settings = settings or Settings()

    if request.has_remote_id:
        record = fetch_person_record(
            int(request.existing_remote_id),
            language=request.preferred_locale,
            settings=settings,
            session=session,
            cancel_token=cancel_token,
        )
        if record is None:
            return []
        item = map_person(record, request, image_base_url=settings.image_base_url)
        provider_ids = {
            key: item.external_ids[key] for key in (TMDB_PROVIDER_KEY, IMDB_PROVIDER_KEY) if key in item.external_ids
        }
        return [
            RemoteSearchResult(
                name=record.name,
                provider_ids=provider_ids,
                image_url=item.primary_image_url,
                overview=record.biography,
            )
        ]

    if request.is_automated:
        return []

    name = (request.display_name or "").strip()
    if not name:
        return []

    hits = _search_person_hits(name, settings=settings, session=session, cancel_token=cancel_token)
    return [
        RemoteSearchResult(
            name=hit.name,
            provider_ids={TMDB_PROVIDER_KEY: hit.tmdb_id},
            image_url=build_image_url("profile", hit.image_path, base_url=settings.image_base_url),
        )
        for hit in hits
    ]

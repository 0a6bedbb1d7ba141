"""Typed views over raw TMDb person, season and search payloads."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal, Mapping, Union


def _parse_date(value: str | None) -> date | None:
    """Parse a date string (YYYY-MM-DD) to a date object."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def _as_str(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if raw.isdigit():
            return int(raw)
    return None


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def _as_id_str(value: Any) -> str | None:
    # TMDb sends tvdb ids as ints and imdb ids as strings; both are stored as text.
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    return None


@dataclass(frozen=True)
class TmdbImage:
    file_path: str
    width: int | None = None
    height: int | None = None
    iso_639_1: str | None = None
    vote_average: float | None = None
    vote_count: int | None = None


@dataclass(frozen=True)
class TmdbCastCredit:
    name: str
    character: str | None = None
    order: int | None = None
    tmdb_id: int | None = None
    profile_path: str | None = None


@dataclass(frozen=True)
class TmdbCrewCredit:
    name: str
    job: str | None = None
    department: str | None = None
    tmdb_id: int | None = None
    profile_path: str | None = None


@dataclass(frozen=True)
class TmdbPersonRecord:
    """TMDb person from /3/person/{id}?append_to_response=images,external_ids."""

    tmdb_id: int
    name: str | None = None
    biography: str | None = None
    birthday: date | None = None
    deathday: date | None = None
    homepage: str | None = None
    place_of_birth: str | None = None
    profile_path: str | None = None
    imdb_id: str | None = None
    profiles: list[TmdbImage] | None = None
    kind: Literal["person"] = "person"


@dataclass(frozen=True)
class TmdbSeasonRecord:
    """TMDb season from /3/tv/{id}/season/{n}?append_to_response=credits,external_ids,images."""

    series_id: int
    season_number: int
    tmdb_season_id: int | None = None
    name: str | None = None
    overview: str | None = None
    air_date: date | None = None
    poster_path: str | None = None
    tvdb_id: str | None = None
    posters: list[TmdbImage] | None = None
    cast: list[TmdbCastCredit] | None = None
    crew: list[TmdbCrewCredit] | None = None
    kind: Literal["season"] = "season"


RemoteRecord = Union[TmdbPersonRecord, TmdbSeasonRecord]


@dataclass(frozen=True)
class TmdbSearchHit:
    tmdb_id: int
    name: str | None = None
    image_path: str | None = None


def parse_images(items: Any) -> list[TmdbImage] | None:
    """Returns None when the payload has no image list at all."""
    if not isinstance(items, list):
        return None
    images: list[TmdbImage] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        file_path = _as_str(item.get("file_path"))
        if not file_path:
            continue
        images.append(
            TmdbImage(
                file_path=file_path,
                width=_as_int(item.get("width")),
                height=_as_int(item.get("height")),
                iso_639_1=_as_str(item.get("iso_639_1")),
                vote_average=_as_float(item.get("vote_average")),
                vote_count=_as_int(item.get("vote_count")),
            )
        )
    return images


def _parse_cast(items: Any) -> list[TmdbCastCredit] | None:
    if not isinstance(items, list):
        return None
    cast: list[TmdbCastCredit] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        name = _as_str(item.get("name"))
        if not name or not name.strip():
            continue
        cast.append(
            TmdbCastCredit(
                name=name,
                character=_as_str(item.get("character")),
                order=_as_int(item.get("order")),
                tmdb_id=_as_int(item.get("id")),
                profile_path=_as_str(item.get("profile_path")),
            )
        )
    return cast


def _parse_crew(items: Any) -> list[TmdbCrewCredit] | None:
    if not isinstance(items, list):
        return None
    crew: list[TmdbCrewCredit] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        name = _as_str(item.get("name"))
        if not name or not name.strip():
            continue
        crew.append(
            TmdbCrewCredit(
                name=name,
                job=_as_str(item.get("job")),
                department=_as_str(item.get("department")),
                tmdb_id=_as_int(item.get("id")),
                profile_path=_as_str(item.get("profile_path")),
            )
        )
    return crew


def parse_person_record(payload: Mapping[str, Any], *, tmdb_id: int) -> TmdbPersonRecord:
    external_ids = payload.get("external_ids")
    if not isinstance(external_ids, Mapping):
        external_ids = {}
    # Older payloads carry imdb_id at the top level as well.
    imdb_id = _as_str(external_ids.get("imdb_id")) or _as_str(payload.get("imdb_id"))

    images = payload.get("images")
    profiles = parse_images(images.get("profiles")) if isinstance(images, Mapping) else None

    return TmdbPersonRecord(
        tmdb_id=_as_int(payload.get("id")) or tmdb_id,
        name=_as_str(payload.get("name")),
        biography=_as_str(payload.get("biography")),
        birthday=_parse_date(payload.get("birthday")),
        deathday=_parse_date(payload.get("deathday")),
        homepage=_as_str(payload.get("homepage")),
        place_of_birth=_as_str(payload.get("place_of_birth")),
        profile_path=_as_str(payload.get("profile_path")),
        imdb_id=imdb_id,
        profiles=profiles,
    )


def parse_season_record(payload: Mapping[str, Any], *, series_id: int, season_number: int) -> TmdbSeasonRecord:
    external_ids = payload.get("external_ids")
    if not isinstance(external_ids, Mapping):
        external_ids = {}

    images = payload.get("images")
    posters = parse_images(images.get("posters")) if isinstance(images, Mapping) else None

    credits = payload.get("credits")
    if not isinstance(credits, Mapping):
        credits = {}

    parsed_number = _as_int(payload.get("season_number"))

    return TmdbSeasonRecord(
        series_id=series_id,
        season_number=parsed_number if parsed_number is not None else season_number,
        tmdb_season_id=_as_int(payload.get("id")),
        name=_as_str(payload.get("name")),
        overview=_as_str(payload.get("overview")),
        air_date=_parse_date(payload.get("air_date")),
        poster_path=_as_str(payload.get("poster_path")),
        tvdb_id=_as_id_str(external_ids.get("tvdb_id")),
        posters=posters,
        cast=_parse_cast(credits.get("cast")),
        crew=_parse_crew(credits.get("crew")),
    )


def parse_search_hits(results: list[Mapping[str, Any]], *, image_key: str) -> list[TmdbSearchHit]:
    """
    Convert `/search/*` results into hits, preserving TMDb's relevance order.

    Entries without a positive id are dropped.
    """

    hits: list[TmdbSearchHit] = []
    for item in results:
        if not isinstance(item, Mapping):
            continue
        tmdb_id = _as_int(item.get("id"))
        if tmdb_id is None or tmdb_id <= 0:
            continue
        hits.append(
            TmdbSearchHit(
                tmdb_id=tmdb_id,
                name=_as_str(item.get("name")),
                image_path=_as_str(item.get(image_key)),
            )
        )
    return hits

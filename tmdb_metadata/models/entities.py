from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from tmdb_metadata.models.images import CandidateImage

TMDB_PROVIDER_KEY = "tmdb"
IMDB_PROVIDER_KEY = "imdb"
TVDB_PROVIDER_KEY = "tvdb"
TMDB_SERIES_PROVIDER_KEY = "tmdb_series"

ACTOR = "Actor"


@dataclass(frozen=True)
class PersonCredit:
    """A cast or crew line on a season; `role` is the character (cast) or job title (crew)."""

    name: str
    person_type: str
    role: str | None = None
    sort_order: int | None = None
    tmdb_id: int | None = None


@dataclass
class _ProviderIdsMixin:
    external_ids: dict[str, Any] = field(default_factory=dict)

    def set_provider_id(self, key: str, value: Any) -> None:
        """
        Record an external id. Empty strings and non-positive ints are ignored,
        so a missing id is always "absent" rather than zero or "".
        """
        if value is None or isinstance(value, bool):
            return
        if isinstance(value, int):
            if value <= 0:
                return
            self.external_ids[key] = value
            return
        text = str(value).strip()
        if text:
            self.external_ids[key] = text

    def get_provider_id(self, key: str) -> Any:
        return self.external_ids.get(key)


@dataclass
class PersonEntity(_ProviderIdsMixin):
    name: str = ""
    overview: str | None = None
    homepage_url: str | None = None
    premiere_date: datetime | None = None
    end_date: datetime | None = None
    production_locations: list[str] | None = None
    images: list[CandidateImage] = field(default_factory=list)
    primary_image_url: str | None = None
    kind: Literal["person"] = "person"


@dataclass
class SeasonEntity(_ProviderIdsMixin):
    name: str = ""
    index_number: int | None = None
    overview: str | None = None
    premiere_date: datetime | None = None
    production_year: int | None = None
    people: list[PersonCredit] = field(default_factory=list)
    images: list[CandidateImage] = field(default_factory=list)
    primary_image_url: str | None = None
    kind: Literal["season"] = "season"

    @property
    def cast(self) -> list[PersonCredit]:
        return [p for p in self.people if p.person_type == ACTOR]

    @property
    def crew(self) -> list[PersonCredit]:
        return [p for p in self.people if p.person_type != ACTOR]

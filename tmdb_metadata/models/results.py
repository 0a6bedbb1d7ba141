from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar

from tmdb_metadata.models.entities import PersonEntity, SeasonEntity

EnrichmentStatus = Literal["ok", "unresolved", "not_found"]

EntityT = TypeVar("EntityT", PersonEntity, SeasonEntity)


@dataclass(frozen=True)
class EnrichmentResult(Generic[EntityT]):
    """
    Outcome of a resolve-and-map call.

    `item` is only set when `status == "ok"`. On "unresolved" and "not_found"
    the caller keeps its entity unimproved; on "not_found" `remote_id` names the
    stale id the caller should clear.
    """

    status: EnrichmentStatus
    item: EntityT | None = None
    remote_id: int | None = None
    reason: str | None = None

    @property
    def has_metadata(self) -> bool:
        return self.status == "ok" and self.item is not None


@dataclass(frozen=True)
class RemoteSearchResult:
    """Lightweight preview used by disambiguation UIs."""

    name: str | None
    provider_ids: dict[str, Any] = field(default_factory=dict)
    image_url: str | None = None
    overview: str | None = None
    search_provider_name: str = "TheMovieDb"

from __future__ import annotations

from dataclasses import dataclass, replace

from tmdb_metadata.integrations.tmdb.records import TmdbImage
from tmdb_metadata.integrations.tmdb.urls import build_image_url
from tmdb_metadata.settings import DEFAULT_IMAGE_BASE_URL


@dataclass(frozen=True)
class CandidateImage:
    """A remote image offered to the caller; `locale_tag=None` means no text on the image."""

    url: str
    width: int | None = None
    height: int | None = None
    locale_tag: str | None = None
    community_rating: float | None = None
    vote_count: int | None = None
    image_type: str = "primary"
    provider_name: str = "TheMovieDb"

    @classmethod
    def from_tmdb(
        cls,
        image: TmdbImage,
        *,
        kind: str,
        base_url: str = DEFAULT_IMAGE_BASE_URL,
    ) -> "CandidateImage | None":
        url = build_image_url(kind, image.file_path, base_url=base_url)
        if url is None:
            return None
        return cls(
            url=url,
            width=image.width,
            height=image.height,
            locale_tag=image.iso_639_1 or None,
            community_rating=image.vote_average,
            vote_count=image.vote_count,
        )

    def with_locale_tag(self, locale_tag: str | None) -> "CandidateImage":
        return replace(self, locale_tag=locale_tag)

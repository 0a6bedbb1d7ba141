from __future__ import annotations

from typing import Iterable

from tmdb_metadata.ingestion.locale_matching import adjust_image_language, classify_locale
from tmdb_metadata.models.images import CandidateImage
from tmdb_metadata.integrations.tmdb.records import TmdbImage
from tmdb_metadata.settings import DEFAULT_IMAGE_BASE_URL


def rank_images(images: Iterable[CandidateImage], preferred_locale: str | None) -> list[CandidateImage]:
    """
    Order images by locale preference: exact locale match, then textless, then everything else.

    Within a class the input order is kept (TMDb's own order carries its popularity signal).
    Every input image is returned; this is a permutation, never a filter.
    """

    ordered = list(images)
    # sorted() is stable, so equal classes keep their relative order.
    return sorted(ordered, key=lambda image: classify_locale(image.locale_tag, preferred_locale), reverse=True)


def candidate_images_from_tmdb(
    images: Iterable[TmdbImage] | None,
    *,
    kind: str,
    preferred_locale: str | None,
    base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> list[CandidateImage]:
    """Build ranked candidates from TMDb image records; None or empty input gives []."""

    candidates: list[CandidateImage] = []
    for image in images or []:
        candidate = CandidateImage.from_tmdb(image, kind=kind, base_url=base_url)
        if candidate is None:
            continue
        candidates.append(candidate.with_locale_tag(adjust_image_language(candidate.locale_tag, preferred_locale)))
    return rank_images(candidates, preferred_locale)

"""Pure URL builders for TMDb images, web pages and image-language filters."""

from __future__ import annotations

from tmdb_metadata.settings import DEFAULT_IMAGE_BASE_URL

TMDB_WEB_BASE_URL = "https://www.themoviedb.org/"

IMAGE_KINDS = frozenset({"profile", "poster", "backdrop", "still", "logo"})
EXTERNAL_URL_KINDS = frozenset({"person", "tv", "movie", "collection"})


def build_image_url(
    kind: str,
    file_path: str | None,
    *,
    size: str = "original",
    base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> str | None:
    """
    Build an absolute TMDb image URL, e.g. `https://image.tmdb.org/t/p/original/abc.jpg`.

    Returns None when `file_path` is empty.
    """

    if kind not in IMAGE_KINDS:
        raise ValueError(f"Unknown TMDb image kind: {kind!r}")
    path = (file_path or "").strip()
    if not path:
        return None
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url.rstrip('/')}/{size}{path}"


def build_external_url(kind: str, remote_id: int | None) -> str | None:
    if kind not in EXTERNAL_URL_KINDS:
        raise ValueError(f"Unknown TMDb page kind: {kind!r}")
    if remote_id is None or remote_id <= 0:
        return None
    return f"{TMDB_WEB_BASE_URL}{kind}/{int(remote_id)}"

from __future__ import annotations

from dataclasses import dataclass

from tmdb_metadata.utils.env import env_int, env_str, load_env

DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"
DEFAULT_LANGUAGE = "en-US"
DEFAULT_MAX_CAST_MEMBERS = 15


@dataclass(frozen=True)
class Settings:
    api_key: str | None = None
    bearer_token: str | None = None
    image_base_url: str = DEFAULT_IMAGE_BASE_URL
    language: str = DEFAULT_LANGUAGE
    max_cast_members: int = DEFAULT_MAX_CAST_MEMBERS


def load_settings(*, load_dotenv_file: bool = True) -> Settings:
    """Read TMDb settings from the environment (and `.env`, when present)."""
    if load_dotenv_file:
        load_env()
    max_cast = env_int("TMDB_MAX_CAST_MEMBERS", DEFAULT_MAX_CAST_MEMBERS)
    if max_cast < 0:
        raise RuntimeError("TMDB_MAX_CAST_MEMBERS must not be negative.")
    return Settings(
        api_key=env_str("TMDB_API_KEY"),
        bearer_token=env_str("TMDB_BEARER"),
        image_base_url=env_str("TMDB_IMAGE_BASE_URL", DEFAULT_IMAGE_BASE_URL) or DEFAULT_IMAGE_BASE_URL,
        language=env_str("TMDB_LANGUAGE", DEFAULT_LANGUAGE) or DEFAULT_LANGUAGE,
        max_cast_members=max_cast,
    )

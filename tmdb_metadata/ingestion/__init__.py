"""
Resolution and mapping pipeline for TMDb people and seasons.
"""

from tmdb_metadata.ingestion.crew_roles import RoleClassifier, RoleClassifierConfig
from tmdb_metadata.ingestion.identifier_resolver import resolve_remote_id
from tmdb_metadata.ingestion.image_ranking import rank_images
from tmdb_metadata.ingestion.person_metadata import (
    get_person_images,
    resolve_and_map_person,
    search_person_candidates,
)
from tmdb_metadata.ingestion.season_metadata import (
    get_season_images,
    resolve_and_map_season,
    search_season_candidates,
)

__all__ = [
    "RoleClassifier",
    "RoleClassifierConfig",
    "get_person_images",
    "get_season_images",
    "rank_images",
    "resolve_and_map_person",
    "resolve_and_map_season",
    "resolve_remote_id",
    "search_person_candidates",
    "search_season_candidates",
]

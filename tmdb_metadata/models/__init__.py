"""
Data shapes exchanged with callers of the resolution pipeline.
"""

from tmdb_metadata.models.entities import PersonCredit, PersonEntity, SeasonEntity
from tmdb_metadata.models.images import CandidateImage
from tmdb_metadata.models.lookup import LookupRequest
from tmdb_metadata.models.results import EnrichmentResult, RemoteSearchResult

__all__ = [
    "CandidateImage",
    "EnrichmentResult",
    "LookupRequest",
    "PersonCredit",
    "PersonEntity",
    "RemoteSearchResult",
    "SeasonEntity",
]

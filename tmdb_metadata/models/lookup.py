from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LookupRequest:
    """
    What the caller already knows about a library item.

    `existing_remote_id` is the TMDb id of the record itself (person) or of the
    parent series (season). `series_name` is only used for season lookups.
    """

    display_name: str
    existing_remote_id: int | None = None
    is_automated: bool = False
    preferred_locale: str = ""
    series_name: str | None = None

    @property
    def has_remote_id(self) -> bool:
        return isinstance(self.existing_remote_id, int) and self.existing_remote_id > 0

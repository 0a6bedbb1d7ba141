"""
Crew job-title classification and cast/crew list building.

TMDb crew entries carry free-text job titles ("Executive Producer", "Teleplay",
"Director of Photography"). They are mapped onto a small set of canonical
categories, and only wanted categories (or wanted raw titles) are kept.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from tmdb_metadata.integrations.tmdb.records import TmdbCastCredit, TmdbCrewCredit
from tmdb_metadata.models.entities import ACTOR, PersonCredit
from tmdb_metadata.settings import DEFAULT_MAX_CAST_MEMBERS

logger = logging.getLogger(__name__)

DIRECTOR = "Director"
WRITER = "Writer"
PRODUCER = "Producer"
COMPOSER = "Composer"
CINEMATOGRAPHER = "Cinematographer"
EDITOR = "Editor"
CREW = "Crew"

DEFAULT_JOB_CATEGORIES: Mapping[str, str] = MappingProxyType(
    {
        "director": DIRECTOR,
        "series director": DIRECTOR,
        "co-director": DIRECTOR,
        "writer": WRITER,
        "screenplay": WRITER,
        "teleplay": WRITER,
        "story": WRITER,
        "novel": WRITER,
        "author": WRITER,
        "characters": WRITER,
        "creator": WRITER,
        "staff writer": WRITER,
        "story editor": WRITER,
        "producer": PRODUCER,
        "executive producer": PRODUCER,
        "co-producer": PRODUCER,
        "co-executive producer": PRODUCER,
        "associate producer": PRODUCER,
        "supervising producer": PRODUCER,
        "consulting producer": PRODUCER,
        "line producer": PRODUCER,
        "original music composer": COMPOSER,
        "music": COMPOSER,
        "composer": COMPOSER,
        "director of photography": CINEMATOGRAPHER,
        "cinematography": CINEMATOGRAPHER,
        "editor": EDITOR,
        "film editor": EDITOR,
    }
)

# Department fallbacks for titles the table does not know.
DEFAULT_DEPARTMENT_CATEGORIES: Mapping[str, str] = MappingProxyType(
    {
        "directing": DIRECTOR,
        "writing": WRITER,
    }
)

# Department -> (title keyword -> category), for titles like "Field Producer".
DEFAULT_DEPARTMENT_KEYWORDS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "production": MappingProxyType({"producer": PRODUCER}),
    }
)

DEFAULT_WANTED_CREW = frozenset({DIRECTOR, WRITER, PRODUCER})


def _fold_keys(table: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType({k.strip().casefold(): v for k, v in table.items()})


@dataclass(frozen=True)
class RoleClassifierConfig:
    """
    Lookup tables for crew classification. Tables left as None use the defaults
    above; keys are matched case-insensitively.
    """

    job_categories: Mapping[str, str] | None = None
    department_categories: Mapping[str, str] | None = None
    department_keywords: Mapping[str, Mapping[str, str]] | None = None
    wanted: frozenset[str] = DEFAULT_WANTED_CREW
    default_category: str = CREW
    max_cast_members: int = DEFAULT_MAX_CAST_MEMBERS
    _wanted_folded: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        jobs = DEFAULT_JOB_CATEGORIES if self.job_categories is None else self.job_categories
        departments = DEFAULT_DEPARTMENT_CATEGORIES if self.department_categories is None else self.department_categories
        keywords = DEFAULT_DEPARTMENT_KEYWORDS if self.department_keywords is None else self.department_keywords
        object.__setattr__(self, "job_categories", _fold_keys(jobs))
        object.__setattr__(self, "department_categories", _fold_keys(departments))
        object.__setattr__(
            self,
            "department_keywords",
            MappingProxyType({k.strip().casefold(): _fold_keys(v) for k, v in keywords.items()}),
        )
        object.__setattr__(self, "wanted", frozenset(self.wanted))
        object.__setattr__(self, "_wanted_folded", frozenset(w.strip().casefold() for w in self.wanted))

    def is_wanted(self, value: str | None) -> bool:
        return bool(value) and value.strip().casefold() in self._wanted_folded


class RoleClassifier:
    """Stateless apart from its immutable config; safe to share across threads."""

    def __init__(self, config: RoleClassifierConfig | None = None) -> None:
        self.config = config or RoleClassifierConfig()

    def category_for(self, job: str | None, department: str | None = None) -> str | None:
        """Canonical category for a job title, or None when neither the title nor the department is known."""
        job_key = (job or "").strip().casefold()
        if job_key in self.config.job_categories:
            return self.config.job_categories[job_key]
        dept_key = (department or "").strip().casefold()
        for keyword, category in self.config.department_keywords.get(dept_key, {}).items():
            if keyword in job_key:
                return category
        return self.config.department_categories.get(dept_key)

    def classify(self, crew: TmdbCrewCredit) -> str | None:
        """
        Returns the category to file this crew member under, or None when it is excluded.

        Included when the category or the raw job title is wanted; a wanted title
        with no known category gets the default category.
        """
        category = self.category_for(crew.job, crew.department)
        if category is not None and self.config.is_wanted(category):
            return category
        if self.config.is_wanted(crew.job):
            return category or self.config.default_category
        return None

    def build_cast(self, cast: Iterable[TmdbCastCredit] | None) -> list[PersonCredit]:
        # Missing order sorts last; sorted() keeps TMDb order for ties.
        ordered = sorted(cast or [], key=lambda c: (c.order is None, c.order if c.order is not None else 0))
        limit = max(0, self.config.max_cast_members)
        return [
            PersonCredit(
                name=member.name.strip(),
                person_type=ACTOR,
                role=member.character,
                sort_order=member.order,
                tmdb_id=member.tmdb_id,
            )
            for member in ordered[:limit]
        ]

    def build_crew(self, crew: Iterable[TmdbCrewCredit] | None) -> list[PersonCredit]:
        people: list[PersonCredit] = []
        skipped = 0
        for member in crew or []:
            category = self.classify(member)
            if category is None:
                skipped += 1
                continue
            people.append(
                PersonCredit(
                    name=member.name.strip(),
                    person_type=category,
                    role=member.job,
                    tmdb_id=member.tmdb_id,
                )
            )
        if skipped:
            logger.debug(f"Dropped {skipped} crew entries outside the wanted roles")
        return people

    def build_people(
        self,
        cast: Iterable[TmdbCastCredit] | None,
        crew: Iterable[TmdbCrewCredit] | None,
    ) -> list[PersonCredit]:
        return self.build_cast(cast) + self.build_crew(crew)


DEFAULT_ROLE_CLASSIFIER = RoleClassifier()

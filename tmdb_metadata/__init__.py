"""
TMDb metadata resolution for media-library items.

This package holds the code that turns partially-known library items (people,
TV seasons) into enriched domain entities:
- the TMDb transport in `integrations/`
- caller-facing data shapes in `models/`
- the resolution and mapping pipeline in `ingestion/`

Entrypoints (CLI scripts, host services) should live outside this package and
import from `tmdb_metadata` rather than the other way around.
"""

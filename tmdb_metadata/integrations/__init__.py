"""
External metadata integrations (TMDb).

Remote clients live under this namespace so they stay decoupled from the
resolution pipeline in `ingestion/` and from entrypoints in `scripts/`.
"""

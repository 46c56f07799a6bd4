"""HTTP clients used by the question pipeline."""
from __future__ import annotations

from .elasticsearch import ElasticsearchClient, SearchEngineError
from .stortinget import StortingetClient

__all__ = ["ElasticsearchClient", "SearchEngineError", "StortingetClient"]

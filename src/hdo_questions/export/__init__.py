"""Exports of indexed questions."""
from __future__ import annotations

from .search import IGNORE_PATTERN, SchemaDriftError, SearchExporter
from .stats import StatsExporter

__all__ = ["IGNORE_PATTERN", "SchemaDriftError", "SearchExporter", "StatsExporter"]

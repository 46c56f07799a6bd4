"""Core domain helpers."""
from __future__ import annotations

from .dates import convert_dates, parse_legacy_date
from .flatten import flatten
from .types import CATEGORIES, FetchResult, IndexSummary, QuestionDocument, Session, document_id

__all__ = [
    "CATEGORIES",
    "FetchResult",
    "IndexSummary",
    "QuestionDocument",
    "Session",
    "convert_dates",
    "document_id",
    "flatten",
    "parse_legacy_date",
]

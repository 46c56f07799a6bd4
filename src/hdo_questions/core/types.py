"""Typed domain objects for the question pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

Session = str
QuestionDocument = Dict[str, Any]

ORAL_QUESTIONS = "sporretimesporsmal"
INTERPELLATIONS = "interpellasjoner"
WRITTEN_QUESTIONS = "skriftligesporsmal"

CATEGORIES = (ORAL_QUESTIONS, INTERPELLATIONS, WRITTEN_QUESTIONS)


def document_id(category: str, upstream_id: Any) -> str:
    """Composite index key of a question: ``{category}-{upstream_id}``."""

    return f"{category}-{upstream_id}"


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of fetching one (session, category) export."""

    session: Session
    category: str
    path: Path
    fetched: bool
    status_code: Optional[int] = None


@dataclass(frozen=True, slots=True)
class IndexSummary:
    """Totals of an ``index_all`` run."""

    files: int
    documents: int
    failures: int


__all__ = [
    "CATEGORIES",
    "FetchResult",
    "INTERPELLATIONS",
    "IndexSummary",
    "ORAL_QUESTIONS",
    "QuestionDocument",
    "Session",
    "WRITTEN_QUESTIONS",
    "document_id",
]

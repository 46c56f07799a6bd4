"""Progress notifications emitted by the download and index jobs."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Optional

PipelineEventKind = Literal["fetched", "skipped", "indexed", "failed"]


@dataclass(slots=True)
class PipelineEvent:
    """Fine grained progress notification for a single file."""

    kind: PipelineEventKind
    message: str
    session: str | None = None
    category: str | None = None
    path: Path | None = None
    count: int | None = None


ProgressCallback = Callable[[PipelineEvent], None]


def notify(callback: Optional[ProgressCallback], event: PipelineEvent) -> None:
    if callback:
        callback(event)


__all__ = ["PipelineEvent", "PipelineEventKind", "ProgressCallback", "notify"]

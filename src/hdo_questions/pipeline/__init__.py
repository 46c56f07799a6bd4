"""Download and index jobs."""
from __future__ import annotations

from .cache import CacheWriteError, FileCache
from .download import Downloader
from .events import PipelineEvent, ProgressCallback
from .indexer import Indexer, InvalidCacheFileError, convert_question, question_type_for

__all__ = [
    "CacheWriteError",
    "Downloader",
    "FileCache",
    "Indexer",
    "InvalidCacheFileError",
    "PipelineEvent",
    "ProgressCallback",
    "convert_question",
    "question_type_for",
]

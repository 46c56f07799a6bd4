"""Pipeline for Stortinget parliamentary questions: download, index, export."""
from __future__ import annotations

from .clients import ElasticsearchClient, SearchEngineError, StortingetClient
from .config import AppConfig, PipelineConfig, SearchConfig, UpstreamConfig, load_config
from .core import CATEGORIES, FetchResult, IndexSummary, convert_dates, document_id, flatten
from .export import SchemaDriftError, SearchExporter, StatsExporter
from .index import MAPPING, create_index, delete_index
from .pipeline import (
    CacheWriteError,
    Downloader,
    FileCache,
    Indexer,
    InvalidCacheFileError,
    PipelineEvent,
)
from .runtime import PipelineResources, create_pipeline

__all__ = [
    "AppConfig",
    "CATEGORIES",
    "CacheWriteError",
    "Downloader",
    "ElasticsearchClient",
    "FetchResult",
    "FileCache",
    "IndexSummary",
    "Indexer",
    "InvalidCacheFileError",
    "MAPPING",
    "PipelineConfig",
    "PipelineEvent",
    "PipelineResources",
    "SchemaDriftError",
    "SearchConfig",
    "SearchEngineError",
    "SearchExporter",
    "StatsExporter",
    "StortingetClient",
    "UpstreamConfig",
    "convert_dates",
    "create_index",
    "create_pipeline",
    "delete_index",
    "document_id",
    "flatten",
    "load_config",
]

"""Application level helpers for assembling pipeline dependencies."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .clients import ElasticsearchClient, StortingetClient
from .config import AppConfig
from .export import SearchExporter, StatsExporter
from .pipeline import Downloader, FileCache, Indexer, ProgressCallback


@dataclass(slots=True)
class PipelineResources:
    """Container bundling the objects needed to run the batch jobs."""

    config: AppConfig
    upstream: StortingetClient
    search: ElasticsearchClient
    cache: FileCache
    downloader: Downloader
    indexer: Indexer
    search_exporter: SearchExporter
    stats_exporter: StatsExporter
    owns_upstream: bool = True
    owns_search: bool = True

    async def aclose(self) -> None:
        if self.owns_upstream:
            await self.upstream.aclose()
        if self.owns_search:
            await self.search.aclose()


def create_pipeline(
    config: AppConfig,
    *,
    upstream: StortingetClient | None = None,
    search: ElasticsearchClient | None = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> PipelineResources:
    owns_upstream = upstream is None
    owns_search = search is None
    upstream_client = upstream or StortingetClient(
        config.upstream.base_url,
        user_agent=config.upstream.user_agent,
        timeout=config.upstream.timeout,
    )
    search_client = search or ElasticsearchClient(config.search.url, timeout=config.search.timeout)
    cache = FileCache(config.pipeline.output_path)
    return PipelineResources(
        config=config,
        upstream=upstream_client,
        search=search_client,
        cache=cache,
        downloader=Downloader(
            client=upstream_client,
            cache=cache,
            config=config,
            progress_callback=progress_callback,
        ),
        indexer=Indexer(
            client=search_client,
            cache=cache,
            config=config,
            progress_callback=progress_callback,
        ),
        search_exporter=SearchExporter(client=search_client, config=config),
        stats_exporter=StatsExporter(client=search_client, config=config),
        owns_upstream=owns_upstream,
        owns_search=owns_search,
    )


__all__ = ["PipelineResources", "create_pipeline"]

"""Download of the per-session question exports into the local cache."""
from __future__ import annotations

import asyncio
from typing import List, Optional
import logging

from ..clients import StortingetClient
from ..config import AppConfig
from ..core.types import CATEGORIES, FetchResult, Session
from .cache import FileCache
from .events import PipelineEvent, ProgressCallback, notify

LOGGER = logging.getLogger(__name__)


class Downloader:
    """Fetch every category of every session, at most ``concurrency`` at a time."""

    def __init__(
        self,
        *,
        client: StortingetClient,
        cache: FileCache,
        config: AppConfig,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._config = config
        self._progress_callback = progress_callback

    async def download(self, *, cached: bool = False) -> List[FetchResult]:
        """Refresh the cache for all sessions listed upstream.

        Network errors propagate and abort the run.
        """

        sessions = await self._client.list_sessions()
        semaphore = asyncio.Semaphore(self._config.pipeline.concurrency)

        async def _session(session: Session) -> List[FetchResult]:
            LOGGER.info("Downloading session %s", session)
            return list(
                await asyncio.gather(
                    *(
                        self.fetch_session_data(session, category, cached=cached, semaphore=semaphore)
                        for category in CATEGORIES
                    )
                )
            )

        per_session = await asyncio.gather(*(_session(session) for session in sessions))
        results = [result for batch in per_session for result in batch]
        fetched = sum(1 for result in results if result.fetched)
        LOGGER.info("Fetched %s of %s files for %s sessions", fetched, len(results), len(sessions))
        return results

    async def fetch_session_data(
        self,
        session: Session,
        category: str,
        *,
        cached: bool = False,
        semaphore: Optional[asyncio.Semaphore] = None,
    ) -> FetchResult:
        """Fetch one export and write the body verbatim to its cache file.

        With ``cached`` an existing file is reused, except for the current
        session, which is always refreshed.
        """

        out = self._cache.path_for(category, session)
        if (
            cached
            and session != self._config.pipeline.current_session
            and await self._cache.exists(out)
        ):
            LOGGER.debug("Using cached %s", out)
            notify(
                self._progress_callback,
                PipelineEvent(kind="skipped", message=f"Cached {out}", session=session, category=category, path=out),
            )
            return FetchResult(session=session, category=category, path=out, fetched=False)

        url = self._client.category_url(category, session)
        if semaphore is None:
            response = await self._client.fetch_category(category, session)
        else:
            async with semaphore:
                response = await self._client.fetch_category(category, session)
        if response.status_code != 200:
            LOGGER.error("response code %s for %s", response.status_code, url)

        await self._cache.write(out, response.content, source=url)
        LOGGER.info("%s => %s", url, out)
        notify(
            self._progress_callback,
            PipelineEvent(kind="fetched", message=f"{url} => {out}", session=session, category=category, path=out),
        )
        return FetchResult(
            session=session,
            category=category,
            path=out,
            fetched=True,
            status_code=response.status_code,
        )


__all__ = ["Downloader"]

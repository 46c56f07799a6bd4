"""Bulk loading of cached export files into the search index."""
from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from ..clients import ElasticsearchClient
from ..config import AppConfig
from ..core.dates import convert_dates
from ..core.types import CATEGORIES, IndexSummary, QuestionDocument, document_id
from .cache import FileCache
from .events import PipelineEvent, ProgressCallback, notify

LOGGER = logging.getLogger(__name__)

_TYPE_PREFIX_RE = re.compile(r"^(.+?)\.")


class InvalidCacheFileError(ValueError):
    """Raised when a cache filename does not start with a known category."""


def question_type_for(path: Path | str) -> str:
    """Return the category encoded as filename prefix (``<category>.<session>.json``)."""

    match = _TYPE_PREFIX_RE.match(Path(path).name)
    if not match or match.group(1) not in CATEGORIES:
        raise InvalidCacheFileError(f"unable to determine type from: {path}")
    return match.group(1)


def convert_question(session_id: str, question_type: str, raw: QuestionDocument) -> QuestionDocument:
    raw["sesjon_id"] = session_id
    raw["type_navn"] = question_type
    convert_dates(raw)
    return raw


class Indexer:
    """Reads cached files and bulk-upserts their questions."""

    def __init__(
        self,
        *,
        client: ElasticsearchClient,
        cache: FileCache,
        config: AppConfig,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._config = config
        self._progress_callback = progress_callback

    def to_bulk_body(self, question_type: str, questions: List[QuestionDocument]) -> List[Dict[str, Any]]:
        body: List[Dict[str, Any]] = []
        for doc in questions:
            body.append(
                {
                    "index": {
                        "_index": self._config.search.index,
                        "_id": document_id(question_type, doc.get("id")),
                    }
                }
            )
            body.append(doc)
        return body

    async def index_file(self, path: Path) -> int:
        """Index every question of one cache file with a single bulk request.

        Returns the number of indexed questions.
        """

        question_type = question_type_for(path)
        data = json.loads(await self._cache.read_text(path))
        questions = [
            convert_question(data["sesjon_id"], question_type, raw)
            for raw in data.get("sporsmal_liste") or []
        ]
        if not questions:
            LOGGER.debug("No questions in %s", path)
            return 0

        await self._client.bulk(self.to_bulk_body(question_type, questions))
        LOGGER.info("indexed %s", path)
        notify(
            self._progress_callback,
            PipelineEvent(
                kind="indexed",
                message=f"Indexed {len(questions)} questions",
                session=data["sesjon_id"],
                category=question_type,
                path=path,
                count=len(questions),
            ),
        )
        return len(questions)

    async def index_all(self) -> IndexSummary:
        """Index all cache files, at most ``concurrency`` at a time.

        A file with a malformed name is logged and skipped. Any other error is
        re-raised once all files have been processed.
        """

        files = await self._cache.list_files()
        semaphore = asyncio.Semaphore(self._config.pipeline.concurrency)

        async def _guarded(path: Path) -> int:
            async with semaphore:
                return await self.index_file(path)

        results = await asyncio.gather(*(_guarded(path) for path in files), return_exceptions=True)

        documents = 0
        failures = 0
        first_error: BaseException | None = None
        for path, result in zip(files, results):
            if isinstance(result, BaseException):
                failures += 1
                if isinstance(result, InvalidCacheFileError):
                    LOGGER.error("Skipping %s: %s", path, result)
                else:
                    LOGGER.error("Failed to index %s: %s", path, result)
                    first_error = first_error or result
                notify(
                    self._progress_callback,
                    PipelineEvent(kind="failed", message=str(result), path=path),
                )
            else:
                documents += result

        summary = IndexSummary(files=len(files), documents=documents, failures=failures)
        LOGGER.info(
            "Indexed %s questions from %s files (%s failed)",
            summary.documents,
            summary.files,
            summary.failures,
        )
        if first_error is not None:
            raise first_error
        return summary


__all__ = ["Indexer", "InvalidCacheFileError", "convert_question", "question_type_for"]

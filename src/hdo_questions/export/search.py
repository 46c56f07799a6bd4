"""Streaming tab-separated export of search results."""
from __future__ import annotations

import csv
import re
from typing import Any, AsyncIterator, Dict, List, Optional, TextIO
import logging

from ..clients import ElasticsearchClient
from ..config import AppConfig
from ..core.flatten import flatten

LOGGER = logging.getLogger(__name__)

IGNORE_PATTERN = re.compile(r"^(versjon|.+\.(versjon|.+dato|kjoenn))$")
TOPIC_FIELD = "emne_liste"


class SchemaDriftError(RuntimeError):
    """Raised in strict mode when a record's columns differ from the header."""


def join_topics(source: Dict[str, Any]) -> Dict[str, Any]:
    """Replace the topic list with its sorted, comma-joined names."""

    topics = source.get(TOPIC_FIELD)
    if isinstance(topics, list):
        source[TOPIC_FIELD] = ",".join(sorted(str(topic.get("navn", "")) for topic in topics))
    return source


def visible_columns(flat: Dict[str, Any]) -> List[str]:
    return [key for key in flat if not IGNORE_PATTERN.match(key)]


def _cell(value: Any) -> Any:
    # JSON spelling for booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class SearchExporter:
    """Runs a query_string search and turns the hits into TSV rows."""

    def __init__(self, *, client: ElasticsearchClient, config: AppConfig) -> None:
        self._client = client
        self._config = config

    async def records(self, query: str = "*") -> AsyncIterator[Dict[str, Any]]:
        """Yield the ``_source`` of every hit, one result page at a time."""

        page_size = self._config.search.page_size
        start = 0
        while True:
            response = await self._client.search(
                self._config.search.index,
                {
                    "query": {"query_string": {"query": query}},
                    "from": start,
                    "size": page_size,
                },
            )
            hits = response.get("hits", {})
            page = hits.get("hits") or []
            for hit in page:
                yield hit["_source"]
            start += len(page)
            total = hits.get("total")
            if isinstance(total, dict):
                total = total.get("value")
            if not page or (total is not None and start >= total):
                break

    async def rows(self, query: str = "*") -> AsyncIterator[List[Any]]:
        """Yield a header row followed by one value row per record.

        The first record fixes the columns. Later records are projected onto
        them: missing keys become empty cells and extra keys are dropped,
        unless ``strict_columns`` is configured.
        """

        columns: Optional[List[str]] = None
        drift_reported = False
        async for source in self.records(query):
            flat = flatten(join_topics(source))
            if columns is None:
                columns = visible_columns(flat)
                yield list(columns)
            else:
                current = visible_columns(flat)
                if set(current) != set(columns):
                    if self._config.pipeline.strict_columns:
                        raise SchemaDriftError(
                            f"record columns differ from header: "
                            f"missing={sorted(set(columns) - set(current))} "
                            f"extra={sorted(set(current) - set(columns))}"
                        )
                    if not drift_reported:
                        LOGGER.warning("Search results have varying fields; columns follow the first record")
                        drift_reported = True
            yield [_cell(flat.get(key)) for key in columns]

    async def write_tsv(self, stream: TextIO, query: str = "*") -> int:
        """Write the export to ``stream`` as it arrives. Returns the record count."""

        writer = csv.writer(stream, delimiter="\t", lineterminator="\n")
        count = -1
        async for row in self.rows(query):
            writer.writerow(row)
            count += 1
        return max(count, 0)


__all__ = ["IGNORE_PATTERN", "SchemaDriftError", "SearchExporter", "join_topics", "visible_columns"]

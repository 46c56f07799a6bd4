"""Per-session question counts."""
from __future__ import annotations

import csv
import io
from typing import List, Tuple

from ..clients import ElasticsearchClient
from ..config import AppConfig


class StatsExporter:
    def __init__(self, *, client: ElasticsearchClient, config: AppConfig) -> None:
        self._client = client
        self._config = config

    async def session_counts(self, query: str = "*") -> List[Tuple[str, int]]:
        """Return ``(session, count)`` pairs sorted by session id."""

        response = await self._client.search(
            self._config.search.index,
            {
                "query": {"query_string": {"query": query}},
                "size": 0,
                "aggregations": {
                    "sessionCounts": {
                        "terms": {"field": "sesjon_id", "size": self._config.search.stats_size},
                    }
                },
            },
        )
        buckets = response["aggregations"]["sessionCounts"]["buckets"]
        return sorted(((str(bucket["key"]), bucket["doc_count"]) for bucket in buckets), key=lambda row: row[0])

    async def stats(self, query: str = "*") -> str:
        """Render the counts as a TSV table with a ``session``/``count`` header."""

        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter="\t", lineterminator="\n")
        writer.writerow(["session", "count"])
        writer.writerows(await self.session_counts(query))
        return buffer.getvalue()


__all__ = ["StatsExporter"]

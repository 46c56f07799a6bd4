from __future__ import annotations

from typing import Any, Dict, List

import pytest

from hdo_questions.config import AppConfig, PipelineConfig, SearchConfig, UpstreamConfig


class DummySearchClient:
    """Records calls instead of talking to Elasticsearch."""

    def __init__(self, search_responses: List[Dict[str, Any]] | None = None) -> None:
        self.bulk_calls: List[List[Dict[str, Any]]] = []
        self.search_calls: List[Dict[str, Any]] = []
        self._search_responses = list(search_responses or [])

    async def bulk(self, body: List[Dict[str, Any]]) -> Dict[str, Any]:
        self.bulk_calls.append(body)
        return {"errors": False, "items": []}

    async def search(self, index: str, body: Dict[str, Any]) -> Dict[str, Any]:
        self.search_calls.append(body)
        return self._search_responses.pop(0)


@pytest.fixture()
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        upstream=UpstreamConfig(base_url="https://data.example.invalid/eksport"),
        search=SearchConfig(url="http://search.example.invalid:9200", index="questions-test"),
        pipeline=PipelineConfig(output_path=str(tmp_path), concurrency=2, current_session="2014-2015"),
    )


@pytest.fixture()
def search_client_factory():
    return DummySearchClient

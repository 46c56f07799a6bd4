"""Async REST client for the Elasticsearch index holding the questions."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional
import logging

import httpx

LOGGER = logging.getLogger(__name__)


class SearchEngineError(RuntimeError):
    """Raised when Elasticsearch answers a request with an error status."""

    def __init__(self, status_code: int, body: str, *, method: str = "", url: str = "") -> None:
        super().__init__(f"Elasticsearch returned status {status_code} for {method} {url}: {body}")
        self.status_code = status_code
        self.body = body


class ElasticsearchClient:
    """Thin wrapper over the handful of Elasticsearch endpoints the pipeline needs."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    # --- index lifecycle ------------------------------------------------
    async def create_index(self, index: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/{index}", json=body)

    async def delete_index(self, index: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/{index}")

    # --- documents ------------------------------------------------------
    async def bulk(self, body: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Submit alternating action/document entries as one NDJSON request."""

        payload = "".join(json.dumps(entry, ensure_ascii=False) + "\n" for entry in body)
        result = await self._request(
            "POST",
            "/_bulk",
            content=payload.encode("utf-8"),
            headers={"Content-Type": "application/x-ndjson"},
        )
        if result.get("errors"):
            failed = [
                item
                for item in result.get("items", [])
                if next(iter(item.values()), {}).get("error")
            ]
            LOGGER.warning("Bulk request reported %s failed items", len(failed))
        return result

    async def search(self, index: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/{index}/_search", json=body)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def __aenter__(self) -> "ElasticsearchClient":  # pragma: no cover - trivial
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - trivial
        await self.aclose()

    # --- helpers --------------------------------------------------------
    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        LOGGER.debug("%s %s", method, url)
        response = await self._client.request(method, url, **kwargs)
        if response.status_code >= 400:
            raise SearchEngineError(response.status_code, response.text, method=method, url=url)
        return response.json()


__all__ = ["ElasticsearchClient", "SearchEngineError"]

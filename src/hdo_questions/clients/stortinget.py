"""Async HTTP client for the Stortinget open-data export API."""

from __future__ import annotations

from typing import List, Optional
import logging

import httpx

from ..core.types import Session

LOGGER = logging.getLogger(__name__)


class StortingetClient:
    """Minimal client for the ``/eksport`` endpoints used by the pipeline."""

    def __init__(
        self,
        base_url: str,
        *,
        user_agent: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    # --- public API -----------------------------------------------------
    async def list_sessions(self) -> List[Session]:
        """Return the session identifiers in the order the API lists them.

        Transport errors and malformed bodies propagate to the caller.
        """

        url = self.sessions_url()
        response = await self._client.get(url)
        if response.status_code != 200:
            LOGGER.error("response code %s for %s", response.status_code, url)
        return [entry["id"] for entry in response.json()["sesjoner_liste"]]

    async def fetch_category(self, category: str, session: Session) -> httpx.Response:
        """GET the raw export of ``category`` for ``session``.

        The response is returned whatever its status; callers decide what to
        do with error bodies.
        """

        return await self._client.get(self.category_url(category, session))

    def sessions_url(self) -> str:
        return f"{self._base_url}/sesjoner?format=json"

    def category_url(self, category: str, session: Session) -> str:
        return f"{self._base_url}/{category}?sesjonid={session}&format=json"

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def __aenter__(self) -> "StortingetClient":  # pragma: no cover - trivial
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - trivial
        await self.aclose()


__all__ = ["StortingetClient"]

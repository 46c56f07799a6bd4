"""Local JSON cache of raw export bodies, one file per (category, session)."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

from ..core.types import Session


class CacheWriteError(RuntimeError):
    """Raised when a downloaded body cannot be written to the cache."""


class FileCache:
    """Filesystem layout ``{root}/{category}.{session}.json``.

    All file access runs in a worker thread so the event loop never blocks.
    """

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, category: str, session: Session) -> Path:
        return self._root / f"{category}.{session}.json"

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(path.is_file)

    async def write(self, path: Path, body: bytes, *, source: str = "") -> None:
        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(body)

        try:
            await asyncio.to_thread(_write)
        except OSError as exc:
            raise CacheWriteError(f"unable to write {source or 'response'} to {path}: {exc}") from exc

    async def read_text(self, path: Path) -> str:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    async def list_files(self) -> List[Path]:
        return await asyncio.to_thread(lambda: sorted(self._root.glob("*.json")))


__all__ = ["CacheWriteError", "FileCache"]

"""Index schema and lifecycle."""
from __future__ import annotations

from .lifecycle import create_index, delete_index
from .mapping import MAPPING, TITLE_FIELD

__all__ = ["MAPPING", "TITLE_FIELD", "create_index", "delete_index"]

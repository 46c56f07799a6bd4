"""Field mapping of the question index.

Strings are stored as exact-match keywords, except the title, which is
analysed for full-text search.
"""
from __future__ import annotations

TITLE_FIELD = "tittel"

MAPPING = {
    "dynamic_templates": [
        {
            "notanalyzed": {
                "match": "*",
                "match_mapping_type": "string",
                "mapping": {"type": "keyword"},
            }
        }
    ],
    "properties": {
        TITLE_FIELD: {"type": "text"},
    },
}

__all__ = ["MAPPING", "TITLE_FIELD"]

from __future__ import annotations

from typing import Any, Dict


def flatten(value: Dict[str, Any], *, delimiter: str = ".") -> Dict[str, Any]:
    """Flatten nested objects and lists into a single level of dotted keys.

    List items use their index as path segment (``emner.0.navn``). Empty
    containers are kept as leaf values. Key order follows the input.
    """

    flat: Dict[str, Any] = {}

    def _walk(node: Any, prefix: str) -> None:
        if isinstance(node, dict) and node:
            items = node.items()
        elif isinstance(node, list) and node:
            items = ((str(index), item) for index, item in enumerate(node))
        else:
            flat[prefix] = node
            return
        for key, child in items:
            _walk(child, f"{prefix}{delimiter}{key}" if prefix else str(key))

    for key, child in value.items():
        _walk(child, str(key))
    return flat


__all__ = ["flatten"]

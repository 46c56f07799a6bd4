"""Configuration helpers for the parliament questions pipeline."""
from __future__ import annotations

from .settings import (
    AppConfig,
    PipelineConfig,
    SearchConfig,
    UpstreamConfig,
    load_config,
    resolve_config_path,
)

__all__ = [
    "AppConfig",
    "PipelineConfig",
    "SearchConfig",
    "UpstreamConfig",
    "load_config",
    "resolve_config_path",
]

"""Application configuration helpers for the parliament questions pipeline."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
import types
from typing import Any, Dict, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints


_DEFAULT_CONFIG_LOCATIONS = (
    Path("hdo_questions.json"),
    Path.home() / ".config" / "hdo_questions" / "config.json",
)

ENV_PREFIX = "HDO_QUESTIONS_"


@dataclass(frozen=True, slots=True)
class UpstreamConfig:
    """Configuration for the Stortinget open-data export API."""

    base_url: str = "http://data.stortinget.no/eksport"
    user_agent: str = "hdo-python-fetcher | holderdeord.no"
    timeout: Optional[float] = None


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Configuration for the Elasticsearch endpoint holding the question index."""

    url: str = "http://localhost:9200"
    index: str = "hdo-parliament-questions"
    page_size: int = 100
    stats_size: int = 200
    timeout: Optional[float] = None


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Configuration for the download/index batch jobs."""

    output_path: str = "data"
    concurrency: int = 10
    current_session: str = "2025-2026"
    strict_columns: bool = False


@dataclass(frozen=True, slots=True)
class AppConfig:
    """High level application configuration."""

    upstream: UpstreamConfig
    search: SearchConfig
    pipeline: PipelineConfig


def _load_from_env(prefix: str) -> Dict[str, Any]:
    """Load configuration entries for ``prefix`` from the environment."""

    data: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if key.startswith(prefix):
            normalized_key = key.removeprefix(prefix)
            data[normalized_key.lower()] = value
    return data


def _merge_dict(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    merged = target.copy()
    merged.update({k: v for k, v in updates.items() if v is not None})
    return merged


def _load_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf8") as fh:
        return json.load(fh)


T = TypeVar("T")


def _coerce_value(value: Any, annotation: Any) -> Any:
    """Best-effort conversion of ``value`` to match ``annotation``."""

    if value is None:
        return None

    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]  # noqa: E721 - allow Optional
        if not args:
            return None
        if isinstance(value, str) and value.strip().lower() in {"", "none", "null"}:
            return None
        last_error: Exception | None = None
        for candidate in args:
            try:
                return _coerce_value(value, candidate)
            except (TypeError, ValueError) as exc:
                last_error = exc
        raise ValueError(f"Cannot convert {value!r} to {annotation}") from last_error

    target_type = origin or annotation

    if target_type in {Any, object}:
        return value

    if target_type is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in {"true", "1", "yes", "y", "on"}:
                return True
            if normalized in {"false", "0", "no", "n", "off"}:
                return False
        if isinstance(value, (int, float)):
            return bool(value)
        raise ValueError(f"Cannot convert {value!r} to bool")

    if target_type is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, (float, str)):
            return int(float(value))
        raise ValueError(f"Cannot convert {value!r} to int")

    if target_type is float:
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            return float(value)
        raise ValueError(f"Cannot convert {value!r} to float")

    if target_type is str:
        if isinstance(value, str):
            return value
        return str(value)

    return value


def _dataclass_from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
    """Create dataclass ``cls`` while coercing ``data`` to the proper types."""

    kwargs: Dict[str, Any] = {}
    type_hints = get_type_hints(cls)
    for field in fields(cls):
        if field.name not in data:
            continue
        try:
            annotation = type_hints.get(field.name, field.type)
            kwargs[field.name] = _coerce_value(data[field.name], annotation)
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"Invalid value for {cls.__name__}.{field.name}: {data[field.name]!r}"
            ) from exc
    return cls(**kwargs)


def resolve_config_path(explicit_path: Optional[Path] = None) -> Path:
    """Return the effective configuration file path.

    If ``explicit_path`` is provided it is returned verbatim. Otherwise the
    default locations are checked in order and the first existing file wins;
    if none are present the last default path
    (``~/.config/hdo_questions/config.json``) is returned.
    """

    if explicit_path:
        return explicit_path

    for candidate in _DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    return _DEFAULT_CONFIG_LOCATIONS[-1]


def load_config(explicit_path: Optional[Path] = None) -> AppConfig:
    """Create the application configuration.

    Default values, an optional JSON configuration file and environment
    variables (``HDO_QUESTIONS_*``) are combined into one immutable
    :class:`AppConfig`. Environment variable names use the format
    ``HDO_QUESTIONS_SECTION_FIELD`` (e.g. ``HDO_QUESTIONS_SEARCH_URL``).
    """

    base = {
        "upstream": asdict(UpstreamConfig()),
        "search": asdict(SearchConfig()),
        "pipeline": asdict(PipelineConfig()),
    }

    file_data = _load_config_file(resolve_config_path(explicit_path))

    sections: Dict[str, Dict[str, Any]] = {}
    for name, defaults in base.items():
        from_file = _merge_dict(defaults, file_data.get(name, {}))
        sections[name] = _merge_dict(from_file, _load_from_env(f"{ENV_PREFIX}{name.upper()}_"))

    return AppConfig(
        upstream=_dataclass_from_dict(UpstreamConfig, sections["upstream"]),
        search=_dataclass_from_dict(SearchConfig, sections["search"]),
        pipeline=_dataclass_from_dict(PipelineConfig, sections["pipeline"]),
    )


__all__ = [
    "AppConfig",
    "PipelineConfig",
    "SearchConfig",
    "UpstreamConfig",
    "load_config",
    "resolve_config_path",
]

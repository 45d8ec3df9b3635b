from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .cache import TemplateCache
from .renderer import CardRenderer
from .utils import load_json

UNKNOWN_FILTER_POLICIES = ("passthrough", "error")

DEFAULTS: dict[str, dict[str, Any]] = {
    "filters": {"unknown_filter": "passthrough"},
    "cache": {"max_entries": 256},
    "preview": {"include_default_styles": True, "night_mode": False, "css": ""},
    "export": {"deck_name": None, "tags": []},
}


@dataclass(frozen=True)
class RendererConfig:
    filters: dict[str, Any]
    cache: dict[str, Any]
    preview: dict[str, Any]
    export: dict[str, Any]

    def __post_init__(self) -> None:
        policy = self.unknown_filter
        if policy not in UNKNOWN_FILTER_POLICIES:
            raise ValueError(f"filters.unknown_filter must be one of {UNKNOWN_FILTER_POLICIES}, got {policy!r}")

    @property
    def unknown_filter(self) -> str:
        return str(self.filters.get("unknown_filter", "passthrough"))

    @property
    def strict_filters(self) -> bool:
        return self.unknown_filter == "error"

    @property
    def cache_max_entries(self) -> int:
        return int(self.cache.get("max_entries", 256))


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    merged = dict(DEFAULTS[name])
    value = data.get(name, {})
    if isinstance(value, dict):
        merged.update(value)
    return merged


def config_from_dict(data: dict[str, Any]) -> RendererConfig:
    return RendererConfig(
        filters=_section(data, "filters"),
        cache=_section(data, "cache"),
        preview=_section(data, "preview"),
        export=_section(data, "export"),
    )


def default_config() -> RendererConfig:
    return config_from_dict({})


def load_config(config_path: str | Path | None) -> RendererConfig:
    """Load config JSON; a missing path falls back to the built-in defaults."""
    if config_path is None or not Path(config_path).exists():
        return default_config()
    data = load_json(config_path)
    if not isinstance(data, dict):
        raise ValueError(f"config must be a JSON object: {config_path}")
    return config_from_dict(data)


def build_renderer(cfg: RendererConfig) -> CardRenderer:
    return CardRenderer(
        cache=TemplateCache(max_entries=cfg.cache_max_entries),
        strict_filters=cfg.strict_filters,
    )

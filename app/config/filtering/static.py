"""Static filter profile loader. Read-only; no business logic."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from app.config.filtering.models import FilterConfig
from app.services.filtering.errors import InvalidArgumentError

_config_dir = Path(__file__).resolve().parent
_config_path = _config_dir / "static.json"

_cached_raw: dict[str, Any] | None = None


def _load_raw_data() -> dict[str, Any]:
    """Load raw JSON once; holds both profiles and the active marker."""
    global _cached_raw
    if _cached_raw is None:
        _cached_raw = json.loads(_config_path.read_text(encoding="utf-8"))
    return _cached_raw


def get_active_profile_name() -> str:
    """Return the profile name marked as active in static.json. Defaults to 'default' if missing."""
    return _load_raw_data().get("active", "default")


def get_profile_names() -> list[str]:
    return sorted(_load_raw_data().get("profiles", {}))


def validate_filter_config(data: dict[str, Any]) -> FilterConfig:
    """Validate raw config values, reporting failures as InvalidArgumentError."""
    try:
        return FilterConfig.model_validate(data)
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid filter configuration: {e}", cause=e) from e


def resolve_filter_config(profile_name: str, inline_config: dict[str, Any] | None = None) -> FilterConfig:
    """
    Resolve a filter config from a named profile with optional inline overrides merged on top.
    'active' selects the profile marked active in static.json.
    Raises InvalidArgumentError for an unknown profile or invalid merged values.
    """
    name = get_active_profile_name() if profile_name == "active" else profile_name
    profiles = _load_raw_data().get("profiles", {})
    base = profiles.get(name)
    if base is None:
        raise InvalidArgumentError(f"Unknown filter profile: {name!r}")
    merged = {**base, **(inline_config or {})}
    return validate_filter_config(merged)

"""
YAML-backed engine defaults.

Two files are layered, later wins:
1. config/defaults.yaml - shipped defaults
2. config/settings.yaml - local overrides (not checked in)

Environment variables sit on top of both; see core.config.Settings.
Readers get plain dicts and scalars; typed_config turns the ``engine``
sections into validated models.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

ENGINE_SECTIONS: Tuple[str, ...] = ("weekly", "streak", "mood", "checkin")

_merged: Optional[Dict[str, Any]] = None
_merged_from: Optional[Tuple[Path, Path]] = None


def get_project_root() -> Path:
    """Directory holding ``config/`` (two levels above this package)."""
    return Path(__file__).parent.parent.parent


def load_yaml_file(file_path: Path) -> Dict[str, Any]:
    """Mapping stored in *file_path*; missing, empty or non-mapping files give {}."""
    if not file_path.exists():
        return {}

    with open(file_path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)
    return content if isinstance(content, dict) else {}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """New dict with *override* layered onto *base*, recursing into mappings."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def get_nested(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """Value at a dotted path such as ``engine.weekly.week_starts_on``."""
    node: Any = config
    for key in key_path.split("."):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


def load_defaults(
    defaults_path: Optional[Path] = None,
    settings_path: Optional[Path] = None,
    reload: bool = False,
) -> Dict[str, Any]:
    """Merged defaults and local settings, cached per pair of paths.

    Args:
        defaults_path: Shipped defaults (config/defaults.yaml by default)
        settings_path: Local overrides (config/settings.yaml by default)
        reload: Re-read the files even if cached

    Returns:
        Merged configuration dictionary
    """
    global _merged, _merged_from

    config_dir = get_project_root() / "config"
    sources = (
        defaults_path or config_dir / "defaults.yaml",
        settings_path or config_dir / "settings.yaml",
    )

    if not reload and _merged is not None and _merged_from == sources:
        return _merged

    _merged = deep_merge(load_yaml_file(sources[0]), load_yaml_file(sources[1]))
    _merged_from = sources
    return _merged


def get_config_value(key_path: str, default: Any = None) -> Any:
    """Dotted-path lookup in the merged YAML configuration."""
    return get_nested(load_defaults(), key_path, default)


def get_engine_section(name: str) -> Dict[str, Any]:
    """One ``engine.<name>`` section as a dict; absent or malformed gives {}."""
    value = get_config_value(f"engine.{name}", {})
    return value if isinstance(value, dict) else {}


def get_engine_sections() -> Dict[str, Dict[str, Any]]:
    """All known engine sections, keyed by name."""
    return {name: get_engine_section(name) for name in ENGINE_SECTIONS}


def get_log_dir(default: str = "logs") -> str:
    """``logging.dir`` with ``~`` and environment variables expanded."""
    value = get_config_value("logging.dir", default)
    if not isinstance(value, str) or not value:
        return default
    return os.path.expanduser(os.path.expandvars(value))


def clear_cache() -> None:
    """Forget the merged configuration so the next read hits the files."""
    global _merged, _merged_from
    _merged = None
    _merged_from = None

"""Layered configuration for conanbump.

Sources are merged with increasing precedence:

1. environment variables (CONAN_REMOTE_BASE_URL, CONAN_REMOTE_REPO)
2. global YAML config (per-user config directory)
3. local YAML config (``.conanbump/config.yaml`` in the working directory)
4. an explicit ``--config`` file
5. CLI overrides

Problems reading a config file are collected as warnings and never raise,
so a broken optional file cannot break the CLI.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "conan": {"remote_repo": Constants.DEFAULT_REMOTE},
    "files": {"manifest": Constants.MANIFEST_FILE, "lock": Constants.LOCK_FILE},
}

_CAMEL_RE = re.compile(r'(?<!^)(?=[A-Z])')


@dataclass
class LoadedConfig:
    """Merged configuration plus the source of each dotted key."""
    data: Dict[str, Any] = field(default_factory=dict)
    sources: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def get(self, path: str, default: Any = None) -> Any:
        return get_config_value(self.data, path, default)


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """Read a dotted ``path`` such as ``conan.remote_base_url`` from ``config``."""
    node: Any = config
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return default if node is None else node


def global_config_path() -> str:
    """Per-user config file location for the current platform."""
    home = os.path.expanduser("~")
    if sys.platform == "win32":
        base = os.environ.get("APPDATA") or os.path.join(home, "AppData", "Roaming")
    elif sys.platform == "darwin":
        base = os.path.join(home, "Library", "Application Support")
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(home, ".config")
    return os.path.join(base, Constants.GLOBAL_CONFIG_DIR, Constants.GLOBAL_CONFIG_FILE)


def _normalize_keys(node: Any) -> Any:
    """Accept camelCase keys (``remoteBaseUrl``) as their snake_case form."""
    if isinstance(node, dict):
        return {
            _CAMEL_RE.sub("_", str(k)).lower().replace("-", "_"): _normalize_keys(v)
            for k, v in node.items()
        }
    return node


def _flatten(node: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in node.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def _merge(target: LoadedConfig, layer: Dict[str, Any], source: str) -> None:
    for dotted, value in _flatten(layer).items():
        if value is None:
            continue
        node = target.data
        parts = dotted.split(".")
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value
        target.sources[dotted] = source


def _read_yaml(path: str, warnings: List[str]) -> Dict[str, Any]:
    if not os.path.isfile(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        warnings.append(f"Failed to load config {path}: {exc}")
        return {}
    if not isinstance(data, dict):
        warnings.append(f"Ignoring config {path}: top level is not a mapping")
        return {}
    return _normalize_keys(data)


def _env_config() -> Dict[str, Any]:
    return {
        "conan": {
            "remote_base_url": os.environ.get(Constants.ENV_REMOTE_BASE_URL) or None,
            "remote_repo": os.environ.get(Constants.ENV_REMOTE_REPO) or None,
        }
    }


def load_config(
    cli_overrides: Optional[Dict[str, Any]] = None,
    working_directory: str = ".",
    config_path: Optional[str] = None,
) -> LoadedConfig:
    """Load and merge every configuration source."""
    loaded = LoadedConfig()
    _merge(loaded, DEFAULTS, "default")
    _merge(loaded, _env_config(), "env")
    _merge(loaded, _read_yaml(global_config_path(), loaded.warnings), "global")
    _merge(
        loaded,
        _read_yaml(os.path.join(working_directory, Constants.LOCAL_CONFIG_PATH), loaded.warnings),
        "local",
    )
    if config_path:
        if not os.path.isfile(config_path):
            loaded.warnings.append(f"Config file not found: {config_path}")
        _merge(loaded, _read_yaml(config_path, loaded.warnings), "file")
    _merge(loaded, cli_overrides or {}, "cli")

    for warning in loaded.warnings:
        logger.warning(warning)
    return loaded


def cli_overrides_from_args(args) -> Dict[str, Any]:
    """Build the CLI configuration layer from parsed arguments."""
    return {
        "conan": {
            "remote_base_url": getattr(args, "REMOTE_BASE_URL", None),
            "remote_repo": getattr(args, "REMOTE", None) or getattr(args, "REMOTE_REPO", None),
        },
        "files": {
            "manifest": getattr(args, "MANIFEST", None),
            "lock": getattr(args, "LOCK", None),
        },
    }

#!/usr/bin/env python3
"""
Settings
========
Application settings from meddl/configs/app.yaml.

Relative paths in app.yaml are resolved against the package directory, so
the default rule table is found no matter where the process was started.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
RULES_DIR = PACKAGE_ROOT / "rules"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"

DEFAULT_RULES = "de_oger.yaml"


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    if not APP_CONFIG_PATH.exists():
        raise FileNotFoundError(f"Missing app config: {APP_CONFIG_PATH}")
    data = yaml.safe_load(APP_CONFIG_PATH.read_text(encoding='utf-8'))
    return data or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path, e.g. 'interlude.probability'."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a path string against base (default: the package directory)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if path.is_absolute():
        return path
    return ((base or PACKAGE_ROOT) / path).resolve()


def get_default_rules_path() -> Path:
    """
    Rule table named by rules.default.

    A bare file name is taken from the packaged rules directory. Anything
    else is resolved relative to the package directory.
    """
    value = str(get_setting('rules.default', DEFAULT_RULES))
    packaged = RULES_DIR / value
    if Path(value).name == value and packaged.exists():
        return packaged
    return resolve_path(value)


def get_interlude_probability() -> float:
    """Chance per word that the interlude is appended."""
    value = float(get_setting('interlude.probability', 0.01))
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"interlude.probability must be between 0 and 1, got {value}")
    return value


__all__ = [
    "load_app_config",
    "get_setting",
    "resolve_path",
    "get_default_rules_path",
    "get_interlude_probability",
    "PACKAGE_ROOT",
    "RULES_DIR",
    "APP_CONFIG_PATH",
]

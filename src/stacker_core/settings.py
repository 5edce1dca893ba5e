from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from functools import lru_cache
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

SETTINGS_ENV = "PANEL_STACKER_SETTINGS"


@dataclass(frozen=True)
class StackerSettings:
    default_pallet_count: int = 4
    export_dir: str = ""
    stack_csv_name: str = "curved-panels-stack.csv"
    pallet_csv_name: str = "curved-panels-pallets.csv"
    stack_pdf_name: str = "curved-panels-stack.pdf"
    report_title: str = "Curved Panel Pallet Stacker"
    log_level: str = "INFO"


DEFAULT_SETTINGS = StackerSettings()


def settings_path() -> str:
    env_path = os.getenv(SETTINGS_ENV)
    if env_path:
        return os.path.expanduser(env_path)
    return os.path.join(os.path.dirname(__file__), "settings.yaml")


def _read_settings_file(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        logger.warning("Could not read settings from %s, using defaults", path, exc_info=True)
        return {}
    if not isinstance(loaded, dict):
        logger.warning("Settings file %s is not a mapping, using defaults", path)
        return {}
    return loaded


def _coerce(name: str, value: Any, default: Any) -> Any:
    if isinstance(default, int):
        if isinstance(value, bool):
            raise TypeError(f"{name} must be a number")
        return int(value)
    if value is None:
        return ""
    return str(value)


@lru_cache(maxsize=None)
def load_settings() -> StackerSettings:
    """Load settings from ``settings.yaml`` on top of the defaults."""

    data = _read_settings_file(settings_path())
    values: Dict[str, Any] = {}
    for item in fields(StackerSettings):
        if item.name not in data:
            continue
        default = getattr(DEFAULT_SETTINGS, item.name)
        try:
            values[item.name] = _coerce(item.name, data[item.name], default)
        except (TypeError, ValueError):
            logger.warning(
                "Invalid value %r for setting %s, using %r",
                data[item.name],
                item.name,
                default,
            )
    return StackerSettings(**values)

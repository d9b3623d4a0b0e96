"""Local settings loader and lightweight logging helpers.

Settings are stored in JSON (see local_settings.example.json) so they can be
edited without touching code. Values fall back to documented defaults when the
JSON file is missing.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

_DEFAULT_SETTINGS_FILE = Path(__file__).with_name("local_settings.example.json")


@dataclass(frozen=True)
class DataPaths:
    catalog_export: Optional[str]
    catalog_output: str


@dataclass(frozen=True)
class CsvSettings:
    delimiter: str = ","


@dataclass(frozen=True)
class Settings:
    data_paths: DataPaths
    csv: CsvSettings
    log_level: str = "INFO"


def _read_json(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def _default_payload() -> Dict[str, Any]:
    if _DEFAULT_SETTINGS_FILE.exists():
        return _read_json(_DEFAULT_SETTINGS_FILE)
    # Fallback to hardcoded defaults if the example file was removed.
    return {
        "data_paths": {
            "catalog_export": "data/raw/products.csv",
            "catalog_output": "data/products.json",
        },
        "csv": {
            "delimiter": ",",
        },
        "log_level": "INFO",
    }


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(path: str | Path | None = None) -> Settings:
    candidate = Path(path or os.getenv("LOCAL_SETTINGS_PATH", "local_settings.json"))
    payload = _default_payload()
    if candidate.exists():
        user_payload = _read_json(candidate)
        payload = _merge(payload, user_payload)
    else:
        logging.getLogger(__name__).info(
            "Local settings file %s not found, falling back to defaults", candidate
        )

    data_paths = payload.get("data_paths", {})
    csv_settings = payload.get("csv", {})
    return Settings(
        data_paths=DataPaths(
            catalog_export=data_paths.get("catalog_export"),
            catalog_output=data_paths.get("catalog_output", "data/products.json"),
        ),
        csv=CsvSettings(delimiter=csv_settings.get("delimiter", ",")),
        log_level=payload.get("log_level", "INFO"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure root logging once using the desired log level.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to settings value.
        log_file: Optional file path for log output. If provided, logs to both console and file.
    """
    log_level = level or get_settings().log_level or "INFO"

    handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handlers.append(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,
    )

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, file=%s", log_level, log_file or "console-only"
    )

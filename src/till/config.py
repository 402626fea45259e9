from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Config:
    price_list: Optional[str] = None
    pad_minor_units: bool = False
    strict_scan: bool = False
    log_level: str = "WARNING"


_ENV_PREFIX = "TILL_"
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _find_pyproject(start_dir: Path) -> Path | None:
    for directory in (start_dir, *start_dir.parents):
        candidate = directory / "pyproject.toml"
        if candidate.exists():
            return candidate
    return None


def load_toml_text(text: str) -> Dict[str, Any]:
    try:
        import tomllib  # py311+
    except ModuleNotFoundError:
        import tomli as tomllib

    return tomllib.loads(text)


def _load_toml(path: Path) -> Dict[str, Any]:
    return load_toml_text(path.read_text(encoding="utf-8"))


def _to_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    return default


def _to_log_level(value: Any, default: str) -> str:
    normalized = str(value).strip().upper()
    return normalized if normalized in _LOG_LEVELS else default


def _from_sources(raw: Dict[str, Any], base_dir: Path | None = None) -> Config:
    price_list = os.getenv(f"{_ENV_PREFIX}PRICE_LIST", raw.get("price_list"))
    if price_list and base_dir is not None and "price_list" in raw and f"{_ENV_PREFIX}PRICE_LIST" not in os.environ:
        # paths in pyproject.toml are relative to that file
        price_list = str((base_dir / price_list).resolve())

    pad_minor_units = _to_bool(os.getenv(f"{_ENV_PREFIX}PAD_MINOR_UNITS", raw.get("pad_minor_units", False)), False)
    strict_scan = _to_bool(os.getenv(f"{_ENV_PREFIX}STRICT_SCAN", raw.get("strict_scan", False)), False)
    log_level = _to_log_level(os.getenv(f"{_ENV_PREFIX}LOG_LEVEL", raw.get("log_level", "WARNING")), "WARNING")

    return Config(
        price_list=str(price_list) if price_list else None,
        pad_minor_units=pad_minor_units,
        strict_scan=strict_scan,
        log_level=log_level,
    )


@lru_cache(maxsize=32)
def load_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    root = Path(start_dir or os.getcwd()).resolve()
    pyproject = _find_pyproject(root)
    if pyproject is None:
        return _from_sources({})

    parsed = _load_toml(pyproject)
    tool = parsed.get("tool", {}) if isinstance(parsed, dict) else {}
    till = tool.get("till", {}) if isinstance(tool, dict) else {}
    return _from_sources(till if isinstance(till, dict) else {}, pyproject.parent)


def refresh_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    load_config.cache_clear()
    return load_config(start_dir)

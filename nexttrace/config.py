"""Build metadata and the DN42 settings file (``nt_config.yaml``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

VERSION = "v0.0.0.alpha"
BUILD_DATE = ""
COMMIT_ID = ""

CONFIG_NAME = "nt_config"
CONFIG_EXTENSIONS = ("yaml", "yml")
DEFAULT_SEARCH_DIRS = ("/etc/bin/nexttrace/", "/usr/local/bin/nexttrace/", ".")
DEFAULTS = {
    "ptrpath": "./ptr.csv",
    "geofeedpath": "./geofeed.csv",
}


class _ConfigError(Exception):
    """The settings file is missing or cannot be parsed."""


@dataclass(frozen=True)
class Settings:
    """Settings loaded from ``nt_config.yaml`` merged over the defaults."""

    ptr_path: str = DEFAULTS["ptrpath"]
    geo_feed_path: str = DEFAULTS["geofeedpath"]
    values: dict[str, Any] = field(default_factory=lambda: dict(DEFAULTS))


def _locate(search_dirs: Iterable[str | Path]) -> Path:
    for directory in search_dirs:
        for ext in CONFIG_EXTENSIONS:
            candidate = Path(directory) / f"{CONFIG_NAME}.{ext}"
            if candidate.is_file():
                return candidate
    raise _ConfigError(f"config file {CONFIG_NAME!r} not found")


def _read(search_dirs: Iterable[str | Path]) -> dict[str, Any]:
    path = _locate(search_dirs)
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise _ConfigError(str(exc)) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise _ConfigError(f"{path} does not hold a mapping")
    return {str(key).lower(): value for key, value in loaded.items()}


def _settings_from(values: dict[str, Any]) -> Settings:
    merged = dict(DEFAULTS)
    merged.update(values)
    return Settings(
        ptr_path=str(merged["ptrpath"]),
        geo_feed_path=str(merged["geofeedpath"]),
        values=merged,
    )


def _safe_write(target: Path) -> bool:
    """Write the defaults to ``target`` unless a file is already there."""
    try:
        with target.open("x", encoding="utf-8") as handle:
            yaml.safe_dump(dict(DEFAULTS), handle, default_flow_style=False)
    except OSError:
        return False
    return True


def init_config(search_dirs=None, write_dir=None) -> Settings:
    """Find and read ``nt_config.yaml``, creating a default one if none is found."""
    dirs = list(DEFAULT_SEARCH_DIRS if search_dirs is None else search_dirs)
    target_dir = Path("." if write_dir is None else write_dir)

    try:
        return _settings_from(_read(dirs))
    except _ConfigError:
        print("未能找到配置文件，我们将在您的运行目录为您创建 nt_config.yaml 默认配置")
        if not _safe_write(target_dir / f"{CONFIG_NAME}.yaml"):
            return _settings_from({})

    try:
        return _settings_from(_read(dirs))
    except _ConfigError:
        return _settings_from({})
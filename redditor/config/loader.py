"""Configuration loading helpers for redditor."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from .models import WatchConfig

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
DEFAULT_HOME_NAME = ".redditor"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


@dataclass(slots=True)
class ConfigLocator:
    """Resolve the directories redditor writes to."""

    project_root: Path | None = None
    logs_dir: Path | None = None

    def __post_init__(self) -> None:
        env_root = os.environ.get("REDDITOR_HOME")
        if env_root:
            root = Path(env_root).expanduser().resolve()
        else:
            root = (self.project_root or Path.home() / DEFAULT_HOME_NAME).expanduser().resolve()
        self.project_root = root
        self.logs_dir = (root / "logs").resolve()
        self.ensure_directories()

    def ensure_directories(self) -> None:
        self.logs_dir.mkdir(parents=True, exist_ok=True)


def load_watch_config(path: Path | None) -> WatchConfig:
    """Read and validate a watch configuration file; ``None`` yields defaults."""

    if path is None:
        return WatchConfig()
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    if path.suffix not in CONFIG_EXTENSIONS:
        raise ValueError(f"Unsupported configuration format: {path.suffix}")
    return WatchConfig.model_validate(_read_file(path))


__all__ = ["CONFIG_EXTENSIONS", "DEFAULT_HOME_NAME", "ConfigLocator", "load_watch_config"]

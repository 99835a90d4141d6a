from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError

DEFAULT_CONFIG_PATH = "instnoth.yaml"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class RunConfig:
    """Run defaults from an optional YAML file; command-line flags win.

    Example::

        quick: true
        verbose: false
        seed: 42
        skip_deps: false
        logging:
          path: logs/instnoth.log
          level: debug
    """

    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def quick(self) -> bool:
        return bool(self.raw.get("quick", False))

    @property
    def verbose(self) -> bool:
        return bool(self.raw.get("verbose", False))

    @property
    def skip_deps(self) -> bool:
        return bool(self.raw.get("skip_deps", False))

    @property
    def seed(self) -> Optional[int]:
        seed = self.raw.get("seed")
        if seed is None:
            return None
        try:
            return int(seed)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"seed must be an integer, got {seed!r}") from e

    @property
    def log_path(self) -> Optional[str]:
        path = (self.raw.get("logging") or {}).get("path")
        return str(path) if path else None

    @property
    def log_level(self) -> int:
        name = str((self.raw.get("logging") or {}).get("level") or "info").lower()
        if name not in _LEVELS:
            raise ConfigError(f"unknown log level {name!r}")
        return _LEVELS[name]


def load_run_config(path: Optional[str]) -> RunConfig:
    """Load `path`, or return defaults when no path is given."""

    if path is None:
        return RunConfig()

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"config file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("run config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the run config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping/object")

    return RunConfig(raw=raw)

# Project board — configuration
# Override defaults via projectboard.yaml, PROJECTBOARD_* env vars or CLI args.

import logging
import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("projectboard.yaml")
CONFIG_ENV = "PROJECTBOARD_CONFIG"

LOG_FORMAT = "%(asctime)s [projectboard] %(levelname)s: %(message)s"


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""
    pass


@dataclass
class BoardConfig:
    """Runtime configuration for the project board."""

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 3000
    api_secret: str = ""  # empty = mutating endpoints need no key
    log_level: str = "INFO"

    # Input form bounds
    description_min_length: int = 5
    description_max_length: int = 99
    people_min: int = 1
    people_max: int = 5

    def apply_env(self) -> None:
        """Let PROJECTBOARD_* environment variables win over the file."""
        env = os.environ
        if env.get("PROJECTBOARD_HOST"):
            self.host = env["PROJECTBOARD_HOST"]
        if env.get("PROJECTBOARD_PORT"):
            try:
                self.port = int(env["PROJECTBOARD_PORT"])
            except ValueError:
                raise ConfigError(
                    f"PROJECTBOARD_PORT must be an integer, got: {env['PROJECTBOARD_PORT']!r}"
                )
        if "PROJECTBOARD_API_SECRET" in env:
            self.api_secret = env["PROJECTBOARD_API_SECRET"].strip()
        if env.get("PROJECTBOARD_LOG_LEVEL"):
            self.log_level = env["PROJECTBOARD_LOG_LEVEL"]

    def coerce_types(self) -> None:
        """Convert YAML/env values to each field's declared type."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type is int:
                if isinstance(value, bool):
                    raise ConfigError(f"{f.name} must be an integer, got: {value!r}")
                try:
                    setattr(self, f.name, int(value))
                except (TypeError, ValueError):
                    raise ConfigError(f"{f.name} must be an integer, got: {value!r}")
            elif f.type is str:
                if value is None or isinstance(value, (list, dict)):
                    raise ConfigError(f"{f.name} must be a string, got: {value!r}")
                setattr(self, f.name, str(value))

    def check(self) -> None:
        self.coerce_types()
        if self.description_min_length > self.description_max_length:
            raise ConfigError(
                f"description_min_length ({self.description_min_length}) exceeds "
                f"description_max_length ({self.description_max_length})"
            )
        if self.people_min < 1:
            raise ConfigError(f"people_min must be >= 1, got: {self.people_min}")
        if self.people_min > self.people_max:
            raise ConfigError(
                f"people_min ({self.people_min}) exceeds people_max ({self.people_max})"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError(f"Unknown log_level: {self.log_level}")

    @classmethod
    def load(cls, path: Optional[str] = None) -> "BoardConfig":
        """Load config from YAML file, falling back to defaults."""
        if path is None:
            path = os.environ.get(CONFIG_ENV)
        cfg_path = Path(path) if path else CONFIG_PATH
        known = {f.name for f in fields(cls)}
        cfg = cls()
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                cfg = cls(**{k: v for k, v in data.items() if k in known})
            except (yaml.YAMLError, OSError, TypeError, AttributeError) as e:
                logger.warning(f"Cannot read {cfg_path}, using defaults: {e}")
                cfg = cls()
        cfg.apply_env()
        cfg.check()
        return cfg


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

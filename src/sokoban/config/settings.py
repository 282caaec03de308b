from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from sokoban.collection.loader import load_bundled_collection, load_collection
from sokoban.exceptions import ConfigError
from sokoban.game.session import GameSession

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey values into a bool.

    Accepts: True/False, 1/0, "true"/"false", "yes"/"no", "on"/"off" (case-insensitive).
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off"}:
            return False
    raise ConfigError(f"Not a boolean value: {value!r}")


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Apply the project log format to the root logger."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


@dataclass
class Settings:
    """Engine settings for a host.

    Sources, lowest to highest precedence:
    - the embedded defaults (sokoban/config/defaults.yaml)
    - a YAML file (explicit path, or env SOKOBAN_SETTINGS_FILE)
    - environment variables (prefix: SOKOBAN_)
    """

    collection: Optional[str] = None
    auto_advance: bool = True
    start_level: int = 0
    log_level: str = "WARNING"

    def validate(self) -> None:
        """Validate and normalize settings; raise ConfigError on bad values."""
        self.auto_advance = _as_bool(self.auto_advance)
        try:
            self.start_level = int(self.start_level)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"start_level must be an integer, got {self.start_level!r}") from exc
        if self.start_level < 0:
            raise ConfigError(f"start_level must be >= 0, got {self.start_level}")
        level = str(self.log_level).strip().upper()
        if level not in _LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level!r}")
        self.log_level = level
        if self.collection is not None:
            self.collection = str(self.collection)

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    # ------------------------ Loading & Overrides ------------------------
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            logger.warning("Ignoring unknown settings keys: %s", sorted(unknown))
        obj = cls(**{k: v for k, v in data.items() if k in allowed})
        obj.validate()
        return obj

    @staticmethod
    def read_yaml(text: str, origin: str = "<string>") -> Dict[str, Any]:
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {origin}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Settings in {origin} must be a mapping")
        return raw

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        data = resource_files("sokoban.config").joinpath("defaults.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded default settings")
        return cls.read_yaml(data, "defaults.yaml")

    @classmethod
    def from_yaml_file(cls, path: Path) -> Dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
        logger.debug("Loaded settings from path: %s", path)
        return cls.read_yaml(text, str(path))

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        mapping = {
            "SOKOBAN_COLLECTION": "collection",
            "SOKOBAN_AUTO_ADVANCE": "auto_advance",
            "SOKOBAN_START_LEVEL": "start_level",
            "SOKOBAN_LOG_LEVEL": "log_level",
        }
        return {field: env[key] for key, field in mapping.items() if env.get(key, "") != ""}

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Dict[str, str]] = None,
        file_path: Optional[Path | str] = None,
    ) -> "Settings":
        env = os.environ if env is None else env
        data = cls.defaults()
        if file_path is None and env.get("SOKOBAN_SETTINGS_FILE"):
            file_path = env["SOKOBAN_SETTINGS_FILE"]
        if file_path is not None:
            data.update(cls.from_yaml_file(Path(file_path).expanduser()))
        data.update(cls.from_env(env))
        settings = cls.from_dict(data)
        logger.info(
            "Settings: collection=%s auto_advance=%s start_level=%d",
            settings.collection or "<bundled>",
            settings.auto_advance,
            settings.start_level,
        )
        return settings

    # ------------------------ Integration Helpers ------------------------
    def open_session(self) -> GameSession:
        """Load the configured collection and start a GameSession on it."""
        if self.collection is None:
            levels = load_bundled_collection()
        else:
            levels = load_collection(self.collection)
        return GameSession(levels, auto_advance=self.auto_advance, start=self.start_level)


def load_settings(file_path: Optional[Path | str] = None) -> Settings:
    """Build settings from all sources and apply the configured log level."""
    settings = Settings.from_sources(file_path=file_path)
    configure_logging(settings.log_level)
    return settings


__all__ = ["Settings", "configure_logging", "load_settings"]

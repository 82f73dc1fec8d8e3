"""Layered settings: env/.env, then an optional config file, then runtime pushes.

The config file is master over env; pushed overrides win over both and
survive a file reload until cleared. A push or reload that fails
validation leaves the current settings untouched.
"""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

REDACTED = "***"
SECRET_KEYS = frozenset({"jwt_secret", "database_url"})

_PARSERS = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}


def load_config_file(path: Optional[Path]) -> dict[str, Any]:
    """Parse a YAML or JSON mapping. Missing or unreadable files count as empty."""
    if path is None or not path.exists():
        return {}
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        logger.warning("Ignoring config file with unsupported extension: %s", path)
        return {}
    try:
        data = parser(path.read_text())
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        logger.warning("Could not load config file %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s must hold a mapping, got %s", path, type(data).__name__)
        return {}
    return data


class ConfigStore:
    """Owns the live Settings instance."""

    def __init__(self, settings_cls: type, config_file_path: Optional[str] = None):
        self._settings_cls = settings_cls
        self._path = Path(config_file_path).expanduser().resolve() if config_file_path else None
        self._overrides: dict[str, Any] = {}
        self._current = None
        self._lock = threading.RLock()

    def _build(self, *, with_overrides: bool = True, extra: Optional[dict[str, Any]] = None):
        layers: dict[str, Any] = self._settings_cls().model_dump()
        layers.update(load_config_file(self._path))
        if with_overrides:
            layers.update(self._overrides)
        if extra:
            layers.update(extra)
        return self._settings_cls(**layers)

    def load_initial(self) -> None:
        """Build settings from env, file and any overrides already pushed."""
        with self._lock:
            self._current = self._build()
            if self._path and self._path.exists():
                logger.info("Config file loaded (master over env): %s", self._path)

    def get_settings(self):
        with self._lock:
            if self._current is None:
                self.load_initial()
            return self._current

    @property
    def overrides(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._overrides)

    def update(self, overrides: dict[str, Any]) -> bool:
        """Push overrides. Returns False and keeps the current settings when invalid."""
        with self._lock:
            try:
                settings = self._build(extra=overrides)
            except Exception as e:
                logger.warning("Rejected config push %s: %s", sorted(overrides), e)
                return False
            self._overrides.update(overrides)
            self._current = settings
            logger.info("Config overrides pushed: %s", sorted(overrides))
            return True

    def reload_from_file(self) -> bool:
        """Re-read the file and reapply overrides. Returns False when the result is invalid."""
        with self._lock:
            try:
                self._current = self._build()
            except Exception as e:
                logger.warning("Config reload rejected; keeping previous settings: %s", e)
                return False
            return True

    def clear_overrides(self) -> None:
        """Drop pushed overrides; back to file + env."""
        with self._lock:
            self._overrides.clear()
            self._current = self._build(with_overrides=False)

    def snapshot(self) -> dict[str, Any]:
        """Current values with secrets masked, for the admin config view."""
        values = self.get_settings().model_dump()
        return {k: (REDACTED if k in SECRET_KEYS and v else v) for k, v in values.items()}

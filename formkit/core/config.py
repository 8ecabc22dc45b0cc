"""
Formkit Configuration Management
================================

Centralized configuration for controls and the validation engine:
- Layered sources (defaults, env, runtime)
- Hierarchical configuration with dot notation
- Typed access with defaults

Loading priority (highest to lowest):
1. Runtime overrides (``config.set``)
2. Environment variables (FORMKIT_*)
3. Default values

Option defaults live under the ``options`` section and are consulted by
``Input.get_option`` when neither the control nor its type sets a value.

Example:
    config = get_config()
    config.set("options.validation-script", True)

    config.get("options.error:required")  # "Please fill out this field"
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TypeVar, Union

import orjson

T = TypeVar("T")

ENV_PREFIX = "FORMKIT_"


DEFAULT_UPLOAD_ERRORS: Dict[int, str] = {
    1: "The uploaded file exceeds the maximum upload size",
    2: "The uploaded file exceeds the maximum size allowed by the form",
    3: "The uploaded file was only partially uploaded",
    4: "No file was uploaded",
    6: "Missing a temporary folder",
    7: "Failed to write file to disk",
    8: "File upload stopped by extension",
}


DEFAULTS: Dict[str, Any] = {
    "options": {
        "basic-validation": True,
        "validation-script": False,
        "error:required": "Please fill out this field",
        "error:type": "Please enter a valid {{type}}",
        "error:min": "Value must be greater or equal to {{min}}",
        "error:max": "Value must be less or equal to {{max}}",
        "error:minlength": "Please use {{minlength}} characters or more for this text",
        "error:maxlength": "Please shorten this text to {{maxlength}} characters or less",
        "error:pattern": "Please match the requested format",
        "error:match": "Please match the value of {{match}}",
        "error:upload": DEFAULT_UPLOAD_ERRORS,
    },
    "logging": {
        "level": "WARNING",
        "format": "text",
    },
}


@dataclass
class ConfigSource:
    """Represents a configuration source with priority."""
    name: str
    data: Dict[str, Any]
    priority: int = 0


class Config:
    """
    Configuration container.

    Provides hierarchical configuration access with type coercion
    and default values. Values can be nested using dot notation.

    Example:
        config = Config()
        config.set("options.basic-validation", False)

        config.get("options.basic-validation")  # False
        config.get("options.missing", "default")  # "default"
    """

    def __init__(self, defaults: Optional[Dict[str, Any]] = None) -> None:
        self._sources: List[ConfigSource] = []
        self._cache: Dict[str, Any] = {}
        self._merged: Dict[str, Any] = {}
        self._dirty = True

        if defaults:
            self.add_source("defaults", defaults, priority=0)

    def load_env(self, environ: Optional[Dict[str, str]] = None) -> None:
        """
        Load overrides from FORMKIT_* environment variables.

        FORMKIT_OPTIONS_BASIC__VALIDATION=0 maps to
        ``options.basic-validation``. A double underscore stands for a hyphen.
        """
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}

        for key, value in environ.items():
            if key.startswith(ENV_PREFIX):
                config_key = (
                    key[len(ENV_PREFIX):]
                    .lower()
                    .replace("__", "-")
                    .replace("_", ".")
                )
                overrides[config_key] = self._parse_env_value(value)

        if overrides:
            self.add_source("env_vars", self._unflatten(overrides), priority=100)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return orjson.loads(value)
            except orjson.JSONDecodeError:
                pass

        return value

    def _unflatten(self, flat: Dict[str, Any]) -> Dict[str, Any]:
        """Convert flat dot-notation keys to nested dict."""
        result: Dict[str, Any] = {}

        for key, value in flat.items():
            parts = key.split(".")
            current = result

            for part in parts[:-1]:
                if part not in current:
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = value

        return result

    def add_source(
        self,
        name: str,
        data: Dict[str, Any],
        priority: int = 0,
    ) -> None:
        """Add a configuration source."""
        self._sources.append(ConfigSource(name=name, data=data, priority=priority))
        self._dirty = True
        self._cache.clear()

    def _merge(self) -> None:
        """Merge all sources into single configuration."""
        if not self._dirty:
            return

        # Lower priority first, so higher overrides
        sorted_sources = sorted(self._sources, key=lambda s: s.priority)

        self._merged = {}
        for source in sorted_sources:
            self._deep_merge(self._merged, source.data)

        self._dirty = False
        self._cache.clear()

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        """Deep merge override into base."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            elif isinstance(value, dict):
                base[key] = copy.deepcopy(value)
            else:
                base[key] = value

    def get(
        self,
        key: str,
        default: T = None,
    ) -> Union[Any, T]:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "options.basic-validation")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        self._merge()

        if key in self._cache:
            return self._cache[key]

        current = self._merged
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        self._cache[key] = current
        return current

    def get_int(self, key: str, default: int = 0) -> int:
        """Get configuration value as integer."""
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get configuration value as boolean."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1")
        return bool(value)

    def set(self, key: str, value: Any) -> None:
        """
        Set a runtime configuration value.

        Runtime values have the highest priority.
        """
        runtime_source = None
        for source in self._sources:
            if source.name == "runtime":
                runtime_source = source
                break

        if runtime_source is None:
            runtime_source = ConfigSource(name="runtime", data={}, priority=1000)
            self._sources.append(runtime_source)

        parts = key.split(".")
        current = runtime_source.data

        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]

        current[parts[-1]] = value
        self._dirty = True

    def has(self, key: str) -> bool:
        """Check if configuration key exists."""
        return self.get(key) is not None

    def section(self, prefix: str) -> Dict[str, Any]:
        """Get all values under a prefix."""
        value = self.get(prefix)
        if isinstance(value, dict):
            return value.copy()
        return {}

    def __getitem__(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.has(key)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance, loading env overrides once."""
    global _config
    if _config is None:
        _config = Config(DEFAULTS)
        _config.load_env()
    return _config


def reset_config() -> None:
    """Drop the global configuration (rebuilt on next access)."""
    global _config
    _config = None

# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Configuration loading from dicts, YAML/TOML files and env vars, with dataclass binding."""

from __future__ import annotations

import dataclasses
import enum
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

from csrfshield.kernel.exceptions import ConfigurationException

T = TypeVar("T")

_CONFIG_PROPERTIES_ATTR = "__csrfshield_config_prefix__"
_ENV_PREFIX = "CSRFSHIELD_"
_TRUE_VALUES = ("true", "1", "yes", "on")


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="csrfshield.csrf")
        @dataclass(frozen=True)
        class CsrfProperties:
            cookie_name: str = "csrf_token"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (CSRFSHIELD_SECTION_KEY format)
    2. Configuration dict / file values
    3. Dataclass defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the raw configuration data."""
        return dict(self._data)

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load configuration from a YAML or TOML file.

        A missing file yields an empty configuration, so env vars and
        dataclass defaults still apply.
        """
        path = Path(path)
        if not path.exists():
            return cls({})
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return cls(tomllib.load(f) or {})
        with open(path) as f:
            return cls(yaml.safe_load(f) or {})

    @staticmethod
    def env_key(key: str) -> str:
        """Map a dotted key to its environment variable name.

        ``csrfshield.csrf.cookie_name`` -> ``CSRFSHIELD_CSRF_COOKIE_NAME``
        """
        base = key.removeprefix("csrfshield.")
        return _ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first."""
        env_val = os.environ.get(self.env_key(key))
        if env_val is not None:
            return env_val

        current: Any = self._data
        for part in key.split("."):
            if isinstance(current, dict):
                current = current.get(part)
                if current is None:
                    return default
            else:
                return default
        return current

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix as a dict."""
        current: Any = self._data
        for part in prefix.split("."):
            if isinstance(current, dict):
                current = current.get(part, {})
            else:
                return {}
        return current if isinstance(current, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a @config_properties dataclass.

        Values missing from both the file and the environment fall back to the
        dataclass defaults. String values are coerced to the annotated type.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ConfigurationException(f"{config_cls.__name__} is not decorated with @config_properties")

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            kwargs[field.name] = _coerce(value, hints.get(field.name), f"{prefix}.{field.name}")

        return config_cls(**kwargs)


def _coerce(value: Any, expected_type: Any, key: str) -> Any:
    if not isinstance(value, str):
        return value
    try:
        if expected_type is int:
            return int(value)
        if expected_type is bool:
            return value.strip().lower() in _TRUE_VALUES
        if isinstance(expected_type, type) and issubclass(expected_type, enum.Enum):
            return expected_type(value.strip().lower())
    except ValueError as exc:
        raise ConfigurationException(
            f"Cannot convert '{value}' for '{key}'", code="CONFIG_COERCION", context={"key": key}
        ) from exc
    return value

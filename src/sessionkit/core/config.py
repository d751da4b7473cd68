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
"""Layered configuration: packaged defaults, YAML/TOML files, env vars, binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__sessionkit_config_prefix__"
_ENV_PREFIX = "SESSIONKIT_"
_FILE_STEM = "sessionkit"
_EXTENSIONS = (".yaml", ".toml")
_MAX_PLACEHOLDER_DEPTH = 10


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass or pydantic model as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="sessionkit.session")
        @dataclass
        class SessionProperties:
            store: str = "memory"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (``SESSIONKIT_SECTION_KEY`` format)
    2. Configuration dict / file values
    3. Dataclass or model defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Config sources that were merged, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load and merge config from every known location under *base_dir*.

        Merge order (later wins):
        1. Packaged defaults (``sessionkit-defaults.yaml``)
        2. ``config/sessionkit.yaml`` or ``config/sessionkit.toml``
        3. ``sessionkit.yaml`` or ``sessionkit.toml``
        4. Profile overlays: ``[config/]sessionkit-{profile}.{yaml,toml}``
        5. Environment variables (applied at read time in :meth:`get`)
        """
        base_dir = Path(base_dir)
        data: dict[str, Any] = {}
        sources: list[str] = []

        if load_defaults:
            data = cls._load_defaults()
            sources.append(f"{_FILE_STEM}-defaults.yaml (defaults)")

        candidates: list[tuple[Path, str]] = []
        for search_dir in (base_dir / "config", base_dir):
            candidates.extend((search_dir / f"{_FILE_STEM}{ext}", "") for ext in _EXTENSIONS)
        for profile in active_profiles or []:
            for search_dir in (base_dir / "config", base_dir):
                candidates.extend(
                    (search_dir / f"{_FILE_STEM}-{profile}{ext}", f" (profile: {profile})")
                    for ext in _EXTENSIONS
                )

        for candidate, label in candidates:
            if candidate.is_file():
                data = cls._deep_merge(data, cls._load_file(candidate))
                sources.append(f"{candidate}{label}")

        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @classmethod
    def from_file(cls, path: str | Path, load_defaults: bool = True) -> Config:
        """Load a single YAML or TOML file on top of the packaged defaults."""
        path = Path(path)
        data = cls._load_defaults() if load_defaults else {}
        sources = [f"{_FILE_STEM}-defaults.yaml (defaults)"] if load_defaults else []

        if path.is_file():
            data = cls._deep_merge(data, cls._load_file(path))
            sources.append(str(path))

        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @staticmethod
    def _load_file(path: Path) -> dict[str, Any]:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _load_defaults() -> dict[str, Any]:
        defaults_file = importlib.resources.files("sessionkit.resources").joinpath(
            f"{_FILE_STEM}-defaults.yaml"
        )
        with importlib.resources.as_file(defaults_file) as p, open(p) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    @staticmethod
    def env_key(key: str) -> str:
        """Environment variable consulted for *key*.

        ``sessionkit.session.store`` -> ``SESSIONKIT_SESSION_STORE``
        """
        base = key.removeprefix(f"{_FILE_STEM}.")
        return _ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        String values containing ``${...}`` placeholders are resolved:
        - ``${ENV_VAR}`` from the environment
        - ``${config.key}`` from other config values
        - ``${key:default}`` falling back to *default*
        """
        env_val = os.environ.get(self.env_key(key))
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    def _resolve_placeholders(self, value: str, _depth: int = 0) -> str:
        if _depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. "
                "Check for circular references."
            )

        def _replace(match: re.Match[str]) -> str:
            inner = match.group(1)
            ref_key, sep, default_val = inner.partition(":")

            env_val = os.environ.get(ref_key)
            if env_val is not None:
                return env_val

            current = self._lookup(ref_key)
            if current is not None:
                resolved = str(current)
                if "${" in resolved:
                    resolved = self._resolve_placeholders(resolved, _depth + 1)
                return resolved

            if sep:
                return cast(str, default_val)

            raise ValueError(
                f"Cannot resolve placeholder '${{{inner}}}': not found in environment or config"
            )

        return _PLACEHOLDER_RE.sub(_replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get the mapping stored under *prefix*, or an empty dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a ``@config_properties`` dataclass or pydantic model.

        Environment overrides apply per field, so ``SESSIONKIT_SESSION_STORE``
        wins over ``sessionkit.session.store`` in a file.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        section = dict(self.get_section(prefix))

        from pydantic import BaseModel, ValidationError

        if isinstance(config_cls, type) and issubclass(config_cls, BaseModel):
            for name in config_cls.model_fields:
                env_val = os.environ.get(self.env_key(f"{prefix}.{name}"))
                if env_val is not None:
                    section[name] = env_val
            try:
                return config_cls.model_validate(section)
            except ValidationError as exc:
                raise ValueError(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}"
                ) from exc

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            expected_type = hints.get(field.name)
            if isinstance(value, str):
                if expected_type is int:
                    value = int(value)
                elif expected_type is float:
                    value = float(value)
                elif expected_type is bool:
                    value = value.lower() in ("true", "1", "yes")
            kwargs[field.name] = value

        return config_cls(**kwargs)

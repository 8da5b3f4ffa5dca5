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
"""Configuration for speclogic: YAML/TOML files, env vars, and typed binding.

Values live under the ``speclogic`` root key::

    speclogic:
      evaluation:
        missing-member: none
      translation:
        mongo:
          regex-options: i

Lookup order for :meth:`Config.get` (first hit wins):

1. ``SPECLOGIC_*`` environment variables (``speclogic.evaluation.missing-member``
   is overridden by ``SPECLOGIC_EVALUATION_MISSING_MEMBER``)
2. profile overlays, then ``speclogic.yaml`` / ``speclogic.toml``
3. the packaged ``speclogic-defaults.yaml``
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

ROOT_KEY = "speclogic"
ENV_PREFIX = "SPECLOGIC_"

_PREFIX_ATTR = "__speclogic_config_prefix__"
_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10
_SUFFIXES = (".yaml", ".toml")
_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Declare the configuration section a properties class binds to.

    The class may be a dataclass or a pydantic ``BaseModel``::

        @config_properties(prefix="speclogic.evaluation")
        @dataclass
        class EvaluationProperties:
            mapping_access: bool = True
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def _env_name(key: str) -> str:
    name = key.removeprefix(f"{ROOT_KEY}.")
    return ENV_PREFIX + re.sub(r"[.\-]", "_", name).upper()


def _lookup(data: dict[str, Any], key: str) -> Any:
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def _merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with path.open("rb") as fh:
            return tomllib.load(fh)
    with path.open() as fh:
        return yaml.safe_load(fh) or {}


def _read_defaults() -> dict[str, Any]:
    resource = importlib.resources.files("speclogic.resources") / f"{ROOT_KEY}-defaults.yaml"
    return yaml.safe_load(resource.read_text()) or {}


def _candidates(base_dir: Path, profiles: list[str]) -> Iterator[tuple[Path, str | None]]:
    stems: list[tuple[str, str | None]] = [(ROOT_KEY, None)]
    stems += [(f"{ROOT_KEY}-{profile}", profile) for profile in profiles]
    for stem, profile in stems:
        for directory in (base_dir / "config", base_dir):
            for suffix in _SUFFIXES:
                yield directory / f"{stem}{suffix}", profile


def _coerce(value: Any, expected: Any) -> Any:
    if not isinstance(value, str):
        return value
    if expected is bool:
        return value.strip().lower() in _TRUE_STRINGS
    if expected in (int, float):
        return expected(value)
    return value


class Config:
    """Nested configuration values with dot-notation access."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Descriptions of the merged sources, lowest priority first."""
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
        """Merge the packaged defaults with the ``speclogic.*`` files in *base_dir*.

        ``config/`` is searched before *base_dir* itself, so files in the
        project root win. Profile overlays (``speclogic-<profile>.yaml``)
        are applied last, in the order given.
        """
        config = cls()
        if load_defaults:
            config._overlay(_read_defaults(), f"{ROOT_KEY}-defaults.yaml (library defaults)")
        for path, profile in _candidates(Path(base_dir), active_profiles or []):
            if path.is_file():
                label = str(path) if profile is None else f"{path} (profile: {profile})"
                config._overlay(_read(path), label)
        return config

    @classmethod
    def from_file(cls, path: str | Path, load_defaults: bool = True) -> Config:
        """Load one YAML or TOML file, optionally on top of the packaged defaults."""
        path = Path(path)
        if path.stem == ROOT_KEY:
            return cls.from_sources(path.parent, load_defaults=load_defaults)

        config = cls()
        if load_defaults:
            config._overlay(_read_defaults(), f"{ROOT_KEY}-defaults.yaml (library defaults)")
        if path.is_file():
            config._overlay(_read(path), str(path))
        return config

    def _overlay(self, data: dict[str, Any], source: str) -> None:
        self._data = _merge(self._data, data)
        self._loaded_sources.append(source)

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dot-notation *key*, or *default*.

        ``${NAME}``, ``${other.key}`` and ``${NAME:fallback}`` placeholders in
        string values are resolved against the environment, then the config.
        """
        env_value = os.environ.get(_env_name(key))
        if env_value is not None:
            return env_value

        value = _lookup(self._data, key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._interpolate(value, 0)
        return value

    def _interpolate(self, value: str, depth: int) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{value}' nest too deeply; check for circular references")

        def substitute(match: re.Match[str]) -> str:
            ref, _, fallback = match.group(1).partition(":")
            has_fallback = ":" in match.group(1)

            env_value = os.environ.get(ref)
            if env_value is not None:
                return env_value
            found = _lookup(self._data, ref)
            if found is not None:
                text = str(found)
                return self._interpolate(text, depth + 1) if "${" in text else text
            if has_fallback:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}'")

        return _PLACEHOLDER_RE.sub(substitute, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """The mapping stored under *prefix*, or an empty dict."""
        section = _lookup(self._data, prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, properties_cls: type[T]) -> T:
        """Instantiate a ``@config_properties`` class from its section.

        Section keys may be ``kebab-case`` or ``snake_case``. Each field is
        read through :meth:`get`, so ``SPECLOGIC_*`` overrides and
        ``${...}`` placeholders apply to bound values too.
        """
        prefix = getattr(properties_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{properties_cls.__name__} is not decorated with @config_properties")

        if issubclass(properties_cls, BaseModel):
            names = list(properties_cls.model_fields)
        else:
            names = [f.name for f in dataclasses.fields(properties_cls)]  # type: ignore[arg-type]
        values = self._field_values(prefix, names)

        if issubclass(properties_cls, BaseModel):
            try:
                return properties_cls.model_validate(values)
            except ValidationError as exc:
                raise ValueError(
                    f"Invalid configuration for {properties_cls.__name__} (prefix='{prefix}'):\n{exc}"
                ) from exc

        hints = get_type_hints(properties_cls)
        kwargs = {name: _coerce(value, hints.get(name)) for name, value in values.items()}
        return properties_cls(**kwargs)

    def _field_values(self, prefix: str, names: list[str]) -> dict[str, Any]:
        section = self.get_section(prefix)
        values: dict[str, Any] = {}
        for name in names:
            kebab = name.replace("_", "-")
            key = kebab if kebab in section else name
            value = self.get(f"{prefix}.{key}")
            if value is not None:
                values[name] = value
        return values

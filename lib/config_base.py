from __future__ import annotations

import json
import tomllib
from dataclasses import asdict, fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, TypeVar, get_type_hints

TConfig = TypeVar("TConfig", bound="ConfigBase")


def load_config_file(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix == ".toml":
        data = tomllib.loads(path.read_text())
    elif path.suffix == ".json":
        data = json.loads(path.read_text())
    else:
        raise ValueError(
            f"Unsupported config format: {path.suffix}. Use .toml or .json."
        )
    if not isinstance(data, Mapping):
        raise ValueError("Config must parse to a mapping at the top level.")
    return dict(data)


class ConfigBase:
    """Mixin for dataclass configs loaded from .toml/.json and dotted overrides."""

    @classmethod
    def from_file(cls: type[TConfig], config_path: str | Path) -> TConfig:
        return cls.from_dict(load_config_file(config_path))

    @classmethod
    def from_dict(cls: type[TConfig], data: Mapping[str, Any]) -> TConfig:
        field_names = {f.name for f in fields(cls)}
        unknown = [key for key in data if key not in field_names]
        if unknown:
            keys = ", ".join(sorted(unknown))
            raise ValueError(f"Unknown config field(s): {keys}")

        type_hints = get_type_hints(cls)
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            if f.name in data:
                kwargs[f.name] = cls._coerce_value(
                    type_hints.get(f.name, f.type), data[f.name], path=f.name
                )
        return cls(**kwargs)  # type: ignore[call-arg]

    def to_dict(self) -> dict[str, Any]:
        return json.loads(json.dumps(asdict(self), default=_encode_value))

    def with_flat_updates(self: TConfig, updates: Mapping[str, Any]) -> TConfig:
        merged = self.to_dict()
        for dotted_key, value in updates.items():
            _deep_set(merged, dotted_key, value)
        return type(self).from_dict(merged)

    @classmethod
    def _coerce_value(cls, field_type: Any, incoming: Any, *, path: str) -> Any:
        if not isinstance(field_type, type):
            return incoming
        if is_dataclass(field_type) and issubclass(field_type, ConfigBase):
            if not isinstance(incoming, Mapping):
                raise ValueError(f"Expected mapping for nested config field `{path}`.")
            return field_type.from_dict(incoming)
        if issubclass(field_type, Enum):
            try:
                return field_type(incoming)
            except ValueError:
                choices = ", ".join(str(m.value) for m in field_type)
                raise ValueError(
                    f"Invalid value {incoming!r} for `{path}` (expected one of: {choices})"
                ) from None
        return incoming


def _encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Cannot encode config value of type {type(value).__name__}")


def _deep_set(target: dict[str, Any], dotted_key: str, value: Any) -> None:
    if not dotted_key:
        raise ValueError("Config override keys must be non-empty.")
    parts = dotted_key.split(".")
    if any(not part for part in parts):
        raise ValueError(f"Invalid override key `{dotted_key}`.")
    cursor = target
    for part in parts[:-1]:
        existing = cursor.get(part)
        if not isinstance(existing, dict):
            raise ValueError(
                f"Cannot set nested key `{dotted_key}` because `{part}` is not a mapping."
            )
        cursor = existing
    cursor[parts[-1]] = value

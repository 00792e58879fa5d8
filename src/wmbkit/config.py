"""Decode options and their loading from JSON/YAML files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, Mapping

import yaml

from .format.errors import config_error

__all__ = ["CoordinateSystem", "DecodeOptions", "load_options"]


class CoordinateSystem(IntEnum):
    GAMESTUDIO = 0  # native: x forward, y left, z up
    OPENGL = 1
    DIRECTX = 2

    @classmethod
    def parse(cls, value: Any) -> "CoordinateSystem":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise config_error(
            f"Unknown coordinate system {value!r}",
            {"choices": [c.name.lower() for c in cls]},
        )


@dataclass(frozen=True, slots=True)
class DecodeOptions:
    coordinate_system: CoordinateSystem = CoordinateSystem.GAMESTUDIO
    log_warnings: bool = True
    log_errors: bool = True
    log_verbose: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DecodeOptions":
        known = {"coordinate_system", "log_warnings", "log_errors", "log_verbose"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise config_error(
                f"Unknown option(s): {', '.join(unknown)}", {"keys": unknown}
            )
        kwargs: dict[str, Any] = {}
        if "coordinate_system" in data:
            kwargs["coordinate_system"] = CoordinateSystem.parse(
                data["coordinate_system"]
            )
        for key in ("log_warnings", "log_errors", "log_verbose"):
            if key in data:
                if not isinstance(data[key], bool):
                    raise config_error(f"'{key}' must be a boolean", {"key": key})
                kwargs[key] = data[key]
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "coordinate_system": self.coordinate_system.name.lower(),
            "log_warnings": self.log_warnings,
            "log_errors": self.log_errors,
            "log_verbose": self.log_verbose,
        }


def load_options(path: str | Path) -> DecodeOptions:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise config_error(f"Cannot parse options file {p.name}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise config_error("Root of options file must be a mapping")
    return DecodeOptions.from_dict(data)

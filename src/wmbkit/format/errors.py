"""Error definitions for the WMB decoder.

Every fatal decode condition is a ``WmbError`` subclass carrying a stable
code; recoverable conditions are only logged.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_SOURCE = "E_SOURCE"
E_TRUNCATED = "E_TRUNCATED"
E_SEEK_RANGE = "E_SEEK_RANGE"
E_BAD_MAGIC = "E_BAD_MAGIC"
E_TEXTURE_FORMAT = "E_TEXTURE_FORMAT"
E_OBJECT_TYPE = "E_OBJECT_TYPE"
E_NO_ENVIRONMENT = "E_NO_ENVIRONMENT"
E_LIGHTMAP_SIZE = "E_LIGHTMAP_SIZE"
E_CONFIG = "E_CONFIG"


@dataclass
class WmbError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class SourceError(WmbError):
    pass


class TruncatedInputError(SourceError):
    pass


class SeekRangeError(SourceError):
    pass


class BadMagicError(WmbError):
    pass


class TextureFormatError(WmbError):
    pass


class ObjectTypeError(WmbError):
    pass


class MissingEnvironmentError(WmbError):
    pass


class LightmapSizeError(WmbError):
    pass


class ConfigError(WmbError):
    pass


def truncated(
    offset: int, wanted: int, available: int, label: str = "read"
) -> TruncatedInputError:
    return TruncatedInputError(
        code=E_TRUNCATED,
        message=f"Unexpected end of input during {label} at {offset}: need {wanted}, have {available}",
        context={"offset": offset, "wanted": wanted, "available": available},
    )


def config_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> ConfigError:
    return ConfigError(code=E_CONFIG, message=message, context=context)


__all__ = [
    "WmbError",
    "SourceError",
    "TruncatedInputError",
    "SeekRangeError",
    "BadMagicError",
    "TextureFormatError",
    "ObjectTypeError",
    "MissingEnvironmentError",
    "LightmapSizeError",
    "ConfigError",
    "truncated",
    "config_error",
    "E_SOURCE",
    "E_TRUNCATED",
    "E_SEEK_RANGE",
    "E_BAD_MAGIC",
    "E_TEXTURE_FORMAT",
    "E_OBJECT_TYPE",
    "E_NO_ENVIRONMENT",
    "E_LIGHTMAP_SIZE",
    "E_CONFIG",
]

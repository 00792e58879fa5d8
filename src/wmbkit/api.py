"""High-level API for wmbkit."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .config import DecodeOptions
from .format.decoder import decode_level
from .format.directory import read_directory
from .format.errors import WmbError
from .format.reader import ByteSource, Source
from .logging import get_logger
from .model import Entity, Level, Light, Path, Position, Region, Sound

__all__ = [
    "load_level",
    "inspect_directory",
    "summarize_level",
    "texture_rows",
]


def load_level(source: Source, options: Optional[DecodeOptions] = None) -> Level:
    """Decode a WMB7 level from a path, a bytes object or a binary stream.

    Returns the complete level or raises a ``WmbError``; a partially decoded
    level is never returned. Files opened from a path are always closed.
    """
    options = options or DecodeOptions()
    try:
        with ByteSource.open(source) as src:
            return decode_level(src, options)
    except WmbError as exc:
        if options.log_errors:
            get_logger().error("Failed to load level: %s", exc)
        raise


def inspect_directory(source: Source) -> Dict[str, Any]:
    """Header check and raw section table, without decoding any section."""
    with ByteSource.open(source) as src:
        directory = read_directory(src)
        return {
            "file_size": src.size,
            "magic": directory.magic.decode("ascii"),
            "sections": directory.to_dict(),
        }


_OBJECT_KINDS = (
    ("positions", Position),
    ("lights", Light),
    ("sounds", Sound),
    ("paths", Path),
    ("entities", Entity),
    ("regions", Region),
)


def summarize_level(level: Level) -> Dict[str, Any]:
    info = level.info
    return {
        "info": {
            "azimuth": info.azimuth,
            "elevation": info.elevation,
            "gamma": round(info.gamma, 4),
            "lightmap_size": info.lightmap_size,
        },
        "textures": len(level.textures),
        "materials": len(level.materials),
        "blocks": len(level.blocks),
        "vertices": sum(len(b.vertices) for b in level.blocks),
        "triangles": sum(len(b.triangles) for b in level.blocks),
        "lightmaps": len(level.lightmaps),
        "terrain_lightmaps": len(level.terrain_lightmaps),
        "warnings": len(level.warnings),
        "objects": {
            name: len(level.objects_of(kind)) for name, kind in _OBJECT_KINDS
        },
    }


def texture_rows(level: Level) -> List[str]:
    return [
        f"size={t.width}*{t.height},\tformat={t.format.name},\tname='{t.name}'"
        for t in level.textures
    ]

"""Level assembly: runs the section decoders in dependency order.

Textures, materials and blocks are independent. Objects must be decoded
before block lightmaps because the lightmap edge length comes from the Info
record. Any ``WmbError`` raised along the way aborts the whole decode.
"""

from __future__ import annotations

from typing import Optional

from ..config import DecodeOptions
from ..logging import get_logger
from ..model import Color, Info, Level
from .blocks import decode_blocks
from .constants import LIGHTMAP_SIZES
from .coords import CoordinateMapper
from .directory import read_directory
from .errors import (
    E_LIGHTMAP_SIZE,
    E_NO_ENVIRONMENT,
    LightmapSizeError,
    MissingEnvironmentError,
)
from .lightmaps import decode_lightmaps, decode_terrain_lightmaps
from .materials import decode_materials
from .objects import EnvironmentRecord, ObjectPass, decode_objects
from .reader import ByteSource
from .textures import decode_textures

__all__ = ["resolve_environment", "decode_level"]


def resolve_environment(record: Optional[EnvironmentRecord]) -> Info:
    if record is None:
        raise MissingEnvironmentError(
            code=E_NO_ENVIRONMENT,
            message="Level has no Info object",
        )
    sel = record.lightmap_selector
    if not 0 <= sel < len(LIGHTMAP_SIZES):
        raise LightmapSizeError(
            code=E_LIGHTMAP_SIZE,
            message=f"Invalid lightmap size selector {sel}",
            context={"selector": sel, "allowed": list(range(len(LIGHTMAP_SIZES)))},
        )
    return Info(
        azimuth=record.azimuth,
        elevation=record.elevation,
        gamma=record.gamma / 255.0,
        lightmap_size=LIGHTMAP_SIZES[sel],
        sun_color=Color.from_argb(record.sun_color),
        ambient_color=Color.from_argb(record.ambient_color),
        fog_colors=tuple(Color.from_argb(c) for c in record.fog_colors),
    )


def decode_level(src: ByteSource, options: DecodeOptions) -> Level:
    logger = get_logger()
    directory = read_directory(src)
    mapper = CoordinateMapper(options.coordinate_system)

    def _present(name: str):
        sec = directory[name]
        return sec if sec.present else None

    sec = _present("textures")
    textures = decode_textures(src, sec) if sec else []
    sec = _present("materials")
    materials = decode_materials(src, sec) if sec else []
    sec = _present("blocks")
    blocks = decode_blocks(src, sec, mapper) if sec else []

    state = decode_objects(
        src,
        directory["objects"],
        ObjectPass(mapper=mapper, options=options, label=src.label),
    )
    info = resolve_environment(state.environment)

    sec = _present("lightmaps")
    lightmaps = decode_lightmaps(src, sec, info.lightmap_size) if sec else []
    sec = _present("terrain_lightmaps")
    terrain = decode_terrain_lightmaps(src, sec) if sec else []

    if options.log_verbose:
        logger.debug(
            "%s: textures=%d materials=%d blocks=%d objects=%d lightmaps=%d terrain_lightmaps=%d lightmap_size=%d",
            src.label,
            len(textures),
            len(materials),
            len(blocks),
            len(state.objects),
            len(lightmaps),
            len(terrain),
            info.lightmap_size,
        )

    return Level(
        info=info,
        textures=tuple(textures),
        materials=tuple(materials),
        lightmaps=tuple(lightmaps),
        terrain_lightmaps=tuple(terrain),
        blocks=tuple(blocks),
        objects=tuple(state.objects),
        warnings=tuple(state.warnings),
    )

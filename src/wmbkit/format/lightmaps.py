"""Block and terrain lightmap decoders (3 bytes per pixel, BGR)."""

from __future__ import annotations

from typing import List

from ..model import Lightmap
from .constants import LIGHTMAP_BYTES_PER_PIXEL, TERRAIN_LIGHTMAP_HEADER
from .directory import Section
from .reader import ByteSource

__all__ = ["lightmap_count", "decode_lightmaps", "decode_terrain_lightmaps"]


def lightmap_count(section_length: int, size: int) -> int:
    return section_length // (LIGHTMAP_BYTES_PER_PIXEL * size * size)


def decode_lightmaps(src: ByteSource, section: Section, size: int) -> List[Lightmap]:
    """Square lightmaps of the level-wide size; the count is implied by length."""
    src.seek(section.offset)
    nbytes = LIGHTMAP_BYTES_PER_PIXEL * size * size
    return [
        Lightmap(width=size, height=size, data=src.read_bytes(nbytes, "lightmap"))
        for _ in range(lightmap_count(section.length, size))
    ]


def decode_terrain_lightmaps(src: ByteSource, section: Section) -> List[Lightmap]:
    src.seek(section.offset)
    count = src.read_u32("terrain lightmap count")
    lightmaps: List[Lightmap] = []
    for _ in range(count):
        obj, width, height = src.read_struct(
            TERRAIN_LIGHTMAP_HEADER, "terrain lightmap header"
        )
        data = src.read_bytes(
            LIGHTMAP_BYTES_PER_PIXEL * width * height, "terrain lightmap"
        )
        lightmaps.append(Lightmap(width=width, height=height, data=data, object=obj))
    return lightmaps

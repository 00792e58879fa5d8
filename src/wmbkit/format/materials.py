"""Material section: back-to-back 64-byte MATERIAL_INFO records."""

from __future__ import annotations

from typing import List

from ..model import Material
from .constants import DEFAULT_MATERIAL_SENTINEL, MATERIAL_INFO
from .directory import Section
from .reader import ByteSource, decode_cstr

__all__ = ["decode_materials"]


def decode_materials(src: ByteSource, section: Section) -> List[Material]:
    src.seek(section.offset)
    materials: List[Material] = []
    for _ in range(section.length // MATERIAL_INFO.size):
        (raw_name,) = src.read_struct(MATERIAL_INFO, "material")
        materials.append(
            Material(
                name=decode_cstr(raw_name),
                is_default=raw_name.startswith(DEFAULT_MATERIAL_SENTINEL),
            )
        )
    return materials

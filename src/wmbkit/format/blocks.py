"""Block (mesh) section decoder.

The section is strictly sequential: a block count, then for every block its
header immediately followed by the vertex, triangle and skin arrays.
"""

from __future__ import annotations

from typing import List

from ..model import Block, Skin, Triangle, Vec2, Vec3, Vertex
from .constants import BLOCK_HEADER, SKIN, TRIANGLE, VERTEX
from .coords import CoordinateMapper
from .directory import Section
from .reader import ByteSource

__all__ = ["decode_blocks"]


def _read_block(src: ByteSource, mapper: CoordinateMapper) -> Block:
    h = src.read_struct(BLOCK_HEADER, "block header")
    bb_min, bb_max = Vec3(*h[0:3]), Vec3(*h[3:6])
    num_verts, num_tris, num_skins = h[7:10]

    vertices = []
    for _ in range(num_verts):
        x, y, z, tu, tv, su, sv = src.read_struct(VERTEX, "vertex")
        vertices.append(
            Vertex(
                position=mapper.position(x, y, z),
                uv=Vec2(tu, tv),
                lightmap_uv=Vec2(su, sv),
            )
        )

    triangles = []
    for _ in range(num_tris):
        v1, v2, v3, skin, _unused = src.read_struct(TRIANGLE, "triangle")
        triangles.append(Triangle(*mapper.triangle(v1, v2, v3), skin=skin))

    skins = [Skin(*src.read_struct(SKIN, "skin")) for _ in range(num_skins)]

    return Block(
        bb_min=bb_min,
        bb_max=bb_max,
        vertices=tuple(vertices),
        triangles=tuple(triangles),
        skins=tuple(skins),
    )


def decode_blocks(
    src: ByteSource, section: Section, mapper: CoordinateMapper
) -> List[Block]:
    src.seek(section.offset)
    count = src.read_u32("block count")
    return [_read_block(src, mapper) for _ in range(count)]

"""Binary layout constants for WMB7 level files.

All multi-byte values are little-endian; record layouts are packed (no
alignment padding), which ``struct`` gives us with the ``<`` prefix.
"""

from __future__ import annotations

import struct
from enum import IntEnum

MAGIC = b"WMB7"

# Section directory, in file order. Slots named legacy*/pvs/bsp_*/aabb_hulls
# are only meaningful for older WMB versions or BSP maps and are not decoded.
SECTION_NAMES = (
    "palettes",
    "legacy1",
    "textures",
    "legacy2",
    "pvs",
    "bsp_nodes",
    "materials",
    "legacy3",
    "legacy4",
    "aabb_hulls",
    "bsp_leafs",
    "bsp_blocks",
    "legacy5",
    "legacy6",
    "legacy7",
    "objects",
    "lightmaps",
    "blocks",
    "legacy8",
    "terrain_lightmaps",
)

U32 = struct.Struct("<I")
HEADER = struct.Struct("<4s" + "II" * len(SECTION_NAMES))

TEXTURE_HEADER = struct.Struct("<16sIII3I")
TEXTURE_FORMAT_MASK = 0x07
TEXTURE_MIPMAP_BIT = 0x08
MAX_EXTRA_MIP_LEVELS = 3

MATERIAL_INFO = struct.Struct("<44x20s")
DEFAULT_MATERIAL_SENTINEL = b"\x00def"

BLOCK_HEADER = struct.Struct("<6fI3I")
VERTEX = struct.Struct("<7f")
TRIANGLE = struct.Struct("<4HI")
SKIN = struct.Struct("<2HI2fI")

OBJ_INFO = struct.Struct("<3f2fIfBB2I2I4I")
OBJ_POSITION = struct.Struct("<3f3f2I20s")
OBJ_LIGHT = struct.Struct("<3f3ffI")
OBJ_SOUND = struct.Struct("<3ff2fII33s")
OBJ_PATH = struct.Struct("<20sf3II")
PATH_NODE_POSITION = struct.Struct("<3f")
PATH_NODE_SKILLS = struct.Struct("<6f")
PATH_EDGE = struct.Struct("<6f")
OBJ_ENTITY = struct.Struct("<3f3f3f33s33s33sx20fIffiI33s33s33s33x")
OBJ_OLD_ENTITY = struct.Struct("<3f3f3f20s13s20s8fIf")
OBJ_REGION = struct.Struct("<3f3fII32s")

TERRAIN_LIGHTMAP_HEADER = struct.Struct("<3I")
LIGHTMAP_BYTES_PER_PIXEL = 3

# Info.LMapSize selector -> lightmap edge length in pixels.
LIGHTMAP_SIZES = (256, 512, 1024)

ENTITY_SKILLS = 20
OLD_ENTITY_SKILLS = 8
PATH_SKILLS = 6
FOG_COLORS = 4


class ObjectTag(IntEnum):
    POSITION = 1
    LIGHT = 2
    OLD_ENTITY = 3
    SOUND = 4
    INFO = 5
    PATH = 6
    ENTITY = 7
    REGION = 8


class TextureFormat(IntEnum):
    RGB565 = 2
    RGB888 = 4
    RGBA8888 = 5
    DDS = 6

    @property
    def bytes_per_pixel(self) -> int:
        # DDS payloads are sized by the header, not by pixel count
        return _BYTES_PER_PIXEL.get(self, 0)

    @property
    def is_compressed(self) -> bool:
        return self is TextureFormat.DDS


_BYTES_PER_PIXEL = {
    TextureFormat.RGB565: 2,
    TextureFormat.RGB888: 3,
    TextureFormat.RGBA8888: 4,
}

__all__ = [
    "MAGIC",
    "SECTION_NAMES",
    "U32",
    "HEADER",
    "TEXTURE_HEADER",
    "TEXTURE_FORMAT_MASK",
    "TEXTURE_MIPMAP_BIT",
    "MAX_EXTRA_MIP_LEVELS",
    "MATERIAL_INFO",
    "DEFAULT_MATERIAL_SENTINEL",
    "BLOCK_HEADER",
    "VERTEX",
    "TRIANGLE",
    "SKIN",
    "OBJ_INFO",
    "OBJ_POSITION",
    "OBJ_LIGHT",
    "OBJ_SOUND",
    "OBJ_PATH",
    "PATH_NODE_POSITION",
    "PATH_NODE_SKILLS",
    "PATH_EDGE",
    "OBJ_ENTITY",
    "OBJ_OLD_ENTITY",
    "OBJ_REGION",
    "TERRAIN_LIGHTMAP_HEADER",
    "LIGHTMAP_BYTES_PER_PIXEL",
    "LIGHTMAP_SIZES",
    "ENTITY_SKILLS",
    "OLD_ENTITY_SKILLS",
    "PATH_SKILLS",
    "FOG_COLORS",
    "ObjectTag",
    "TextureFormat",
]

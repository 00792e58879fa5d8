"""Dataclass models for a decoded WMB level.

Records are frozen and collections are tuples, so a ``Level`` cannot be
changed after decoding and two decodes of the same bytes compare equal.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional, Tuple, Type, TypeVar, Union

from .format.constants import TextureFormat


class Vec2(NamedTuple):
    u: float
    v: float


class Vec3(NamedTuple):
    x: float
    y: float
    z: float


class Euler(NamedTuple):
    pan: float
    tilt: float
    roll: float


class Color(NamedTuple):
    r: float
    g: float
    b: float
    a: float

    @classmethod
    def from_argb(cls, value: int) -> "Color":
        return cls(
            ((value >> 16) & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            (value & 0xFF) / 255.0,
            ((value >> 24) & 0xFF) / 255.0,
        )


def _bit(flags: int, index: int) -> bool:
    return bool((flags >> index) & 1)


@dataclass(frozen=True, slots=True)
class Info:
    azimuth: float
    elevation: float
    gamma: float
    lightmap_size: int
    sun_color: Color
    ambient_color: Color
    fog_colors: Tuple[Color, ...]


@dataclass(frozen=True, slots=True)
class Texture:
    name: str
    width: int
    height: int
    format: TextureFormat
    has_mipmaps: bool
    levels: Tuple[bytes, ...]

    @property
    def data(self) -> bytes:
        return self.levels[0]


@dataclass(frozen=True, slots=True)
class Material:
    name: str
    is_default: bool


@dataclass(frozen=True, slots=True)
class Lightmap:
    width: int
    height: int
    data: bytes  # BGR, 3 bytes per pixel
    object: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Vertex:
    position: Vec3
    uv: Vec2
    lightmap_uv: Vec2


@dataclass(frozen=True, slots=True)
class Triangle:
    v1: int
    v2: int
    v3: int
    skin: int


@dataclass(frozen=True, slots=True)
class Skin:
    texture: int
    lightmap: int
    material: int
    ambient: float
    albedo: float
    flags: int

    @property
    def is_flat(self) -> bool:
        return _bit(self.flags, 1)

    @property
    def is_sky(self) -> bool:
        return _bit(self.flags, 2)

    @property
    def is_smooth(self) -> bool:
        return _bit(self.flags, 14)


@dataclass(frozen=True, slots=True)
class Block:
    bb_min: Vec3
    bb_max: Vec3
    vertices: Tuple[Vertex, ...]
    triangles: Tuple[Triangle, ...]
    skins: Tuple[Skin, ...]


@dataclass(frozen=True, slots=True)
class Position:
    name: str
    origin: Vec3
    angle: Euler


@dataclass(frozen=True, slots=True)
class Light:
    origin: Vec3
    color: Vec3  # percent, 0..100
    range: float
    flags: int

    @property
    def is_high_res(self) -> bool:
        return _bit(self.flags, 0)

    @property
    def is_dynamic(self) -> bool:
        return _bit(self.flags, 1)

    @property
    def is_static(self) -> bool:
        return _bit(self.flags, 2)

    @property
    def is_casting(self) -> bool:
        return _bit(self.flags, 3)


@dataclass(frozen=True, slots=True)
class Sound:
    origin: Vec3
    volume: float
    range: int
    flags: int
    filename: str


@dataclass(frozen=True, slots=True)
class PathNode:
    position: Vec3
    skills: Tuple[float, ...]


@dataclass(frozen=True, slots=True)
class PathEdge:
    node1: int  # 0-based index into Path.nodes
    node2: int
    length: float
    bezier: float
    weight: float
    skill: float


@dataclass(frozen=True, slots=True)
class Path:
    name: str
    nodes: Tuple[PathNode, ...]
    edges: Tuple[PathEdge, ...]


class EntityFlag(IntEnum):
    """Bit positions of ``Entity.flags``."""

    FLAG1 = 0
    FLAG2 = 1
    FLAG3 = 2
    FLAG4 = 3
    FLAG5 = 4
    FLAG6 = 5
    FLAG7 = 6
    FLAG8 = 7
    INVISIBLE = 8
    PASSABLE = 9
    TRANSLUCENT = 10
    OVERLAY = 12
    SPOTLIGHT = 13
    ZNEAR = 14
    NOFILTER = 16
    UNLIT = 17
    SHADOW = 18
    LIGHT = 19
    NOFOG = 20
    BRIGHT = 21
    DECAL = 22
    METAL = 22
    CAST = 23
    POLYGON = 26


@dataclass(frozen=True, slots=True)
class Entity:
    origin: Vec3
    angle: Euler
    scale: Vec3
    name: str
    filename: str
    action: str
    skills: Tuple[float, ...]
    flags: int
    ambient: float
    albedo: float = 0.0
    path: Optional[int] = None
    attached_entity: Optional[int] = None
    material: str = ""
    string1: str = ""
    string2: str = ""
    is_old_entity: bool = False

    def has_flag(self, flag: EntityFlag) -> bool:
        return _bit(self.flags, int(flag))


@dataclass(frozen=True, slots=True)
class Region:
    name: str
    minimum: Vec3
    maximum: Vec3


SceneObject = Union[Position, Light, Sound, Path, Entity, Region]

_T = TypeVar("_T", Position, Light, Sound, Path, Entity, Region)


@dataclass(frozen=True, slots=True)
class Level:
    info: Info
    textures: Tuple[Texture, ...] = ()
    materials: Tuple[Material, ...] = ()
    lightmaps: Tuple[Lightmap, ...] = ()
    terrain_lightmaps: Tuple[Lightmap, ...] = ()
    blocks: Tuple[Block, ...] = ()
    objects: Tuple[SceneObject, ...] = ()
    # recoverable problems met while decoding, in file order
    warnings: Tuple[str, ...] = ()

    def objects_of(self, kind: Type[_T]) -> Tuple[_T, ...]:
        return tuple(o for o in self.objects if isinstance(o, kind))


__all__ = [
    "Vec2",
    "Vec3",
    "Euler",
    "Color",
    "Info",
    "Texture",
    "TextureFormat",
    "Material",
    "Lightmap",
    "Vertex",
    "Triangle",
    "Skin",
    "Block",
    "Position",
    "Light",
    "Sound",
    "PathNode",
    "PathEdge",
    "Path",
    "EntityFlag",
    "Entity",
    "Region",
    "SceneObject",
    "Level",
]

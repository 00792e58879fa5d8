"""Object section decoder.

Layout::

    u32 count
    u32 offsets[count]        relative to the section start
    per object:
        u32 type tag          see ObjectTag
        fixed record for that tag (paths carry trailing node/edge arrays)

Records are dispatched through ``OBJECT_DECODERS``; a tag without an entry is
a fatal error. The single Info record is not a scene object: it is collected
in ``ObjectPass.environment`` and duplicates are dropped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ..config import DecodeOptions
from ..logging import get_logger
from ..model import (
    Entity,
    Euler,
    Light,
    Path,
    PathEdge,
    PathNode,
    Position,
    Region,
    SceneObject,
    Sound,
    Vec3,
)
from .constants import (
    ENTITY_SKILLS,
    FOG_COLORS,
    OBJ_ENTITY,
    OBJ_INFO,
    OBJ_LIGHT,
    OBJ_OLD_ENTITY,
    OBJ_PATH,
    OBJ_POSITION,
    OBJ_REGION,
    OBJ_SOUND,
    OLD_ENTITY_SKILLS,
    PATH_EDGE,
    PATH_NODE_POSITION,
    PATH_NODE_SKILLS,
    ObjectTag,
)
from .coords import CoordinateMapper
from .directory import Section
from .errors import E_OBJECT_TYPE, ObjectTypeError
from .reader import ByteSource, decode_cstr

__all__ = [
    "EnvironmentRecord",
    "ObjectPass",
    "OBJECT_DECODERS",
    "decode_objects",
]


@dataclass(frozen=True, slots=True)
class EnvironmentRecord:
    """Info record as stored; the lightmap selector is resolved on assembly."""

    azimuth: float
    elevation: float
    gamma: int
    lightmap_selector: int
    sun_color: int
    ambient_color: int
    fog_colors: Tuple[int, ...]


@dataclass
class ObjectPass:
    """State threaded through one decode of the object section."""

    mapper: CoordinateMapper
    options: DecodeOptions
    label: str = "<level>"
    objects: List[SceneObject] = field(default_factory=list)
    environment: Optional[EnvironmentRecord] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def seen_environment(self) -> bool:
        return self.environment is not None

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        if self.options.log_warnings:
            get_logger().warning("%s: %s", self.label, message)


Handler = Callable[[ByteSource, ObjectPass], Optional[SceneObject]]


def _vec(values) -> Vec3:
    return Vec3(*values)


def _read_info(src: ByteSource, state: ObjectPass) -> None:
    f = src.read_struct(OBJ_INFO, "info")
    if state.seen_environment:
        state.warn("multiple Info objects defined, keeping the first")
        return None
    state.environment = EnvironmentRecord(
        azimuth=f[3],
        elevation=f[4],
        gamma=f[7],
        lightmap_selector=f[8],
        sun_color=f[11],
        ambient_color=f[12],
        fog_colors=tuple(f[13 : 13 + FOG_COLORS]),
    )
    return None


def _read_position(src: ByteSource, state: ObjectPass) -> Position:
    f = src.read_struct(OBJ_POSITION, "position")
    return Position(
        name=decode_cstr(f[8]),
        origin=state.mapper.position(*f[0:3]),
        angle=Euler(*f[3:6]),
    )


def _read_light(src: ByteSource, state: ObjectPass) -> Light:
    f = src.read_struct(OBJ_LIGHT, "light")
    return Light(
        origin=state.mapper.position(*f[0:3]),
        color=_vec(f[3:6]),
        range=f[6],
        flags=f[7],
    )


def _read_sound(src: ByteSource, state: ObjectPass) -> Sound:
    f = src.read_struct(OBJ_SOUND, "sound")
    return Sound(
        origin=state.mapper.position(*f[0:3]),
        volume=f[3],
        range=f[6],
        flags=f[7],
        filename=decode_cstr(f[8]),
    )


def _edge_or_none(
    raw: Tuple[float, ...], node_count: int, path_name: str, state: ObjectPass
) -> Optional[PathEdge]:
    n1, n2, length, bezier, weight, skill = raw
    # node references are 1-based; the range test also rejects NaN
    if not (1 <= n1 <= node_count and 1 <= n2 <= node_count):
        state.warn(f"invalid path edge {n1:g} -> {n2:g} in path '{path_name}'")
        return None
    node1, node2 = int(n1) - 1, int(n2) - 1
    if node1 == node2:
        state.warn(f"invalid path edge {n1:g} -> {n2:g} in path '{path_name}'")
        return None
    return PathEdge(
        node1=node1,
        node2=node2,
        length=length,
        bezier=bezier,
        weight=weight,
        skill=skill,
    )


def _read_path(src: ByteSource, state: ObjectPass) -> Path:
    raw_name, f_num_points, _u0, _u1, _u2, num_edges = src.read_struct(
        OBJ_PATH, "path"
    )
    name = decode_cstr(raw_name)
    node_count = 0
    if math.isfinite(f_num_points) and f_num_points > 0:
        node_count = int(f_num_points)

    # all positions first, then all skill blocks
    positions = [
        src.read_struct(PATH_NODE_POSITION, "path node") for _ in range(node_count)
    ]
    skills = [
        src.read_struct(PATH_NODE_SKILLS, "path node skills")
        for _ in range(node_count)
    ]
    nodes = tuple(
        PathNode(position=state.mapper.position(*p), skills=tuple(s))
        for p, s in zip(positions, skills)
    )

    edges = []
    for _ in range(num_edges):
        edge = _edge_or_none(
            src.read_struct(PATH_EDGE, "path edge"), node_count, name, state
        )
        if edge is not None:
            edges.append(edge)
    return Path(name=name, nodes=nodes, edges=tuple(edges))


def _reference(value: int, what: str, entity: str, state: ObjectPass) -> Optional[int]:
    # 1-based in the file, 0 means none
    if value < 0:
        state.warn(f"negative {what} reference {value} in entity '{entity}', ignored")
        return None
    return None if value == 0 else value - 1


def _read_entity(src: ByteSource, state: ObjectPass) -> Entity:
    f = src.read_struct(OBJ_ENTITY, "entity")
    name = decode_cstr(f[9])
    return Entity(
        origin=state.mapper.position(*f[0:3]),
        angle=Euler(*f[3:6]),
        scale=state.mapper.scale(*f[6:9]),
        name=name,
        filename=decode_cstr(f[10]),
        action=decode_cstr(f[11]),
        skills=tuple(f[12 : 12 + ENTITY_SKILLS]),
        flags=f[32],
        ambient=f[33],
        albedo=f[34],
        path=_reference(f[35], "path", name, state),
        attached_entity=_reference(f[36], "attached entity", name, state),
        material=decode_cstr(f[37]),
        string1=decode_cstr(f[38]),
        string2=decode_cstr(f[39]),
    )


def _read_old_entity(src: ByteSource, state: ObjectPass) -> Entity:
    f = src.read_struct(OBJ_OLD_ENTITY, "old entity")
    skills = tuple(f[12 : 12 + OLD_ENTITY_SKILLS]) + (0.0,) * (
        ENTITY_SKILLS - OLD_ENTITY_SKILLS
    )
    return Entity(
        origin=state.mapper.position(*f[0:3]),
        angle=Euler(*f[3:6]),
        scale=state.mapper.scale(*f[6:9]),
        name=decode_cstr(f[9]),
        filename=decode_cstr(f[10]),
        action=decode_cstr(f[11]),
        skills=skills,
        flags=f[20],
        ambient=f[21],
        is_old_entity=True,
    )


def _read_region(src: ByteSource, state: ObjectPass) -> Region:
    f = src.read_struct(OBJ_REGION, "region")
    # bounds stay in native axes so minimum/maximum remain ordered
    return Region(
        name=decode_cstr(f[8]),
        minimum=_vec(f[0:3]),
        maximum=_vec(f[3:6]),
    )


OBJECT_DECODERS: Dict[ObjectTag, Handler] = {
    ObjectTag.POSITION: _read_position,
    ObjectTag.LIGHT: _read_light,
    ObjectTag.OLD_ENTITY: _read_old_entity,
    ObjectTag.SOUND: _read_sound,
    ObjectTag.INFO: _read_info,
    ObjectTag.PATH: _read_path,
    ObjectTag.ENTITY: _read_entity,
    ObjectTag.REGION: _read_region,
}


def _handler_for(tag_value: int, index: int) -> Handler:
    try:
        return OBJECT_DECODERS[ObjectTag(tag_value)]
    except (ValueError, KeyError):
        raise ObjectTypeError(
            code=E_OBJECT_TYPE,
            message=f"Object {index} has unknown type tag {tag_value}",
            context={"object": index, "tag": tag_value},
        ) from None


def decode_objects(src: ByteSource, section: Section, state: ObjectPass) -> ObjectPass:
    # no directory entry means no objects
    if not section.present:
        return state
    src.seek(section.offset)
    count = src.read_u32("object count")
    offsets = [src.read_u32("object offset") for _ in range(count)]
    for i, rel in enumerate(offsets):
        src.seek(section.offset + rel)
        handler = _handler_for(src.read_u32("object type"), i)
        obj = handler(src, state)
        if obj is not None:
            state.objects.append(obj)
    return state

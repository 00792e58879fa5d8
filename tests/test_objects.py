import logging
import math

import pytest

from wmbkit import (
    CoordinateSystem,
    DecodeOptions,
    Entity,
    EntityFlag,
    Light,
    ObjectTag,
    ObjectTypeError,
    Path,
    Position,
    Region,
    Sound,
    load_level,
)
from wmbkit.format.objects import OBJECT_DECODERS
from wmb_builder import LevelBuilder, minimal_level


def test_every_object_tag_has_a_decoder():
    assert set(OBJECT_DECODERS) == set(ObjectTag)


def test_all_object_kinds_in_file_order():
    b = LevelBuilder()
    b.add_position("start", (1.0, 2.0, 3.0), angle=(90.0, 0.0, 0.0))
    b.add_info()
    b.add_light((0.0, 0.0, 64.0), flags=0b1010)
    b.add_sound((5.0, 5.0, 5.0), "wind.wav", volume=75.0, range_=800)
    b.add_path("patrol", [(0.0, 0.0, 0.0), (10.0, 0.0, 0.0)], edges=[(1, 2, 10, 0, 1, 0)])
    b.add_entity("door", flags=1 << EntityFlag.PASSABLE)
    b.add_old_entity("crate")
    b.add_region("water", (-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))
    level = load_level(b.build())

    kinds = [type(o) for o in level.objects]
    assert kinds == [Position, Light, Sound, Path, Entity, Entity, Region]

    pos = level.objects[0]
    assert pos.name == "start"
    assert pos.origin == (1.0, 2.0, 3.0)
    assert pos.angle.pan == 90.0

    light = level.objects[1]
    assert light.color == (100.0, 50.0, 25.0)
    assert light.range == 256.0
    assert light.is_dynamic and light.is_casting
    assert not light.is_high_res and not light.is_static

    snd = level.objects[2]
    assert (snd.filename, snd.volume, snd.range) == ("wind.wav", 75.0, 800)

    region = level.objects[6]
    assert region.name == "water"
    assert region.minimum == (-1.0, -1.0, -1.0)
    assert region.maximum == (1.0, 1.0, 1.0)

    assert len(level.objects_of(Entity)) == 2


def test_entity_fields_and_references():
    b = minimal_level()
    b.add_entity(
        "lamp",
        origin=(1.0, 2.0, 3.0),
        scale=(1.0, 2.0, 3.0),
        path=3,
        attached=1,
        flags=(1 << EntityFlag.INVISIBLE) | (1 << EntityFlag.BRIGHT),
    )
    b.add_entity("loose", path=0, attached=0)
    ents = load_level(b.build()).objects_of(Entity)
    lamp, loose = ents
    assert lamp.name == "lamp"
    assert lamp.filename == "model.mdl"
    assert lamp.action == "act"
    assert lamp.material == "mat"
    assert (lamp.string1, lamp.string2) == ("s1", "s2")
    assert lamp.skills == tuple(float(i) for i in range(20))
    assert (lamp.ambient, lamp.albedo) == (0.5, 0.25)
    assert lamp.path == 2
    assert lamp.attached_entity == 0
    assert lamp.has_flag(EntityFlag.INVISIBLE)
    assert lamp.has_flag(EntityFlag.BRIGHT)
    assert not lamp.has_flag(EntityFlag.PASSABLE)
    assert not lamp.is_old_entity
    assert loose.path is None
    assert loose.attached_entity is None


def test_entity_scale_is_permuted_not_negated():
    b = minimal_level()
    b.add_entity("e", origin=(1.0, 2.0, 3.0), scale=(1.0, 2.0, 3.0))
    opts = DecodeOptions(coordinate_system=CoordinateSystem.OPENGL)
    (ent,) = load_level(b.build(), opts).objects_of(Entity)
    assert ent.origin == (-2.0, 3.0, -1.0)
    assert ent.scale == (1.0, 3.0, 2.0)


def test_old_entity_reduced_fields():
    b = minimal_level()
    b.add_old_entity("crate", scale=(1.0, 2.0, 3.0), ambient=0.75)
    (ent,) = load_level(b.build()).objects_of(Entity)
    assert ent.is_old_entity
    assert ent.name == "crate"
    assert ent.filename == "old.mdl"
    assert ent.action == "old_act"
    assert ent.skills[:8] == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0)
    assert ent.skills[8:] == (0.0,) * 12
    assert ent.ambient == 0.75
    assert ent.albedo == 0.0
    assert ent.material == ""
    assert ent.path is None and ent.attached_entity is None


def test_path_nodes_skills_and_edges():
    b = minimal_level()
    nodes = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0)]
    skills = [(1, 1, 1, 1, 1, 1), (2, 2, 2, 2, 2, 2), (3, 3, 3, 3, 3, 3)]
    edges = [(1, 2, 1.0, 0.5, 2.0, 7.0), (2, 3, 1.0, 0.0, 1.0, 0.0)]
    b.add_path("route", nodes, edges=edges, skills=skills)
    (path,) = load_level(b.build()).objects_of(Path)
    assert path.name == "route"
    assert [n.position for n in path.nodes] == nodes
    assert [n.skills for n in path.nodes] == [tuple(map(float, s)) for s in skills]
    first = path.edges[0]
    assert (first.node1, first.node2) == (0, 1)
    assert (first.length, first.bezier, first.weight, first.skill) == (1.0, 0.5, 2.0, 7.0)
    assert (path.edges[1].node1, path.edges[1].node2) == (1, 2)


def test_path_node_count_is_truncated():
    b = minimal_level()
    b.add_path("p", [(0.0, 0.0, 0.0), (1.0, 1.0, 1.0)], num_points=2.9)
    (path,) = load_level(b.build()).objects_of(Path)
    assert len(path.nodes) == 2


@pytest.mark.parametrize(
    "edge",
    [
        (0, 1, 1, 0, 1, 0),  # zero reference
        (1, 4, 1, 0, 1, 0),  # beyond node count
        (2, 2, 1, 0, 1, 0),  # self loop
        (math.nan, 1, 1, 0, 1, 0),
    ],
)
def test_invalid_path_edges_are_dropped(edge, caplog):
    b = minimal_level()
    nodes = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0)]
    b.add_path("guard", nodes, edges=[(1, 2, 1, 0, 1, 0), edge, (2, 3, 1, 0, 1, 0)])
    with caplog.at_level(logging.WARNING, logger="wmbkit"):
        (path,) = load_level(b.build()).objects_of(Path)
    level = load_level(b.build(), DecodeOptions(log_warnings=False))
    assert len(level.warnings) == 1
    assert [(e.node1, e.node2) for e in path.edges] == [(0, 1), (1, 2)]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "guard" in warnings[0].getMessage()


def test_path_positions_follow_coordinate_system():
    b = minimal_level()
    b.add_path("p", [(1.0, 2.0, 3.0)])
    opts = DecodeOptions(coordinate_system=CoordinateSystem.DIRECTX)
    (path,) = load_level(b.build(), opts).objects_of(Path)
    assert path.nodes[0].position == (-2.0, 3.0, 1.0)


@pytest.mark.parametrize("tag", [0, 9, 0xFFFFFFFF])
def test_unknown_object_tag_is_fatal(tag):
    b = minimal_level()
    b.add_raw_object(tag, b"\x00" * 64)
    with pytest.raises(ObjectTypeError) as ei:
        load_level(b.build(), DecodeOptions(log_errors=False))
    assert ei.value.code == "E_OBJECT_TYPE"
    assert ei.value.context["tag"] == tag


def test_negative_entity_path_reference_is_dropped(caplog):
    b = minimal_level()
    b.add_entity("stray", path=-1, attached=2)
    with caplog.at_level(logging.WARNING, logger="wmbkit"):
        level = load_level(b.build())
    (ent,) = level.objects_of(Entity)
    assert ent.path is None
    assert ent.attached_entity == 1
    assert level.warnings == ("negative path reference -1 in entity 'stray', ignored",)
    assert len(caplog.records) == 1

import pytest

from wmbkit import (
    DecodeOptions,
    LightmapSizeError,
    MissingEnvironmentError,
    TruncatedInputError,
    load_level,
)
from wmbkit.format.lightmaps import lightmap_count
from wmb_builder import LevelBuilder, minimal_level

QUIET = DecodeOptions(log_errors=False)
LM_256 = 3 * 256 * 256


def test_lightmap_count_formula():
    assert lightmap_count(0, 256) == 0
    assert lightmap_count(LM_256 - 1, 256) == 0
    assert lightmap_count(2 * LM_256 + 100, 256) == 2
    assert lightmap_count(3 * 512 * 512, 512) == 1


def test_regular_lightmaps_use_info_size():
    b = minimal_level()
    b.set_lightmaps(b"\x10" * LM_256 + b"\x20" * LM_256 + b"\x30" * 100)
    level = load_level(b.build())
    assert level.info.lightmap_size == 256
    assert len(level.lightmaps) == lightmap_count(2 * LM_256 + 100, 256) == 2
    first, second = level.lightmaps
    assert (first.width, first.height, first.object) == (256, 256, None)
    assert first.data == b"\x10" * LM_256
    assert second.data == b"\x20" * LM_256


def test_selector_one_means_512():
    b = LevelBuilder()
    b.add_info(lightmap_selector=1)
    b.set_lightmaps(b"\x00" * (3 * 512 * 512))
    level = load_level(b.build())
    assert level.info.lightmap_size == 512
    assert len(level.lightmaps) == 1


@pytest.mark.parametrize("selector", [3, 255])
def test_invalid_selector_is_fatal(selector):
    b = LevelBuilder()
    b.add_info(lightmap_selector=selector)
    with pytest.raises(LightmapSizeError) as ei:
        load_level(b.build(), QUIET)
    assert ei.value.context["selector"] == selector


def test_level_without_info_is_fatal():
    b = LevelBuilder()
    b.add_light((0.0, 0.0, 0.0))
    with pytest.raises(MissingEnvironmentError):
        load_level(b.build(), QUIET)


def test_absent_objects_section_is_fatal_for_missing_info():
    b = LevelBuilder()
    b.add_material("only")
    with pytest.raises(MissingEnvironmentError):
        load_level(b.build(), QUIET)


def test_empty_objects_section_yields_no_objects_but_needs_info():
    b = LevelBuilder()
    b.force_objects_section = True
    with pytest.raises(MissingEnvironmentError):
        load_level(b.build(), QUIET)


def test_terrain_lightmaps_carry_own_size_and_owner():
    b = minimal_level()
    b.add_terrain_lightmap(obj=4, width=2, height=3, data=bytes(range(18)))
    b.add_terrain_lightmap(obj=0, width=1, height=1, data=b"\xaa\xbb\xcc")
    level = load_level(b.build())
    first, second = level.terrain_lightmaps
    assert (first.object, first.width, first.height) == (4, 2, 3)
    assert first.data == bytes(range(18))
    assert (second.object, second.width, second.height) == (0, 1, 1)
    assert second.data == b"\xaa\xbb\xcc"
    assert level.lightmaps == ()


def test_oversized_terrain_lightmap_is_truncation():
    b = minimal_level()
    b.add_terrain_lightmap(obj=0, width=0xFFFFFFFF, height=0xFFFFFFFF, data=b"\x00" * 12)
    with pytest.raises(TruncatedInputError) as ei:
        load_level(b.build(), QUIET)
    assert ei.value.context["wanted"] == 3 * 0xFFFFFFFF * 0xFFFFFFFF
    assert ei.value.context["available"] == 12

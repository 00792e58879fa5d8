"""Whole-file decode scenarios on synthetic levels."""

import io
import logging
from pathlib import Path

import pytest

from wmbkit import (
    BadMagicError,
    Color,
    DecodeOptions,
    Light,
    ObjectTypeError,
    TruncatedInputError,
    inspect_directory,
    load_level,
    summarize_level,
)
from wmb_builder import minimal_level


def test_minimal_level():
    level = load_level(minimal_level().build())
    assert len(level.objects) == 1
    (light,) = level.objects
    assert isinstance(light, Light)
    assert light.origin == (1.0, 2.0, 3.0)
    assert level.info.lightmap_size == 256
    assert level.textures == ()
    assert level.materials == ()
    assert level.blocks == ()
    assert level.lightmaps == ()
    assert level.terrain_lightmaps == ()


def test_info_values():
    b = minimal_level()
    b.objects.clear()
    b.add_info(
        lightmap_selector=2,
        azimuth=120.0,
        elevation=15.0,
        gamma=51,
        sun_color=0x80FF0000,
        ambient_color=0xFF00FF00,
        fog_colors=(0xFF0000FF, 0, 0, 0xFFFFFFFF),
    )
    info = load_level(b.build()).info
    assert info.lightmap_size == 1024
    assert (info.azimuth, info.elevation) == (120.0, 15.0)
    assert info.gamma == pytest.approx(0.2)
    assert info.sun_color == Color(1.0, 0.0, 0.0, 128 / 255.0)
    assert info.ambient_color == Color(0.0, 1.0, 0.0, 1.0)
    assert info.fog_colors[0] == Color(0.0, 0.0, 1.0, 1.0)
    assert info.fog_colors[3] == Color(1.0, 1.0, 1.0, 1.0)
    assert len(info.fog_colors) == 4


def test_duplicate_info_keeps_first_and_warns_once(caplog):
    b = minimal_level()
    b.add_info(lightmap_selector=1, azimuth=10.0)
    with caplog.at_level(logging.WARNING, logger="wmbkit"):
        level = load_level(b.build())
    assert level.info.lightmap_size == 256
    assert level.info.azimuth == 45.0
    assert len(level.objects) == 1
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "multiple Info" in warnings[0].getMessage()


def test_duplicate_info_with_bad_selector_is_ignored():
    b = minimal_level()
    b.add_info(lightmap_selector=9)
    assert load_level(b.build()).info.lightmap_size == 256


def test_warnings_can_be_suppressed(caplog):
    b = minimal_level()
    b.add_info()
    with caplog.at_level(logging.WARNING, logger="wmbkit"):
        level = load_level(b.build(), DecodeOptions(log_warnings=False))
    assert not caplog.records
    # still collected on the level
    assert len(level.warnings) == 1
    assert "multiple Info" in level.warnings[0]
    assert summarize_level(level)["warnings"] == 1


def test_unknown_object_tag_returns_no_level(caplog):
    b = minimal_level()
    b.add_raw_object(42, b"\x00" * 32)
    level = None
    with caplog.at_level(logging.ERROR, logger="wmbkit"):
        with pytest.raises(ObjectTypeError):
            level = load_level(b.build())
    assert level is None
    assert any("E_OBJECT_TYPE" in r.getMessage() for r in caplog.records)


def test_bad_magic():
    b = minimal_level()
    b.magic = b"WMB6"
    with pytest.raises(BadMagicError) as ei:
        load_level(b.build(), DecodeOptions(log_errors=False))
    assert ei.value.code == "E_BAD_MAGIC"


def test_truncated_header():
    with pytest.raises(TruncatedInputError) as ei:
        load_level(b"WMB7" + b"\x00" * 20, DecodeOptions(log_errors=False))
    assert ei.value.context["offset"] == 0


def test_decoding_is_deterministic():
    b = minimal_level()
    b.add_texture("t", 2, 2, 5 | 8, bytes(16 + 4 + 1))
    b.add_material("m")
    b.add_block([(1.0, 2.0, 3.0, 0.0, 0.0, 0.0, 0.0)], [(0, 0, 0, 0)])
    b.add_path("p", [(0.0, 0.0, 0.0), (1.0, 1.0, 1.0)], edges=[(1, 2, 1, 0, 1, 0)])
    b.add_entity("e", path=1)
    b.add_terrain_lightmap(1, 2, 2)
    data = b.build()
    assert load_level(data) == load_level(data)


def test_sources_path_bytes_and_stream_agree(tmp_path: Path):
    data = minimal_level().build()
    p = tmp_path / "level.wmb"
    p.write_bytes(data)
    from_path = load_level(p)
    from_str = load_level(str(p))
    from_stream = load_level(io.BytesIO(data))
    assert from_path == from_str == from_stream == load_level(data)


def test_summary_and_directory(tmp_path: Path):
    b = minimal_level()
    b.add_entity("e")
    data = b.build()
    summary = summarize_level(load_level(data))
    assert summary["info"]["lightmap_size"] == 256
    assert summary["objects"]["lights"] == 1
    assert summary["objects"]["entities"] == 1
    assert summary["textures"] == 0

    info = inspect_directory(data)
    assert info["magic"] == "WMB7"
    assert info["file_size"] == len(data)
    assert info["sections"]["objects"]["offset"] == 164
    assert info["sections"]["textures"] == {"offset": 0, "length": 0}
    assert len(info["sections"]) == 20

"""Texture section decoder.

Layout::

    u32 count
    u32 offsets[count]        relative to the section start
    per texture:
        TEXTURE header (40 bytes)
        pixel payload

For DDS textures the header width is the byte length of the compressed blob.
Raw textures store ``bpp * width * height`` bytes, followed by three quartered
mip levels when bit 3 of the type word is set.
"""

from __future__ import annotations

from typing import List

from ..model import Texture
from .constants import (
    MAX_EXTRA_MIP_LEVELS,
    TEXTURE_FORMAT_MASK,
    TEXTURE_HEADER,
    TEXTURE_MIPMAP_BIT,
    TextureFormat,
)
from .directory import Section
from .errors import E_TEXTURE_FORMAT, TextureFormatError
from .reader import ByteSource, decode_cstr

__all__ = ["decode_textures", "mip_level_sizes"]


def mip_level_sizes(fmt: TextureFormat, width: int, height: int, mipmaps: bool) -> List[int]:
    if fmt.is_compressed:
        return [width]
    size = fmt.bytes_per_pixel * width * height
    sizes = [size]
    if mipmaps:
        for _ in range(MAX_EXTRA_MIP_LEVELS):
            size //= 4
            if size == 0:
                break
            sizes.append(size)
    return sizes


def _parse_format(type_word: int, name: str, index: int) -> TextureFormat:
    code = type_word & TEXTURE_FORMAT_MASK
    try:
        return TextureFormat(code)
    except ValueError:
        raise TextureFormatError(
            code=E_TEXTURE_FORMAT,
            message=f"Texture '{name}' has unknown format code {code}",
            context={"texture": index, "name": name, "format": code},
        ) from None


def decode_textures(src: ByteSource, section: Section) -> List[Texture]:
    src.seek(section.offset)
    count = src.read_u32("texture count")
    offsets = [src.read_u32("texture offset") for _ in range(count)]

    textures: List[Texture] = []
    for i, rel in enumerate(offsets):
        src.seek(section.offset + rel)
        raw_name, width, height, type_word, *_reserved = src.read_struct(
            TEXTURE_HEADER, "texture header"
        )
        name = decode_cstr(raw_name)
        fmt = _parse_format(type_word, name, i)
        has_mipmaps = bool(type_word & TEXTURE_MIPMAP_BIT)
        levels = tuple(
            src.read_bytes(n, f"texture '{name}' pixels")
            for n in mip_level_sizes(fmt, width, height, has_mipmaps)
        )
        textures.append(
            Texture(
                name=name,
                width=width,
                height=height,
                format=fmt,
                has_mipmaps=has_mipmaps,
                levels=levels,
            )
        )
    return textures

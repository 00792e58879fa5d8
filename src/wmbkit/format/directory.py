"""WMB7 header: magic tag and the 20-entry section directory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .constants import HEADER, MAGIC, SECTION_NAMES
from .errors import E_BAD_MAGIC, BadMagicError
from .reader import ByteSource

__all__ = ["Section", "Directory", "read_directory"]


@dataclass(frozen=True, slots=True)
class Section:
    name: str
    offset: int
    length: int

    @property
    def present(self) -> bool:
        return self.offset != 0


@dataclass(frozen=True, slots=True)
class Directory:
    magic: bytes
    sections: Tuple[Section, ...]

    def __getitem__(self, name: str) -> Section:
        for s in self.sections:
            if s.name == name:
                return s
        raise KeyError(name)

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {
            s.name: {"offset": s.offset, "length": s.length}
            for s in self.sections
        }


def read_directory(src: ByteSource) -> Directory:
    src.seek(0)
    fields = src.read_struct(HEADER, "header")
    magic = fields[0]
    if magic != MAGIC:
        raise BadMagicError(
            code=E_BAD_MAGIC,
            message=f"Not a WMB7 level (magic {magic!r})",
            context={"magic": magic.hex()},
        )
    pairs = fields[1:]
    sections = tuple(
        Section(name, pairs[2 * i], pairs[2 * i + 1])
        for i, name in enumerate(SECTION_NAMES)
    )
    return Directory(magic=magic, sections=sections)

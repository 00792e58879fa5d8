"""Random-access byte source used by all section decoders."""

from __future__ import annotations

import io
import os
import struct
from pathlib import Path
from typing import BinaryIO, Tuple, Union

from .constants import U32
from .errors import (
    E_SEEK_RANGE,
    E_SOURCE,
    SeekRangeError,
    SourceError,
    truncated,
)

Source = Union[str, os.PathLike, bytes, bytearray, memoryview, BinaryIO]

__all__ = ["ByteSource", "Source", "decode_cstr"]


class ByteSource:
    """Fixed-width reads, raw reads and absolute seeks over one input.

    Use as a context manager; when the source was opened from a path the file
    is closed on exit whether decoding succeeded or not. Streams handed in by
    the caller stay open.
    """

    def __init__(self, stream: BinaryIO, *, owned: bool = False, label: str = "<stream>"):
        self._stream = stream
        self._owned = owned
        self.label = label
        try:
            self._size = stream.seek(0, io.SEEK_END)
            stream.seek(0)
        except (OSError, ValueError) as exc:
            raise SourceError(
                code=E_SOURCE,
                message=f"Input is not seekable: {label}",
                context={"error": str(exc)},
            ) from exc

    @classmethod
    def open(cls, source: Source) -> "ByteSource":
        if isinstance(source, (bytes, bytearray, memoryview)):
            return cls(io.BytesIO(bytes(source)), owned=True, label="<bytes>")
        if isinstance(source, (str, os.PathLike)):
            p = Path(source)
            try:
                f = p.open("rb")
            except OSError as exc:
                raise SourceError(
                    code=E_SOURCE,
                    message=f"Cannot open input: {p}",
                    context={"path": str(p), "error": str(exc)},
                ) from exc
            try:
                return cls(f, owned=True, label=str(p))
            except SourceError:
                f.close()
                raise
        return cls(source, label=getattr(source, "name", "<stream>"))

    def __enter__(self) -> "ByteSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owned:
            self._stream.close()

    @property
    def size(self) -> int:
        return self._size

    def tell(self) -> int:
        return self._stream.tell()

    def seek(self, offset: int) -> None:
        if offset < 0 or offset > self._size:
            raise SeekRangeError(
                code=E_SEEK_RANGE,
                message=f"Seek to {offset} outside input of {self._size} bytes",
                context={"offset": offset, "size": self._size},
            )
        self._stream.seek(offset)

    def read_bytes(self, n: int, label: str = "read") -> bytes:
        start = self.tell()
        available = self._size - start
        # sizes come from file headers; never ask the stream for more than remains
        if n < 0 or n > available:
            raise truncated(start, n, max(available, 0), label)
        try:
            data = self._stream.read(n)
        except OSError as exc:
            raise SourceError(
                code=E_SOURCE,
                message=f"Read failed at {start}: {exc}",
                context={"offset": start},
            ) from exc
        if len(data) != n:
            raise truncated(start, n, len(data), label)
        return data

    def read_struct(self, layout: struct.Struct, label: str = "record") -> Tuple:
        return layout.unpack(self.read_bytes(layout.size, label))

    def read_u32(self, label: str = "u32") -> int:
        return self.read_struct(U32, label)[0]


def decode_cstr(raw: bytes) -> str:
    """Fixed-width name field up to the first NUL (Windows-1252 text)."""
    return raw.split(b"\x00", 1)[0].decode("cp1252", errors="replace")

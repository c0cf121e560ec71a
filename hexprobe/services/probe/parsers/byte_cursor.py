# hexprobe/services/probe/parsers/byte_cursor.py
from __future__ import annotations

import struct

from hexprobe.domain.errors import TruncatedDataError

_U16BE = struct.Struct(">H")
_U16LE = struct.Struct("<H")
_U32BE = struct.Struct(">I")
_U32LE = struct.Struct("<I")
_I32LE = struct.Struct("<i")
_U64BE = struct.Struct(">Q")
_U64LE = struct.Struct("<Q")


class ByteCursor:
    """
    Bounds-checked reader over an immutable byte buffer.

    Reads advance the position; ``seek`` returns the cursor so absolute reads
    chain (``cur.seek(16).u32be()``). Any read or seek outside the buffer
    raises ``TruncatedDataError``; nothing here indexes unchecked.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes, position: int = 0) -> None:
        self._data = bytes(data) if not isinstance(data, bytes) else data
        self._pos = 0
        self.seek(position)

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def has(self, n: int) -> bool:
        return 0 <= n <= self.remaining

    # ---- positioning ----------------------------------------------------
    def seek(self, pos: int) -> "ByteCursor":
        if pos < 0 or pos > len(self._data):
            raise TruncatedDataError(f"seek to {pos} outside buffer of {len(self._data)} bytes")
        self._pos = pos
        return self

    def skip(self, n: int) -> "ByteCursor":
        return self.seek(self._pos + n)

    # ---- reads ----------------------------------------------------------
    def _require(self, n: int) -> None:
        if n < 0 or n > self.remaining:
            raise TruncatedDataError(
                f"need {n} bytes at offset {self._pos}, only {max(self.remaining, 0)} available"
            )

    def _unpack(self, fmt: struct.Struct) -> int:
        self._require(fmt.size)
        (value,) = fmt.unpack_from(self._data, self._pos)
        self._pos += fmt.size
        return value

    def u8(self) -> int:
        self._require(1)
        value = self._data[self._pos]
        self._pos += 1
        return value

    def u16be(self) -> int:
        return self._unpack(_U16BE)

    def u16le(self) -> int:
        return self._unpack(_U16LE)

    def u32be(self) -> int:
        return self._unpack(_U32BE)

    def u32le(self) -> int:
        return self._unpack(_U32LE)

    def i32le(self) -> int:
        return self._unpack(_I32LE)

    def u64be(self) -> int:
        return self._unpack(_U64BE)

    def u64le(self) -> int:
        return self._unpack(_U64LE)

    def bytes(self, n: int) -> bytes:
        self._require(n)
        chunk = self._data[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def ascii(self, n: int) -> str:
        return self.bytes(n).decode("ascii", errors="replace")

    def peek(self, n: int = 1) -> bytes:
        """Next ``n`` bytes without moving."""
        self._require(n)
        return self._data[self._pos:self._pos + n]

    def __repr__(self) -> str:
        return f"ByteCursor(position={self._pos}, length={len(self._data)})"

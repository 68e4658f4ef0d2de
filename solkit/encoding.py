"""Little-endian binary writer and reader for bincode and borsh layouts."""

from __future__ import annotations

import struct
from typing import Any, Callable, TypeVar

from solkit.core import PUBLIC_KEY_LENGTH, PublicKey

T = TypeVar("T")


class DecodeError(ValueError):
    """Raised when input bytes do not match the expected layout."""


class BinaryWriter:
    """Accumulates encoded values; every writer method returns the writer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def _pack(self, fmt: str, value: int) -> BinaryWriter:
        try:
            self._buffer += struct.pack(fmt, value)
        except struct.error as exc:
            raise ValueError(f"value {value!r} out of range: {exc}") from None
        return self

    def u8(self, value: int) -> BinaryWriter:
        return self._pack("<B", value)

    def u16(self, value: int) -> BinaryWriter:
        return self._pack("<H", value)

    def u32(self, value: int) -> BinaryWriter:
        return self._pack("<I", value)

    def u64(self, value: int) -> BinaryWriter:
        return self._pack("<Q", value)

    def i64(self, value: int) -> BinaryWriter:
        return self._pack("<q", value)

    def boolean(self, value: bool) -> BinaryWriter:
        return self.u8(1 if value else 0)

    def raw(self, data: bytes) -> BinaryWriter:
        self._buffer += bytes(data)
        return self

    def pubkey(self, key: PublicKey) -> BinaryWriter:
        return self.raw(bytes(key))

    def bincode_str(self, text: str) -> BinaryWriter:
        """Write a string with a u64 length prefix."""
        encoded = text.encode("utf-8")
        return self.u64(len(encoded)).raw(encoded)

    def borsh_str(self, text: str) -> BinaryWriter:
        """Write a string with a u32 length prefix."""
        encoded = text.encode("utf-8")
        return self.u32(len(encoded)).raw(encoded)

    def option(self, value: T | None, write: Callable[[T], Any]) -> BinaryWriter:
        """Write a presence flag, then the value through ``write`` if present."""
        if value is None:
            return self.u8(0)
        self.u8(1)
        write(value)
        return self

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


class BinaryReader:
    """Reads encoded values from a byte string, front to back."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    def _take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise DecodeError(
                f"need {size} bytes at offset {self._offset}, "
                f"only {len(self._data) - self._offset} left"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def _unpack(self, fmt: str) -> int:
        return struct.unpack(fmt, self._take(struct.calcsize(fmt)))[0]

    def u8(self) -> int:
        return self._unpack("<B")

    def u16(self) -> int:
        return self._unpack("<H")

    def u32(self) -> int:
        return self._unpack("<I")

    def u64(self) -> int:
        return self._unpack("<Q")

    def boolean(self) -> bool:
        value = self.u8()
        if value > 1:
            raise DecodeError(f"invalid boolean byte {value}")
        return value == 1

    def pubkey(self) -> PublicKey:
        return PublicKey(self._take(PUBLIC_KEY_LENGTH))

    def borsh_str(self) -> str:
        length = self.u32()
        return self._take(length).decode("utf-8", errors="replace")

    def option(self, read: Callable[[], T]) -> T | None:
        """Read a presence flag, then the value through ``read`` if present."""
        flag = self.u8()
        if flag == 0:
            return None
        if flag != 1:
            raise DecodeError(f"invalid option flag {flag}")
        return read()

    def remaining(self) -> bytes:
        """Return all unread bytes and move to the end."""
        rest = self._data[self._offset:]
        self._offset = len(self._data)
        return rest
"""Little-endian Borsh encoding primitives used for instruction and payload data."""

from __future__ import annotations

from .errors import RuleSetError, RuleSetException

_U32_MAX = 2**32 - 1


class BorshWriter:
    """Accumulates Borsh-encoded values in a byte buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def _write_uint(self, value: int, size: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected an integer, got {type(value).__name__}")
        if not 0 <= value < 1 << (8 * size):
            raise ValueError(f"{value} does not fit in an unsigned {8 * size}-bit integer")
        self._buffer += value.to_bytes(size, "little")

    def write_u8(self, value: int) -> None:
        """Write an unsigned 8-bit integer."""
        self._write_uint(value, 1)

    def write_u32(self, value: int) -> None:
        """Write an unsigned 32-bit little-endian integer."""
        self._write_uint(value, 4)

    def write_u64(self, value: int) -> None:
        """Write an unsigned 64-bit little-endian integer."""
        self._write_uint(value, 8)

    def write_bool(self, value: bool) -> None:
        """Write a boolean as a single 0 or 1 byte."""
        if not isinstance(value, bool):
            raise TypeError(f"expected a bool, got {type(value).__name__}")
        self._buffer.append(1 if value else 0)

    def write_fixed(self, data: bytes) -> None:
        """Write bytes as they are, with no length prefix."""
        self._buffer += bytes(data)

    def write_bytes(self, data: bytes) -> None:
        """Write bytes preceded by their length as a u32."""
        raw = bytes(data)
        if len(raw) > _U32_MAX:
            raise ValueError("byte sequence too long to encode")
        self.write_u32(len(raw))
        self._buffer += raw

    def write_string(self, value: str) -> None:
        """Write a UTF-8 string preceded by its byte length as a u32."""
        if not isinstance(value, str):
            raise TypeError(f"expected a str, got {type(value).__name__}")
        self.write_bytes(value.encode("utf-8"))

    def getvalue(self) -> bytes:
        """Everything written so far."""
        return bytes(self._buffer)


def _deserialization_error() -> RuleSetException:
    return RuleSetException(RuleSetError.BORSH_DESERIALIZATION_ERROR)


class BorshReader:
    """Reads Borsh-encoded values from a byte string, front to back.

    Malformed or truncated input raises RuleSetException carrying
    BORSH_DESERIALIZATION_ERROR.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._position = 0

    def _take(self, size: int) -> bytes:
        end = self._position + size
        if size < 0 or end > len(self._data):
            raise _deserialization_error()
        chunk = self._data[self._position:end]
        self._position = end
        return chunk

    def read_u8(self) -> int:
        """Read an unsigned 8-bit integer."""
        return self._take(1)[0]

    def read_u32(self) -> int:
        """Read an unsigned 32-bit little-endian integer."""
        return int.from_bytes(self._take(4), "little")

    def read_u64(self) -> int:
        """Read an unsigned 64-bit little-endian integer."""
        return int.from_bytes(self._take(8), "little")

    def read_bool(self) -> bool:
        """Read a boolean; any byte other than 0 or 1 is rejected."""
        byte = self.read_u8()
        if byte not in (0, 1):
            raise _deserialization_error()
        return byte == 1

    def read_fixed(self, size: int) -> bytes:
        """Read exactly `size` bytes."""
        return self._take(size)

    def read_bytes(self) -> bytes:
        """Read a u32 length followed by that many bytes."""
        return self._take(self.read_u32())

    def read_string(self) -> str:
        """Read a length-prefixed UTF-8 string."""
        raw = self.read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise _deserialization_error() from None

    def finish(self) -> None:
        """Check that all input was consumed."""
        if self._position != len(self._data):
            raise _deserialization_error()
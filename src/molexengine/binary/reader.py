"""Immutable byte cursor for bounds-checked binary decoding.

Implements the immutable cursor pattern over a fixed byte buffer.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - Sequential reads return a NEW cursor alongside the value
    - Offset-based reads are pure and never move the cursor
    - Every read is bounds-checked; nothing returns partial data

Error Model:
    - Sequential reads past the end raise TruncatedInputError
    - Offset-based reads outside the buffer raise InvalidOffsetError
"""

import struct
from dataclasses import dataclass

from molexengine.diagnostics import ErrorTemplate, InvalidOffsetError, TruncatedInputError
from molexengine.enums import ByteOrder

__all__ = ["ByteCursor", "ReadResult"]

_U32_SIZE = 4

_U32 = {
    ByteOrder.LITTLE: struct.Struct("<I"),
    ByteOrder.BIG: struct.Struct(">I"),
}


@dataclass(frozen=True, slots=True)
class ReadResult[T]:
    """Read result containing decoded value and new cursor position.

    Example:
        >>> cursor = ByteCursor(b"\\x01\\x00\\x00\\x00", 0)
        >>> result = cursor.read_u32()
        >>> result.value
        1
        >>> result.cursor.pos
        4
    """

    value: T
    cursor: "ByteCursor"


@dataclass(frozen=True, slots=True)
class ByteCursor:
    """Immutable position tracker over a byte buffer.

    The byte order is fixed per cursor; ``with_order()`` derives a cursor
    decoding the same buffer in the other order.

    Example:
        >>> cursor = ByteCursor(b"\\x00\\x00\\x00\\x2a", 0, ByteOrder.BIG)
        >>> cursor.read_u32().value
        42
        >>> cursor.pos  # Original unchanged
        0
    """

    data: bytes
    pos: int = 0
    order: ByteOrder = ByteOrder.LITTLE

    @property
    def size(self) -> int:
        """Total buffer size in bytes."""
        return len(self.data)

    @property
    def remaining(self) -> int:
        """Bytes left between the cursor and the end of the buffer."""
        return max(len(self.data) - self.pos, 0)

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.data)

    def with_order(self, order: ByteOrder) -> "ByteCursor":
        """Return a cursor at the same position decoding in ``order``."""
        return ByteCursor(self.data, self.pos, order)

    def advance(self, count: int) -> "ByteCursor":
        """Return new cursor advanced by count bytes.

        Raises:
            TruncatedInputError: If fewer than count bytes remain
        """
        self._require(count)
        return ByteCursor(self.data, self.pos + count, self.order)

    # ------------------------------------------------------------------
    # Sequential reads (advance)
    # ------------------------------------------------------------------

    def read_bytes(self, count: int) -> ReadResult[bytes]:
        """Read exactly count raw bytes.

        Raises:
            TruncatedInputError: If fewer than count bytes remain
        """
        self._require(count)
        end = self.pos + count
        return ReadResult(self.data[self.pos : end], ByteCursor(self.data, end, self.order))

    def read_u32(self) -> ReadResult[int]:
        """Read an unsigned 32-bit integer in the cursor's byte order.

        Raises:
            TruncatedInputError: If fewer than 4 bytes remain
        """
        self._require(_U32_SIZE)
        (value,) = _U32[self.order].unpack_from(self.data, self.pos)
        return ReadResult(value, ByteCursor(self.data, self.pos + _U32_SIZE, self.order))

    def read_until(self, delimiter: bytes) -> ReadResult[bytes]:
        """Read a delimiter-bounded run.

        Returns the bytes up to (not including) the next delimiter and a
        cursor positioned just past it. Without a further delimiter the run
        extends to the end of the buffer and the new cursor is at EOF.

        Example:
            >>> cursor = ByteCursor(b"one\\x00two", 0)
            >>> first = cursor.read_until(b"\\x00")
            >>> first.value, first.cursor.pos
            (b'one', 4)
            >>> second = first.cursor.read_until(b"\\x00")
            >>> second.value, second.cursor.is_eof
            (b'two', True)
        """
        end = self.data.find(delimiter, self.pos)
        if end == -1:
            return ReadResult(self.data[self.pos :], ByteCursor(self.data, len(self.data), self.order))
        return ReadResult(
            self.data[self.pos : end],
            ByteCursor(self.data, end + len(delimiter), self.order),
        )

    def split(self, delimiter: bytes) -> list[bytes]:
        """Split the rest of the buffer into delimiter-bounded runs.

        Mirrors ``bytes.split``: n delimiters always yield n + 1 runs,
        including empty ones.

        Example:
            >>> ByteCursor(b"a\\x00\\x00b", 0).split(b"\\x00")
            [b'a', b'', b'b']
        """
        runs: list[bytes] = []
        cursor = self
        while True:
            result = cursor.read_until(delimiter)
            runs.append(result.value)
            consumed_delimiter = result.cursor.pos > cursor.pos + len(result.value)
            if not consumed_delimiter:
                return runs
            if result.cursor.is_eof:
                # Buffer ended right after a delimiter: one trailing empty run.
                runs.append(b"")
                return runs
            cursor = result.cursor

    # ------------------------------------------------------------------
    # Offset-based reads (pure)
    # ------------------------------------------------------------------

    def u32_at(self, offset: int) -> int:
        """Read an unsigned 32-bit integer at an absolute offset.

        Raises:
            InvalidOffsetError: If the 4 bytes lie outside the buffer
        """
        self._check_range(offset, _U32_SIZE)
        (value,) = _U32[self.order].unpack_from(self.data, offset)
        return value

    def slice_at(self, offset: int, length: int) -> bytes:
        """Return length bytes starting at an absolute offset.

        Raises:
            InvalidOffsetError: If the range lies outside the buffer
        """
        self._check_range(offset, length)
        return self.data[offset : offset + length]

    def at(self, offset: int) -> "ByteCursor":
        """Return a cursor positioned at an absolute offset.

        Raises:
            InvalidOffsetError: If offset is outside the buffer
        """
        self._check_range(offset, 0)
        return ByteCursor(self.data, offset, self.order)

    # ------------------------------------------------------------------
    # Bounds checks
    # ------------------------------------------------------------------

    def _require(self, count: int) -> None:
        if count < 0 or self.pos + count > len(self.data):
            raise TruncatedInputError(
                ErrorTemplate.truncated_input(self.pos, count, self.remaining),
                offset=self.pos,
                size=count,
            )

    def _check_range(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > len(self.data):
            raise InvalidOffsetError(
                ErrorTemplate.invalid_offset(offset, length, len(self.data)),
                offset=offset,
                length=length,
            )

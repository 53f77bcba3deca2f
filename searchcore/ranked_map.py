"""Numeric field values of documents, kept for ranking."""

from __future__ import annotations

import struct
from typing import BinaryIO, Union

Number = Union[int, float]

_LENGTH = struct.Struct("<Q")
_KEY = struct.Struct("<QHI")
_UNSIGNED = struct.Struct("<Q")
_SIGNED = struct.Struct("<q")
_FLOAT = struct.Struct("<d")

_TAG_UNSIGNED = 0
_TAG_SIGNED = 1
_TAG_FLOAT = 2


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    data = reader.read(size)
    if len(data) != size:
        raise ValueError("unexpected end of ranked map data")
    return data


class RankedMap:
    """Maps ``(document id, field id)`` pairs to numbers."""

    def __init__(self) -> None:
        self._values: dict[tuple[int, int], Number] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RankedMap):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"RankedMap({self._values!r})"

    def insert(self, document: int, field: int, number: Number) -> None:
        """Set the number of ``field`` in ``document``."""
        if isinstance(number, bool) or not isinstance(number, (int, float)):
            raise TypeError(f"expected a number, got {number!r}")
        self._values[(document, field)] = number

    def remove(self, document: int, field: int) -> None:
        """Forget the number of ``field`` in ``document``, if there is one."""
        self._values.pop((document, field), None)

    def get(self, document: int, field: int) -> Number | None:
        """Return the number of ``field`` in ``document``, or None."""
        return self._values.get((document, field))

    @classmethod
    def read_from_bin(cls, reader: BinaryIO) -> RankedMap:
        """Read a map written by :meth:`write_to_bin` from a binary stream."""
        ranked = cls()
        (count,) = _LENGTH.unpack(_read_exact(reader, _LENGTH.size))
        for _ in range(count):
            document, field, tag = _KEY.unpack(_read_exact(reader, _KEY.size))
            if tag == _TAG_UNSIGNED:
                (value,) = _UNSIGNED.unpack(_read_exact(reader, _UNSIGNED.size))
            elif tag == _TAG_SIGNED:
                (value,) = _SIGNED.unpack(_read_exact(reader, _SIGNED.size))
            elif tag == _TAG_FLOAT:
                (value,) = _FLOAT.unpack(_read_exact(reader, _FLOAT.size))
            else:
                raise ValueError(f"unknown number tag {tag}")
            ranked._values[(document, field)] = value
        return ranked

    def write_to_bin(self, writer: BinaryIO) -> None:
        """Write the map to a binary stream."""
        writer.write(_LENGTH.pack(len(self._values)))
        for (document, field), number in self._values.items():
            try:
                if isinstance(number, float):
                    writer.write(_KEY.pack(document, field, _TAG_FLOAT) + _FLOAT.pack(number))
                elif number >= 0:
                    writer.write(_KEY.pack(document, field, _TAG_UNSIGNED) + _UNSIGNED.pack(number))
                else:
                    writer.write(_KEY.pack(document, field, _TAG_SIGNED) + _SIGNED.pack(number))
            except struct.error as error:
                raise ValueError(f"cannot encode entry {(document, field)}: {error}") from error
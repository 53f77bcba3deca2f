"""Renumbering of attributes in the order they were made searchable."""

from __future__ import annotations

_MAX_ATTRIBUTE = 0xFFFF


class ReorderedAttrs:
    """A two-way mapping between attribute ids and their searchable order."""

    def __init__(self) -> None:
        self._reorders: list[int | None] = []
        self._reverse: list[int] = []

    def insert_attribute(self, attribute: int) -> None:
        """Give ``attribute`` the next position in the searchable order."""
        if not 0 <= attribute <= _MAX_ATTRIBUTE:
            raise ValueError(f"attribute {attribute} is out of range")
        if attribute >= len(self._reorders):
            self._reorders.extend([None] * (attribute + 1 - len(self._reorders)))
        self._reorders[attribute] = len(self._reverse)
        self._reverse.append(attribute)

    def get(self, attribute: int) -> int | None:
        """Return the searchable position of ``attribute``, if it has one."""
        if 0 <= attribute < len(self._reorders):
            return self._reorders[attribute]
        return None

    def reverse(self, attribute: int) -> int | None:
        """Return the attribute id at searchable position ``attribute``."""
        if 0 <= attribute < len(self._reverse):
            return self._reverse[attribute]
        return None
"""Coding path: where in the encoded value a leaf was found."""

from __future__ import annotations

from typing import NamedTuple

from .exceptions import NestingDepthError

MAX_DEPTH = 2


class CodingPath(NamedTuple):
    """
    Where a leaf sits in the encoded value.

    ``(root_key,)`` for scalars and array elements, ``(root_key, field_key)``
    for record fields.
    """

    root_key: str
    field_key: str | None = None

    @property
    def depth(self) -> int:
        return 1 if self.field_key is None else 2

    @property
    def segments(self) -> tuple[str, ...]:
        if self.field_key is None:
            return (self.root_key,)
        return (self.root_key, self.field_key)

    def require_room(self, key: str | None = None) -> None:
        """
        Check that a container may open at this path.

        Raises:
            NestingDepthError: the path already has ``MAX_DEPTH`` segments.
        """
        if self.depth >= MAX_DEPTH:
            raise NestingDepthError(self.segments, key)

    def child(self, key: str) -> CodingPath:
        """Extend the path with a record field key."""
        self.require_room(key)
        return CodingPath(self.root_key, key)

    def __str__(self) -> str:
        return ".".join(self.segments)

"""
Axis-aligned bounding box collision
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle anchored at its top-left corner.
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def centered(cls, cx: float, cy: float, width: float, height: float) -> Rect:
        """
        Build a rectangle centered on (cx, cy)

        :param cx: Center x
        :type cx: float

        :param cy: Center y
        :type cy: float

        :param width: Width of the rectangle
        :type width: float

        :param height: Height of the rectangle
        :type height: float

        :return: Rect
        """
        return cls(cx - width / 2, cy - height / 2, width, height)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def intersects(self, other: Rect) -> bool:
        """
        Strict overlap on both axes. Rectangles that only share an edge
        do not intersect.

        :param other: Rectangle to test against
        :type other: Rect

        :return: bool
        """
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )


@runtime_checkable
class HasBoundingBox(Protocol):
    """Anything that can report the rectangle it occupies."""

    def bounding_box(self) -> Rect: ...


def intersects(a: HasBoundingBox, b: HasBoundingBox) -> bool:
    """
    Check whether two objects overlap

    :param a: First object
    :type a: HasBoundingBox

    :param b: Second object
    :type b: HasBoundingBox

    :return: bool
    """
    return a.bounding_box().intersects(b.bounding_box())


class BoxBody:
    """
    Mixin for entities positioned by their center with a fixed size.

    Subclasses provide ``x``, ``y``, ``width`` and ``height`` attributes.
    """

    x: float
    y: float
    width: float
    height: float

    def bounding_box(self) -> Rect:
        return Rect.centered(self.x, self.y, self.width, self.height)

    def collides_with(self, other: HasBoundingBox) -> bool:
        return intersects(self, other)

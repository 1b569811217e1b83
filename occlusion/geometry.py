from __future__ import annotations

###############################################################################
# Imports                                                                     #
###############################################################################

# — Standard library —
import math
from dataclasses import dataclass
from typing import ClassVar, List, Mapping

###############################################################################
# Rectangle value type                                                        #
###############################################################################

_INF = float("inf")


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in Quartz global coordinates (y grows downwards).

    Two sentinel values exist besides ordinary rectangles:

    * ``Rect.NULL`` – no geometry at all (e.g. the intersection of two
      disjoint rectangles).
    * ``Rect.INFINITE`` – an unbounded rectangle.

    Neither sentinel ever contributes area to a region.
    """

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    NULL: ClassVar["Rect"]
    INFINITE: ClassVar["Rect"]

    # ───────────────────────── construction
    @classmethod
    def from_bounds(cls, bounds: Mapping[str, float]) -> "Rect":
        """Build a rect from a ``kCGWindowBounds`` dictionary."""
        return cls(
            float(bounds.get("X", 0)),
            float(bounds.get("Y", 0)),
            float(bounds.get("Width", 0)),
            float(bounds.get("Height", 0)),
        )

    # ───────────────────────── edges
    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    # ───────────────────────── validity
    @property
    def is_null(self) -> bool:
        return (math.isinf(self.x) and self.x > 0) or (math.isinf(self.y) and self.y > 0)

    @property
    def is_infinite(self) -> bool:
        """True only for the ``Rect.INFINITE`` sentinel.

        A rect with just one unbounded side is still an ordinary rect and
        intersects by the usual min/max rules.
        """
        return (
            self.x == -_INF and self.y == -_INF
            and self.width == _INF and self.height == _INF
        )

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height))

    @property
    def is_empty(self) -> bool:
        return self.is_null or self.width <= 0 or self.height <= 0

    @property
    def is_valid(self) -> bool:
        """True for a finite rectangle with positive area."""
        return self.is_finite and not self.is_empty

    @property
    def area(self) -> float:
        if self.is_empty:
            return 0.0
        if not self.is_finite:
            return _INF
        return self.width * self.height

    # ───────────────────────── relations
    def intersection(self, other: "Rect") -> "Rect":
        """Return the overlap of *self* and *other*, or ``Rect.NULL``.

        Rectangles that merely touch along an edge do not intersect.
        """
        if self.is_empty or other.is_empty:
            return Rect.NULL
        if self.is_infinite:
            return other
        if other.is_infinite:
            return self

        x0 = max(self.min_x, other.min_x)
        y0 = max(self.min_y, other.min_y)
        x1 = min(self.max_x, other.max_x)
        y1 = min(self.max_y, other.max_y)
        if x0 < x1 and y0 < y1:
            return Rect(x0, y0, x1 - x0, y1 - y0)
        return Rect.NULL

    def intersects(self, other: "Rect") -> bool:
        return not self.intersection(other).is_empty

    def contains(self, other: "Rect") -> bool:
        """True if *other* lies entirely inside *self* (edges inclusive)."""
        if self.is_empty or other.is_null:
            return False
        if self.is_infinite:
            return True
        if other.is_infinite:
            return False
        return (
            self.min_x <= other.min_x
            and self.min_y <= other.min_y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    # ───────────────────────── decomposition
    def subtract(self, other: "Rect") -> List["Rect"]:
        """Return the pieces of *self* not covered by *other*.

        At most four pairwise-disjoint strips are returned, in this order:

        * **top** – full width, from ``self.min_y`` down to the overlap
        * **bottom** – full width, from the overlap down to ``self.max_y``
        * **left** – overlap rows only, from ``self.min_x`` to the overlap
        * **right** – overlap rows only, from the overlap to ``self.max_x``

        Their union is exactly ``self`` minus the overlap.
        """
        if self.is_empty:
            return []
        if self.is_infinite:
            return [] if other.is_infinite else [self]

        inter = self.intersection(other)
        if inter.is_empty:
            return [self]
        if other.contains(self):
            return []

        pieces: list[Rect] = []
        if inter.min_y > self.min_y:
            pieces.append(Rect(self.min_x, self.min_y, self.width, inter.min_y - self.min_y))
        if inter.max_y < self.max_y:
            pieces.append(Rect(self.min_x, inter.max_y, self.width, self.max_y - inter.max_y))
        if inter.min_x > self.min_x:
            pieces.append(Rect(self.min_x, inter.min_y, inter.min_x - self.min_x, inter.height))
        if inter.max_x < self.max_x:
            pieces.append(Rect(inter.max_x, inter.min_y, self.max_x - inter.max_x, inter.height))

        return [p for p in pieces if not p.is_empty]

    def __str__(self) -> str:
        if self.is_null:
            return "Rect(null)"
        if self.is_infinite:
            return "Rect(infinite)"
        return f"Rect(x={self.x:g}, y={self.y:g}, w={self.width:g}, h={self.height:g})"


Rect.NULL = Rect(_INF, _INF, 0.0, 0.0)
Rect.INFINITE = Rect(-_INF, -_INF, _INF, _INF)

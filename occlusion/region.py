from __future__ import annotations

###############################################################################
# Imports                                                                     #
###############################################################################

# — Standard library —
from typing import Iterable, Iterator, Tuple

# — Third-party —
from shapely.geometry import box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

# — Local —
from .geometry import Rect

###############################################################################
# Region of non-overlapping rectangles                                        #
###############################################################################


class RegionSet:
    """An immutable list of rectangles that never overlap after subtraction.

    The area of the region is the plain sum of its members' areas.  That is
    only exact because ``subtract`` keeps members pairwise disjoint: every
    piece it produces is a subset of a single, already disjoint parent.

    Every operation returns a new region; degenerate rectangles (empty,
    null, infinite) are absorbed silently and never raise.
    """

    __slots__ = ("_rects",)

    def __init__(self, rects: Iterable[Rect] = ()) -> None:
        """Wrap *rects* as they are, minus any degenerate ones.

        The members are trusted to be pairwise disjoint; use ``from_rect``
        and ``subtract`` to build a region from arbitrary rectangles.
        """
        self._rects: Tuple[Rect, ...] = tuple(r for r in rects if r.is_valid)

    # ───────────────────────── construction
    @classmethod
    def from_rect(cls, rect: Rect) -> "RegionSet":
        return cls((rect,)) if rect.is_valid else cls()

    @classmethod
    def from_rects(cls, rects: Iterable[Rect]) -> "RegionSet":
        """Fold *rects* through ``add``.  Overlaps between inputs are kept."""
        region = cls()
        for r in rects:
            region = region.add(r)
        return region

    # ───────────────────────── accessors
    @property
    def rects(self) -> Tuple[Rect, ...]:
        return self._rects

    @property
    def area(self) -> float:
        return sum(r.area for r in self._rects)

    @property
    def is_empty(self) -> bool:
        return not self._rects

    def __len__(self) -> int:
        return len(self._rects)

    def __iter__(self) -> Iterator[Rect]:
        return iter(self._rects)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegionSet):
            return NotImplemented
        return self._rects == other._rects

    def __hash__(self) -> int:
        return hash(self._rects)

    def __repr__(self) -> str:
        return f"RegionSet({len(self._rects)} rects, area={self.area:g})"

    # ───────────────────────── algebra
    def add(self, rect: Rect) -> "RegionSet":
        if not rect.is_valid:
            return self
        return RegionSet(self._rects + (rect,))

    def subtract(self, rect: Rect) -> "RegionSet":
        if rect.is_empty or rect.is_infinite:
            return self

        pieces: list[Rect] = []
        for member in self._rects:
            pieces.extend(member.subtract(rect))
        return RegionSet(pieces)

    def subtract_all(self, rects: Iterable[Rect]) -> "RegionSet":
        region = self
        for r in rects:
            region = region.subtract(r)
        return region

    def __sub__(self, rect: Rect) -> "RegionSet":
        if not isinstance(rect, Rect):
            return NotImplemented
        return self.subtract(rect)

    # ───────────────────────── interop
    def to_geometry(self) -> BaseGeometry:
        """Return the region as a single shapely geometry.

        Note that shapely's axes are plain Cartesian; no Y-flip is applied,
        so the geometry mirrors Quartz coordinates one-to-one.
        """
        return unary_union([box(r.min_x, r.min_y, r.max_x, r.max_y) for r in self._rects])

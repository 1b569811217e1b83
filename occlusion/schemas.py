from __future__ import annotations

###############################################################################
# Imports                                                                     #
###############################################################################

# — Standard library —
from dataclasses import dataclass, field
from typing import Hashable, Optional, Tuple

# — Third-party —
from shapely.geometry.base import BaseGeometry

# — Local —
from .geometry import Rect
from .region import RegionSet

###############################################################################
# Surface snapshot entry                                                      #
###############################################################################


@dataclass(frozen=True, eq=False)
class SurfaceInfo:
    """One on-screen surface (window) as reported by a provider.

    ``z_index`` is the front-to-back rank inside the snapshot the surface
    came from; 0 is frontmost.  ``layer`` 0 is a normal application window,
    anything else is system chrome (menu bar, Dock, overlays).
    """

    id: Hashable
    pid: int
    owner_name: str
    frame: Rect
    layer: int = 0
    alpha: float = 1.0
    is_on_screen: bool = True
    z_index: int = 0
    title: Optional[str] = None
    bundle_id: Optional[str] = None

    @property
    def area(self) -> float:
        return self.frame.area

    @property
    def is_normal_layer(self) -> bool:
        return self.layer == 0

    @property
    def is_visible(self) -> bool:
        """On screen, with some area and some opacity."""
        return self.is_on_screen and self.area > 0 and self.alpha > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SurfaceInfo):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        title = f'"{self.title}"' if self.title is not None else "untitled"
        return f"SurfaceInfo(id={self.id}, owner={self.owner_name}, title={title}, frame={self.frame})"

###############################################################################
# Calculation result                                                          #
###############################################################################


@dataclass(frozen=True, eq=False)
class OcclusionResult:
    """Outcome of one occlusion calculation.

    Attributes
    ----------
    target:
        The analysed surface.
    coverage:
        Fraction of the target hidden by occluders, clamped to ``[0, 1]``.
    occluders:
        Surfaces that covered part of the target, front-to-back.
    visible_regions:
        Disjoint rectangles that remain visible.
    """

    target: SurfaceInfo
    coverage: float
    occluders: Tuple[SurfaceInfo, ...] = field(default_factory=tuple)
    visible_regions: Tuple[Rect, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "coverage", min(1.0, max(0.0, float(self.coverage))))
        object.__setattr__(self, "occluders", tuple(self.occluders))
        object.__setattr__(self, "visible_regions", tuple(self.visible_regions))

    # ───────────────────────── derived values
    @property
    def visible_percentage(self) -> float:
        return 1.0 - self.coverage

    @property
    def visible_area(self) -> float:
        return sum(r.area for r in self.visible_regions)

    @property
    def covered_area(self) -> float:
        return self.target.area - self.visible_area

    @property
    def is_fully_visible(self) -> bool:
        return self.coverage == 0.0

    @property
    def is_fully_occluded(self) -> bool:
        return self.coverage >= 1.0

    def is_occluded(self, threshold: float = 0.5) -> bool:
        return self.coverage > threshold

    def is_visible(self, threshold: float = 0.5) -> bool:
        return self.visible_percentage > threshold

    def visible_geometry(self) -> BaseGeometry:
        """The visible regions merged into one shapely geometry."""
        return RegionSet(self.visible_regions).to_geometry()

    # ───────────────────────── dunder
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OcclusionResult):
            return NotImplemented
        return self.target.id == other.target.id and self.coverage == other.coverage

    def __hash__(self) -> int:
        return hash((self.target.id, self.coverage))

    def __str__(self) -> str:
        return (
            f"OcclusionResult({self.target.owner_name}: {int(self.coverage * 100)}% covered "
            f"by {len(self.occluders)} window(s))"
        )

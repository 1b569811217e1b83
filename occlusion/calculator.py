from __future__ import annotations

###############################################################################
# Imports                                                                     #
###############################################################################

# — Standard library —
import logging
from typing import TYPE_CHECKING, Dict, Hashable, Iterable, List, Optional, Sequence, Union

# — Local —
from .errors import TargetNotFound
from .region import RegionSet
from .schemas import OcclusionResult, SurfaceInfo
from .providers import SurfaceProvider

if TYPE_CHECKING:
    from .observers import OcclusionObserver
    from .query import SurfaceQuery

log = logging.getLogger("Occlusion")

###############################################################################
# Core algorithm                                                              #
###############################################################################

def _index_of(surfaces: Sequence[SurfaceInfo], target_id: Hashable) -> Optional[int]:
    for idx, s in enumerate(surfaces):
        if s.id == target_id:
            return idx
    return None


def occlusion_at(surfaces: Sequence[SurfaceInfo], idx: int) -> OcclusionResult:
    target = surfaces[idx]
    frame = target.frame

    # a surface without area counts as fully covered
    if frame.area <= 0:
        return OcclusionResult(target=target, coverage=1.0)

    visible = RegionSet.from_rect(frame)
    occluders: list[SurfaceInfo] = []

    # everything before the target in the snapshot is in front of it
    for s in surfaces[:idx]:
        if s.layer != target.layer or s.alpha <= 0 or not s.is_on_screen:
            continue
        if frame.intersects(s.frame):
            visible = visible.subtract(s.frame)
            occluders.append(s)

    coverage = 1.0 - visible.area / frame.area
    return OcclusionResult(
        target=target,
        coverage=max(0.0, min(1.0, coverage)),
        occluders=tuple(occluders),
        visible_regions=visible.rects,
    )


def compute_occlusion(surfaces: Sequence[SurfaceInfo], target_id: Hashable) -> OcclusionResult:
    """Compute how much of *target_id* is hidden by the surfaces in front of it.

    Parameters
    ----------
    surfaces:
        Snapshot ordered front-to-back.  The order is trusted as-is.
    target_id:
        Id of the surface to analyse.

    Raises
    ------
    TargetNotFound
        If no surface in *surfaces* has id *target_id*.
    """
    idx = _index_of(surfaces, target_id)
    if idx is None:
        raise TargetNotFound(target_id)
    return occlusion_at(surfaces, idx)

###############################################################################
# Provider-backed calculator                                                  #
###############################################################################

Target = Union[Hashable, SurfaceInfo]


def _target_id(target: Target) -> Hashable:
    return target.id if isinstance(target, SurfaceInfo) else target


class OcclusionCalculator:
    """Runs :func:`compute_occlusion` against fresh provider snapshots.

    The calculator holds no state besides its provider; every call takes
    a new snapshot, so instances can be shared between threads and tasks.
    """

    def __init__(self, provider: SurfaceProvider) -> None:
        self.provider = provider

    # ───────────────────────── snapshots
    def all_surfaces(self) -> List[SurfaceInfo]:
        return self.provider.all_surfaces()

    def surface(self, target_id: Hashable) -> Optional[SurfaceInfo]:
        return self.provider.surface(target_id)

    # ───────────────────────── single target
    def calculate(self, target: Target) -> OcclusionResult:
        """Analyse one surface, given by id or by a ``SurfaceInfo``.

        A ``SurfaceInfo`` is looked up by id in the fresh snapshot, so the
        result reflects where the surface is *now*.
        """
        target_id = _target_id(target)
        surfaces = self.provider.all_surfaces()
        try:
            return compute_occlusion(surfaces, target_id)
        except TargetNotFound:
            log.debug("Target %r not in snapshot of %d surfaces", target_id, len(surfaces))
            raise

    def coverage(self, target: Target) -> float:
        return self.calculate(target).coverage

    def is_occluded(self, target: Target, threshold: float = 0.5) -> bool:
        return self.calculate(target).is_occluded(threshold)

    def is_visible(self, target: Target, threshold: float = 0.5) -> bool:
        return self.calculate(target).is_visible(threshold)

    # ───────────────────────── batches (one snapshot each)
    def calculate_many(self, targets: Iterable[Target]) -> List[OcclusionResult]:
        """Analyse several surfaces against a single snapshot.

        Ids missing from the snapshot are skipped; use
        :meth:`calculate_by_id` to find out which ones.
        """
        surfaces = self.provider.all_surfaces()
        results = []
        for target in targets:
            idx = _index_of(surfaces, _target_id(target))
            if idx is not None:
                results.append(occlusion_at(surfaces, idx))
        return results

    def calculate_by_id(self, targets: Iterable[Target]) -> Dict[Hashable, Optional[OcclusionResult]]:
        """Like :meth:`calculate_many`, but maps every requested id to its
        result, or to ``None`` when the id is not in the snapshot."""
        surfaces = self.provider.all_surfaces()
        out: dict[Hashable, Optional[OcclusionResult]] = {}
        for target in targets:
            target_id = _target_id(target)
            idx = _index_of(surfaces, target_id)
            out[target_id] = None if idx is None else occlusion_at(surfaces, idx)
        return out

    # ───────────────────────── builders
    def query(self) -> "SurfaceQuery":
        from .query import SurfaceQuery

        return SurfaceQuery(self)

    def observe(self, target: Target, **kwargs) -> "OcclusionObserver":
        """Start an :class:`~occlusion.observers.OcclusionObserver` on *target*.

        Must be called from a running event loop.
        """
        from .observers import OcclusionObserver

        return OcclusionObserver(self, _target_id(target), **kwargs)

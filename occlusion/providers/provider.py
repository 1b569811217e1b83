from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Hashable, List, Optional

from ..schemas import SurfaceInfo


class SurfaceProvider(ABC):
    """Source of surface snapshots.

    Implementations return every surface front-to-back, with ``z_index``
    equal to the position in the returned list, and raise
    :class:`~occlusion.errors.ProviderError` when enumeration fails.
    """

    @abstractmethod
    def all_surfaces(self) -> List[SurfaceInfo]:
        ...

    def surface(self, surface_id: Hashable) -> Optional[SurfaceInfo]:
        return next((s for s in self.all_surfaces() if s.id == surface_id), None)

    def surfaces_for_process(self, pid: int) -> List[SurfaceInfo]:
        return [s for s in self.all_surfaces() if s.pid == pid]

    def surfaces_matching(self, predicate: Callable[[SurfaceInfo], bool]) -> List[SurfaceInfo]:
        return [s for s in self.all_surfaces() if predicate(s)]

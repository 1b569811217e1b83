from __future__ import annotations

###############################################################################
# Imports                                                                     #
###############################################################################

# — Standard library —
import logging
import os
from typing import Iterable, List, Optional

# — Third-party —
import Quartz
from AppKit import NSRunningApplication

# — Local —
from ..errors import PermissionDenied, ProviderError
from ..geometry import Rect
from ..schemas import SurfaceInfo
from .provider import SurfaceProvider

log = logging.getLogger("Occlusion")

###############################################################################
# CGWindowList provider                                                       #
###############################################################################

class QuartzSurfaceProvider(SurfaceProvider):
    """macOS windows via ``CGWindowListCopyWindowInfo``, front-to-back.

    Window titles of other processes are only readable with the Screen
    Recording permission; without it ``title`` is ``None`` but every
    geometric field is still populated.
    """

    DEFAULT_OPTIONS = (
        Quartz.kCGWindowListOptionOnScreenOnly
        | Quartz.kCGWindowListExcludeDesktopElements
    )

    def __init__(self, options: Optional[int] = None, skip_owners: Iterable[str] = ()) -> None:
        self.options = self.DEFAULT_OPTIONS if options is None else options
        # e.g. {"Dock", "WindowServer"}
        self.skip_owners = frozenset(skip_owners)

    # ───────────────────────── enumeration
    def all_surfaces(self) -> List[SurfaceInfo]:
        wins = Quartz.CGWindowListCopyWindowInfo(self.options, Quartz.kCGNullWindowID)
        if wins is None:
            raise ProviderError("Failed to retrieve window list")

        surfaces: list[SurfaceInfo] = []
        for info in wins:
            surface = self._parse(info, z_index=len(surfaces))
            if surface is not None:
                surfaces.append(surface)

        log.debug("Enumerated %d windows (%d raw)", len(surfaces), len(wins))
        return surfaces

    def _parse(self, info, z_index: int) -> Optional[SurfaceInfo]:
        wid = info.get(Quartz.kCGWindowNumber)
        pid = info.get(Quartz.kCGWindowOwnerPID)
        owner = info.get(Quartz.kCGWindowOwnerName)
        bounds = info.get(Quartz.kCGWindowBounds)
        if wid is None or pid is None or owner is None or bounds is None:
            return None
        if owner in self.skip_owners:
            return None

        frame = Rect.from_bounds(bounds)
        if frame.width <= 0 or frame.height <= 0:
            return None  # hidden or minimised

        return SurfaceInfo(
            id=int(wid),
            pid=int(pid),
            owner_name=str(owner),
            frame=frame,
            layer=int(info.get(Quartz.kCGWindowLayer, 0)),
            alpha=float(info.get(Quartz.kCGWindowAlpha, 1.0)),
            is_on_screen=bool(info.get(Quartz.kCGWindowIsOnscreen, True)),
            z_index=z_index,
            title=info.get(Quartz.kCGWindowName),
            bundle_id=self._bundle_id(int(pid)),
        )

    @staticmethod
    def _bundle_id(pid: int) -> Optional[str]:
        app = NSRunningApplication.runningApplicationWithProcessIdentifier_(pid)
        return app.bundleIdentifier() if app is not None else None

    # ───────────────────────── screen recording permission
    def has_screen_recording_permission(self) -> bool:
        """True if a window title of another process is readable.

        A ``False`` answer is inconclusive: there may simply be no other
        titled window on screen.
        """
        wins = Quartz.CGWindowListCopyWindowInfo(self.DEFAULT_OPTIONS, Quartz.kCGNullWindowID) or []
        me = os.getpid()
        return any(
            info.get(Quartz.kCGWindowOwnerPID) != me and info.get(Quartz.kCGWindowName) is not None
            for info in wins
        )

    @staticmethod
    def request_screen_recording_permission() -> None:
        """Trigger the system permission dialog by capturing a 1×1 image."""
        Quartz.CGWindowListCreateImage(
            Quartz.CGRectMake(0, 0, 1, 1),
            Quartz.kCGWindowListOptionOnScreenOnly,
            Quartz.kCGNullWindowID,
            Quartz.kCGWindowImageBestResolution,
        )

    def require_screen_recording_permission(self) -> None:
        if not self.has_screen_recording_permission():
            raise PermissionDenied()

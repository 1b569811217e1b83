from dataclasses import replace

from occlusion import Rect, SurfaceInfo
from occlusion.providers import SurfaceProvider


class FakeProvider(SurfaceProvider):
    """Serves canned snapshots.

    ``snapshots`` is consumed one per call; the last one repeats forever.
    An exception instance in the list is raised instead of returned.
    """

    def __init__(self, *snapshots):
        self.snapshots = list(snapshots) or [[]]
        self.calls = 0

    def all_surfaces(self):
        self.calls += 1
        snap = self.snapshots.pop(0) if len(self.snapshots) > 1 else self.snapshots[0]
        if isinstance(snap, BaseException):
            raise snap
        return list(snap)


def make_surface(sid, frame, z_index=0, **kw):
    kw.setdefault("pid", 1)
    kw.setdefault("owner_name", "TestApp")
    kw.setdefault("bundle_id", "com.test.app")
    kw.setdefault("title", f"Window {sid}")
    if not isinstance(frame, Rect):
        frame = Rect(*frame)
    return SurfaceInfo(id=sid, frame=frame, z_index=z_index, **kw)


def stack(*surfaces):
    """Front-to-back list with z_index matching position."""
    return [replace(s, z_index=i) for i, s in enumerate(surfaces)]

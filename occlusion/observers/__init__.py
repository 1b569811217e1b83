from .observer import Observer
from .occlusion import ChangeDetector, OcclusionObserver, observe

__all__ = ["Observer", "OcclusionObserver", "ChangeDetector", "observe"]

"""Exact window occlusion for stacked rectangular surfaces.

    >>> from occlusion import OcclusionCalculator
    >>> from occlusion.providers import default_provider
    >>> calc = OcclusionCalculator(default_provider())
    >>> calc.coverage(window_id)
    0.25
"""

from .calculator import OcclusionCalculator, compute_occlusion
from .config import OcclusionConfig
from .errors import (
    NoMatchingSurfaces,
    OcclusionError,
    PermissionDenied,
    ProviderError,
    TargetNotFound,
)
from .geometry import Rect
from .query import Matcher, SurfaceQuery
from .region import RegionSet
from .schemas import OcclusionResult, SurfaceInfo

__version__ = "0.1.0"

__all__ = [
    "OcclusionCalculator",
    "compute_occlusion",
    "OcclusionConfig",
    "OcclusionError",
    "TargetNotFound",
    "ProviderError",
    "PermissionDenied",
    "NoMatchingSurfaces",
    "Rect",
    "RegionSet",
    "SurfaceInfo",
    "OcclusionResult",
    "Matcher",
    "SurfaceQuery",
]

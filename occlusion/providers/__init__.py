from .provider import SurfaceProvider


def default_provider(**kwargs) -> SurfaceProvider:
    """Return the platform provider (macOS only, imports Quartz on demand)."""
    from .quartz import QuartzSurfaceProvider

    return QuartzSurfaceProvider(**kwargs)


__all__ = ["SurfaceProvider", "default_provider"]

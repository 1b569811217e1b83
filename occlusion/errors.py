"""Exceptions raised by the occlusion engine.

Degenerate geometry never raises; it simply contributes no area.
"""

from __future__ import annotations

from typing import Hashable


class OcclusionError(Exception):
    """Base class for every error the package raises on purpose."""

    recovery_suggestion: str = ""


class TargetNotFound(OcclusionError):
    """The requested surface is not part of the current snapshot."""

    recovery_suggestion = "The window may have been closed. Try refreshing the window list."

    def __init__(self, target_id: Hashable) -> None:
        self.target_id = target_id
        super().__init__(f"Surface with id {target_id!r} not found")


class ProviderError(OcclusionError):
    """The surface provider could not enumerate surfaces."""

    recovery_suggestion = "Try the operation again. If the problem persists, restart the application."

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Provider error: {message}")


class PermissionDenied(OcclusionError):
    recovery_suggestion = (
        "Open System Settings > Privacy & Security > Screen Recording "
        "and enable access for this application."
    )

    def __init__(self) -> None:
        super().__init__("Screen recording permission is required")


class NoMatchingSurfaces(OcclusionError):
    recovery_suggestion = "Adjust the query or make sure the target application is running."

    def __init__(self) -> None:
        super().__init__("No surfaces matched the query")

from __future__ import annotations

###############################################################################
# Imports                                                                     #
###############################################################################

# — Standard library —
import os
from dataclasses import dataclass
from typing import Optional

# — Third-party —
from dotenv import load_dotenv

###############################################################################
# Runtime configuration                                                       #
###############################################################################

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class OcclusionConfig:
    """Knobs for the polling observers.

    Attributes:
        poll_interval: seconds between two calculations
        emit_only_changes: suppress results whose coverage did not change
        change_epsilon: 0.0 compares coverage with exact float equality;
            a positive value treats smaller differences as "no change"
        default_threshold: coverage threshold used by ``when_occluded`` /
            ``when_visible`` when none is given
        debug: log observer activity to the console
    """

    poll_interval: float = 0.5
    emit_only_changes: bool = True
    change_epsilon: float = 0.0
    default_threshold: float = 0.5
    debug: bool = False

    def __post_init__(self):
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")
        if self.change_epsilon < 0:
            raise ValueError(f"change_epsilon must be >= 0, got {self.change_epsilon}")
        if not 0.0 <= self.default_threshold <= 1.0:
            raise ValueError(
                f"default_threshold must be in [0.0, 1.0], got {self.default_threshold}"
            )

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "OcclusionConfig":
        """Read ``OCCLUSION_*`` variables, loading a ``.env`` file first."""
        load_dotenv(dotenv_path)
        defaults = cls()
        return cls(
            poll_interval=_env_float("OCCLUSION_POLL_INTERVAL", defaults.poll_interval),
            emit_only_changes=_env_bool("OCCLUSION_EMIT_ONLY_CHANGES", defaults.emit_only_changes),
            change_epsilon=_env_float("OCCLUSION_CHANGE_EPSILON", defaults.change_epsilon),
            default_threshold=_env_float("OCCLUSION_THRESHOLD", defaults.default_threshold),
            debug=_env_bool("OCCLUSION_DEBUG", defaults.debug),
        )

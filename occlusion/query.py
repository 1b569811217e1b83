"""Composable surface filters and a fluent query builder.

    >>> calc.query().bundle("com.apple.Terminal").normal_layer().results()
    >>> calc.query().matching(title_contains("draft") | owner("Preview")).first()
"""

from __future__ import annotations

###############################################################################
# Imports                                                                     #
###############################################################################

# — Standard library —
import re
from typing import TYPE_CHECKING, Callable, Hashable, List, Optional, Tuple

# — Local —
from .calculator import occlusion_at
from .errors import NoMatchingSurfaces
from .schemas import OcclusionResult, SurfaceInfo

if TYPE_CHECKING:
    from .calculator import OcclusionCalculator

###############################################################################
# Matchers                                                                    #
###############################################################################

class Matcher:
    """A predicate over :class:`SurfaceInfo`, combinable with ``&``, ``|`` and ``~``."""

    __slots__ = ("predicate",)

    def __init__(self, predicate: Callable[[SurfaceInfo], bool]) -> None:
        self.predicate = predicate

    def __call__(self, surface: SurfaceInfo) -> bool:
        return bool(self.predicate(surface))

    matches = __call__

    def __and__(self, other: "Matcher") -> "Matcher":
        return Matcher(lambda s: self(s) and other(s))

    def __or__(self, other: "Matcher") -> "Matcher":
        return Matcher(lambda s: self(s) or other(s))

    def __invert__(self) -> "Matcher":
        return Matcher(lambda s: not self(s))


ALL = Matcher(lambda s: True)
NONE = Matcher(lambda s: False)
NORMAL_LAYER = Matcher(lambda s: s.is_normal_layer)
ON_SCREEN = Matcher(lambda s: s.is_on_screen)
VISIBLE = Matcher(lambda s: s.is_visible)


def process(pid: int) -> Matcher:
    return Matcher(lambda s: s.pid == pid)


def bundle(identifier: str) -> Matcher:
    return Matcher(lambda s: s.bundle_id == identifier)


def bundle_matching(pattern: str) -> Matcher:
    """Bundle id against a ``*``/``?`` wildcard pattern, e.g. ``com.apple.*``.

    Every other character matches literally, brackets included.
    """
    rx = re.compile(re.escape(pattern).replace(r"\*", ".*").replace(r"\?", "."))
    return Matcher(lambda s: s.bundle_id is not None and rx.fullmatch(s.bundle_id) is not None)


def title(text: str) -> Matcher:
    return Matcher(lambda s: s.title == text)


def title_contains(substring: str) -> Matcher:
    needle = substring.casefold()
    return Matcher(lambda s: s.title is not None and needle in s.title.casefold())


def title_matching(pattern: str) -> Matcher:
    rx = re.compile(pattern)
    return Matcher(lambda s: s.title is not None and rx.search(s.title) is not None)


def owner(name: str) -> Matcher:
    return Matcher(lambda s: s.owner_name == name)


def owner_contains(substring: str) -> Matcher:
    needle = substring.casefold()
    return Matcher(lambda s: needle in s.owner_name.casefold())


def surface_id(sid: Hashable) -> Matcher:
    return Matcher(lambda s: s.id == sid)


def min_area(area: float) -> Matcher:
    return Matcher(lambda s: s.area >= area)


def max_area(area: float) -> Matcher:
    return Matcher(lambda s: s.area <= area)


def layer(value: int) -> Matcher:
    return Matcher(lambda s: s.layer == value)

###############################################################################
# Query builder                                                               #
###############################################################################

class SurfaceQuery:
    """Immutable, chainable filter over one calculator's provider.

    Every terminal operation takes exactly one snapshot, so all the results
    it returns are consistent with each other.
    """

    def __init__(self, calculator: "OcclusionCalculator", matchers: Tuple[Matcher, ...] = ()) -> None:
        self._calculator = calculator
        self._matchers = matchers

    # ───────────────────────── chainable filters
    def matching(self, matcher: Matcher) -> "SurfaceQuery":
        return SurfaceQuery(self._calculator, self._matchers + (matcher,))

    def filter(self, predicate: Callable[[SurfaceInfo], bool]) -> "SurfaceQuery":
        return self.matching(Matcher(predicate))

    def process(self, pid: int) -> "SurfaceQuery":
        return self.matching(process(pid))

    def bundle(self, identifier: str) -> "SurfaceQuery":
        return self.matching(bundle(identifier))

    def bundle_matching(self, pattern: str) -> "SurfaceQuery":
        return self.matching(bundle_matching(pattern))

    def title(self, text: str) -> "SurfaceQuery":
        return self.matching(title(text))

    def title_contains(self, substring: str) -> "SurfaceQuery":
        return self.matching(title_contains(substring))

    def title_matching(self, pattern: str) -> "SurfaceQuery":
        return self.matching(title_matching(pattern))

    def owner(self, name: str) -> "SurfaceQuery":
        return self.matching(owner(name))

    def owner_contains(self, substring: str) -> "SurfaceQuery":
        return self.matching(owner_contains(substring))

    def surface_id(self, sid: Hashable) -> "SurfaceQuery":
        return self.matching(surface_id(sid))

    def min_area(self, area: float) -> "SurfaceQuery":
        return self.matching(min_area(area))

    def max_area(self, area: float) -> "SurfaceQuery":
        return self.matching(max_area(area))

    def layer(self, value: int) -> "SurfaceQuery":
        return self.matching(layer(value))

    def normal_layer(self) -> "SurfaceQuery":
        return self.matching(NORMAL_LAYER)

    def on_screen(self) -> "SurfaceQuery":
        return self.matching(ON_SCREEN)

    def visible(self) -> "SurfaceQuery":
        return self.matching(VISIBLE)

    # ───────────────────────── terminal operations
    def _matched(self) -> Tuple[List[SurfaceInfo], List[int]]:
        snapshot = self._calculator.all_surfaces()
        hits = [i for i, s in enumerate(snapshot) if all(m(s) for m in self._matchers)]
        return snapshot, hits

    def surfaces(self) -> List[SurfaceInfo]:
        snapshot, hits = self._matched()
        return [snapshot[i] for i in hits]

    def results(self) -> List[OcclusionResult]:
        snapshot, hits = self._matched()
        return [occlusion_at(snapshot, i) for i in hits]

    def first(self) -> Optional[OcclusionResult]:
        snapshot, hits = self._matched()
        return occlusion_at(snapshot, hits[0]) if hits else None

    def first_surface(self) -> Optional[SurfaceInfo]:
        snapshot, hits = self._matched()
        return snapshot[hits[0]] if hits else None

    def require(self) -> OcclusionResult:
        """Like :meth:`first`, but raise :class:`NoMatchingSurfaces` instead of returning ``None``."""
        result = self.first()
        if result is None:
            raise NoMatchingSurfaces()
        return result

    def count(self) -> int:
        return len(self._matched()[1])

    def exists(self) -> bool:
        return self.count() > 0

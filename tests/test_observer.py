import asyncio

import pytest

from occlusion import OcclusionCalculator, OcclusionConfig, ProviderError, TargetNotFound
from occlusion.observers import ChangeDetector, OcclusionObserver, observe

from helpers import FakeProvider, make_surface, stack

TICK = 0.005


def _snapshot(cover_width):
    """Target 1 (100x100) behind a front window *cover_width* wide."""
    surfaces = [make_surface(1, (0, 0, 100, 100))]
    if cover_width:
        surfaces.insert(0, make_surface(2, (0, 0, cover_width, 100)))
    return stack(*surfaces)


def _collect(obs):
    async def run():
        return [r async for r in obs]
    return run()


# ─── change detection ────────────────────────────────────────────────────────

def test_change_detector_uses_exact_equality():
    det = ChangeDetector()
    assert det.should_emit(0.25)
    assert not det.should_emit(0.25)
    assert det.should_emit(0.25 + 1e-15)
    assert det.should_emit(0.0)


def test_change_detector_with_epsilon():
    det = ChangeDetector(epsilon=0.01)
    assert det.should_emit(0.5)
    assert not det.should_emit(0.505)
    assert det.should_emit(0.52)


def test_change_detector_can_emit_everything():
    det = ChangeDetector(emit_only_changes=False)
    assert det.should_emit(0.5)
    assert det.should_emit(0.5)


# ─── polling loop ────────────────────────────────────────────────────────────

def test_emits_only_changes_and_ends_when_target_disappears():
    provider = FakeProvider(_snapshot(0), _snapshot(0), _snapshot(50), _snapshot(50), [])
    calc = OcclusionCalculator(provider)

    async def main():
        obs = OcclusionObserver(calc, 1, interval=TICK)
        coverages = [r.coverage async for r in obs]
        await obs.stop()
        return obs, coverages

    obs, coverages = asyncio.run(main())

    assert coverages == [0.0, 0.5]
    assert isinstance(obs.error, TargetNotFound)
    assert not obs.is_running
    assert provider.calls == 5


def test_emit_every_tick_when_configured():
    provider = FakeProvider(_snapshot(0), _snapshot(0), _snapshot(0), [])
    calc = OcclusionCalculator(provider)
    cfg = OcclusionConfig(poll_interval=TICK, emit_only_changes=False)

    async def main():
        obs = calc.observe(1, config=cfg)
        return [r async for r in obs.coverages()]

    assert asyncio.run(main()) == [0.0, 0.0, 0.0]


def test_sync_and_async_handlers_receive_results():
    seen_sync, seen_async = [], []

    async def on_result(result):
        seen_async.append(result.visible_percentage)

    async def main():
        calc_a = OcclusionCalculator(FakeProvider(_snapshot(25), []))
        calc_b = OcclusionCalculator(FakeProvider(_snapshot(25), []))
        a = observe(calc_a, 1, interval=TICK, handler=lambda r: seen_sync.append(r.coverage))
        b = observe(calc_b, 1, interval=TICK, handler=on_result)
        await asyncio.gather(_collect(a), _collect(b))

    asyncio.run(main())
    assert seen_sync == [0.25]
    assert seen_async == [0.75]


def test_provider_error_stops_observation():
    boom = ProviderError("enumeration failed")
    calc = OcclusionCalculator(FakeProvider(_snapshot(10), boom))

    async def main():
        obs = OcclusionObserver(calc, 1, interval=TICK)
        results = await _collect(obs)
        return obs, results

    obs, results = asyncio.run(main())
    assert [r.coverage for r in results] == pytest.approx([0.1])
    assert obs.error is boom


def test_stop_ends_iteration_after_current_tick():
    calc = OcclusionCalculator(FakeProvider(_snapshot(30)))

    async def main():
        obs = OcclusionObserver(calc, 1, interval=60)
        first = await obs.__anext__()
        await obs.stop()
        rest = await _collect(obs)
        return first, rest, obs

    first, rest, obs = asyncio.run(main())
    assert first.coverage == pytest.approx(0.3)
    assert rest == []
    assert obs.error is None
    assert not obs.is_running


def test_filtered_streams():
    snaps = [_snapshot(w) for w in (10, 60, 20, 90)] + [[]]

    async def main():
        occluded = OcclusionObserver(OcclusionCalculator(FakeProvider(*snaps)), 1, interval=TICK)
        visible = OcclusionObserver(OcclusionCalculator(FakeProvider(*snaps)), 1, interval=TICK)
        vis = OcclusionObserver(OcclusionCalculator(FakeProvider(*snaps)), 1, interval=TICK)
        hidden = [r.coverage async for r in occluded.when_occluded()]
        shown = [r.coverage async for r in visible.when_visible(0.85)]
        fractions = [v async for v in vis.visibilities()]
        return hidden, shown, fractions

    hidden, shown, fractions = asyncio.run(main())
    assert hidden == pytest.approx([0.6, 0.9])
    assert shown == pytest.approx([0.1])
    assert fractions == pytest.approx([0.9, 0.4, 0.8, 0.1])


def test_unexpected_errors_surface_from_stop():
    calc = OcclusionCalculator(FakeProvider(RuntimeError("bug")))

    async def main():
        obs = OcclusionObserver(calc, 1, interval=TICK)
        assert await _collect(obs) == []
        await obs.stop()

    with pytest.raises(RuntimeError, match="bug"):
        asyncio.run(main())


def test_invalid_interval_is_rejected():
    calc = OcclusionCalculator(FakeProvider())

    async def main():
        OcclusionObserver(calc, 1, interval=0)

    with pytest.raises(ValueError):
        asyncio.run(main())

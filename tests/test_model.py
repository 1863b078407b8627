"""Tests for the cached per-star model."""

from stellar_engine.core.curves import get_star_state_at_time
from stellar_engine.core.model import build_star_model, cached_star_model
from stellar_engine.core.params import StarParams
from stellar_engine.core.timeline import compute_evolution_timeline


def _params() -> StarParams:
    return StarParams(mass=4.0, metallicity=0.015, cno_fraction=0.5)


def test_model_state_matches_inline_computation() -> None:
    """state_at must equal a full inline recomputation."""
    params = _params()
    model = build_star_model(params)
    timeline = compute_evolution_timeline(params)
    for i in range(21):
        t = timeline.total_lifetime_myr * i / 20.0
        assert model.state_at(t) == get_star_state_at_time(params, timeline, t)


def test_model_exposes_initial_state() -> None:
    """The model's initial state must be the timeline's."""
    model = build_star_model(_params())
    assert model.initial is model.timeline.initial


def test_model_build_is_deterministic() -> None:
    """Two builds from equal parameters must be equal."""
    first = build_star_model(_params())
    second = build_star_model(_params())
    assert first.timeline == second.timeline
    assert dict(first.table) == dict(second.table)


def test_cached_model_is_shared_for_equal_params() -> None:
    """Equal parameters must hit the cache and return the same object."""
    first = cached_star_model(_params())
    second = cached_star_model(StarParams(mass=4.0, metallicity=0.015, cno_fraction=0.5))
    assert first is second

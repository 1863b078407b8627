"""Tests for the continuous evolution curve interpolator."""

import logging
import math
from dataclasses import replace

import pytest

from stellar_engine.core.curves import (
    build_keypoint_table,
    get_star_state_at_time,
    locate_phase,
    phase_fraction,
    white_dwarf_cooling_track,
)
from stellar_engine.core.initial_state import (
    compute_initial_star,
    temperature_from_luminosity_radius,
)
from stellar_engine.core.params import StarParams
from stellar_engine.core.phases import PhaseId, Remnant, ShapeKey
from stellar_engine.core.timeline import EvolutionPhase, compute_evolution_timeline

_SHAPE_ORDER: list[ShapeKey] = [
    ShapeKey.MS,
    ShapeKey.SUBGIANT,
    ShapeKey.RGB,
    ShapeKey.HB,
    ShapeKey.AGB,
    ShapeKey.WD,
]


def _params(mass: float, metallicity: float = 0.02, cno: float = 0.3) -> StarParams:
    return StarParams(mass=mass, metallicity=metallicity, cno_fraction=cno)


def _sample_stars() -> list[StarParams]:
    """One star per remnant branch plus a few composition variants."""
    return [
        _params(0.3),
        _params(1.0),
        _params(3.0, metallicity=0.004, cno=0.8),
        _params(12.0),
        _params(20.0, metallicity=0.04, cno=0.0),
        _params(30.0),
        _params(50.0, metallicity=0.0, cno=1.0),
    ]


def _rel_diff(a: float, b: float) -> float:
    return abs(a - b) / max(abs(a), abs(b), 1e-300)


# ---------------------------------------------------------------------------
# Continuity
# ---------------------------------------------------------------------------


def test_keypoints_chain_end_to_start() -> None:
    """From ms to agb every shape must start where the previous one ends."""
    for params in _sample_stars():
        timeline = compute_evolution_timeline(params)
        table = build_keypoint_table(params, timeline.initial, timeline.remnant)
        for prev, nxt in zip(_SHAPE_ORDER[:-1], _SHAPE_ORDER[1:-1]):
            assert table[prev].end == table[nxt].start


def test_collapse_progenitors_continue_from_agb_tip() -> None:
    """NS and BH terminal shapes must start at the AGB tip."""
    for params in _sample_stars():
        timeline = compute_evolution_timeline(params)
        if timeline.remnant is Remnant.WD:
            continue
        table = build_keypoint_table(params, timeline.initial, timeline.remnant)
        assert table[ShapeKey.WD].start == table[ShapeKey.AGB].end


def test_curve_is_continuous_across_phase_boundaries() -> None:
    """States just before and after each continuous boundary must agree.

    Every boundary is continuous except the jump from the AGB tip onto the
    white dwarf cooling track.
    """
    for params in _sample_stars():
        timeline = compute_evolution_timeline(params)
        phases = timeline.phases
        for prev, nxt in zip(phases, phases[1:]):
            if nxt.id is PhaseId.WD_FINAL:
                continue
            eps = 1e-9 * min(prev.duration_myr, nxt.duration_myr)
            before = get_star_state_at_time(params, timeline, prev.t_end_myr - eps)
            after = get_star_state_at_time(params, timeline, nxt.t_start_myr + eps)
            assert before.phase_id == prev.id
            assert after.phase_id == nxt.id
            assert _rel_diff(before.L, after.L) < 1e-6
            assert _rel_diff(before.R, after.R) < 1e-6
            assert _rel_diff(before.T_eff, after.T_eff) < 1e-6


def test_white_dwarf_phase_jumps_onto_cooling_track() -> None:
    """wdFinal must start on the hot white dwarf and keep a constant radius."""
    for mass in (0.3, 1.0, 3.0):
        params = _params(mass)
        timeline = compute_evolution_timeline(params)
        final = timeline.final_phase
        assert final.id is PhaseId.WD_FINAL
        eps = 1e-9 * final.duration_myr
        agb_tip = get_star_state_at_time(params, timeline, final.t_start_myr - eps)
        radius = 0.015 * mass**-0.2
        samples = [
            get_star_state_at_time(params, timeline, final.t_start_myr + k * eps)
            for k in (1.0, 0.5e9, 1e9 - 1.0)
        ]
        assert all(s.phase_id is PhaseId.WD_FINAL for s in samples)
        assert all(s.R == pytest.approx(radius, rel=1e-9) for s in samples)
        assert samples[0].T_eff == pytest.approx(25_000.0 * mass**0.05, rel=1e-6)
        assert samples[0].L == pytest.approx(
            timeline.initial.L_ms * min(max(0.08 * mass**0.7, 0.02), 0.3), rel=1e-6
        )
        assert agb_tip.phase_id is PhaseId.AGB
        assert agb_tip.R > 100.0 * radius


def test_curve_starts_on_initial_state() -> None:
    """At t = 0 the state must equal the zero-age main-sequence state."""
    params = _params(1.0)
    timeline = compute_evolution_timeline(params)
    state = get_star_state_at_time(params, timeline, 0.0)
    assert state.phase_id is PhaseId.MS
    assert state.phase_frac == 0.0
    assert state.L == timeline.initial.L_ms
    assert state.R == timeline.initial.R_ms
    assert state.T_eff == timeline.initial.T_eff


# ---------------------------------------------------------------------------
# Time clamping and progress
# ---------------------------------------------------------------------------


def test_out_of_range_times_are_clamped() -> None:
    """Sampling outside [0, total] must match sampling at the bounds."""
    for params in _sample_stars():
        timeline = compute_evolution_timeline(params)
        total = timeline.total_lifetime_myr
        assert get_star_state_at_time(params, timeline, -50.0) == get_star_state_at_time(
            params, timeline, 0.0
        )
        assert get_star_state_at_time(
            params, timeline, total * 3.0 + 1.0
        ) == get_star_state_at_time(params, timeline, total)


def test_progress_bounds() -> None:
    """phase_frac and frac_total must stay in [0, 1]."""
    for params in _sample_stars():
        timeline = compute_evolution_timeline(params)
        total = timeline.total_lifetime_myr
        for i in range(101):
            state = get_star_state_at_time(params, timeline, total * i / 100.0)
            assert 0.0 <= state.phase_frac <= 1.0
            assert 0.0 <= state.frac_total <= 1.0
            assert math.isfinite(state.logL)
            assert math.isfinite(state.logT)


def test_state_reports_active_phase() -> None:
    """A query inside a phase must report that phase and its progress."""
    params = _params(1.0)
    timeline = compute_evolution_timeline(params)
    rgb = timeline.phase(PhaseId.RGB)
    t = rgb.t_start_myr + 0.25 * rgb.duration_myr
    state = get_star_state_at_time(params, timeline, t)
    assert state.phase_id is PhaseId.RGB
    assert state.phase_label == "Red giant branch"
    assert state.phase_frac == pytest.approx(0.25)
    assert state.frac_total == pytest.approx(t / timeline.total_lifetime_myr)
    assert state.remnant is Remnant.WD


def test_log_coordinates_follow_state() -> None:
    """logL and logT must be the log10 of the interpolated L and T_eff."""
    params = _params(5.0)
    timeline = compute_evolution_timeline(params)
    state = get_star_state_at_time(params, timeline, 0.5 * timeline.total_lifetime_myr)
    assert state.logL == pytest.approx(math.log10(state.L))
    assert state.logT == pytest.approx(math.log10(state.T_eff))


# ---------------------------------------------------------------------------
# Remnant endpoints
# ---------------------------------------------------------------------------


def test_black_hole_progenitor_endpoint() -> None:
    """A 30 M_sun star must end as a hot, luminous Wolf-Rayet-like star."""
    params = _params(30.0)
    timeline = compute_evolution_timeline(params)
    assert timeline.remnant is Remnant.BH
    assert timeline.final_phase.id is PhaseId.BH_FINAL
    end = get_star_state_at_time(params, timeline, timeline.total_lifetime_myr)
    assert end.phase_id is PhaseId.BH_FINAL
    assert 40_000.0 <= end.T_eff <= 90_000.0
    assert 5.2 - 1e-9 <= end.logL <= 6.2 + 1e-9


def test_neutron_star_progenitor_endpoint() -> None:
    """A 12 M_sun star must end as a cool, luminous red supergiant."""
    params = _params(12.0)
    timeline = compute_evolution_timeline(params)
    end = get_star_state_at_time(params, timeline, timeline.total_lifetime_myr)
    assert end.phase_id is PhaseId.NS_FINAL
    assert 3_400.0 <= end.T_eff <= 4_300.0
    assert end.logL >= 4.5 - 1e-9
    assert end.T_eff == pytest.approx(temperature_from_luminosity_radius(end.L, end.R))


def test_white_dwarf_endpoint() -> None:
    """A solar star must end on the cold end of the white dwarf cooling track."""
    params = _params(1.0)
    timeline = compute_evolution_timeline(params)
    end = get_star_state_at_time(params, timeline, timeline.total_lifetime_myr)
    assert end.phase_id is PhaseId.WD_FINAL
    assert end.R == pytest.approx(0.015)
    assert end.T_eff == pytest.approx(4_500.0)
    assert end.L == pytest.approx(2e-4 * timeline.initial.L_ms)


def test_white_dwarf_cooling_track_has_constant_radius() -> None:
    """The cooling track must run hot to cold at fixed radius."""
    params = _params(0.8)
    initial = compute_initial_star(params)
    track = white_dwarf_cooling_track(initial, 0.8, 0.02)
    assert track.start.R == track.end.R
    assert track.start.T_eff > track.end.T_eff
    assert track.start.L > track.end.L


# ---------------------------------------------------------------------------
# Keypoint physics
# ---------------------------------------------------------------------------


def test_rgb_tip_is_bright_and_cool() -> None:
    """The RGB tip must sit 0.8 dex above the MS, capped at 5.8 dex, and be cool."""
    for params in _sample_stars():
        initial = compute_initial_star(params)
        table = build_keypoint_table(params, initial, Remnant.WD)
        tip = table[ShapeKey.RGB].end
        assert math.log10(tip.L) >= min(initial.logL + 0.8, 5.8) - 1e-9
        assert math.log10(tip.L) <= 5.8 + 1e-9
        assert tip.T_eff < 5_500.0


def test_agb_brighter_than_rgb_tip() -> None:
    """The AGB must climb above the RGB tip but stay below 6.2 dex."""
    for params in _sample_stars():
        initial = compute_initial_star(params)
        table = build_keypoint_table(params, initial, Remnant.WD)
        rgb_tip = table[ShapeKey.RGB].end
        agb_tip = table[ShapeKey.AGB].end
        assert agb_tip.L > rgb_tip.L
        assert math.log10(agb_tip.L) <= 6.2 + 1e-9
        assert agb_tip.R > rgb_tip.R


def test_horizontal_branch_contracts() -> None:
    """Core helium burning must be fainter and smaller than the RGB tip."""
    params = _params(1.0)
    initial = compute_initial_star(params)
    table = build_keypoint_table(params, initial, Remnant.WD)
    assert table[ShapeKey.HB].end.L < table[ShapeKey.RGB].end.L
    assert table[ShapeKey.HB].end.R < table[ShapeKey.RGB].end.R


def test_subgiant_temperature_follows_stefan_boltzmann() -> None:
    """At solar metallicity the subgiant end must satisfy L = R^2 T^4."""
    params = _params(1.0)
    initial = compute_initial_star(params)
    end = build_keypoint_table(params, initial, Remnant.WD)[ShapeKey.SUBGIANT].end
    assert end.T_eff == pytest.approx(temperature_from_luminosity_radius(end.L, end.R))


def test_precomputed_table_matches_inline_recomputation() -> None:
    """Passing a cached keypoint table must not change any value."""
    params = _params(15.0, metallicity=0.01, cno=0.6)
    timeline = compute_evolution_timeline(params)
    table = build_keypoint_table(params, timeline.initial, timeline.remnant)
    for i in range(41):
        t = timeline.total_lifetime_myr * i / 40.0
        assert get_star_state_at_time(params, timeline, t, table=table) == (
            get_star_state_at_time(params, timeline, t)
        )


def test_keypoint_table_is_read_only() -> None:
    """The keypoint table must not be mutable by callers."""
    params = _params(1.0)
    table = build_keypoint_table(params, compute_initial_star(params), Remnant.WD)
    with pytest.raises(TypeError):
        table[ShapeKey.MS] = table[ShapeKey.RGB]  # type: ignore[index]


# ---------------------------------------------------------------------------
# Defensive branches
# ---------------------------------------------------------------------------


def test_zero_duration_phase_has_zero_progress() -> None:
    """A zero-length phase must report phase_frac = 0, not divide by zero."""
    phase = EvolutionPhase(
        id=PhaseId.HB,
        label="Helium burning",
        t_start_myr=10.0,
        t_end_myr=10.0,
        duration_myr=0.0,
        frac_start=0.5,
        frac_end=0.5,
    )
    assert phase_fraction(phase, 10.0) == 0.0
    assert phase_fraction(phase, 12.0) == 0.0


def test_uncovered_time_pins_to_last_phase(caplog: pytest.LogCaptureFixture) -> None:
    """A time no phase contains must fall back to the last phase."""
    params = _params(1.0)
    timeline = compute_evolution_timeline(params)
    truncated = replace(timeline, phases=timeline.phases[:2])
    with caplog.at_level(logging.WARNING):
        state = get_star_state_at_time(params, truncated, timeline.total_lifetime_myr)
    assert state.phase_id is PhaseId.SUBGIANT
    assert state.phase_frac == 1.0
    assert "pinning to last phase" in caplog.text


def test_empty_timeline_returns_initial_state() -> None:
    """With no phases the state must be the initial main-sequence state."""
    params = _params(2.0)
    timeline = compute_evolution_timeline(params)
    empty = replace(timeline, phases=())
    assert locate_phase(empty, 5.0) is None
    state = get_star_state_at_time(params, empty, 5.0)
    assert state.t_myr == 0.0
    assert state.frac_total == 0.0
    assert state.phase_id is PhaseId.MS
    assert state.phase_frac == 0.0
    assert state.L == timeline.initial.L_ms
    assert state.T_eff == timeline.initial.T_eff
    assert state.logT == timeline.initial.logT

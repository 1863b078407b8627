"""Continuous evolution curves for the stellar evolution engine.

For each shape in the per-star keypoint table a start and end state
``(L, R, T_eff)`` bounds one evolutionary phase.  Within a phase the
three channels are interpolated linearly.  From the main sequence to the
AGB each shape starts where the previous one ends, so the trajectory is
continuous across those boundaries without any global curve fitting.
Neutron-star and black-hole progenitors stay continuous into the
terminal phase as well.  Stars ending as white dwarfs jump from the AGB
tip onto the hot end of the constant-radius cooling track, standing in
for the unmodelled envelope ejection.

The keypoint table depends only on the star's parameters and remnant.
:func:`get_star_state_at_time` rebuilds it on every call unless a
precomputed table is passed in; callers sampling the same star many
times should build it once with :func:`build_keypoint_table` (or use
:class:`stellar_engine.core.model.StarModel`).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import assert_never

from stellar_engine.core.constants import (
    DEFAULT_CONSTANTS,
    ModelConstants,
    clamp,
    lerp,
)
from stellar_engine.core.initial_state import (
    InitialStarState,
    compute_initial_star,
    radius_from_luminosity_temperature,
    relative_metallicity,
    temperature_from_luminosity_radius,
)
from stellar_engine.core.params import StarParams
from stellar_engine.core.phases import (
    PHASE_LABELS,
    PhaseId,
    Remnant,
    ShapeKey,
    shape_key_for_phase,
)
from stellar_engine.core.timeline import EvolutionPhase, EvolutionTimeline

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Keypoint containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatePoint:
    """Physical state at one keypoint: L in L_sun, R in R_sun, T_eff in K."""

    L: float
    R: float
    T_eff: float


@dataclass(frozen=True)
class PhaseShape:
    """Start and end keypoints of one evolutionary phase."""

    start: StatePoint
    end: StatePoint

    def at(self, frac: float) -> StatePoint:
        """Interpolate each channel linearly at phase progress *frac*."""
        return StatePoint(
            L=lerp(self.start.L, self.end.L, frac),
            R=lerp(self.start.R, self.end.R, frac),
            T_eff=lerp(self.start.T_eff, self.end.T_eff, frac),
        )


KeypointTable = Mapping[ShapeKey, PhaseShape]


@dataclass(frozen=True)
class StarEvolutionState:
    """State of a star at one queried time.

    Attributes:
        t_myr: Query time clamped into ``[0, total_lifetime_myr]``.
        frac_total: ``t_myr`` as a fraction of the total lifetime.
        phase_id: Identifier of the active phase.
        phase_label: Human-readable name of the active phase.
        phase_frac: Progress through the active phase, in [0, 1].
        remnant: Remnant fate copied from the timeline.
        L: Luminosity in L_sun.
        R: Radius in R_sun.
        T_eff: Effective temperature in K.
        logL: log10 of ``L`` (floored at 1e-6).
        logT: log10 of ``T_eff`` (floored at 10 K).
    """

    t_myr: float
    frac_total: float
    phase_id: PhaseId
    phase_label: str
    phase_frac: float
    remnant: Remnant
    L: float
    R: float
    T_eff: float
    logL: float
    logT: float


# ---------------------------------------------------------------------------
# Keypoint construction
# ---------------------------------------------------------------------------


def _with_temperature(
    luminosity: float,
    radius: float,
    z_rel: float,
    z_exponent: float,
    constants: ModelConstants,
) -> StatePoint:
    """Keypoint whose T_eff follows from L and R, with a metallicity tweak."""
    t_eff = temperature_from_luminosity_radius(luminosity, radius, constants)
    return StatePoint(L=luminosity, R=radius, T_eff=t_eff * z_rel**z_exponent)


def _with_radius(
    luminosity: float, t_eff: float, constants: ModelConstants
) -> StatePoint:
    """Keypoint whose R follows from L and T_eff."""
    radius = radius_from_luminosity_temperature(luminosity, t_eff, constants)
    return StatePoint(L=luminosity, R=radius, T_eff=t_eff)


def rgb_nominal_temperature(
    mass: float, constants: ModelConstants = DEFAULT_CONSTANTS
) -> float:
    """Cool red-giant temperature, mildly falling with mass."""
    c = constants
    return clamp(
        c.rgb_temperature_zero + c.rgb_temperature_slope * math.log10(mass),
        *c.rgb_temperature_range,
    )


def white_dwarf_cooling_track(
    initial: InitialStarState,
    mass: float,
    metallicity: float,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> PhaseShape:
    """Hot-to-cold white dwarf cooling track at constant radius.

    With the default constants it starts at ``L0 * clamp(0.08 M^0.7, 0.02,
    0.3)`` and ``25000 M^0.05`` K, ends at ``L0 * clamp(2e-4 M^0.3, 5e-5,
    5e-4)`` and ``4500 Z_rel^-0.05`` K, with ``R = 0.015 M^-0.2``
    throughout.  ``L0`` is the initial main-sequence luminosity.
    """
    c = constants
    m = clamp(mass, *c.mass_range)
    z_rel = relative_metallicity(clamp(metallicity, *c.metallicity_range), c)
    radius = c.wd_radius_coefficient * m**c.wd_radius_exponent
    hot = StatePoint(
        L=initial.L_ms
        * clamp(
            c.wd_hot_luminosity_coefficient * m**c.wd_hot_luminosity_exponent,
            *c.wd_hot_luminosity_range,
        ),
        R=radius,
        T_eff=c.wd_hot_temperature * m**c.wd_hot_temperature_exponent,
    )
    cold = StatePoint(
        L=initial.L_ms
        * clamp(
            c.wd_cold_luminosity_coefficient * m**c.wd_cold_luminosity_exponent,
            *c.wd_cold_luminosity_range,
        ),
        R=radius,
        T_eff=c.wd_cold_temperature * z_rel**c.wd_cold_z_exponent,
    )
    return PhaseShape(start=hot, end=cold)


def _core_collapse_point(
    remnant: Remnant,
    agb_end: StatePoint,
    mass: float,
    constants: ModelConstants,
) -> StatePoint:
    """Pre-collapse end point of the terminal phase for NS and BH fates."""
    c = constants
    log_l_core = max(math.log10(agb_end.L), c.core_min_log_luminosity)
    if remnant is Remnant.NS:
        # Red-supergiant-like pre-supernova state: cool and very luminous.
        t_rsg = clamp(
            c.rsg_temperature_zero + c.rsg_temperature_slope * math.log10(mass),
            *c.rsg_temperature_range,
        )
        return _with_radius(10.0**log_l_core, t_rsg, c)
    if remnant is Remnant.BH:
        # Hot Wolf-Rayet / LBV-like endpoint.
        log_l_wr = clamp(log_l_core + c.wr_dex_above_core, *c.wr_log_luminosity_range)
        t_wr = clamp(
            c.wr_temperature_scale
            * (mass / c.wr_reference_mass) ** c.wr_temperature_exponent,
            *c.wr_temperature_range,
        )
        return _with_radius(10.0**log_l_wr, t_wr, c)
    raise ValueError(f"Remnant {remnant.value!r} has no core-collapse end point.")


def _terminal_shape(
    remnant: Remnant,
    initial: InitialStarState,
    agb_end: StatePoint,
    mass: float,
    metallicity: float,
    constants: ModelConstants,
) -> PhaseShape:
    """Shape of the terminal phase for each remnant kind.

    White dwarfs jump from the AGB tip onto the cooling track; NS and BH
    progenitors continue from the AGB tip to their pre-collapse point.
    """
    if remnant is Remnant.WD:
        return white_dwarf_cooling_track(initial, mass, metallicity, constants)
    if remnant is Remnant.NS or remnant is Remnant.BH:
        return PhaseShape(
            start=agb_end,
            end=_core_collapse_point(remnant, agb_end, mass, constants),
        )
    assert_never(remnant)


def build_keypoint_table(
    params: StarParams,
    initial: InitialStarState,
    remnant: Remnant,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> KeypointTable:
    """Build the start/end keypoints of every shape for one star.

    From ms to agb each shape starts at the previous shape's end.  The
    terminal shape continues from the AGB tip for NS and BH progenitors;
    for white dwarfs it is the cooling track, which starts on the hot
    white dwarf rather than the AGB tip.  Temperatures are re-derived from
    L and R (or radii from L and T) so every keypoint satisfies the
    Stefan-Boltzmann relation up to its metallicity tweak.

    Shapes, with the default constants:
        ms: brightening ``clamp(0.3 M^-0.3, 0.05, 0.4)`` and radius growth
            ``clamp(0.15 M^-0.2, 0.03, 0.2)``.
        subgiant: ``L x (1.5 + M^0.3)``, ``R x (3 + 2 M^0.2)``.
        rgb: tip ``logL = clamp(4 + 1.3 log M, logL_ms + 0.8, 5.8)``,
            ``R = 50 R0 M^0.6``, cool nominal temperature.
        hb: luminosity drops to 0.2-0.5x and radius to 0.08-0.25x the tip.
        agb: 0.1-0.5 dex above the tip (<= 6.2 dex), 1.2-2.2x the tip
            radius, 0.9x the nominal RGB temperature.
        wd: the white dwarf cooling track, or the run from the AGB tip to
            the red-supergiant (NS) or Wolf-Rayet (BH) point.

    Args:
        params: Formation parameters; out-of-range values are clamped.
        initial: Main-sequence state of the star.
        remnant: Remnant fate from the timeline.
        constants: Model constants.

    Returns:
        Read-only mapping from :class:`ShapeKey` to :class:`PhaseShape`.
    """
    c = constants
    remnant = Remnant(remnant)
    mass, metallicity, _ = params.clamped(c)
    z_rel = relative_metallicity(metallicity, c)

    l0, r0 = initial.L_ms, initial.R_ms
    ms_start = StatePoint(L=l0, R=r0, T_eff=initial.T_eff)

    # -- Main sequence: slow brightening and swelling -------------------------
    brightening = clamp(
        c.ms_brightening_coefficient * (1.0 / mass) ** c.ms_brightening_exponent,
        *c.ms_brightening_range,
    )
    radius_growth = clamp(
        c.ms_swelling_coefficient * (1.0 / mass) ** c.ms_swelling_exponent,
        *c.ms_swelling_range,
    )
    ms_end = _with_temperature(
        l0 * (1.0 + brightening),
        r0 * (1.0 + radius_growth),
        z_rel,
        c.ms_end_z_exponent,
        c,
    )

    # -- Subgiant: envelope expands, star cools ---------------------------------
    sg_end = _with_temperature(
        ms_end.L
        * (
            c.subgiant_luminosity_base
            + c.subgiant_luminosity_coefficient * mass**c.subgiant_luminosity_exponent
        ),
        ms_end.R
        * (
            c.subgiant_radius_base
            + c.subgiant_radius_coefficient * mass**c.subgiant_radius_exponent
        ),
        z_rel,
        c.subgiant_z_exponent,
        c,
    )

    # -- Red giant branch tip ---------------------------------------------------
    log_l_rgb = clamp(
        c.rgb_log_luminosity_zero + c.rgb_log_luminosity_slope * math.log10(mass),
        initial.logL + c.rgb_min_dex_above_ms,
        c.rgb_max_log_luminosity,
    )
    t_rgb_nominal = rgb_nominal_temperature(mass, c)
    rgb_end = StatePoint(
        L=10.0**log_l_rgb,
        R=r0 * c.rgb_radius_coefficient * mass**c.rgb_radius_exponent,
        T_eff=t_rgb_nominal * z_rel**c.rgb_z_exponent,
    )

    # -- Core helium burning: fainter, much smaller, hotter ---------------------
    hb_end = _with_temperature(
        rgb_end.L
        * clamp(
            c.hb_luminosity_base
            + c.hb_luminosity_coefficient * mass**c.hb_luminosity_exponent,
            *c.hb_luminosity_range,
        ),
        rgb_end.R
        * clamp(
            c.hb_radius_base + c.hb_radius_coefficient * mass**c.hb_radius_exponent,
            *c.hb_radius_range,
        ),
        z_rel,
        c.hb_z_exponent,
        c,
    )

    # -- AGB: climbs back above the RGB tip -------------------------------------
    log_l_agb = clamp(
        log_l_rgb
        + clamp(c.agb_dex_base + c.agb_dex_slope * math.log10(mass), *c.agb_dex_range),
        log_l_rgb + c.agb_min_dex_above_rgb,
        c.agb_max_log_luminosity,
    )
    agb_end = StatePoint(
        L=10.0**log_l_agb,
        R=rgb_end.R
        * clamp(
            c.agb_radius_base + c.agb_radius_coefficient * mass**c.agb_radius_exponent,
            *c.agb_radius_range,
        ),
        T_eff=c.agb_temperature_factor * t_rgb_nominal * z_rel**c.rgb_z_exponent,
    )

    return MappingProxyType(
        {
            ShapeKey.MS: PhaseShape(start=ms_start, end=ms_end),
            ShapeKey.SUBGIANT: PhaseShape(start=ms_end, end=sg_end),
            ShapeKey.RGB: PhaseShape(start=sg_end, end=rgb_end),
            ShapeKey.HB: PhaseShape(start=rgb_end, end=hb_end),
            ShapeKey.AGB: PhaseShape(start=hb_end, end=agb_end),
            ShapeKey.WD: _terminal_shape(
                remnant, initial, agb_end, mass, metallicity, c
            ),
        }
    )


# ---------------------------------------------------------------------------
# Sampling helpers
# ---------------------------------------------------------------------------


def phase_fraction(phase: EvolutionPhase, t_myr: float) -> float:
    """Progress through *phase* at *t_myr*, clamped to [0, 1].

    Zero-duration phases report 0.
    """
    dt = phase.t_end_myr - phase.t_start_myr
    if dt <= 0.0:
        return 0.0
    return clamp((t_myr - phase.t_start_myr) / dt, 0.0, 1.0)


def locate_phase(timeline: EvolutionTimeline, t_myr: float) -> EvolutionPhase | None:
    """Return the first phase whose closed interval contains *t_myr*.

    Falls back to the last phase when no interval matches, and to
    ``None`` when the timeline has no phases at all.
    """
    for ph in timeline.phases:
        if ph.contains(t_myr):
            return ph
    if timeline.phases:
        logger.warning(
            "No phase contains t=%.6g Myr (total %.6g Myr); pinning to last phase",
            t_myr,
            timeline.total_lifetime_myr,
        )
        return timeline.phases[-1]
    return None


def _log_luminosity(luminosity: float, constants: ModelConstants) -> float:
    return math.log10(max(luminosity, constants.log_luminosity_floor))


def _log_temperature(t_eff: float, constants: ModelConstants) -> float:
    return math.log10(max(t_eff, constants.log_temperature_floor))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_star_state_at_time(
    params: StarParams,
    timeline: EvolutionTimeline,
    t_myr_raw: float,
    table: KeypointTable | None = None,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> StarEvolutionState:
    """Sample the continuous evolution curve of a star at one time.

    The query time is clamped into ``[0, total_lifetime_myr]``.  The
    active phase is located, its progress computed, and L, R and T_eff
    interpolated linearly between the phase's keypoints.

    Args:
        params: Formation parameters the timeline was built from.
        timeline: Evolution timeline of the star.
        t_myr_raw: Query time in Myr; out-of-range values are clamped.
        table: Optional precomputed keypoint table for this star.  Must be
            the table :func:`build_keypoint_table` returns for the same
            parameters and remnant.
        constants: Model constants.

    Returns:
        A fresh :class:`StarEvolutionState`.
    """
    remnant = timeline.remnant
    total = timeline.total_lifetime_myr
    t_myr = clamp(t_myr_raw, 0.0, max(total, 0.0))
    frac_total = t_myr / total if total > 0.0 else 0.0

    active = locate_phase(timeline, t_myr)
    if active is None:
        logger.warning("Timeline has no phases; returning the initial main-sequence state")
        initial = compute_initial_star(params, constants)
        return StarEvolutionState(
            t_myr=0.0,
            frac_total=0.0,
            phase_id=PhaseId.MS,
            phase_label=PHASE_LABELS[PhaseId.MS],
            phase_frac=0.0,
            remnant=remnant,
            L=initial.L_ms,
            R=initial.R_ms,
            T_eff=initial.T_eff,
            logL=initial.logL,
            logT=initial.logT,
        )

    if table is None:
        initial = compute_initial_star(params, constants)
        table = build_keypoint_table(params, initial, remnant, constants)

    phase_frac = phase_fraction(active, t_myr)
    point = table[shape_key_for_phase(active.id)].at(phase_frac)

    return StarEvolutionState(
        t_myr=t_myr,
        frac_total=frac_total,
        phase_id=active.id,
        phase_label=active.label,
        phase_frac=phase_frac,
        remnant=remnant,
        L=point.L,
        R=point.R,
        T_eff=point.T_eff,
        logL=_log_luminosity(point.L, constants),
        logT=_log_temperature(point.T_eff, constants),
    )

"""Evolution timeline builder for the stellar evolution engine.

The timeline partitions a star's total lifetime into six contiguous
phases: the main sequence, four post-main-sequence phases whose
durations are fractions of the main-sequence lifetime, and one terminal
phase chosen by the remnant fate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from stellar_engine.core.constants import (
    DEFAULT_CONSTANTS,
    ModelConstants,
    clamp,
    lerp,
)
from stellar_engine.core.initial_state import InitialStarState, compute_initial_star
from stellar_engine.core.params import StarParams
from stellar_engine.core.phases import (
    BASE_PHASES,
    PHASE_LABELS,
    PhaseId,
    Remnant,
    terminal_phase,
)

MYR_PER_GYR: float = 1_000.0

# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EvolutionPhase:
    """One named phase of a star's life on the timeline.

    Attributes:
        id: Phase identifier.
        label: Human-readable phase name.
        t_start_myr: Phase start time in Myr.
        t_end_myr: Phase end time in Myr.
        duration_myr: ``t_end_myr - t_start_myr`` (>= 0).
        frac_start: ``t_start_myr`` as a fraction of the total lifetime.
        frac_end: ``t_end_myr`` as a fraction of the total lifetime.
    """

    id: PhaseId
    label: str
    t_start_myr: float
    t_end_myr: float
    duration_myr: float
    frac_start: float
    frac_end: float

    def contains(self, t_myr: float) -> bool:
        """Return ``True`` if *t_myr* lies in the closed phase interval."""
        return self.t_start_myr <= t_myr <= self.t_end_myr


@dataclass(frozen=True)
class EvolutionTimeline:
    """Ordered, contiguous partition of a star's lifetime into phases.

    Attributes:
        total_lifetime_myr: Sum of all phase durations in Myr.
        phases: The six phases in chronological order.
        initial: Main-sequence state the timeline was derived from.
        remnant: Remnant fate, fixed at construction.
    """

    total_lifetime_myr: float
    phases: tuple[EvolutionPhase, ...]
    initial: InitialStarState
    remnant: Remnant

    @property
    def main_sequence_myr(self) -> float:
        """Duration of the main-sequence phase in Myr."""
        return self.phase(PhaseId.MS).duration_myr

    @property
    def final_phase(self) -> EvolutionPhase:
        """The remnant-specific terminal phase."""
        return self.phases[-1]

    def phase(self, phase_id: PhaseId) -> EvolutionPhase:
        """Return the phase with identifier *phase_id*.

        Raises:
            KeyError: If the timeline has no such phase.
        """
        for ph in self.phases:
            if ph.id == phase_id:
                return ph
        raise KeyError(f"Timeline has no phase '{phase_id}'")


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


def classify_remnant(
    mass: float, constants: ModelConstants = DEFAULT_CONSTANTS
) -> Remnant:
    """Return the remnant fate of a star of initial *mass*.

    ``M < 8`` gives a white dwarf, ``8 <= M < 25`` a neutron star and
    ``M >= 25`` a black hole.  Metallicity and CNO play no role.
    """
    m = clamp(mass, *constants.mass_range)
    if m < constants.ns_mass_threshold:
        return Remnant.WD
    if m < constants.bh_mass_threshold:
        return Remnant.NS
    return Remnant.BH


def main_sequence_lifetime_myr(
    initial: InitialStarState,
    params: StarParams,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> float:
    """Main-sequence lifetime in Myr from a fuel / burn-rate model.

    ::

        t_MS = 10 Gyr * (X / X_sun) * (M / L_ms) * (Z / Z_sun)^0.2

    clamped to ``[3 Myr, 200 Gyr]``.  Z is floored at ``1e-4`` for the
    metallicity factor only, so metal-free stars keep a finite lifetime.

    Args:
        initial: Main-sequence state of the star.
        params: Formation parameters.
        constants: Model constants.

    Returns:
        Main-sequence lifetime in Myr.
    """
    mass = clamp(params.mass, *constants.mass_range)
    metallicity = clamp(
        params.metallicity,
        constants.lifetime_z_floor,
        constants.metallicity_range[1],
    )
    burn_rate = max(initial.L_ms, constants.lifetime_luminosity_floor)

    fuel_factor = initial.X / constants.x_sun
    t_gyr = constants.t_ms_sun_gyr * fuel_factor * (mass / burn_rate)

    if constants.z_sun > 0.0:
        t_gyr *= (metallicity / constants.z_sun) ** constants.lifetime_z_exponent

    t_gyr = clamp(t_gyr, *constants.lifetime_range_gyr)
    return t_gyr * MYR_PER_GYR


def structural_mass_coordinate(
    mass: float, constants: ModelConstants = DEFAULT_CONSTANTS
) -> float:
    """Normalised log-mass ``u`` in [0, 1] across the structural mass range.

    Masses below the structural floor (0.5 M_sun) are treated as the floor.
    """
    low, high = constants.structural_mass_range
    m_struct = clamp(mass, low, high)
    u = (math.log10(m_struct) - math.log10(low)) / (math.log10(high) - math.log10(low))
    return clamp(u, 0.0, 1.0)


def post_main_sequence_fractions(
    mass: float, constants: ModelConstants = DEFAULT_CONSTANTS
) -> dict[PhaseId, float]:
    """Durations of the four post-main-sequence phases as fractions of t_MS.

    Two steps:
        1. Each phase fraction is interpolated between its low-mass and
           high-mass value along the normalised log-mass axis.  This fixes
           the *relative* length of the phases.
        2. The four fractions are rescaled together so that they sum to a
           target total that itself runs from 0.27 (low mass) to 0.15
           (high mass).  This fixes the *absolute* post-MS share.

    Args:
        mass: Initial mass in M_sun.
        constants: Model constants.

    Returns:
        Mapping from phase id (subgiant, rgb, hb, agb) to fraction of t_MS.
    """
    u = structural_mass_coordinate(clamp(mass, *constants.mass_range), constants)

    raw: dict[PhaseId, float] = {
        PhaseId.SUBGIANT: lerp(*constants.subgiant_fraction, u),
        PhaseId.RGB: lerp(*constants.rgb_fraction, u),
        PhaseId.HB: lerp(*constants.hb_fraction, u),
        PhaseId.AGB: lerp(*constants.agb_fraction, u),
    }

    target = lerp(*constants.post_ms_total_fraction, u)
    scale = target / sum(raw.values())
    return {phase_id: frac * scale for phase_id, frac in raw.items()}


def final_phase_duration_myr(
    t_ms_myr: float, mass: float, constants: ModelConstants = DEFAULT_CONSTANTS
) -> float:
    """Duration of the terminal phase: ``min(10 t_MS M^-0.7, 5 t_MS)``.

    The white-dwarf cooling law is used for every remnant kind; for
    neutron-star and black-hole progenitors it only sets the length of
    the final stretch of the timeline.
    """
    m = clamp(mass, *constants.mass_range)
    raw = constants.final_phase_scale * t_ms_myr * m**constants.final_phase_mass_exponent
    return min(raw, constants.final_phase_cap * t_ms_myr)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_evolution_timeline(
    params: StarParams, constants: ModelConstants = DEFAULT_CONSTANTS
) -> EvolutionTimeline:
    """Build the full evolution timeline of a star.

    Phases are laid out contiguously from ``t = 0`` in the fixed order
    ``ms, subgiant, rgb, hb, agb, <terminal>``, where the terminal phase is
    ``wdFinal``, ``nsFinal`` or ``bhFinal`` depending on the remnant.

    Args:
        params: Formation parameters; out-of-range values are clamped.
        constants: Model constants.

    Returns:
        An immutable :class:`EvolutionTimeline`.
    """
    initial = compute_initial_star(params, constants)
    remnant = classify_remnant(params.mass, constants)

    t_ms = main_sequence_lifetime_myr(initial, params, constants)
    post_ms = post_main_sequence_fractions(params.mass, constants)

    final_id = terminal_phase(remnant)
    durations: list[tuple[PhaseId, float]] = [(PhaseId.MS, t_ms)]
    durations += [(phase_id, post_ms[phase_id] * t_ms) for phase_id in BASE_PHASES[1:]]
    durations.append((final_id, final_phase_duration_myr(t_ms, params.mass, constants)))

    total = sum(dt for _, dt in durations)

    phases: list[EvolutionPhase] = []
    cursor = 0.0
    for phase_id, dt in durations:
        t_start = cursor
        t_end = cursor + dt
        cursor = t_end
        phases.append(
            EvolutionPhase(
                id=phase_id,
                label=PHASE_LABELS[phase_id],
                t_start_myr=t_start,
                t_end_myr=t_end,
                duration_myr=dt,
                frac_start=t_start / total if total > 0.0 else 0.0,
                frac_end=t_end / total if total > 0.0 else 0.0,
            )
        )

    return EvolutionTimeline(
        total_lifetime_myr=total,
        phases=tuple(phases),
        initial=initial,
        remnant=remnant,
    )

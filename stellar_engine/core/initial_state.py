"""Zero-age main-sequence state for the stellar evolution engine.

The initial state is a single physical snapshot built from simple
scaling relations: a helium enrichment law, a broken mass-luminosity
power law, a mass-radius power law and the Stefan-Boltzmann relation,
with small metallicity and CNO corrections on top.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from stellar_engine.core.constants import DEFAULT_CONSTANTS, ModelConstants, clamp
from stellar_engine.core.params import StarParams

# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InitialStarState:
    """Main-sequence anchor state of a star, in solar units.

    Attributes:
        X: Hydrogen mass fraction.
        Y: Helium mass fraction.
        Z: Metal mass fraction (clamped input metallicity).
        Z_cno: CNO part of the metals.
        Z_other: Non-CNO part of the metals.
        L_ms: Main-sequence luminosity in L_sun.
        R_ms: Main-sequence radius in R_sun.
        T_eff: Effective temperature in K.
        logL: log10 of ``L_ms``.
        logT: log10 of ``T_eff``.
    """

    X: float
    Y: float
    Z: float
    Z_cno: float
    Z_other: float
    L_ms: float
    R_ms: float
    T_eff: float
    logL: float
    logT: float


# ---------------------------------------------------------------------------
# Scaling relations
# ---------------------------------------------------------------------------


def base_luminosity(mass: float, constants: ModelConstants = DEFAULT_CONSTANTS) -> float:
    """Return the uncorrected main-sequence luminosity for *mass*.

    Three independent power laws, with no blending at the breakpoints::

        M < 0.5        L = M^2.3
        0.5 <= M < 2   L = M^4.0
        M >= 2         L = M^3.5

    The jumps at the breakpoints are part of the model.
    """
    if mass < constants.low_mass_break:
        return mass**constants.low_mass_exponent
    if mass < constants.high_mass_break:
        return mass**constants.mid_mass_exponent
    return mass**constants.high_mass_exponent


def relative_metallicity(
    metallicity: float, constants: ModelConstants = DEFAULT_CONSTANTS
) -> float:
    """Return ``Z / Z_sun`` clamped to the correction range."""
    if constants.z_sun <= 0.0:
        return 1.0
    return clamp(metallicity / constants.z_sun, *constants.z_rel_range)


def temperature_from_luminosity_radius(
    luminosity: float, radius: float, constants: ModelConstants = DEFAULT_CONSTANTS
) -> float:
    """Solve ``L = R^2 (T / T_sun)^4`` (solar units) for T."""
    return constants.t_sun * (luminosity / (radius * radius)) ** 0.25


def radius_from_luminosity_temperature(
    luminosity: float, temperature: float, constants: ModelConstants = DEFAULT_CONSTANTS
) -> float:
    """Solve ``L = R^2 (T / T_sun)^4`` (solar units) for R."""
    x = temperature / constants.t_sun
    return math.sqrt(luminosity) / (x * x)


def cno_weight(mass: float, constants: ModelConstants = DEFAULT_CONSTANTS) -> float:
    """Return the CNO mass ramp: 0 at the onset mass, 1 at the full mass."""
    if mass <= constants.cno_mass_onset:
        return 0.0
    span = constants.cno_mass_full - constants.cno_mass_onset
    return clamp((mass - constants.cno_mass_onset) / span, 0.0, 1.0)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_initial_star(
    params: StarParams, constants: ModelConstants = DEFAULT_CONSTANTS
) -> InitialStarState:
    """Compute the main-sequence state of a star from its formation parameters.

    Steps:
        1. Clamp mass, metallicity and CNO fraction to the model ranges.
        2. Split metals into CNO and non-CNO parts.
        3. Helium from ``Y = clamp(0.248 + 1.7 Z, 0.22, 0.40)``; hydrogen
           is the remainder.
        4. Luminosity from the broken power law, radius ``R = M^0.8``.
        5. Metallicity corrections: ``L *= Z_rel^-0.25`` and
           ``T = T_sun (L / R^2)^0.25 * Z_rel^-0.10``.
        6. For ``M > 1.3`` a mass-ramped CNO boost scales L and T by
           ``1 + gain * (f_cno - 0.3) * weight``.

    Args:
        params: Formation parameters; out-of-range values are clamped.
        constants: Model constants.

    Returns:
        The :class:`InitialStarState` of the star.
    """
    mass, metallicity, f_cno = params.clamped(constants)

    z_cno = metallicity * f_cno
    z_other = metallicity * (1.0 - f_cno)

    helium = clamp(
        constants.primordial_helium + constants.helium_enrichment * metallicity,
        *constants.helium_range,
    )
    hydrogen = max(0.0, 1.0 - helium - metallicity)

    radius = mass**constants.radius_exponent
    z_rel = relative_metallicity(metallicity, constants)

    luminosity = base_luminosity(mass, constants)
    luminosity *= z_rel**constants.luminosity_z_exponent

    temperature = temperature_from_luminosity_radius(luminosity, radius, constants)
    temperature *= z_rel**constants.temperature_z_exponent

    weight = cno_weight(mass, constants)
    if weight > 0.0:
        delta_cno = f_cno - constants.cno_reference
        luminosity *= 1.0 + constants.cno_luminosity_gain * delta_cno * weight
        temperature *= 1.0 + constants.cno_temperature_gain * delta_cno * weight

    return InitialStarState(
        X=hydrogen,
        Y=helium,
        Z=metallicity,
        Z_cno=z_cno,
        Z_other=z_other,
        L_ms=luminosity,
        R_ms=radius,
        T_eff=temperature,
        logL=math.log10(luminosity),
        logT=math.log10(temperature),
    )

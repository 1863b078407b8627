"""Stellar formation parameters for the stellar evolution engine."""

from __future__ import annotations

import math
from dataclasses import dataclass

from stellar_engine.core.constants import DEFAULT_CONSTANTS, ModelConstants, clamp


@dataclass(frozen=True)
class StarParams:
    """User-chosen formation parameters of a single star.

    Out-of-range values are accepted here and clamped by the engine when
    they are used, so any finite triple yields a plausible star.

    Attributes:
        mass: Initial mass in solar masses.
        metallicity: Mass fraction of elements heavier than helium (Z).
        cno_fraction: Fraction of Z made of carbon, nitrogen and oxygen.
    """

    mass: float
    metallicity: float
    cno_fraction: float

    def __post_init__(self) -> None:
        """Reject non-finite parameters."""
        for name in ("mass", "metallicity", "cno_fraction"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value}.")

    def clamped(
        self, constants: ModelConstants = DEFAULT_CONSTANTS
    ) -> tuple[float, float, float]:
        """Return ``(mass, metallicity, cno_fraction)`` clamped to the model ranges."""
        return (
            clamp(self.mass, *constants.mass_range),
            clamp(self.metallicity, *constants.metallicity_range),
            clamp(self.cno_fraction, *constants.cno_range),
        )

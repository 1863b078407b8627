"""Parameter-grid probes for the stellar evolution engine.

A probe evaluates the initial and end-of-life state of every star on a
grid of (mass, metallicity, CNO fraction) values.  It is a quick sanity
sweep over the whole parameter space: every row must be finite and the
remnant counts must follow the mass thresholds.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import product

import pandas as pd

from stellar_engine.core.constants import DEFAULT_CONSTANTS, ModelConstants
from stellar_engine.core.model import build_star_model
from stellar_engine.core.params import StarParams

DEFAULT_MASSES: tuple[float, ...] = (0.1, 0.2, 0.5, 1.0, 3.0, 8.0, 15.0, 30.0, 50.0)
DEFAULT_METALLICITIES: tuple[float, ...] = (0.0, 0.0001, 0.004, 0.02, 0.04)
DEFAULT_CNO_FRACTIONS: tuple[float, ...] = (0.0, 0.3, 0.6, 1.0)

PROBE_COLUMNS: tuple[str, ...] = (
    "mass",
    "Z",
    "cno",
    "lifetime_myr",
    "logT_init",
    "logL_init",
    "phase_end",
    "remnant_end",
    "logT_end",
    "logL_end",
)


def run_probe_grid(
    masses: Sequence[float] = DEFAULT_MASSES,
    metallicities: Sequence[float] = DEFAULT_METALLICITIES,
    cno_fractions: Sequence[float] = DEFAULT_CNO_FRACTIONS,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> pd.DataFrame:
    """Evaluate initial and final states over a parameter grid.

    Rows are ordered mass-major, then metallicity, then CNO fraction.

    Args:
        masses: Masses to probe (M_sun).
        metallicities: Metallicities to probe.
        cno_fractions: CNO fractions to probe.
        constants: Model constants.

    Returns:
        DataFrame with one row per grid point and columns
        :data:`PROBE_COLUMNS`.
    """
    rows: list[dict[str, object]] = []
    for mass, z, cno in product(masses, metallicities, cno_fractions):
        model = build_star_model(
            StarParams(mass=mass, metallicity=z, cno_fraction=cno), constants
        )
        timeline = model.timeline
        end = model.state_at(timeline.total_lifetime_myr)
        rows.append(
            {
                "mass": mass,
                "Z": z,
                "cno": cno,
                "lifetime_myr": timeline.total_lifetime_myr,
                "logT_init": model.initial.logT,
                "logL_init": model.initial.logL,
                "phase_end": end.phase_id.value,
                "remnant_end": end.remnant.value,
                "logT_end": end.logT,
                "logL_end": end.logL,
            }
        )
    return pd.DataFrame(rows, columns=list(PROBE_COLUMNS))


def summarize_remnants(frame: pd.DataFrame) -> dict[str, int]:
    """Count probe rows per remnant kind."""
    counts = frame["remnant_end"].value_counts()
    return {str(kind): int(n) for kind, n in counts.sort_index().items()}

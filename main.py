"""CLI entrypoint for the stellar evolution engine."""

from __future__ import annotations

import sys

from stellar_engine import __version__
from stellar_engine.config import load_model_constants
from stellar_engine.core.model import build_star_model
from stellar_engine.core.params import StarParams


def main() -> None:
    """Run a demonstration of the evolution engine for a sample star."""
    print(f"Stellar Evolution Engine v{__version__}")
    print("=" * 64)

    # -- Load constants --------------------------------------------------------
    constants = load_model_constants()
    print(f"\nModel constants loaded (T_sun={constants.t_sun:.0f} K, Z_sun={constants.z_sun})")

    # -- Sample star -----------------------------------------------------------
    params = StarParams(mass=1.0, metallicity=0.02, cno_fraction=0.3)
    model = build_star_model(params, constants)
    initial = model.initial

    print(
        f"\nStar  : M={params.mass} M_sun, Z={params.metallicity}, "
        f"f_CNO={params.cno_fraction}"
    )
    print(f"X={initial.X:.3f}  Y={initial.Y:.3f}  Z={initial.Z:.3f}")
    print(
        f"L_ms={initial.L_ms:.3f} L_sun  R_ms={initial.R_ms:.3f} R_sun  "
        f"T_eff={initial.T_eff:.0f} K"
    )
    print("-" * 64)

    # -- Timeline --------------------------------------------------------------
    timeline = model.timeline
    print(f"\nRemnant: {timeline.remnant.value}")
    print(f"Total lifetime: {timeline.total_lifetime_myr:,.1f} Myr\n")
    print(f"  {'Phase':<26}  {'Start (Myr)':>12}  {'Duration (Myr)':>14}")
    print(f"  {'-----':<26}  {'-----------':>12}  {'--------------':>14}")
    for phase in timeline.phases:
        print(
            f"  {phase.label:<26}  {phase.t_start_myr:12,.1f}  {phase.duration_myr:14,.1f}"
        )

    # -- Sample the curve at each phase midpoint --------------------------------
    print(f"\n  {'Phase':<26}  {'logT':>6}  {'logL':>6}  {'R (R_sun)':>10}")
    print(f"  {'-----':<26}  {'----':>6}  {'----':>6}  {'---------':>10}")
    for phase in timeline.phases:
        state = model.state_at(0.5 * (phase.t_start_myr + phase.t_end_myr))
        print(
            f"  {state.phase_label:<26}  {state.logT:6.3f}  {state.logL:6.3f}  "
            f"{state.R:10.3f}"
        )

    print("\nSimulation complete.")


if __name__ == "__main__":
    sys.exit(main() or 0)

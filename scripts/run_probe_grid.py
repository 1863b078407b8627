#!/usr/bin/env python
"""Parameter-grid probe of the stellar evolution engine.

This script sweeps the default (mass, metallicity, CNO) grid:

1. Evaluate the initial and end-of-life state of every star.
2. Save the rows to ``results/probe_grid.csv``.
3. Save the remnant counts to ``results/probe_summary.json``.
4. Print a structured summary.

Usage
-----
::

    python scripts/run_probe_grid.py

Requirements
------------
- ``numpy``, ``pandas`` and ``pyyaml`` must be installed.
"""

from __future__ import annotations

import json
import os
import sys

# Ensure the project root is on the import path.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from stellar_engine.config import load_model_constants  # noqa: E402
from stellar_engine.core.probes import (  # noqa: E402
    run_probe_grid,
    summarize_remnants,
)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

RESULTS_DIR: str = os.path.join(_project_root, "results")
GRID_PATH: str = os.path.join(RESULTS_DIR, "probe_grid.csv")
SUMMARY_PATH: str = os.path.join(RESULTS_DIR, "probe_summary.json")


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the probe grid and save the results."""
    print("=" * 60)
    print("STELLAR EVOLUTION PROBE GRID")
    print("=" * 60)
    print()

    # -- Step 1: Evaluate the grid --------------------------------------------
    print("[1/3] Evaluating parameter grid")
    constants = load_model_constants()
    frame = run_probe_grid(constants=constants)
    print(f"      {len(frame)} stars evaluated.")
    print()

    # -- Step 2: Save rows ----------------------------------------------------
    print("[2/3] Saving grid")
    os.makedirs(RESULTS_DIR, exist_ok=True)
    frame.to_csv(GRID_PATH, index=False)
    print(f"      Grid saved to {GRID_PATH}")
    print()

    # -- Step 3: Save summary -------------------------------------------------
    print("[3/3] Saving remnant summary")
    summary = summarize_remnants(frame)
    output: dict[str, object] = {
        "metadata": {
            "rows": len(frame),
            "masses": sorted(frame["mass"].unique().tolist()),
        },
        "remnant_counts": summary,
        "lifetime_myr": {
            "min": float(frame["lifetime_myr"].min()),
            "max": float(frame["lifetime_myr"].max()),
        },
    }
    with open(SUMMARY_PATH, "w", encoding="utf-8") as fh:
        json.dump(output, fh, indent=2, sort_keys=True)
    print(f"      Summary saved to {SUMMARY_PATH}")
    print()

    # -- Structured summary ---------------------------------------------------
    print("=" * 60)
    print("REMNANT SUMMARY (COUNT BY FATE)")
    print("=" * 60)
    for kind, count in summary.items():
        print(f"  {kind:<4s}  {count:4d}")
    print()
    print("=" * 60)
    print("END STATES BY MASS (solar metallicity, reference CNO)")
    print("=" * 60)
    solar = frame[(frame["Z"] == 0.02) & (frame["cno"] == 0.3)]
    for _, row in solar.iterrows():
        print(
            f"  M={row['mass']:5.1f}  {row['phase_end']:<8s}  "
            f"logT={row['logT_end']:.3f}  logL={row['logL_end']:.3f}  "
            f"t={row['lifetime_myr']:,.1f} Myr"
        )
    print()
    print("Probe complete.")


if __name__ == "__main__":
    main()

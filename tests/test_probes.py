"""Tests for the parameter-grid probes."""

import numpy as np

from stellar_engine.core.probes import PROBE_COLUMNS, run_probe_grid, summarize_remnants


def test_default_grid_size_and_columns() -> None:
    """The default grid must hold 9 x 5 x 4 rows with the probe columns."""
    frame = run_probe_grid()
    assert len(frame) == 180
    assert list(frame.columns) == list(PROBE_COLUMNS)


def test_default_grid_remnant_counts() -> None:
    """Remnant counts must follow the 8 and 25 M_sun thresholds."""
    summary = summarize_remnants(run_probe_grid())
    assert summary == {"bh": 40, "ns": 40, "wd": 100}


def test_probe_rows_are_finite() -> None:
    """Every numeric probe value must be finite."""
    frame = run_probe_grid()
    numeric = frame[["lifetime_myr", "logT_init", "logL_init", "logT_end", "logL_end"]]
    assert np.all(np.isfinite(numeric.to_numpy()))
    assert (frame["lifetime_myr"] > 0.0).all()


def test_probe_end_phase_matches_remnant() -> None:
    """Each star must end in the terminal phase of its remnant."""
    frame = run_probe_grid(masses=(1.0, 10.0, 40.0), metallicities=(0.02,), cno_fractions=(0.3,))
    assert frame["phase_end"].tolist() == ["wdFinal", "nsFinal", "bhFinal"]
    assert frame["remnant_end"].tolist() == ["wd", "ns", "bh"]

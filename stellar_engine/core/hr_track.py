"""HR-diagram track sampling for the stellar evolution engine.

The main sequence and the terminal phase dominate a star's lifetime, so
uniform sampling in time would leave the short giant phases with almost
no points.  :func:`sample_evolution` therefore samples every phase with
the same number of points.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from stellar_engine.core.constants import DEFAULT_CONSTANTS, ModelConstants
from stellar_engine.core.curves import build_keypoint_table, get_star_state_at_time
from stellar_engine.core.params import StarParams
from stellar_engine.core.timeline import EvolutionTimeline, compute_evolution_timeline


def sample_evolution(
    params: StarParams,
    timeline: EvolutionTimeline | None = None,
    samples_per_phase: int = 50,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> dict[str, NDArray[Any]]:
    """Sample a star's evolution at evenly spaced times inside every phase.

    Each phase contributes ``samples_per_phase`` times from its start to
    its end inclusive, so phase boundaries appear twice (once per side).

    Args:
        params: Formation parameters.
        timeline: Precomputed timeline for ``params``; built if omitted.
        samples_per_phase: Points per phase (>= 2).
        constants: Model constants.

    Returns:
        Dictionary of equal-length arrays:
            t_myr       -- Sample times in Myr (non-decreasing).
            frac_total  -- Fraction of the total lifetime.
            phase_index -- Index of the phase in ``timeline.phases``.
            L, R, T_eff -- Physical state.
            logL, logT  -- HR-diagram coordinates.

    Raises:
        ValueError: If samples_per_phase < 2.
    """
    if samples_per_phase < 2:
        raise ValueError("samples_per_phase must be >= 2.")

    if timeline is None:
        timeline = compute_evolution_timeline(params, constants)
    table = build_keypoint_table(params, timeline.initial, timeline.remnant, constants)

    n_total = samples_per_phase * len(timeline.phases)
    t_myr = np.empty(n_total)
    phase_index = np.empty(n_total, dtype=np.int64)
    columns: dict[str, NDArray[np.float64]] = {
        name: np.empty(n_total) for name in ("frac_total", "L", "R", "T_eff", "logL", "logT")
    }

    row = 0
    for idx, phase in enumerate(timeline.phases):
        times = np.linspace(phase.t_start_myr, phase.t_end_myr, samples_per_phase)
        for t in times:
            state = get_star_state_at_time(
                params, timeline, float(t), table=table, constants=constants
            )
            t_myr[row] = state.t_myr
            phase_index[row] = idx
            columns["frac_total"][row] = state.frac_total
            columns["L"][row] = state.L
            columns["R"][row] = state.R
            columns["T_eff"][row] = state.T_eff
            columns["logL"][row] = state.logL
            columns["logT"][row] = state.logT
            row += 1

    return {"t_myr": t_myr, "phase_index": phase_index, **columns}


def thin_hr_track(
    log_t: NDArray[np.float64],
    log_l: NDArray[np.float64],
    min_step_dex: float = 0.01,
) -> NDArray[np.bool_]:
    """Mask of track points worth drawing on an HR diagram.

    The first point is always kept.  A later point is kept when it moved
    at least ``min_step_dex`` in logT or in logL from the last kept point.

    Args:
        log_t: log10 effective temperatures.
        log_l: log10 luminosities, same length as ``log_t``.
        min_step_dex: Minimum move in either coordinate.

    Returns:
        Boolean array, ``True`` for kept points.

    Raises:
        ValueError: If the inputs differ in length or min_step_dex < 0.
    """
    log_t = np.asarray(log_t, dtype=float)
    log_l = np.asarray(log_l, dtype=float)
    if log_t.shape != log_l.shape:
        raise ValueError("log_t and log_l must have the same shape.")
    if min_step_dex < 0.0:
        raise ValueError("min_step_dex must be >= 0.")

    keep = np.zeros(log_t.shape, dtype=bool)
    if log_t.size == 0:
        return keep

    keep[0] = True
    last_t, last_l = log_t[0], log_l[0]
    for i in range(1, log_t.size):
        if abs(log_t[i] - last_t) >= min_step_dex or abs(log_l[i] - last_l) >= min_step_dex:
            keep[i] = True
            last_t, last_l = log_t[i], log_l[i]
    return keep


def evolution_frame(
    params: StarParams,
    samples_per_phase: int = 50,
    constants: ModelConstants = DEFAULT_CONSTANTS,
) -> pd.DataFrame:
    """Return :func:`sample_evolution` output as a DataFrame.

    Adds ``phase_id`` and ``remnant`` columns resolved from the timeline.
    """
    timeline = compute_evolution_timeline(params, constants)
    trace = sample_evolution(
        params, timeline, samples_per_phase=samples_per_phase, constants=constants
    )
    df = pd.DataFrame(trace)
    phase_ids = [ph.id.value for ph in timeline.phases]
    df["phase_id"] = [phase_ids[i] for i in trace["phase_index"]]
    df["remnant"] = timeline.remnant.value
    return df

"""Core computation modules for the stellar evolution engine."""

from stellar_engine.core.constants import DEFAULT_CONSTANTS, ModelConstants
from stellar_engine.core.curves import (
    PhaseShape,
    StarEvolutionState,
    StatePoint,
    build_keypoint_table,
    get_star_state_at_time,
    locate_phase,
    phase_fraction,
    white_dwarf_cooling_track,
)
from stellar_engine.core.hr_track import evolution_frame, sample_evolution, thin_hr_track
from stellar_engine.core.initial_state import InitialStarState, compute_initial_star
from stellar_engine.core.model import StarModel, build_star_model, cached_star_model
from stellar_engine.core.params import StarParams
from stellar_engine.core.phases import (
    PhaseId,
    Remnant,
    ShapeKey,
    shape_key_for_phase,
    terminal_phase,
)
from stellar_engine.core.probes import run_probe_grid, summarize_remnants
from stellar_engine.core.timeline import (
    EvolutionPhase,
    EvolutionTimeline,
    classify_remnant,
    compute_evolution_timeline,
    final_phase_duration_myr,
    main_sequence_lifetime_myr,
    post_main_sequence_fractions,
)

__all__ = [
    "DEFAULT_CONSTANTS",
    "EvolutionPhase",
    "EvolutionTimeline",
    "InitialStarState",
    "ModelConstants",
    "PhaseId",
    "PhaseShape",
    "Remnant",
    "ShapeKey",
    "StarEvolutionState",
    "StarModel",
    "StarParams",
    "StatePoint",
    "build_keypoint_table",
    "build_star_model",
    "cached_star_model",
    "classify_remnant",
    "compute_evolution_timeline",
    "compute_initial_star",
    "evolution_frame",
    "final_phase_duration_myr",
    "get_star_state_at_time",
    "locate_phase",
    "main_sequence_lifetime_myr",
    "phase_fraction",
    "post_main_sequence_fractions",
    "run_probe_grid",
    "sample_evolution",
    "shape_key_for_phase",
    "summarize_remnants",
    "terminal_phase",
    "thin_hr_track",
    "white_dwarf_cooling_track",
]

"""Per-star bundle of derived evolution data.

Everything the interpolator needs for one star depends only on its
formation parameters, so it can be computed once and reused for every
time sample (for example once per animation frame).  Caching is a
performance convenience: :meth:`StarModel.state_at` returns exactly what
:func:`get_star_state_at_time` computes inline.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from stellar_engine.core.constants import DEFAULT_CONSTANTS, ModelConstants
from stellar_engine.core.curves import (
    KeypointTable,
    StarEvolutionState,
    build_keypoint_table,
    get_star_state_at_time,
)
from stellar_engine.core.initial_state import InitialStarState
from stellar_engine.core.params import StarParams
from stellar_engine.core.timeline import EvolutionTimeline, compute_evolution_timeline


@dataclass(frozen=True)
class StarModel:
    """Immutable derived data for one star.

    Attributes:
        params: Formation parameters.
        timeline: Evolution timeline built from ``params``.
        table: Keypoint table for ``params`` and the timeline's remnant.
        constants: Model constants used for every derivation.
    """

    params: StarParams
    timeline: EvolutionTimeline
    table: KeypointTable
    constants: ModelConstants = DEFAULT_CONSTANTS

    @property
    def initial(self) -> InitialStarState:
        """Main-sequence state of the star."""
        return self.timeline.initial

    def state_at(self, t_myr: float) -> StarEvolutionState:
        """Sample the star at *t_myr* using the precomputed keypoints."""
        return get_star_state_at_time(
            self.params, self.timeline, t_myr, table=self.table, constants=self.constants
        )


def build_star_model(
    params: StarParams, constants: ModelConstants = DEFAULT_CONSTANTS
) -> StarModel:
    """Derive the timeline and keypoint table of a star."""
    timeline = compute_evolution_timeline(params, constants)
    table = build_keypoint_table(params, timeline.initial, timeline.remnant, constants)
    return StarModel(params=params, timeline=timeline, table=table, constants=constants)


@lru_cache(maxsize=128)
def cached_star_model(params: StarParams) -> StarModel:
    """Memoised :func:`build_star_model` keyed on parameter equality."""
    return build_star_model(params)

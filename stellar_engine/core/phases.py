"""Closed sets of evolutionary phases, remnant fates and curve shapes.

The mapping tables below cover every enum member; adding a member
without extending them fails loudly at lookup time and in the tests.
"""

from __future__ import annotations

from enum import Enum


class Remnant(str, Enum):
    """End state of a star, decided by its initial mass alone."""

    WD = "wd"
    NS = "ns"
    BH = "bh"


class PhaseId(str, Enum):
    """Identifier of an evolutionary phase on the timeline."""

    MS = "ms"
    SUBGIANT = "subgiant"
    RGB = "rgb"
    HB = "hb"
    AGB = "agb"
    WD_FINAL = "wdFinal"
    NS_FINAL = "nsFinal"
    BH_FINAL = "bhFinal"


class ShapeKey(str, Enum):
    """Key of a start/end keypoint pair in the per-star curve table.

    All three terminal phases share the ``WD`` shape; its end point
    depends on the remnant.
    """

    MS = "ms"
    SUBGIANT = "subgiant"
    RGB = "rgb"
    HB = "hb"
    AGB = "agb"
    WD = "wd"


# Phases every star passes through before its terminal phase, in order.
BASE_PHASES: tuple[PhaseId, ...] = (
    PhaseId.MS,
    PhaseId.SUBGIANT,
    PhaseId.RGB,
    PhaseId.HB,
    PhaseId.AGB,
)

PHASE_LABELS: dict[PhaseId, str] = {
    PhaseId.MS: "Main sequence",
    PhaseId.SUBGIANT: "Subgiant",
    PhaseId.RGB: "Red giant branch",
    PhaseId.HB: "Helium burning",
    PhaseId.AGB: "Asymptotic giant branch",
    PhaseId.WD_FINAL: "White dwarf cooling",
    PhaseId.NS_FINAL: "Neutron star cooling",
    PhaseId.BH_FINAL: "Black hole remnant",
}

TERMINAL_PHASES: dict[Remnant, PhaseId] = {
    Remnant.WD: PhaseId.WD_FINAL,
    Remnant.NS: PhaseId.NS_FINAL,
    Remnant.BH: PhaseId.BH_FINAL,
}

_SHAPE_KEYS: dict[PhaseId, ShapeKey] = {
    PhaseId.MS: ShapeKey.MS,
    PhaseId.SUBGIANT: ShapeKey.SUBGIANT,
    PhaseId.RGB: ShapeKey.RGB,
    PhaseId.HB: ShapeKey.HB,
    PhaseId.AGB: ShapeKey.AGB,
    PhaseId.WD_FINAL: ShapeKey.WD,
    PhaseId.NS_FINAL: ShapeKey.WD,
    PhaseId.BH_FINAL: ShapeKey.WD,
}


def terminal_phase(remnant: Remnant) -> PhaseId:
    """Return the terminal phase id for *remnant*."""
    return TERMINAL_PHASES[Remnant(remnant)]


def shape_key_for_phase(phase_id: PhaseId) -> ShapeKey:
    """Map a timeline phase onto its keypoint-table shape.

    The three terminal phases collapse onto :attr:`ShapeKey.WD`.
    """
    return _SHAPE_KEYS[PhaseId(phase_id)]

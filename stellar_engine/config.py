"""Configuration loader for the stellar evolution engine."""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path

import yaml

from stellar_engine.core.constants import ModelConstants

logger = logging.getLogger(__name__)

DATA_DIR: Path = Path(__file__).resolve().parent / "data"
MODEL_PATH: Path = DATA_DIR / "stellar_model.yaml"

# Fields stored as [low, high] pairs.  Pairs whose order is meaningful
# but not necessarily ascending (low-mass / high-mass end points) are
# listed separately; every other tuple field is a clamp range.
_PAIR_FIELDS: tuple[str, ...] = (
    "subgiant_fraction",
    "rgb_fraction",
    "hb_fraction",
    "agb_fraction",
    "post_ms_total_fraction",
)
_RANGE_FIELDS: tuple[str, ...] = tuple(
    f.name
    for f in fields(ModelConstants)
    if isinstance(f.default, tuple) and f.name not in _PAIR_FIELDS
)
_POSITIVE_FIELDS: tuple[str, ...] = (
    "t_sun",
    "z_sun",
    "x_sun",
    "t_ms_sun_gyr",
    "wr_reference_mass",
    "log_luminosity_floor",
    "log_temperature_floor",
)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _flatten(data: dict) -> dict[str, object]:
    """Merge the YAML sections into one flat field mapping."""
    flat: dict[str, object] = {}
    for section, entries in data.items():
        if not isinstance(entries, dict):
            raise ValueError(f"Section '{section}' must be a mapping of fields.")
        for name, value in entries.items():
            if name in flat:
                raise ValueError(f"Field '{name}' is defined more than once.")
            flat[name] = value
    return flat


def load_model_constants(path: Path | None = None) -> ModelConstants:
    """Load the model constants from a YAML file.

    Every field of :class:`ModelConstants` must be present, in any
    section.  Scalars must be numeric; ranges and fraction pairs must be
    two-element numeric lists, with ``low <= high`` for ranges.

    Args:
        path: Optional override for the constants file path.

    Returns:
        A validated :class:`ModelConstants` instance.

    Raises:
        FileNotFoundError: If the constants file does not exist.
        ValueError: If a field is missing, unknown, non-numeric or an
            inverted range.
    """
    model_path = path or MODEL_PATH
    if not model_path.exists():
        raise FileNotFoundError(f"Model constants file not found: {model_path}")

    with open(model_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict):
        raise ValueError(f"Model constants file {model_path} must contain a mapping.")

    flat = _flatten(data)
    known = {f.name for f in fields(ModelConstants)}

    unknown = sorted(set(flat) - known)
    if unknown:
        raise ValueError(f"Unknown model constant(s): {', '.join(unknown)}")

    values: dict[str, object] = {}
    for name in sorted(known):
        # --- Validate presence ---
        if name not in flat:
            raise ValueError(f"Model constants are missing required field '{name}'")
        value = flat[name]

        # --- Validate pairs ---
        if name in _RANGE_FIELDS or name in _PAIR_FIELDS:
            if (
                not isinstance(value, list)
                or len(value) != 2
                or not all(_is_number(v) for v in value)
            ):
                raise ValueError(f"'{name}' must be a list of two numbers, got {value!r}")
            low, high = float(value[0]), float(value[1])
            if name in _RANGE_FIELDS and low > high:
                raise ValueError(f"'{name}' range is inverted: [{low}, {high}]")
            values[name] = (low, high)
            continue

        # --- Validate scalars ---
        if not _is_number(value):
            raise ValueError(
                f"'{name}' must be numeric, got {type(value).__name__}"
            )
        if name in _POSITIVE_FIELDS and float(value) <= 0.0:
            raise ValueError(f"'{name}' must be > 0, got {value}")
        values[name] = float(value)

    logger.debug("Loaded %d model constants from %s", len(values), model_path)
    return ModelConstants(**values)

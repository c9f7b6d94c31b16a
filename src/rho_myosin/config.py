# config.py
"""
Run configuration from a TOML file.

    [integrator]
    t_end = 300.0
    tolerance = 1e-6

    [initial_conditions]
    Ca = 1.0
    CaM = 10.0

    [model]
    literal_rhogef_denominator = true
    replace_initial_conditions = false

Initial conditions are merged onto the reference set unless
``replace_initial_conditions`` is true, in which case unspecified species
start at zero.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

from .parameters import DEFAULT_INITIAL_CONDITIONS, IntegratorSettings
from .state_vector import species_index

_SECTIONS = {"integrator", "initial_conditions", "model"}
_MODEL_KEYS = {"literal_rhogef_denominator", "replace_initial_conditions"}


@dataclass
class RunConfig:
    settings: IntegratorSettings = field(default_factory=IntegratorSettings)
    initial_conditions: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_INITIAL_CONDITIONS)
    )
    literal_rhogef_denominator: bool = True


def parse_config(raw: Dict[str, Any]) -> RunConfig:
    """Build a RunConfig from an already parsed TOML document."""
    unknown = set(raw) - _SECTIONS
    if unknown:
        raise ValueError(f"Unknown config sections: {sorted(unknown)}")

    integrator = dict(raw.get("integrator", {}))
    known = {f.name for f in fields(IntegratorSettings)}
    bad = set(integrator) - known
    if bad:
        raise ValueError(f"Unknown [integrator] keys: {sorted(bad)}")
    settings = IntegratorSettings(**integrator)

    model = dict(raw.get("model", {}))
    bad = set(model) - _MODEL_KEYS
    if bad:
        raise ValueError(f"Unknown [model] keys: {sorted(bad)}")

    ics = {} if model.get("replace_initial_conditions", False) else dict(DEFAULT_INITIAL_CONDITIONS)
    for name, value in raw.get("initial_conditions", {}).items():
        species_index(name)
        ics[name] = float(value)

    return RunConfig(
        settings=settings,
        initial_conditions=ics,
        literal_rhogef_denominator=bool(model.get("literal_rhogef_denominator", True)),
    )


def load_config(path) -> RunConfig:
    with open(Path(path), "rb") as f:
        raw = tomllib.load(f)
    return parse_config(raw)

# state_vector.py
# single source of truth for the order of species in the state vector x

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Mapping, Optional, Tuple

import numpy as np

from .parameters import DEFAULT_INITIAL_CONDITIONS


class Species(IntEnum):
    # ---- CaMKII module: calcium, calmodulin, CaMKII, CaN, I1, PP1 ----
    Ca = 0
    CaM = 1
    CaCaM = 2
    Ng = 3
    NgCaM = 4
    CaMKII = 5
    Factin = 6
    CaMKIIFactin = 7
    Gactin = 8
    CaMKIIGactin = 9
    CaMKIIp = 10
    CaN = 11
    CaNact = 12
    I1 = 13
    I1act = 14
    PP1 = 15
    PP1act = 16

    # ---- Arp2/3 module: Cdc42 GTPase cycle and actin nucleation ----
    Cdc42GEF = 17
    Cdc42GEFact = 18
    Cdc42GDP = 19
    Cdc42GTP = 20
    GAP = 21
    GAPact = 22
    WASP = 23
    WASPact = 24
    Arp23 = 25
    Arp23act = 26

    # ---- Cofilin module ----
    SSH1 = 27
    SSH1act = 28
    LIMK = 29
    LIMKact = 30
    Cofilin = 31
    Cofilinact = 32

    # ---- Actin / membrane module ----
    Fnewactin = 33
    B = 34
    Bp = 35

    # ---- Rho / myosin module ----
    RhoGEF = 36
    RhoGEFact = 37
    RhoGDP = 38
    RhoGTP = 39
    ROCK = 40
    ROCKact = 41
    MyoPpase = 42
    MyoPpaseact = 43
    MLC = 44
    MLCact = 45


N_SPECIES = max(Species) + 1  # assumes enum values are 0..N-1

SPECIES_NAMES: Tuple[str, ...] = tuple(s.name for s in sorted(Species))

# Species introduced by each module, in layer order. Factin, Gactin and
# Arp23act are introduced upstream but also driven by the actin layer.
MODULE_SPECIES: Dict[str, Tuple[Species, ...]] = {
    "camkii": tuple(Species(i) for i in range(Species.Ca, Species.PP1act + 1)),
    "arp23": tuple(Species(i) for i in range(Species.Cdc42GEF, Species.Arp23act + 1)),
    "cofilin": tuple(Species(i) for i in range(Species.SSH1, Species.Cofilinact + 1)),
    "actin": (Species.Fnewactin, Species.Factin, Species.Gactin, Species.B, Species.Bp),
    "rho_myosin": tuple(Species(i) for i in range(Species.RhoGEF, Species.MLCact + 1)),
}


def species_index(name: str) -> int:
    """Index of a species in the state vector."""
    try:
        return int(Species[name])
    except KeyError:
        raise KeyError(f"Unknown species '{name}'") from None


def get_initial_state(initial_conditions: Optional[Mapping[str, float]] = None) -> np.ndarray:
    """
    Build the initial state vector.

    Args:
        initial_conditions: species name -> concentration. Species that are not
            listed start at zero. None selects the reference configuration.

    Returns:
        x0: State vector [N_SPECIES]
    """
    if initial_conditions is None:
        initial_conditions = DEFAULT_INITIAL_CONDITIONS

    x0 = np.zeros(N_SPECIES, dtype=float)
    for name, value in initial_conditions.items():
        value = float(value)
        if not np.isfinite(value):
            raise ValueError(f"Initial condition for '{name}' must be finite, got {value}")
        x0[species_index(name)] = value
    return x0

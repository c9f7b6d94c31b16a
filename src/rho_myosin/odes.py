# odes.py
"""
Global ODE system for the spine Rho/myosin model.

dx/dt = f(t, x, params)

The network is assembled from the submodels in a fixed order:
- CaMKII (calcium, calmodulin, kinase and phosphatase cascade)
- Arp2/3 (Cdc42 GTPase cycle, WASP, Arp2/3 activation)
- Cofilin (SSH1 / LIMK regulation of cofilin)
- Actin (severing, nucleation, barbed ends and membrane)
- Rho / myosin (RhoGEF, ROCK, myosin phosphatase, MLC)
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .actin_submodel import build_actin_submodel
from .arp23_submodel import build_arp23_submodel
from .camkii_submodel import build_camkii_submodel
from .cofilin_submodel import build_cofilin_submodel
from .network import ReactionNetwork
from .parameters import ModelParameters, get_default_parameters
from .rho_myosin_submodel import build_rho_myosin_submodel
from .state_vector import N_SPECIES


def build_network(params: Optional[ModelParameters] = None) -> ReactionNetwork:
    """
    Assemble the layered reaction network.

    Args:
        params: ModelParameters instance (defaults to the reference values)

    Returns:
        ReactionNetwork whose ``evaluate(t, x)`` is the full right-hand side.
    """
    if params is None:
        params = get_default_parameters()

    layers = [
        build_camkii_submodel(params),
        build_arp23_submodel(params),
        build_cofilin_submodel(params),
        build_actin_submodel(params),
        build_rho_myosin_submodel(params),
    ]
    return ReactionNetwork(layers, n_species=N_SPECIES)


def rhs(t: float, x: np.ndarray, params: ModelParameters) -> np.ndarray:
    """
    One-off evaluation of dx/dt = f(t, x, params).

    Builds the network on every call; integrators should hold on to
    ``build_network(params)`` instead.
    """
    return build_network(params).evaluate(t, x)

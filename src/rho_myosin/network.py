# network.py
"""
Layered reaction network: the right-hand side dx/dt = f(t, x).

Each SubModel is one biological module. It computes its fluxes from the
current state only and returns its contribution to dx/dt as a sparse set
of (species index, contribution) pairs. The network zero-initializes the
derivative vector and sums the contributions of all layers per index, so
species shared between modules (e.g. F-actin, consumed in the CaMKII
module and produced by turnover in the actin module) always receive the
sum of every module's terms.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .rate_laws import Flux
from .state_vector import N_SPECIES


@dataclass(frozen=True)
class SubModel:
    name: str
    fluxes: Tuple[Flux, ...]


class _CompiledLayer:
    """SubModel with its stoichiometry restricted to the species it touches."""

    def __init__(self, submodel: SubModel, n_species: int):
        self.name = submodel.name
        self.fluxes = submodel.fluxes

        S = np.zeros((len(self.fluxes), n_species), dtype=float)
        for j, fx in enumerate(self.fluxes):
            for ix, nu in fx.stoichiometry:
                if not 0 <= ix < n_species:
                    raise ValueError(
                        f"Flux '{fx.name}' in layer '{self.name}' refers to species index {ix} "
                        f"outside a state of length {n_species}"
                    )
                S[j, ix] += nu
        self.stoichiometry = S
        self.indices = np.flatnonzero(np.any(S != 0.0, axis=0))
        self._S_touched = S[:, self.indices]

    def rates(self, x: np.ndarray) -> np.ndarray:
        return np.array([fx.rate(x) for fx in self.fluxes], dtype=float)

    def contributions(self, x: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        return self.indices, self.rates(x) @ self._S_touched


class ReactionNetwork:
    """
    Ordered chain of sub-model layers composing one derivative vector.

    Args:
        layers: SubModels in evaluation order.
        n_species: Length of the state vector.
    """

    def __init__(self, layers: Sequence[SubModel], n_species: int = N_SPECIES):
        self.n_species = int(n_species)
        self._layers = [_CompiledLayer(layer, self.n_species) for layer in layers]

        seen = set()
        for layer in self._layers:
            for fx in layer.fluxes:
                key = (layer.name, fx.name)
                if key in seen:
                    raise ValueError(f"Duplicate flux '{fx.name}' in layer '{layer.name}'")
                seen.add(key)

    @property
    def layer_names(self) -> List[str]:
        return [layer.name for layer in self._layers]

    def _check_state(self, x) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        if x.shape != (self.n_species,):
            raise ValueError(f"State vector must have shape ({self.n_species},), got {x.shape}")
        return x

    def evaluate(self, t: float, x: np.ndarray) -> np.ndarray:
        """
        Full right-hand side dx/dt = f(t, x).

        Args:
            t: Time. The network is autonomous; kept for the solver interface.
            x: State vector [n_species]

        Returns:
            dxdt: Derivative vector [n_species], freshly allocated.
        """
        x = self._check_state(x)
        dxdt = np.zeros(self.n_species, dtype=float)
        for layer in self._layers:
            indices, values = layer.contributions(x)
            dxdt[indices] += values
        return dxdt

    __call__ = evaluate

    def layer_contributions(self, t: float, x: np.ndarray) -> List[Tuple[str, np.ndarray, np.ndarray]]:
        """Per layer: (name, species indices, contributions to dx/dt)."""
        x = self._check_state(x)
        out = []
        for layer in self._layers:
            indices, values = layer.contributions(x)
            out.append((layer.name, indices.copy(), values))
        return out

    def flux_rates(self, x: np.ndarray) -> Dict[str, float]:
        """Instantaneous rate of every flux, keyed '<layer>.<flux>'."""
        x = self._check_state(x)
        return {
            f"{layer.name}.{fx.name}": float(fx.rate(x))
            for layer in self._layers
            for fx in layer.fluxes
        }

    def stoichiometry_matrix(self) -> np.ndarray:
        """(n_fluxes, n_species) matrix, fluxes in layer order."""
        if not self._layers:
            return np.zeros((0, self.n_species), dtype=float)
        return np.vstack([layer.stoichiometry for layer in self._layers])

    def conserved_pairs(self) -> List[Tuple[int, int]]:
        """
        Species pairs (A, A*) that every flux changes by opposite amounts,
        so that A + A* is invariant along any trajectory.
        """
        S = self.stoichiometry_matrix()
        active = [i for i in range(self.n_species) if np.any(S[:, i] != 0.0)]
        pairs = []
        for a_pos, a in enumerate(active):
            for b in active[a_pos + 1:]:
                if np.array_equal(S[:, a], -S[:, b]):
                    pairs.append((a, b))
        return pairs

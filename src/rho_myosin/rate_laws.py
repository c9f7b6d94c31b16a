# rate_laws.py
"""
Rate-law building blocks for the reaction network.
--------------------------------------------------

A reaction flux is written as data: a set of forward terms, a set of
reverse terms and a stoichiometry over named species. The net flux is

    v = sum(forward terms) - sum(reverse terms)

and it contributes ``nu_s * v`` to dx_s/dt for every species s with
stoichiometric coefficient nu_s.

Term types:

- MassAction:    k * prod_s x_s^order_s
- Saturating:    vmax * prod_c x_c * S^n / (km^n + S^n),   S = x[switch]
                 (Michaelis-Menten for n = 1, Hill switch for n > 1)
- MembraneDrag:  x[carrier] * vmax * D / (D + km * exp(barrier / D)),   D = x[driver]
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Mapping, Tuple, Union

import numpy as np

from .state_vector import Species, species_index

# exp() overflows a double above this argument
_EXP_LIMIT = 709.0


@dataclass(frozen=True)
class MassAction:
    k: float
    orders: Tuple[Tuple[int, float], ...]

    def rate(self, x: np.ndarray) -> float:
        r = self.k
        for ix, order in self.orders:
            r *= x[ix] if order == 1.0 else x[ix] ** order
        return r

    def scaled(self, factor: float) -> "MassAction":
        return replace(self, k=self.k * factor)


@dataclass(frozen=True)
class Saturating:
    vmax: float
    km: float
    switch: int
    n: float = 1.0
    carriers: Tuple[int, ...] = ()

    def rate(self, x: np.ndarray) -> float:
        S = x[self.switch]
        if self.n == 1.0:
            frac = S / (self.km + S)
        else:
            Sn = S ** self.n
            frac = Sn / (self.km ** self.n + Sn)
        r = self.vmax * frac
        for ix in self.carriers:
            r *= x[ix]
        return r

    def scaled(self, factor: float) -> "Saturating":
        return replace(self, vmax=self.vmax * factor)


@dataclass(frozen=True)
class MembraneDrag:
    """Carrier species times the load-dependent membrane velocity."""

    vmax: float
    km: float
    barrier: float
    driver: int
    carrier: int

    def velocity(self, x: np.ndarray) -> float:
        D = float(x[self.driver])
        if D == 0.0:
            return 0.0
        arg = self.barrier / D
        if arg > _EXP_LIMIT:
            return 0.0
        return self.vmax * D / (D + self.km * math.exp(arg))

    def rate(self, x: np.ndarray) -> float:
        return x[self.carrier] * self.velocity(x)

    def scaled(self, factor: float) -> "MembraneDrag":
        return replace(self, vmax=self.vmax * factor)


Term = Union[MassAction, Saturating, MembraneDrag]


@dataclass(frozen=True)
class Flux:
    name: str
    forward: Tuple[Term, ...]
    reverse: Tuple[Term, ...]
    stoichiometry: Tuple[Tuple[int, float], ...]

    def rate(self, x: np.ndarray) -> float:
        v = 0.0
        for term in self.forward:
            v += term.rate(x)
        for term in self.reverse:
            v -= term.rate(x)
        return v

    def species(self) -> Tuple[Species, ...]:
        return tuple(Species(ix) for ix, _ in self.stoichiometry)


def mass_action(k: float, **orders: float) -> MassAction:
    """mass_action(7.75, Ca=3) -> 7.75 * [Ca]^3"""
    return MassAction(
        k=float(k),
        orders=tuple((species_index(name), float(order)) for name, order in orders.items()),
    )


def saturating(vmax: float, km: float, on: str, n: float = 1.0, by: Tuple[str, ...] = ()) -> Saturating:
    """saturating(0.034, 4.97, on="I1", by=("CaNact",)) -> 0.034 [CaNact][I1] / (4.97 + [I1])"""
    return Saturating(
        vmax=float(vmax),
        km=float(km),
        switch=species_index(on),
        n=float(n),
        carriers=tuple(species_index(name) for name in by),
    )


def membrane_drag(vmax: float, km: float, barrier: float, driver: str, carrier: str) -> MembraneDrag:
    return MembraneDrag(
        vmax=float(vmax),
        km=float(km),
        barrier=float(barrier),
        driver=species_index(driver),
        carrier=species_index(carrier),
    )


def flux(
    name: str,
    *forward: Term,
    reverse: Tuple[Term, ...] = (),
    stoichiometry: Mapping[str, float],
) -> Flux:
    if not stoichiometry:
        raise ValueError(f"Flux '{name}' has an empty stoichiometry")
    return Flux(
        name=name,
        forward=tuple(forward),
        reverse=tuple(reverse),
        stoichiometry=tuple(
            (species_index(sp), float(nu)) for sp, nu in stoichiometry.items() if nu != 0.0
        ),
    )

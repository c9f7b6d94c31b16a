# plotting.py

from __future__ import annotations
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd

from .state_vector import MODULE_SPECIES

MODULE_TITLES = {
    "camkii": "CaMKII module",
    "arp23": "Cdc42 / Arp2/3 module",
    "cofilin": "Cofilin module",
    "actin": "Actin / membrane module",
    "rho_myosin": "Rho / myosin module",
}


# Any set of species
def plot_species(
    trajectory: pd.DataFrame,
    species: Sequence[str],
    ax: Optional[plt.Axes] = None,
    title: Optional[str] = None,
    logy: bool = False,
) -> plt.Axes:
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 4))

    t = trajectory["t"].to_numpy()
    for name in species:
        ax.plot(t, trajectory[name].to_numpy(), label=name)
    ax.set_xlabel("Time [s]")
    ax.set_ylabel("Concentration [uM]")
    if title:
        ax.set_title(title)
    if logy:
        ax.set_yscale("log")
    ax.grid(True)
    ax.legend(fontsize="small", ncol=2)
    return ax


# All species introduced by one module
def plot_module(
    trajectory: pd.DataFrame,
    module: str,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    if module not in MODULE_SPECIES:
        raise KeyError(f"Unknown module '{module}', expected one of {sorted(MODULE_SPECIES)}")
    names = [s.name for s in MODULE_SPECIES[module]]
    return plot_species(trajectory, names, ax=ax, title=MODULE_TITLES[module])


# One panel per module
def plot_overview(trajectory: pd.DataFrame) -> plt.Figure:
    modules = list(MODULE_SPECIES)
    ncols = 2
    nrows = (len(modules) + ncols - 1) // ncols
    fig, axes = plt.subplots(nrows, ncols, figsize=(12, 3.5 * nrows))
    axes = axes.ravel()
    for ax, module in zip(axes, modules):
        plot_module(trajectory, module, ax=ax)
    for ax in axes[len(modules):]:
        ax.set_visible(False)
    fig.tight_layout()
    return fig

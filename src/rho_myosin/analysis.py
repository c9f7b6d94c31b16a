# analysis.py
"""
Validation utilities: conservation checks on recorded trajectories,
tolerance sweeps of the adaptive integrator and high-accuracy reference
solutions.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from scipy.integrate import solve_ivp

from .parameters import IntegratorSettings
from .simulation import integrate
from .stepper import RHS


def _pair_label(pair, columns) -> Tuple[str, str]:
    # indices count species, columns start with t
    a, b = pair
    if isinstance(a, str):
        return a, b
    return columns[1 + int(a)], columns[1 + int(b)]


def pair_totals(trajectory: pd.DataFrame, pairs: Iterable[Tuple[int, int]]) -> pd.DataFrame:
    """
    A + A* over time for every pair, one column per pair named 'A+A*'.

    Pairs are given as species indices (e.g. from
    ``ReactionNetwork.conserved_pairs()``) or as column names.
    """
    out = pd.DataFrame({"t": trajectory["t"].to_numpy()})
    for pair in pairs:
        a, b = _pair_label(pair, trajectory.columns)
        out[f"{a}+{b}"] = trajectory[a].to_numpy() + trajectory[b].to_numpy()
    return out


def conservation_drift(trajectory: pd.DataFrame, pairs: Iterable[Tuple[int, int]]) -> pd.Series:
    """Largest absolute deviation of each pair total from its first recorded value."""
    totals = pair_totals(trajectory, pairs).drop(columns="t")
    if totals.empty:
        return pd.Series(dtype=float)
    return (totals - totals.iloc[0]).abs().max()


def exponential_decay(t: float, x: np.ndarray) -> np.ndarray:
    """dx/dt = -x, exact solution x(t) = x0 * exp(-t)."""
    return -np.asarray(x, dtype=float)


def reference_solution(
    rhs: RHS,
    x0: Sequence[float],
    t: float,
    rtol: float = 1e-10,
    atol: float = 1e-12,
    method: str = "LSODA",
) -> np.ndarray:
    """State at time t from scipy's solve_ivp at tight tolerances."""
    sol = solve_ivp(
        fun=lambda tt, y: rhs(tt, y),
        t_span=(0.0, float(t)),
        y0=np.asarray(x0, dtype=float),
        t_eval=[float(t)],
        method=method,
        rtol=rtol,
        atol=atol,
    )
    if not sol.success:
        raise RuntimeError(f"Reference solve failed: {sol.message}")
    return sol.y[:, -1]


def _run_one_tolerance(
    rhs: RHS,
    x0: np.ndarray,
    settings: IntegratorSettings,
    exact: Optional[Callable[[float], np.ndarray]],
) -> Dict:
    result = integrate(rhs, x0, settings=settings)
    row = dict(
        tolerance=settings.tolerance,
        steps_total=result.stats.steps_total,
        steps_accepted=result.stats.steps_accepted,
        proportion_rejected=result.stats.proportion_rejected,
        min_step=result.stats.min_step,
        max_step=result.stats.max_step,
        t_final=result.t,
        failed=not result.completed,
        global_error=np.nan,
    )
    if exact is not None and result.completed:
        row["global_error"] = float(np.max(np.abs(result.x - np.asarray(exact(result.t)))))
    return row


def tolerance_sweep(
    rhs: RHS,
    x0: Sequence[float],
    tolerances: Iterable[float],
    exact: Optional[Callable[[float], np.ndarray]] = None,
    settings: Optional[IntegratorSettings] = None,
    n_jobs: int = 1,
    **overrides,
) -> pd.DataFrame:
    """
    Integrate the same problem at several tolerances.

    Args:
        rhs: Right-hand side f(t, x); must be picklable when n_jobs != 1.
        x0: Initial state
        tolerances: Local error tolerances to try
        exact: Optional exact solution t -> x(t) for the global error column
        settings: Base IntegratorSettings; ``overrides`` are applied on top
        n_jobs: joblib workers (1 = sequential)

    Returns:
        DataFrame, one row per tolerance, sorted by decreasing tolerance.
    """
    base = (settings or IntegratorSettings()).with_overrides(**overrides)
    x0 = np.asarray(x0, dtype=float)
    tolerances = sorted({float(tol) for tol in tolerances}, reverse=True)

    rows = Parallel(n_jobs=n_jobs)(
        delayed(_run_one_tolerance)(rhs, x0, base.with_overrides(tolerance=tol), exact)
        for tol in tolerances
    )
    return pd.DataFrame(rows)

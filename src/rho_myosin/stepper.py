# stepper.py
"""
Adaptive embedded Runge-Kutta stepper (Bogacki-Shampine stages).

One call to ``step`` is one attempt: three new derivative evaluations
(the first stage is reused from the previous accepted step), a local
error estimate, and either acceptance (state advanced, step grown) or
rejection (only the step size shrinks). Shrinking below the configured
minimum step is reported through ``StepAttempt.underflow``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .parameters import IntegratorSettings

RHS = Callable[[float, np.ndarray], np.ndarray]


@dataclass
class StepState:
    """Integration state owned by the driver; updated in place on acceptance."""

    t: float
    x: np.ndarray
    dxdt: np.ndarray
    h: float


@dataclass(frozen=True)
class StepSizeUnderflow:
    """
    Diagnostics of a failed step: the step size needed to meet the tolerance
    fell below the configured minimum.

    Attributes:
        t: Time of the last accepted step.
        h: Step size of the rejected attempt.
        h_next: Shrunk step size that fell below the minimum.
        err_max: Scaled error estimate of the rejected attempt.
    """

    t: float
    h: float
    h_next: float
    err_max: float

    def __str__(self) -> str:
        return (
            f"step size underflow at t={self.t:.6g}: attempted h={self.h:.3g}, "
            f"proposed h={self.h_next:.3g}, errMax={self.err_max:.3g}"
        )


@dataclass(frozen=True)
class StepAttempt:
    accepted: bool
    t: float
    h: float
    h_next: float
    err_max: float
    underflow: Optional[StepSizeUnderflow] = None


class BogackiShampineStepper:
    """
    Args:
        rhs: Right-hand side f(t, x) -> dx/dt.
        settings: IntegratorSettings (tolerance and step-size control).
        n: Length of the state vector.
    """

    def __init__(self, rhs: RHS, settings: IntegratorSettings, n: int):
        self.rhs = rhs
        self.settings = settings
        self.n = int(n)

        # Stage buffers, reused across attempts
        self._xtmp = np.empty(self.n, dtype=float)
        self._k2 = np.empty(self.n, dtype=float)
        self._k3 = np.empty(self.n, dtype=float)
        self._k4 = np.empty(self.n, dtype=float)

    def _evaluate(self, t: float, x: np.ndarray, out: np.ndarray) -> None:
        dxdt = np.asarray(self.rhs(t, x), dtype=float)
        if dxdt.shape != (self.n,):
            raise ValueError(f"rhs returned shape {dxdt.shape}, expected ({self.n},)")
        out[:] = dxdt

    def step(self, state: StepState) -> StepAttempt:
        s = self.settings
        t, h = state.t, state.h
        x, k1 = state.x, state.dxdt
        xtmp, k2, k3, k4 = self._xtmp, self._k2, self._k3, self._k4

        # stage 2
        np.multiply(k1, 0.5 * h, out=xtmp)
        xtmp += x
        self._evaluate(t + 0.5 * h, xtmp, k2)

        # stage 3
        np.multiply(k2, 0.75 * h, out=xtmp)
        xtmp += x
        self._evaluate(t + 0.75 * h, xtmp, k3)

        # stage 4
        xtmp[:] = x + (h / 9.0) * (2.0 * k1 + 3.0 * k2 + 4.0 * k3)
        self._evaluate(t + h, xtmp, k4)

        # proposed solution and scaled local error
        xtmp[:] = x + (h / 24.0) * (7.0 * k1 + 6.0 * k2 + 8.0 * k3 + 3.0 * k4)
        err = np.abs(h * ((5.0 / 72.0) * k1 - (1.0 / 12.0) * k2 - (1.0 / 9.0) * k3 + (1.0 / 8.0) * k4))
        err_max = float(np.max(err)) / s.tolerance if self.n else 0.0

        if not np.isfinite(err_max):
            fct = s.shrink_max
        elif err_max > 0.0:
            fct = s.safety / err_max ** (1.0 / 3.0)
        else:
            fct = s.grow_max

        if not err_max <= 1.0:
            # reject: shrink, but never by more than shrink_max
            h_next = h * max(fct, s.shrink_max)
            if h_next < s.min_step:
                return StepAttempt(
                    accepted=False,
                    t=t,
                    h=h,
                    h_next=h_next,
                    err_max=err_max,
                    underflow=StepSizeUnderflow(t=t, h=h, h_next=h_next, err_max=err_max),
                )
            state.h = h_next
            return StepAttempt(accepted=False, t=t, h=h, h_next=h_next, err_max=err_max)

        # accept: commit state, reuse the last stage as the next first stage
        state.x[:] = xtmp
        state.dxdt[:] = k4
        state.t = t + h
        h_next = h * min(fct, s.grow_max)
        if s.max_step is not None:
            h_next = min(h_next, s.max_step)
        state.h = h_next
        return StepAttempt(accepted=True, t=t, h=h, h_next=h_next, err_max=err_max)

# simulation.py
"""
Time loop of the model: repeated adaptive steps, run statistics and
periodic sampling of the trajectory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

import numpy as np
from tqdm.auto import tqdm

from .odes import build_network
from .parameters import IntegratorSettings, ModelParameters, get_default_parameters
from .recorder import Recorder, TrajectoryRecorder
from .state_vector import SPECIES_NAMES, get_initial_state
from .stepper import RHS, BogackiShampineStepper, StepSizeUnderflow, StepState

logger = logging.getLogger(__name__)


class SimulationError(RuntimeError):
    pass


class StepSizeUnderflowError(SimulationError):
    """Raised by ``simulate`` when the step size falls below the minimum."""

    def __init__(self, diagnostics: StepSizeUnderflow):
        super().__init__(str(diagnostics))
        self.diagnostics = diagnostics


@dataclass
class IntegrationStats:
    t_start: float
    t_end: float
    min_step: float
    max_step: float
    steps_total: int = 0
    steps_accepted: int = 0

    @property
    def steps_rejected(self) -> int:
        return self.steps_total - self.steps_accepted

    @property
    def proportion_rejected(self) -> float:
        if self.steps_total == 0:
            return 0.0
        return 1.0 - self.steps_accepted / self.steps_total

    @property
    def average_step(self) -> float:
        if self.steps_total == 0:
            return float("nan")
        return (self.t_end - self.t_start) / self.steps_total

    def summary_lines(self) -> List[str]:
        return [
            f"number of steps: {self.steps_total}",
            f"proportion bad steps: {self.proportion_rejected:.6g}",
            f"average step size: {self.average_step:.6g}",
            f"min step size: {self.min_step:.6g}",
            f"max step size: {self.max_step:.6g}",
        ]


@dataclass
class IntegrationResult:
    stats: IntegrationStats
    t: float
    x: np.ndarray
    n_samples: int = 0
    failure: Optional[StepSizeUnderflow] = field(default=None)
    recorder: Optional[Recorder] = field(default=None, repr=False)

    @property
    def completed(self) -> bool:
        return self.failure is None


def integrate(
    rhs: RHS,
    x0: Sequence[float],
    settings: Optional[IntegratorSettings] = None,
    recorder: Optional[Recorder] = None,
    names: Optional[Sequence[str]] = None,
    t0: float = 0.0,
    progress: bool = False,
) -> IntegrationResult:
    """
    Integrate dx/dt = rhs(t, x) from t0 until t >= settings.t_end.

    Every loop iteration is one step attempt. Only accepted attempts advance
    time. When an accepted attempt passes the next sampling threshold, one
    sample is sent to the recorder and the threshold moves on by one sampling
    interval. Steps longer than the interval leave the threshold behind, so
    the sample count is close to (t_end - t0) / sample_interval only while
    steps stay below the interval.

    Args:
        rhs: Right-hand side f(t, x) -> dx/dt
        x0: Initial state [n]
        settings: IntegratorSettings (defaults to the reference tuning)
        recorder: Sink for (t, x) samples, or None
        names: Column names handed to the recorder (default x0, x1, ...)
        t0: Initial time
        progress: Show a tqdm progress bar over simulated time

    Returns:
        IntegrationResult. On step-size underflow the loop stops early and
        ``result.failure`` holds the diagnostics.
    """
    if settings is None:
        settings = IntegratorSettings()

    x = np.array(x0, dtype=float, copy=True)
    n = x.shape[0]
    if names is None:
        names = [f"x{i}" for i in range(n)]
    elif len(names) != n:
        raise ValueError(f"{len(names)} names given for a state of length {n}")

    if recorder is not None:
        recorder.begin(names)

    dxdt = np.array(rhs(t0, x), dtype=float, copy=True)
    if dxdt.shape != x.shape:
        raise ValueError(f"rhs returned shape {dxdt.shape}, expected {x.shape}")

    state = StepState(t=float(t0), x=x, dxdt=dxdt, h=settings.initial_step)
    stepper = BogackiShampineStepper(rhs, settings, n)
    stats = IntegrationStats(
        t_start=float(t0),
        t_end=settings.t_end,
        min_step=settings.initial_step,
        max_step=settings.min_step,
    )

    logger.debug(
        "Integrating %d variables from t=%g to t=%g (tolerance=%g, h0=%g)",
        n, t0, settings.t_end, settings.tolerance, settings.initial_step,
    )

    failure = None
    n_samples = 0
    t_sample = float(t0)
    pbar = tqdm(total=max(settings.t_end - t0, 0.0), desc="Integrating", unit="t", disable=not progress)
    try:
        while state.t < settings.t_end:
            attempt = stepper.step(state)
            stats.steps_total += 1
            if attempt.underflow is not None:
                failure = attempt.underflow
                break
            if attempt.accepted:
                stats.steps_accepted += 1
                pbar.update(min(state.t, settings.t_end) - min(attempt.t, settings.t_end))

            if state.h < stats.min_step:
                stats.min_step = state.h
            elif state.h > stats.max_step:
                stats.max_step = state.h

            # a rejected attempt leaves t unchanged: no new sample time
            if attempt.accepted and state.t > t_sample:
                if recorder is not None:
                    recorder.record(state.t, state.x)
                n_samples += 1
                t_sample += settings.sample_interval
                if settings.catch_up_samples:
                    while t_sample < state.t:
                        t_sample += settings.sample_interval
    finally:
        pbar.close()
        if recorder is not None:
            recorder.finish()

    if failure is not None:
        logger.error("Integration aborted: %s", failure)
    else:
        logger.info(
            "Integration complete: t=%g, %d steps (%.2f%% rejected)",
            state.t, stats.steps_total, 100.0 * stats.proportion_rejected,
        )

    return IntegrationResult(stats=stats, t=state.t, x=state.x, n_samples=n_samples, failure=failure)


def simulate(
    params: Optional[ModelParameters] = None,
    settings: Optional[IntegratorSettings] = None,
    initial_conditions: Optional[Mapping[str, float]] = None,
    recorder: Optional[Recorder] = None,
    progress: bool = False,
) -> IntegrationResult:
    """
    Run the spine model from its initial conditions to settings.t_end.

    Args:
        params: ModelParameters (defaults to the reference rate constants)
        settings: IntegratorSettings (defaults to the reference tuning)
        initial_conditions: species -> concentration; None = reference set
        recorder: Sink for the sampled trajectory (default: in memory,
            available as ``result.recorder``)
        progress: Show a progress bar

    Returns:
        IntegrationResult of a completed run.

    Raises:
        StepSizeUnderflowError: the step size fell below settings.min_step.
    """
    if params is None:
        params = get_default_parameters()
    if recorder is None:
        recorder = TrajectoryRecorder()

    network = build_network(params)
    x0 = get_initial_state(initial_conditions)

    result = integrate(
        network,
        x0,
        settings=settings,
        recorder=recorder,
        names=SPECIES_NAMES,
        progress=progress,
    )
    result.recorder = recorder

    if not result.completed:
        raise StepSizeUnderflowError(result.failure)
    return result

import math

import numpy as np
import pytest

from rho_myosin import simulation
from rho_myosin.analysis import conservation_drift, exponential_decay, reference_solution
from rho_myosin.parameters import IntegratorSettings
from rho_myosin.recorder import CsvRecorder, TrajectoryRecorder, load_trajectory
from rho_myosin.simulation import (
    IntegrationStats,
    StepSizeUnderflowError,
    integrate,
    simulate,
)
from rho_myosin.state_vector import N_SPECIES, SPECIES_NAMES, get_initial_state
from rho_myosin.stepper import StepAttempt


class ScriptedStepper:
    """Replays fixed attempts: a step size is accepted, None is a rejection."""

    def __init__(self, steps):
        self.steps = list(steps)

    def __call__(self, rhs, settings, n):
        return self

    def step(self, state):
        h = self.steps.pop(0)
        t = state.t
        if h is None:
            return StepAttempt(accepted=False, t=t, h=state.h, h_next=state.h, err_max=2.0)
        state.t = t + h
        upcoming = [s for s in self.steps if s is not None]
        state.h = upcoming[0] if upcoming else h
        return StepAttempt(accepted=True, t=t, h=h, h_next=state.h, err_max=0.0)


# 4 steps to t = 0.25, one long step to t = 1.25, then 16 short steps to t = 1.75
SCRIPT = [0.0625] * 4 + [1.0] + [0.03125] * 16


def _scripted_run(monkeypatch, catch_up, script=SCRIPT):
    monkeypatch.setattr(simulation, "BogackiShampineStepper", ScriptedStepper(script))
    settings = IntegratorSettings(
        t_end=1.75, initial_step=0.0625, sample_interval=0.125, catch_up_samples=catch_up
    )
    rec = TrajectoryRecorder()
    result = integrate(exponential_decay, [1.0], settings=settings, recorder=rec)
    return result, np.asarray(rec.times)


def test_decay_matches_exact_solution(decay_settings):
    rec = TrajectoryRecorder()
    result = integrate(exponential_decay, [1.0, 2.0], settings=decay_settings, recorder=rec)

    assert result.completed
    assert result.t >= 1.0
    np.testing.assert_allclose(result.x, np.array([1.0, 2.0]) * math.exp(-result.t), atol=1e-5)

    df = rec.to_dataframe()
    assert list(df.columns) == ["t", "x0", "x1"]
    np.testing.assert_allclose(df["x0"], np.exp(-df["t"]), atol=1e-5)


def test_sample_count_with_short_steps():
    settings = IntegratorSettings(t_end=10.0, sample_interval=0.1, max_step=0.05)
    rec = TrajectoryRecorder()
    result = integrate(exponential_decay, [1.0], settings=settings, recorder=rec)

    assert result.completed
    assert abs(len(rec) - 100) <= 1
    assert result.n_samples == len(rec)
    times = np.asarray(rec.times)
    assert np.all(np.diff(times) > 0.0)
    assert times[0] > 0.0


def test_lagging_sampling_emits_one_sample_per_iteration(monkeypatch):
    result, times = _scripted_run(monkeypatch, catch_up=False)

    assert result.stats.steps_total == len(SCRIPT)
    assert result.t == 1.75
    assert len(times) == 14
    # after the long step the lagging threshold produces a burst of samples
    burst = times[(times > 1.25) & (times <= 1.5625)]
    assert len(burst) == 10
    assert np.all(np.diff(times) > 0.0)


def test_catch_up_sampling_skips_overshot_slots(monkeypatch):
    result, times = _scripted_run(monkeypatch, catch_up=True)

    assert len(times) == 7
    np.testing.assert_allclose(times, [0.0625, 0.1875, 1.25, 1.28125, 1.40625, 1.53125, 1.65625])


@pytest.mark.parametrize("catch_up", [False, True])
def test_rejected_attempts_record_nothing(monkeypatch, catch_up):
    # rejections right after the long step, while the threshold still lags
    script = [0.0625] * 4 + [1.0] + [None] * 3 + [0.03125] * 16
    result, times = _scripted_run(monkeypatch, catch_up=catch_up, script=script)
    _, expected = _scripted_run(monkeypatch, catch_up=catch_up)

    assert result.stats.steps_total == len(script)
    assert result.stats.steps_accepted == len(SCRIPT)
    assert np.all(np.diff(times) > 0.0)
    np.testing.assert_array_equal(times, expected)


def test_uncapped_steps_sample_below_nominal_rate():
    settings = IntegratorSettings(t_end=50.0, sample_interval=0.1)
    rec = TrajectoryRecorder()
    result = integrate(exponential_decay, [1.0], settings=settings, recorder=rec)

    assert result.completed
    times = np.asarray(rec.times)
    assert np.all(np.diff(times) > 0.0)
    # at most one sample per accepted step, so steps longer than the
    # interval leave the count well below t_end / sample_interval
    assert len(times) <= result.stats.steps_accepted
    assert len(times) < 0.5 * 50.0 / 0.1
    assert times[-1] >= 50.0
    # one sample at least every interval plus one step
    longest = max(result.stats.max_step, settings.initial_step)
    assert np.diff(times).max() <= settings.sample_interval + longest + 1e-12


def test_stats_are_consistent(decay_settings):
    result = integrate(exponential_decay, [1.0], settings=decay_settings)
    stats = result.stats

    assert stats.steps_total >= stats.steps_accepted > 0
    assert stats.steps_rejected == stats.steps_total - stats.steps_accepted
    assert 0.0 <= stats.proportion_rejected < 1.0
    assert stats.average_step == pytest.approx((stats.t_end - stats.t_start) / stats.steps_total)
    assert stats.min_step <= stats.max_step
    assert len(stats.summary_lines()) == 5
    assert stats.summary_lines()[0] == f"number of steps: {stats.steps_total}"


def test_empty_stats():
    stats = IntegrationStats(t_start=0.0, t_end=1.0, min_step=0.01, max_step=1e-6)
    assert stats.proportion_rejected == 0.0
    assert math.isnan(stats.average_step)


def test_names_must_match_state():
    with pytest.raises(ValueError):
        integrate(exponential_decay, [1.0, 2.0], names=["a"])


def test_integrate_reports_underflow_without_raising():
    def stiff(t, x):
        return -1.0e6 * np.asarray(x)

    settings = IntegratorSettings(t_end=1.0, initial_step=1.0, min_step=0.5)
    result = integrate(stiff, [1.0], settings=settings)

    assert not result.completed
    assert result.failure.h == 1.0
    assert result.stats.steps_total == 1
    assert result.stats.steps_accepted == 0
    assert result.t == 0.0


def test_short_model_run_conserves_pair_totals(network):
    settings = IntegratorSettings(t_end=2.0)
    result = simulate(settings=settings)

    assert result.completed
    df = result.recorder.to_dataframe()
    assert list(df.columns) == ["t", *SPECIES_NAMES]
    assert np.all(np.isfinite(df.to_numpy()))
    assert np.all(np.diff(df["t"].to_numpy()) > 0.0)

    drift = conservation_drift(df, network.conserved_pairs())
    assert len(drift) == 13
    assert drift.max() < 1e-8


def test_simulate_raises_on_underflow(tmp_path):
    # first attempt cannot meet this tolerance and may not shrink below 0.009
    settings = IntegratorSettings(t_end=1.0, tolerance=1e-12, min_step=0.009)
    path = tmp_path / "traj.csv"

    with CsvRecorder(path) as rec:
        with pytest.raises(StepSizeUnderflowError) as excinfo:
            simulate(settings=settings, recorder=rec)

    diag = excinfo.value.diagnostics
    assert diag.t == 0.0
    assert diag.h == pytest.approx(0.01)
    assert diag.h_next < 0.009
    assert "underflow" in str(excinfo.value)

    # output file closed with its header in place
    df = load_trajectory(path)
    assert list(df.columns) == ["t", *SPECIES_NAMES]
    assert len(df) == 0


@pytest.mark.slow
def test_full_horizon_run_matches_reference(network):
    result = simulate()

    assert result.completed
    assert result.t >= 300.0
    df = result.recorder.to_dataframe()
    assert df.shape[1] == N_SPECIES + 1
    assert np.all(np.isfinite(df.to_numpy()))
    assert np.all(np.diff(df["t"].to_numpy()) > 0.0)

    drift = conservation_drift(df, network.conserved_pairs())
    assert drift.max() < 1e-6

    expected = reference_solution(network, get_initial_state(), result.t)
    np.testing.assert_allclose(result.x, expected, rtol=1e-4, atol=1e-6)

"""
Tests for the Monte Carlo driver: reduction, determinism, batching and failure handling.
"""
import threading

import numpy as np
import pytest

from retention_model.config.models import SimulationSettings
from retention_model.mc import (
    MonteCarloRunner,
    MonteCarloSimulator,
    SimulationAbortedError,
    SimulationCancelledError,
    simulate_revenue_impact,
    summarize_trials,
    trial_revenue,
)

# 0.3 * 0.10 * 0.15 * $50 * 100/day * 365 * 100 stores
REFERENCE_POINT = 821_250


def test_trial_revenue_point_estimate(reference_inputs):
    assert trial_revenue(0.3, 0.15, reference_inputs) == pytest.approx(REFERENCE_POINT)


def test_trial_revenue_vectorised(reference_inputs):
    out = trial_revenue(np.array([0.3, 0.6]), np.array([0.15, 0.15]), reference_inputs)
    np.testing.assert_allclose(out, [REFERENCE_POINT, 2 * REFERENCE_POINT])


def test_summarize_uses_floor_percentile_indices():
    ci = summarize_trials(np.arange(1, 41, dtype=float))
    # floor(40 * 0.025) = 1, floor(40 * 0.975) = 39
    assert ci.lower == 2
    assert ci.upper == 40
    assert ci.mean == pytest.approx(20.5)


def test_summarize_keeps_exact_mean():
    ci = summarize_trials([1.0, 2.0, 3.0, 4.0, 100.0])
    assert (ci.lower, ci.upper) == (1.0, 100.0)
    assert ci.mean == 22.0


def test_summarize_identical_trials_uses_the_value():
    ci = summarize_trials(np.full(1_000, 0.1))
    assert ci.lower == ci.mean == ci.upper == 0.1


def test_summarize_rejects_mean_outside_band():
    # 99 zeros and one outlier: both percentiles are 0 but the mean is 10,000
    with pytest.raises(ValueError):
        summarize_trials(np.r_[np.zeros(99), 1e6])


def test_summarize_single_trial():
    ci = summarize_trials([7.0])
    assert ci.lower == ci.mean == ci.upper == 7.0


def test_summarize_empty_raises():
    with pytest.raises(ValueError):
        summarize_trials([])


def test_same_seed_is_bit_identical(reference_inputs):
    a = MonteCarloSimulator(iterations=3_000, seed=11, batch_size=700).simulate(reference_inputs)
    b = MonteCarloSimulator(iterations=3_000, seed=11, batch_size=700).simulate(reference_inputs)
    assert a == b


def test_worker_count_does_not_change_result(reference_inputs):
    serial = MonteCarloSimulator(iterations=4_000, seed=5, batch_size=500, workers=1)
    pooled = MonteCarloSimulator(iterations=4_000, seed=5, batch_size=500, workers=4)
    np.testing.assert_array_equal(serial.run_trials(reference_inputs), pooled.run_trials(reference_inputs))
    assert serial.simulate(reference_inputs) == pooled.simulate(reference_inputs)


def test_different_seeds_differ(reference_inputs):
    a = MonteCarloSimulator(iterations=1_000, seed=1).simulate(reference_inputs)
    b = MonteCarloSimulator(iterations=1_000, seed=2).simulate(reference_inputs)
    assert a != b


def test_interval_brackets_point_estimate(reference_inputs):
    ci = MonteCarloSimulator(iterations=5_000, seed=3).simulate(reference_inputs)
    assert ci.lower <= ci.mean <= ci.upper
    assert ci.lower < REFERENCE_POINT < ci.upper
    assert ci.mean == pytest.approx(REFERENCE_POINT, rel=0.01)


def test_wider_perturbation_widens_interval(reference_inputs):
    widths = [
        MonteCarloSimulator(iterations=5_000, perturbation=p, seed=9).simulate(reference_inputs).width
        for p in (0.0, 0.05, 0.1, 0.2)
    ]
    assert widths == sorted(widths)
    assert widths[0] == pytest.approx(0)


def test_zero_perturbation_collapses_interval(reference_inputs):
    ci = MonteCarloSimulator(iterations=1_000, perturbation=0.0, seed=1).simulate(reference_inputs)
    assert ci.lower == pytest.approx(REFERENCE_POINT)
    assert ci.upper == pytest.approx(REFERENCE_POINT)
    assert ci.lower <= ci.mean <= ci.upper


def test_from_settings(reference_inputs):
    settings = SimulationSettings(iterations=1_234, perturbation=0.2, seed=8, batch_size=100, workers=2)
    sim = MonteCarloSimulator.from_settings(settings)
    assert (sim.iterations, sim.perturbation, sim.seed, sim.batch_size, sim.workers) == (1_234, 0.2, 8, 100, 2)
    assert len(sim.run_trials(reference_inputs)) == 1_234


def test_batch_sizes_cover_iterations():
    assert MonteCarloRunner(iterations=1_050, batch_size=500, seed=0).batch_sizes() == [500, 500, 50]
    assert MonteCarloRunner(iterations=10, batch_size=500, seed=0).batch_sizes() == [10]


def test_generator_seed_is_accepted(reference_inputs):
    a = MonteCarloSimulator(iterations=500, seed=np.random.default_rng(4)).simulate(reference_inputs)
    b = MonteCarloSimulator(iterations=500, seed=np.random.default_rng(4)).simulate(reference_inputs)
    assert a == b


@pytest.mark.parametrize("kwargs", [{"iterations": 0}, {"batch_size": 0}, {"workers": 0}])
def test_invalid_runner_arguments(kwargs):
    with pytest.raises(ValueError):
        MonteCarloRunner(**kwargs)


def test_failing_batch_is_retried_with_same_seed():
    calls = []

    def flaky(size, rng):
        calls.append(size)
        values = rng.uniform(size=size)
        if len(calls) == 1:
            raise RuntimeError("transient")
        return values

    def steady(size, rng):
        return rng.uniform(size=size)

    runner = MonteCarloRunner(iterations=100, seed=21, batch_size=100, max_retries=1)
    np.testing.assert_array_equal(runner.run_batches(flaky), runner.run_batches(steady))
    assert len(calls) == 2


def test_persistent_failure_aborts():
    attempts = []

    def broken(size, rng):
        attempts.append(size)
        raise RuntimeError("boom")

    runner = MonteCarloRunner(iterations=100, seed=1, batch_size=50, max_retries=1)
    with pytest.raises(SimulationAbortedError):
        runner.run_batches(broken)
    assert len(attempts) == 2


def test_short_batch_aborts():
    runner = MonteCarloRunner(iterations=100, seed=1, batch_size=50, max_retries=0)
    with pytest.raises(SimulationAbortedError):
        runner.run_batches(lambda size, rng: np.zeros(size - 1))


def test_failure_in_pool_aborts():
    runner = MonteCarloRunner(iterations=400, seed=1, batch_size=100, workers=3, max_retries=0)

    def broken(size, rng):
        raise RuntimeError("boom")

    with pytest.raises(SimulationAbortedError):
        runner.run_batches(broken)


def test_cancellation_between_batches(reference_inputs):
    cancel = threading.Event()
    cancel.set()
    sim = MonteCarloSimulator(iterations=1_000, seed=1, batch_size=100)
    with pytest.raises(SimulationCancelledError):
        sim.simulate(reference_inputs, cancel_event=cancel)


def test_simulate_revenue_impact_shortcut(reference_inputs):
    direct = MonteCarloSimulator(iterations=800, seed=6).simulate(reference_inputs)
    assert simulate_revenue_impact(reference_inputs, iterations=800, seed=6) == direct

"""
Monte Carlo driver for the revenue-impact estimate.
"""
import logging
import math
import time
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence, Union

import numpy as np

from .config.models import DEFAULT_ESTIMATIONS, CompanyInputs, SimulationSettings, UserEstimations
from .config.params import (
    DAYS_PER_YEAR,
    DEFAULT_BATCH_SIZE,
    DEFAULT_ITERATIONS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PERTURBATION,
    LOWER_PERCENTILE,
    UPPER_PERCENTILE,
)
from .logging_config import PERFORMANCE_LOGGER
from .sampler import ElasticitySampler
from .schema.results import ConfidenceInterval

__all__ = [
    'MonteCarloSimulator',
    'SimulationAbortedError',
    'SimulationCancelledError',
    'simulate_revenue_impact',
    'summarize_trials',
    'trial_revenue',
]

logger = logging.getLogger(__name__)
perf_logger = logging.getLogger(PERFORMANCE_LOGGER)

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


class SimulationAbortedError(RuntimeError):
    """A trial batch kept failing; no partial result is returned."""

    pass


class SimulationCancelledError(RuntimeError):
    """The caller asked the simulation to stop between batches."""

    pass


def trial_revenue(
    tenure_impact,
    service_impact,
    inputs: CompanyInputs,
    estimations: UserEstimations = DEFAULT_ESTIMATIONS,
):
    """
    Revenue impact for one or many trials.

    Works on scalars or numpy arrays of elasticities alike.
    """
    service_improvement = tenure_impact * inputs.retention_improvement
    transaction_impact = service_improvement * service_impact
    return (
        transaction_impact
        * inputs.average_transaction_value
        * estimations.base_transactions_per_day
        * DAYS_PER_YEAR
        * inputs.number_of_stores
    )


def summarize_trials(samples: Sequence[float]) -> ConfidenceInterval:
    """
    Reduce a complete set of trial outcomes to a 95% empirical interval.

    lower / upper are the sorted values at indices floor(N * 0.025) and
    floor(N * 0.975); mean is the arithmetic mean of all trials.

    Raises:
        ValueError: if there are no trials, or the mean falls outside the
            percentile band (only possible for heavily skewed outcomes).
    """
    values = np.asarray(samples, dtype=float)
    n = len(values)
    if n == 0:
        raise ValueError("Cannot summarize an empty set of trials")

    ordered = np.sort(values)
    lower = float(ordered[math.floor(n * LOWER_PERCENTILE)])
    upper = float(ordered[min(math.floor(n * UPPER_PERCENTILE), n - 1)])
    # identical trials: the summed mean can drift off the single value
    mean = lower if np.ptp(values) == 0 else float(values.mean())
    return ConfidenceInterval(lower=lower, upper=upper, mean=mean)


class MonteCarloRunner:
    """Shared RNG and batching plumbing for Monte Carlo drivers."""

    def __init__(
        self,
        iterations: int = DEFAULT_ITERATIONS,
        seed: SeedLike = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        workers: int = 1,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        """
        Args:
            iterations: number of Monte Carlo trials
            seed: int, SeedSequence or Generator; None draws fresh OS entropy
            batch_size: trials per batch; fixes the random stream layout
            workers: threads used to run batches
            max_retries: extra attempts for a failing batch before aborting
        """
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.iterations = iterations
        self.seed = seed
        self.batch_size = batch_size
        self.workers = workers
        self.max_retries = max_retries

    def _seed_sequence(self) -> np.random.SeedSequence:
        if isinstance(self.seed, np.random.SeedSequence):
            return self.seed
        if isinstance(self.seed, np.random.Generator):
            return np.random.SeedSequence(int(self.seed.integers(0, 2**63 - 1)))
        if self.seed is None:
            logger.warning("No random seed provided for simulation. Results may not be reproducible.")
        return np.random.SeedSequence(self.seed)

    def batch_sizes(self) -> List[int]:
        full, remainder = divmod(self.iterations, self.batch_size)
        sizes = [self.batch_size] * full
        if remainder:
            sizes.append(remainder)
        return sizes

    def run_batches(self, draw, cancel_event: Optional[threading.Event] = None) -> np.ndarray:
        """
        Run ``draw(size, rng)`` once per batch and concatenate in batch order.

        Batch ``i`` always uses the ``i``-th child of the master seed sequence,
        so the output depends on (seed, iterations, batch_size) only.

        Raises:
            SimulationCancelledError: ``cancel_event`` was set between batches.
            SimulationAbortedError: a batch failed more than ``max_retries`` times.
        """
        sizes = self.batch_sizes()
        children = self._seed_sequence().spawn(len(sizes))
        results: List[Optional[np.ndarray]] = [None] * len(sizes)

        if self.workers == 1 or len(sizes) == 1:
            for i, (size, child) in enumerate(zip(sizes, children)):
                results[i] = self._run_batch_with_retry(i, size, child, draw, cancel_event)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                future_to_batch = {
                    executor.submit(self._run_batch_with_retry, i, size, child, draw, cancel_event): i
                    for i, (size, child) in enumerate(zip(sizes, children))
                }
                try:
                    for future in as_completed(future_to_batch):
                        results[future_to_batch[future]] = future.result()
                except BaseException:
                    for future in future_to_batch:
                        future.cancel()
                    raise

        samples = np.concatenate(results)
        if len(samples) != self.iterations:
            raise SimulationAbortedError(
                f"Expected {self.iterations} trials, collected {len(samples)}"
            )
        return samples

    def _run_batch_with_retry(self, index, size, child_seed, draw, cancel_event):
        if cancel_event is not None and cancel_event.is_set():
            raise SimulationCancelledError(f"Simulation cancelled before batch {index}")

        last_error = None
        for attempt in range(self.max_retries + 1):
            # a fresh Generator from the same child seed replays identical draws
            rng = np.random.default_rng(child_seed)
            try:
                batch = np.asarray(draw(size, rng), dtype=float)
                if len(batch) != size:
                    raise ValueError(f"batch {index} produced {len(batch)} trials, expected {size}")
                return batch
            except Exception as e:
                last_error = e
                logger.warning(f"Batch {index} attempt {attempt + 1} failed: {e}")
        raise SimulationAbortedError(
            f"Batch {index} failed after {self.max_retries + 1} attempts"
        ) from last_error


class MonteCarloSimulator(MonteCarloRunner):
    """
    Quantifies uncertainty in the revenue-impact estimate.

    The two elasticity assumptions (tenure -> service, service -> transaction)
    are perturbed independently in every trial and the resulting revenue
    figures are reduced to a 95% empirical interval.
    """

    def __init__(self, iterations: int = DEFAULT_ITERATIONS, perturbation: float = DEFAULT_PERTURBATION,
                 seed: SeedLike = None, batch_size: int = DEFAULT_BATCH_SIZE, workers: int = 1,
                 max_retries: int = DEFAULT_MAX_RETRIES):
        super().__init__(iterations, seed, batch_size, workers, max_retries)
        self.perturbation = perturbation

    @classmethod
    def from_settings(cls, settings: SimulationSettings) -> 'MonteCarloSimulator':
        return cls(
            iterations=settings.iterations,
            perturbation=settings.perturbation,
            seed=settings.seed,
            batch_size=settings.batch_size,
            workers=settings.workers,
            max_retries=settings.max_retries,
        )

    def run_trials(self, inputs: CompanyInputs, estimations: UserEstimations = DEFAULT_ESTIMATIONS,
                   cancel_event: Optional[threading.Event] = None) -> np.ndarray:
        """Return the raw revenue impact of every trial, in batch order."""
        sampler = ElasticitySampler(
            estimations.tenure_service_impact,
            estimations.service_transaction_impact,
            self.perturbation,
        )

        def draw(size, rng):
            tenure, service = sampler.sample(size, rng)
            return trial_revenue(tenure, service, inputs, estimations)

        return self.run_batches(draw, cancel_event)

    def simulate(self, inputs: CompanyInputs, estimations: UserEstimations = DEFAULT_ESTIMATIONS,
                 cancel_event: Optional[threading.Event] = None) -> ConfidenceInterval:
        start = time.perf_counter()
        samples = self.run_trials(inputs, estimations, cancel_event)
        interval = summarize_trials(samples)
        perf_logger.info(
            f"Monte Carlo: {self.iterations} trials in {len(self.batch_sizes())} batches "
            f"on {self.workers} worker(s), {time.perf_counter() - start:.3f}s"
        )
        logger.debug(f"Revenue impact interval: {interval}")
        return interval


def simulate_revenue_impact(
    inputs: CompanyInputs,
    estimations: UserEstimations = DEFAULT_ESTIMATIONS,
    iterations: int = DEFAULT_ITERATIONS,
    seed: SeedLike = None,
    perturbation: float = DEFAULT_PERTURBATION,
    **kwargs,
) -> ConfidenceInterval:
    """Functional shortcut for ``MonteCarloSimulator(...).simulate(inputs, estimations)``."""
    simulator = MonteCarloSimulator(iterations=iterations, perturbation=perturbation, seed=seed, **kwargs)
    return simulator.simulate(inputs, estimations)

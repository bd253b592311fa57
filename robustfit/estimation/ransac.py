"""
Generic RANSAC estimator with an adaptive trial budget.

Each trial draws a minimal random sample, fits a candidate model and counts the
observations whose residual falls below the threshold. The candidate with the
largest consensus set wins, and the number of trials still needed shrinks as
the estimated inlier fraction grows:

    k = log(1 - p) / log(1 - w^s)

where:
 - p is the desired success probability (e.g., 0.99)
 - w is the best inlier fraction found so far
 - s is the minimal sample size of the model

Trials can be spread over a fixed pool of worker threads. Every worker owns its
random generator, and the best result is only updated in a reduction step that
walks each batch in trial order, so a fixed seed and worker count always give
the same answer.
"""

import logging
import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, Tuple, Type, TypeVar

import numpy as np

from robustfit.estimation.errors import DegenerateSampleError, InsufficientDataError
from robustfit.estimation.model import Model

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Model)

_EPS = float(np.finfo(np.float64).eps)


@dataclass(frozen=True)
class TrialRecord:
    """Bookkeeping for one reduced trial."""
    index: int
    inlier_count: int        # consensus size of this trial's candidate
    best_inlier_count: int   # best consensus size after this trial
    k: float                 # trial budget after this trial
    degenerate: bool
    sample: Tuple[int, ...] = ()  # observation indices drawn for this trial


@dataclass(frozen=True)
class _TrialOutcome:
    index: int
    model: Optional[object]
    inliers: Tuple[int, ...]
    sample: Tuple[int, ...]


def required_iterations(probability: float, inlier_ratio: float, sample_size: int) -> float:
    """
    Number of trials needed to draw at least one all-inlier sample with the
    given probability.

    The probability that a sample contains an outlier is clamped into
    [eps, 1 - eps] so that neither log() nor the division can blow up:
    an inlier ratio of 1 gives a budget close to zero, a vanishing ratio
    gives a huge but finite budget.
    """
    p_no_outliers = 1.0 - inlier_ratio ** sample_size
    p_no_outliers = min(max(p_no_outliers, _EPS), 1.0 - _EPS)
    return math.log(1.0 - probability) / math.log(p_no_outliers)


def check_observations(observations: Sequence, min_samples: int):
    """Raise InsufficientDataError unless there are more than min_samples observations."""
    if len(observations) <= min_samples:
        raise InsufficientDataError(len(observations), min_samples)


class _Worker:
    """Runs trials with its own random generator."""

    def __init__(self, seed_sequence: np.random.SeedSequence):
        self.rng = np.random.default_rng(seed_sequence)

    def run_trial(self, index: int, model_type: Type[M], observations: Sequence,
                  min_samples: int, threshold: float) -> _TrialOutcome:
        # Shuffle every index and keep the head: no index is drawn twice
        sample_idx = tuple(int(j) for j in self.rng.permutation(len(observations))[:min_samples])
        samples = [observations[j] for j in sample_idx]

        try:
            model = model_type.from_sample(samples)
        except DegenerateSampleError as e:
            logger.debug("Trial %d rejected: %s", index, e)
            return _TrialOutcome(index, None, (), sample_idx)

        inliers = tuple(
            j for j, obs in enumerate(observations)
            if model.distance_to(obs) < threshold
        )
        return _TrialOutcome(index, model, inliers, sample_idx)


class RANSAC(Generic[M]):
    """RANSAC algorithm for outlier rejection."""

    def __init__(self, model_type: Type[M], threshold: float = 1.0,
                 max_iters: int = 1000, probability: float = 0.8,
                 num_workers: int = 1, seed: Optional[int] = None):
        """
        Initialize the estimator.

        Args:
            model_type: class satisfying the Model contract
            threshold: residual below which an observation is an inlier
            max_iters: hard cap on the number of trials
            probability: desired probability of drawing one all-inlier sample
            num_workers: number of threads evaluating trials
            seed: seed for the worker generators, OS entropy if None
        """
        min_samples = int(model_type.MIN_SAMPLES)
        if min_samples < 1:
            raise ValueError(f"MIN_SAMPLES must be >= 1, got {min_samples}")
        if num_workers < 1:
            raise ValueError(f"num_workers must be >= 1, got {num_workers}")

        self.model_type = model_type
        self.min_samples = min_samples
        self.num_workers = int(num_workers)
        self.configure(threshold, max_iters, probability)

        seed_sequence = np.random.SeedSequence(seed)
        self._workers = [_Worker(s) for s in seed_sequence.spawn(self.num_workers)]
        self._stop_event = threading.Event()
        self._reset()

    def configure(self, threshold: float, max_iters: int = 1000, probability: float = 0.8):
        """Set tuning parameters for subsequent runs."""
        if not threshold > 0:
            raise ValueError(f"threshold must be > 0, got {threshold}")
        if isinstance(max_iters, bool) or int(max_iters) != max_iters or max_iters <= 0:
            raise ValueError(f"max_iters must be a positive integer, got {max_iters}")
        if not 0.0 < probability < 1.0:
            raise ValueError(f"probability must be in (0, 1), got {probability}")

        self.threshold = float(threshold)
        self.max_iters = int(max_iters)
        self.probability = float(probability)

    def _reset(self):
        self._best_model: Optional[M] = None
        self._inlier_indices: Tuple[int, ...] = ()
        self._iterations = 0
        self._trial_log: List[TrialRecord] = []

    @property
    def best_model(self) -> Optional[M]:
        """Best model of the last run, None if no candidate beat the baseline."""
        return self._best_model

    @property
    def inlier_indices(self) -> Tuple[int, ...]:
        """Ascending indices of the observations consistent with the best model."""
        return self._inlier_indices

    @property
    def best_inlier_count(self) -> int:
        return len(self._inlier_indices)

    @property
    def iterations(self) -> int:
        """Number of trials consumed by the last run."""
        return self._iterations

    @property
    def trial_log(self) -> Tuple[TrialRecord, ...]:
        return tuple(self._trial_log)

    def stop(self):
        """
        Ask estimate() to finish after the current batch.

        The request stays pending until a run consumes it, so a stop issued
        just before estimate() starts ends that run before its first trial.
        """
        self._stop_event.set()

    def estimate(self, observations: Sequence) -> bool:
        """
        Run the sampling loop over the observations.

        Returns:
            False if there are not enough observations (state is left
            untouched), True otherwise. A True result may still carry no
            model when nothing beat the baseline; check best_model.
        """
        try:
            check_observations(observations, self.min_samples)
        except InsufficientDataError as e:
            logger.warning("RANSAC - %s. Not doing anything.", e)
            return False

        observations = tuple(observations)
        n = len(observations)

        self._reset()
        start = time.perf_counter()

        k = float(self.max_iters)
        # A candidate has to explain more than its own sample to be recorded
        best_count = self.min_samples

        executor = None
        if self.num_workers > 1:
            executor = ThreadPoolExecutor(max_workers=self.num_workers,
                                          thread_name_prefix="ransac")
        try:
            i = 0
            while i < self.max_iters and i < k and not self._stop_event.is_set():
                end = min(i + self.num_workers, self.max_iters, math.ceil(k))
                outcomes = self._run_batch(executor, range(i, end), observations)

                # Single-writer reduction in trial order: earliest wins on ties
                for outcome in outcomes:
                    if outcome.index >= k:
                        break

                    if outcome.model is None:
                        self._trial_log.append(
                            TrialRecord(outcome.index, 0, best_count, k, True, outcome.sample))
                    else:
                        count = len(outcome.inliers)
                        if count > best_count:
                            best_count = count
                            self._best_model = outcome.model
                            self._inlier_indices = outcome.inliers
                            logger.debug("Trial %d: better model with %d/%d inliers",
                                         outcome.index, count, n)

                        k = min(k, required_iterations(self.probability,
                                                       best_count / n,
                                                       self.min_samples))
                        self._trial_log.append(
                            TrialRecord(outcome.index, count, best_count, k, False, outcome.sample))

                    i = outcome.index + 1
                    self._iterations = i
        finally:
            if executor is not None:
                executor.shutdown(wait=True)
            self._stop_event.clear()

        elapsed = (time.perf_counter() - start) * 1000
        logger.info("RANSAC took %.2f ms: %d trials, %d/%d inliers",
                    elapsed, self._iterations, self.best_inlier_count, n)
        return True

    def _run_batch(self, executor: Optional[ThreadPoolExecutor], indices: range,
                   observations: Tuple) -> List[_TrialOutcome]:
        """Run one trial per worker; trial j of the batch goes to worker j."""
        jobs = list(zip(self._workers, indices))
        args = (self.model_type, observations, self.min_samples, self.threshold)

        if executor is None:
            return [worker.run_trial(index, *args) for worker, index in jobs]

        futures = [executor.submit(worker.run_trial, index, *args) for worker, index in jobs]
        return [f.result() for f in futures]

    def fit(self, observations: Sequence) -> Tuple[Optional[M], np.ndarray]:
        """Fit model using RANSAC and return (best model, inlier indices)."""
        if not self.estimate(observations):
            return None, np.array([], dtype=np.int64)
        return self._best_model, np.asarray(self._inlier_indices, dtype=np.int64)

"""
Model contract for the generic RANSAC estimator.

A model is any class that can be built from a minimal sample of observations,
measure the residual of a single observation and report its coefficients.
Models are matched structurally: they do not need to inherit from ``Model``.
"""

from typing import ClassVar, Protocol, Sequence, Tuple, TypeVar

from robustfit.estimation.errors import DegenerateSampleError

D = TypeVar("D", contravariant=True)


class Model(Protocol[D]):
    """Interface every candidate model must provide."""

    MIN_SAMPLES: ClassVar[int]

    @classmethod
    def from_sample(cls, samples: Sequence[D]) -> "Model[D]":
        """
        Fit a model from exactly MIN_SAMPLES observations.

        Raises:
            DegenerateSampleError: wrong sample size or degenerate geometry
        """
        ...

    def distance_to(self, observation: D) -> float:
        """Non-negative residual of one observation under this model."""
        ...

    def parameters(self) -> Tuple[float, ...]:
        """Fitted coefficients in a fixed, model-defined order."""
        ...


def check_sample_size(samples: Sequence, expected: int, model_name: str):
    """Raise DegenerateSampleError unless the sample has exactly `expected` items."""
    if len(samples) != expected:
        raise DegenerateSampleError(
            f"{model_name} needs exactly {expected} samples, got {len(samples)}"
        )

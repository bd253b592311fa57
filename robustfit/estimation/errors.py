"""Error types raised during robust estimation."""


class RobustFitError(Exception):
    """Base class for robustfit errors."""


class DegenerateSampleError(RobustFitError):
    """A minimal sample does not determine a unique model."""


class InsufficientDataError(RobustFitError):
    """Not enough observations to draw a minimal sample."""

    def __init__(self, num_observations: int, min_samples: int):
        self.num_observations = num_observations
        self.min_samples = min_samples
        super().__init__(
            f"Got {num_observations} observations, need more than {min_samples}"
        )

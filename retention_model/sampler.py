import numpy as np
from typing import Tuple


class ElasticitySampler:
    """
    Draws perturbed (tenure -> service, service -> transaction) elasticity pairs.

    Each parameter gets its own independent relative shift
    ``U ~ Uniform(-perturbation, +perturbation)`` per trial, and the shifted
    value is clipped to [0, 1].
    """

    def __init__(self, tenure_impact: float, service_impact: float, perturbation: float = 0.1):
        if perturbation < 0:
            raise ValueError(f"perturbation must be non-negative, got {perturbation}")
        self.tenure_impact = tenure_impact
        self.service_impact = service_impact
        self.perturbation = perturbation

    def sample(self, size: int, rng: np.random.Generator) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(tenure_impacts, service_impacts)`` arrays of length ``size``."""
        shifts = rng.uniform(-self.perturbation, self.perturbation, size=(size, 2))
        tenure = np.clip(self.tenure_impact * (1 + shifts[:, 0]), 0.0, 1.0)
        service = np.clip(self.service_impact * (1 + shifts[:, 1]), 0.0, 1.0)
        return tenure, service

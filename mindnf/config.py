from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Limits:
    """
    Size limits enforced before and during minimization.

    Both stages are exponential, so exceeding a limit aborts the run
    instead of truncating the result.
    """
    max_inputs: int = 64
    max_prime_implicants: int = 10000

    def __post_init__(self):
        if self.max_inputs < 1:
            raise ValueError(f"max_inputs must be >= 1, got {self.max_inputs}")
        if self.max_prime_implicants < 1:
            raise ValueError(f"max_prime_implicants must be >= 1, got {self.max_prime_implicants}")


DEFAULT_LIMITS = Limits()

"""
Exceptions raised by stratsel
"""


class DimensionMismatch(ValueError):
    """Inputs (A, b, k, n, prior, start, M, steps) have inconsistent shapes"""


class PolytopeEmptyOrUnreachable(RuntimeError):
    """Rejection sampling did not find a point inside the polytope"""

    def __init__(self, attempts: int, n_dims: int):
        self.attempts = attempts
        self.n_dims = n_dims
        super().__init__(
            f"Could not find starting values within the polytope "
            f"after {attempts} uniform draws in [0, 1]^{n_dims}"
        )

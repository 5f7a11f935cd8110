# logistical/utils/errors.py
from __future__ import annotations


class LogisticalError(Exception):
    """
    Root of every error raised by the estimator.

    Errors are raised where they are detected and are never retried.
    """


class TypeArgumentError(LogisticalError, TypeError):
    """Wrong kind of value: not numeric / not a vector / not a matrix."""


class DimensionMismatchError(LogisticalError, ValueError):
    """Vectors or matrices of incompatible size."""


class EmptyInputError(LogisticalError, ValueError):
    """Zero-length vector or matrix where data is required."""


class InvalidArgumentError(LogisticalError, ValueError):
    """Out-of-domain scalar (non-finite value, non-positive size, bad label)."""


class NotFittedError(LogisticalError, RuntimeError):
    """Classifier used before fit()."""


class NonConvergenceError(LogisticalError, RuntimeError):
    """
    Optimizer exhausted its step budget.

    No partial model is attached: coefficients of a failed run are unusable.
    """

    def __init__(self, steps: int, max_change: float):
        self.steps = steps
        self.max_change = max_change
        super().__init__(
            f"Gradient ascent did not converge after {steps} steps "
            f"(last max_change={max_change:.3e})"
        )

# logistical/core/functions.py
from __future__ import annotations

from typing import Any

import numpy as np
from scipy.special import expit

from logistical.core.validation import (
    check_equal_length,
    check_matrix,
    check_scalar,
    check_vector,
)
from logistical.utils.errors import DimensionMismatchError


def logistic(z: Any) -> float:
    """
    1 / (1 + exp(-z)), strictly inside (0, 1) for moderate z.
    """
    z = check_scalar(z, "z").unwrap()
    return float(expit(z))


def score(w: Any, xi: Any) -> float:
    """
    Linear predictor w · xi for a single example.
    """
    w = check_vector(w, "w").unwrap()
    xi = check_vector(xi, "xi").unwrap()
    check_equal_length(w, xi, ("w", "xi")).unwrap()

    return float(np.dot(w, xi))


def scores(w: Any, X: Any) -> np.ndarray:
    """
    Row-wise linear predictor X @ w.
    """
    w = check_vector(w, "w").unwrap()
    X = check_matrix(X, "X").unwrap()

    if X.shape[1] != w.shape[0]:
        raise DimensionMismatchError(
            f"X rows have {X.shape[1]} features, w has {w.shape[0]} coefficients"
        )

    return X @ w


def add_intercept(X: Any) -> np.ndarray:
    """
    Prepend the constant-1 feature so the bias is the first coefficient.
    """
    X = check_matrix(X, "X").unwrap()
    return np.hstack([np.ones((X.shape[0], 1)), X])

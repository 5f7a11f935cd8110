# logistical/core/likelihood.py
"""
Log-likelihood of binary logistic regression and its gradient.

Labels enter the formulas exactly as given: y_i multiplies the score.
With signed labels {-1, +1} this is the textbook likelihood.

Regularization (C > 0):
- log_likelihood switches to the penalized NEGATIVE log-likelihood,
      -L(w) + 0.5 * C * (w · w)
- log_likelihood_gradient stays the ascent direction of the penalized
  log-likelihood,
      dL/dw_k - C * w_k
"""
from __future__ import annotations

from typing import Any, Tuple

import numpy as np
from scipy.special import expit, log_expit

from logistical.core.functions import scores
from logistical.core.validation import (
    check_matching,
    check_matrix,
    check_scalar,
    check_vector,
)
from logistical.utils.errors import InvalidArgumentError


def _prepare(w: Any, Y: Any, X: Any, C: Any) -> Tuple[np.ndarray, np.ndarray, np.ndarray, float]:
    w = check_vector(w, "w").unwrap()
    Y = check_vector(Y, "Y").unwrap()
    X = check_matrix(X, "X").unwrap()
    check_matching(Y, X, ("Y", "X")).unwrap()

    C = check_scalar(C, "C").unwrap()
    if C < 0:
        raise InvalidArgumentError(f"C must be non-negative, got {C}")

    return w, Y, X, C


def log_likelihood(w: Any, Y: Any, X: Any, C: float = 0.0) -> float:
    w, Y, X, C = _prepare(w, Y, X, C)

    total = float(np.sum(log_expit(Y * scores(w, X))))

    if C > 0:
        total = -total + 0.5 * C * float(np.dot(w, w))

    return total


def log_likelihood_gradient(w: Any, X: Any, Y: Any, C: float = 0.0) -> np.ndarray:
    """
    Returns a vector with one partial derivative per coefficient.
    """
    w, Y, X, C = _prepare(w, Y, X, C)

    weights = Y * expit(-Y * scores(w, X))
    gradient = X.T @ weights

    if C > 0:
        gradient = gradient - C * w

    return gradient

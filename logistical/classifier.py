# logistical/classifier.py
"""
Classifier

Binary logistic-regression classifier trained by L2-regularized gradient
ascent.

Two surfaces:
- explicit-coefficient functions (predict / classify / calculate_error
  take w as their first argument), usable on any coefficient vector
- model-bound methods (fit / predict_proba / predict_labels / error)
  that use the one coefficient vector this instance owns

Labels on the public surface are {0, 1}.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np
from scipy.special import expit

from logistical.config.optimizer_config import OptimizerConfig
from logistical.core import functions, likelihood
from logistical.core.functions import add_intercept, scores
from logistical.core.labels import to_binary_labels, to_signed_labels
from logistical.core.validation import check_matching, check_matrix, check_vector
from logistical.observability.instrumentation import Instrumentation, NoOpInstrumentation
from logistical.training.dataset import TrainingSet
from logistical.training.optimizer import (
    GradientAscentOptimizer,
    StepEvent,
    generate_random_coefficients,
)
from logistical.training.train_result import FitResult
from logistical.utils.errors import EmptyInputError, NotFittedError
from logistical.utils.logger import logs

DECISION_THRESHOLD = 0.5


class Classifier:
    """
    Owns at most one fitted coefficient vector.

    Not safe to share across threads while fit() is running.
    """

    def __init__(
        self,
        config: OptimizerConfig | None = None,
        *,
        instrumentation: Instrumentation | None = None,
        on_step: Callable[[StepEvent], None] | None = None,
    ):
        self.config = config or OptimizerConfig()
        self.inst: Instrumentation | NoOpInstrumentation = (
            instrumentation if instrumentation is not None else NoOpInstrumentation()
        )
        self.on_step = on_step
        self._rng = np.random.default_rng(self.config.random_seed)

        self.coefficients: Optional[np.ndarray] = None
        self.fit_intercept: bool = False
        self.result: Optional[FitResult] = None

    # ------------------------------------------------------------------
    # Numeric building blocks
    # ------------------------------------------------------------------
    @staticmethod
    def logistic(z: Any) -> float:
        return functions.logistic(z)

    @staticmethod
    def score(w: Any, xi: Any) -> float:
        return functions.score(w, xi)

    @staticmethod
    def log_likelihood(w: Any, Y: Any, X: Any, C: float = 0.0) -> float:
        return likelihood.log_likelihood(w, Y, X, C)

    @staticmethod
    def log_likelihood_gradient(w: Any, X: Any, Y: Any, C: float = 0.0) -> np.ndarray:
        return likelihood.log_likelihood_gradient(w, X, Y, C)

    def generate_random_coefficients(self, size: int) -> np.ndarray:
        return generate_random_coefficients(size, self._rng)

    # ------------------------------------------------------------------
    # Explicit-coefficient surface
    # ------------------------------------------------------------------
    def predict(self, w: Any, xi: Any) -> float:
        """
        Probability of the positive class for one example.

        Strictly inside (0, 1) for moderate scores only: float64 saturates
        to exactly 1.0 above a score of about 37 and underflows towards 0.0
        far below it.
        """
        return self.logistic(self.score(w, xi))

    def classify(self, w: Any, xi: Any) -> int:
        return 1 if self.predict(w, xi) > DECISION_THRESHOLD else 0

    def calculate_error(self, w: Any, X: Any, Y_expected: Any) -> float:
        """
        Fraction of rows of X whose label differs from Y_expected.
        """
        if X is None or Y_expected is None:
            raise EmptyInputError("X and Y_expected are required")

        w = check_vector(w, "w").unwrap()
        X = check_matrix(X, "X").unwrap()
        Y_expected = check_vector(Y_expected, "Y_expected").unwrap()
        check_matching(Y_expected, X, ("Y_expected", "X")).unwrap()

        labels = self._classify_rows(w, X)
        errors = int(np.sum(labels != Y_expected))

        return errors / X.shape[0]

    def gradient_descent(self, X: Any, Y: Any, C: float | None = None) -> np.ndarray:
        """
        Run the optimizer from random coefficients and return the final w.

        C overrides config.regularization for this run only and is
        validated like any other OptimizerConfig field.
        """
        cfg = self.config
        if C is not None:
            cfg = OptimizerConfig.model_validate({**cfg.model_dump(), "regularization": C})

        optimizer = GradientAscentOptimizer(cfg, on_step=self.on_step, rng=self._rng)
        result = optimizer.run(X, to_signed_labels(Y))
        return result.coefficients

    # ------------------------------------------------------------------
    # Model-bound surface
    # ------------------------------------------------------------------
    @logs.catch("fit failed")
    def fit(self, X: Any, Y: Any, fit_intercept: bool = False) -> "Classifier":
        data = TrainingSet(X, Y)
        X_fit = add_intercept(data.X) if fit_intercept else data.X
        Y_signed = to_signed_labels(data.Y)

        logs.info(
            f"[Classifier] fit rows={len(data)} features={data.n_features} "
            f"intercept={fit_intercept}"
        )

        optimizer = GradientAscentOptimizer(self.config, on_step=self.on_step, rng=self._rng)
        with self.inst.timer("fit"):
            result = optimizer.run(X_fit, Y_signed)

        self.coefficients = result.coefficients
        self.fit_intercept = fit_intercept

        train_error = self.calculate_error(self.coefficients, X_fit, to_binary_labels(Y_signed))
        objective = likelihood.log_likelihood(
            self.coefficients, Y_signed, X_fit, self.config.regularization
        )

        metrics = {
            **result.metrics,
            "steps": result.steps,
            "converged": result.converged,
            "train_error": train_error,
            "log_likelihood": objective,
        }
        self.inst.metrics.record_all(metrics)

        self.result = FitResult(
            coefficients=result.coefficients,
            steps=result.steps,
            converged=result.converged,
            metrics=metrics,
        )
        return self

    def predict_proba(self, X: Any) -> np.ndarray:
        w, X = self._bound_inputs(X)
        return expit(scores(w, X))

    def predict_labels(self, X: Any) -> np.ndarray:
        w, X = self._bound_inputs(X)
        return self._classify_rows(w, X)

    def error(self, X: Any, Y: Any) -> float:
        w, X = self._bound_inputs(X)
        return self.calculate_error(w, X, to_binary_labels(Y))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _classify_rows(w: np.ndarray, X: np.ndarray) -> np.ndarray:
        return (expit(scores(w, X)) > DECISION_THRESHOLD).astype(int)

    def _bound_inputs(self, X: Any):
        if self.coefficients is None:
            raise NotFittedError("Call fit() first.")

        X = check_matrix(X, "X").unwrap()
        if self.fit_intercept:
            X = add_intercept(X)
        return self.coefficients, X

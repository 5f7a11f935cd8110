# logistical/training/optimizer.py
"""
Batch gradient ascent on the (optionally L2-penalized) log-likelihood.

State machine:

    INITIALIZED ──► ITERATING ──► CONVERGED
                        │
                        └──────► FAILED   (NonConvergenceError)

Convergence test, evaluated after every update:
- step index > warmup_fraction * max_steps
- max |w_t - w_{t-1}| < convergence_threshold

Labels must already be signed ({-1, +1}); see logistical.core.labels.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import numpy as np

from logistical.config.optimizer_config import OptimizerConfig
from logistical.core.likelihood import log_likelihood_gradient
from logistical.core.validation import (
    check_equal_length,
    check_matching,
    check_matrix,
    check_vector,
)
from logistical.training.train_result import FitResult
from logistical.utils.errors import InvalidArgumentError, NonConvergenceError
from logistical.utils.logger import logs


class OptimizerState(str, Enum):
    INITIALIZED = "initialized"
    ITERATING = "iterating"
    CONVERGED = "converged"
    FAILED = "failed"


@dataclass(frozen=True)
class StepEvent:
    """
    Diagnostic event emitted once per update.
    """
    step: int
    max_change: float
    state: OptimizerState


def log_step_event(event: StepEvent) -> None:
    logs.debug(
        f"[GradientAscent] step={event.step} "
        f"max_change={event.max_change:.6e} "
        f"state={event.state.value}"
    )


def generate_random_coefficients(
    size: int,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Uniform [0, 1) coefficients, one per feature.
    """
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise InvalidArgumentError(f"size must be an integer, got {size!r}")
    if size < 1:
        raise InvalidArgumentError(f"size must be at least one, got {size}")

    rng = rng if rng is not None else np.random.default_rng()
    return rng.uniform(0.0, 1.0, size=int(size))


class GradientAscentOptimizer:
    """
    One optimizer == one training run at a time.

    on_step receives every StepEvent; it defaults to DEBUG logging.
    Coefficients are drawn from `rng` (seeded from config.random_seed
    when not given).
    """

    def __init__(
        self,
        config: OptimizerConfig | None = None,
        *,
        on_step: Callable[[StepEvent], None] | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.cfg = config or OptimizerConfig()
        self.on_step = on_step or log_step_event
        self.rng = rng if rng is not None else np.random.default_rng(self.cfg.random_seed)
        self.state = OptimizerState.INITIALIZED

    def run(self, X: Any, Y: Any, w0: Any = None) -> FitResult:
        X = check_matrix(X, "X").unwrap()
        Y = check_vector(Y, "Y").unwrap()
        check_matching(Y, X, ("Y", "X")).unwrap()

        if w0 is None:
            w = generate_random_coefficients(X.shape[1], self.rng)
        else:
            w = check_vector(w0, "w0").unwrap().copy()
            check_equal_length(w, X[0], ("w0", "X row")).unwrap()

        cfg = self.cfg
        self.state = OptimizerState.INITIALIZED
        logs.info(
            f"[GradientAscent] START rows={X.shape[0]} features={X.shape[1]} "
            f"alpha={cfg.learning_rate} C={cfg.regularization} max_steps={cfg.max_steps}"
        )

        self.state = OptimizerState.ITERATING
        max_change = math.inf

        for step in range(1, cfg.max_steps + 1):
            gradient = log_likelihood_gradient(w, X, Y, cfg.regularization)
            w_new = w + cfg.learning_rate * gradient

            max_change = float(np.max(np.abs(w_new - w)))
            w = w_new

            if not math.isfinite(max_change):
                # diverged: no later step can satisfy the test
                self._fail(step, max_change)

            if step > cfg.warmup_steps and max_change < cfg.convergence_threshold:
                self.state = OptimizerState.CONVERGED

            self.on_step(StepEvent(step=step, max_change=max_change, state=self.state))

            if self.state is OptimizerState.CONVERGED:
                logs.info(f"[GradientAscent] converged after {step} steps")
                return FitResult(
                    coefficients=w,
                    steps=step,
                    converged=True,
                    metrics={"max_change": max_change},
                )

        self._fail(cfg.max_steps, max_change)

    def _fail(self, step: int, max_change: float):
        self.state = OptimizerState.FAILED
        self.on_step(StepEvent(step=step, max_change=max_change, state=self.state))
        logs.error(f"[GradientAscent] FAILED at step={step} max_change={max_change:.3e}")
        raise NonConvergenceError(step, max_change)

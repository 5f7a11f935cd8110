#!filepath: tests/training/test_optimizer.py
import numpy as np
import pytest
from loguru import logger

from logistical.config.optimizer_config import OptimizerConfig
from logistical.core.labels import to_signed_labels
from logistical.training.optimizer import (
    GradientAscentOptimizer,
    OptimizerState,
    StepEvent,
    generate_random_coefficients,
)
from logistical.utils.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    NonConvergenceError,
)


# =============================================================================
# Random coefficients
# =============================================================================

@pytest.mark.parametrize("n", [1, 2, 7])
def test_random_coefficients_length(n):
    w = generate_random_coefficients(n)

    assert w.shape == (n,)
    assert np.all((w >= 0) & (w < 1))


def test_random_coefficients_differ_between_calls():
    rng = np.random.default_rng(5)

    a = generate_random_coefficients(4, rng)
    b = generate_random_coefficients(4, rng)

    assert not np.array_equal(a, b)


@pytest.mark.parametrize("n", [0, -1, 1.5, True, None])
def test_random_coefficients_invalid_size(n):
    with pytest.raises(InvalidArgumentError):
        generate_random_coefficients(n)


# =============================================================================
# Convergence
# =============================================================================

def test_converges_on_overlapping_data(overlapping_data, fast_config):
    X, y = overlapping_data
    optimizer = GradientAscentOptimizer(fast_config)

    result = optimizer.run(X, to_signed_labels(y))

    assert result.converged
    assert optimizer.state is OptimizerState.CONVERGED
    assert result.coefficients.shape == (2,)
    assert result.steps > fast_config.warmup_steps
    assert result.metrics["max_change"] < fast_config.convergence_threshold
    # mirror symmetry: the intercept vanishes at the optimum, the slope is positive
    assert abs(result.coefficients[0]) < 1e-3
    assert result.coefficients[1] > 0


def test_emits_one_event_per_step(overlapping_data, fast_config):
    X, y = overlapping_data
    events = []

    result = GradientAscentOptimizer(fast_config, on_step=events.append).run(X, to_signed_labels(y))

    assert len(events) == result.steps
    assert all(isinstance(e, StepEvent) for e in events)
    assert [e.step for e in events] == list(range(1, result.steps + 1))
    assert all(e.state is OptimizerState.ITERATING for e in events[:-1])
    assert events[-1].state is OptimizerState.CONVERGED
    assert events[-1].max_change == result.metrics["max_change"]


def test_warmup_delays_convergence(overlapping_data, fast_config):
    X, y = overlapping_data
    cfg = fast_config.model_copy(
        update={"max_steps": 400, "warmup_fraction": 0.5, "convergence_threshold": 1e-3}
    )

    result = GradientAscentOptimizer(cfg).run(X, to_signed_labels(y))

    assert result.steps == 201


def test_seeded_runs_are_reproducible(overlapping_data, fast_config):
    X, y = overlapping_data
    Y = to_signed_labels(y)

    a = GradientAscentOptimizer(fast_config).run(X, Y)
    b = GradientAscentOptimizer(fast_config).run(X, Y)

    np.testing.assert_array_equal(a.coefficients, b.coefficients)
    assert a.steps == b.steps


def test_initial_coefficients_are_not_mutated(overlapping_data, fast_config):
    X, y = overlapping_data
    w0 = np.array([0.25, 0.25])

    GradientAscentOptimizer(fast_config).run(X, to_signed_labels(y), w0=w0)

    np.testing.assert_array_equal(w0, [0.25, 0.25])


def test_initial_coefficients_length_checked(overlapping_data, fast_config):
    X, y = overlapping_data

    with pytest.raises(DimensionMismatchError):
        GradientAscentOptimizer(fast_config).run(X, to_signed_labels(y), w0=[0.1, 0.2, 0.3])


def test_label_count_checked(overlapping_data, fast_config):
    X, _ = overlapping_data

    with pytest.raises(DimensionMismatchError):
        GradientAscentOptimizer(fast_config).run(X, [1, -1])


# =============================================================================
# Failure
# =============================================================================

def test_step_budget_exhausted(overlapping_data, fast_config):
    X, y = overlapping_data
    cfg = fast_config.model_copy(update={"max_steps": 5, "convergence_threshold": 1e-12})
    events = []
    optimizer = GradientAscentOptimizer(cfg, on_step=events.append)

    with pytest.raises(NonConvergenceError) as exc:
        optimizer.run(X, to_signed_labels(y))

    assert exc.value.steps == 5
    assert exc.value.max_change > 1e-12
    assert optimizer.state is OptimizerState.FAILED
    assert events[-1].state is OptimizerState.FAILED
    assert len(events) == 6


def test_separable_data_without_penalty_does_not_converge(fast_config):
    X = np.array([[1.0, -1.0], [1.0, -2.0], [1.0, 1.0], [1.0, 2.0]])
    Y = np.array([-1, -1, 1, 1])
    cfg = fast_config.model_copy(update={"regularization": 0.0, "max_steps": 300})

    with pytest.raises(NonConvergenceError):
        GradientAscentOptimizer(cfg).run(X, Y)


# =============================================================================
# Cross-check
# =============================================================================

def test_matches_sklearn_l2_logistic_regression():
    sklearn_linear_model = pytest.importorskip("sklearn.linear_model")

    rng = np.random.default_rng(42)
    features = rng.normal(size=(60, 2))
    logits = 1.5 * features[:, 0] - 1.0 * features[:, 1] + 0.3
    y = (logits + rng.normal(scale=1.0, size=60) > 0).astype(int)
    X = np.column_stack([np.ones(60), features])

    C = 1.0
    cfg = OptimizerConfig(
        learning_rate=0.02,
        regularization=C,
        max_steps=20000,
        convergence_threshold=1e-9,
        warmup_fraction=0.0,
        random_seed=0,
    )
    ours = GradientAscentOptimizer(cfg).run(X, to_signed_labels(y))

    # sklearn minimizes 0.5 * |w|^2 + C_sk * sum(log-loss): C_sk = 1 / C
    reference = sklearn_linear_model.LogisticRegression(
        C=1.0 / C, fit_intercept=False, tol=1e-10, max_iter=10000
    ).fit(X, y)

    np.testing.assert_allclose(ours.coefficients, reference.coef_.ravel(), atol=1e-4)


# =============================================================================
# Default diagnostics (no on_step)
# =============================================================================

@pytest.fixture
def log_records():
    records = []
    sink_id = logger.add(
        lambda msg: records.append((msg.record["level"].name, msg.record["message"])),
        level="DEBUG",
    )
    yield records
    logger.remove(sink_id)


def test_default_step_events_are_logged(overlapping_data, fast_config, log_records):
    X, y = overlapping_data

    result = GradientAscentOptimizer(fast_config).run(X, to_signed_labels(y))

    steps = [m for level, m in log_records if level == "DEBUG" and m.startswith("[GradientAscent] step=")]
    assert len(steps) == result.steps
    assert steps[0].startswith("[GradientAscent] step=1 ")
    assert "state=converged" in steps[-1]

    info = [m for level, m in log_records if level == "INFO"]
    assert any(m.startswith("[GradientAscent] START rows=6 features=2") for m in info)
    assert f"[GradientAscent] converged after {result.steps} steps" in info


def test_failed_run_is_logged_at_error(overlapping_data, fast_config, log_records):
    X, y = overlapping_data
    cfg = fast_config.model_copy(update={"max_steps": 4, "convergence_threshold": 1e-12})

    with pytest.raises(NonConvergenceError):
        GradientAscentOptimizer(cfg).run(X, to_signed_labels(y))

    errors = [m for level, m in log_records if level == "ERROR"]
    assert len(errors) == 1
    assert errors[0].startswith("[GradientAscent] FAILED at step=4")

    steps = [m for level, m in log_records if level == "DEBUG"]
    assert len(steps) == 5
    assert "state=failed" in steps[-1]

# tests/conftest.py
from __future__ import annotations

import numpy as np
import pytest
from loguru import logger

from logistical.config.optimizer_config import OptimizerConfig


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def overlapping_data():
    """
    Six 1-D examples, not linearly separable, mirror-symmetric around 0
    (x -> -x flips the label), with the intercept column prepended.
    """
    x = np.array([-2.0, -1.0, -0.5, 0.5, 1.0, 2.0])
    X = np.column_stack([np.ones_like(x), x])
    y = np.array([0, 0, 1, 0, 1, 1])
    return X, y


@pytest.fixture
def fast_config() -> OptimizerConfig:
    return OptimizerConfig(
        learning_rate=0.1,
        regularization=0.1,
        max_steps=2000,
        convergence_threshold=1e-6,
        warmup_fraction=0.01,
        random_seed=3,
    )

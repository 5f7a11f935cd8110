# logistical/training/dataset.py
from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from logistical.core.validation import check_matching, check_matrix, check_vector
from logistical.utils.errors import InvalidArgumentError


@dataclass(frozen=True)
class TrainingSet:
    """
    Ordered (X_i, y_i) pairs.

    Invariants:
    - X is a non-empty 2-D numeric matrix, every row has the same length
    - exactly one label per row
    """

    X: Any
    Y: Any

    def __post_init__(self):
        X = check_matrix(self.X, "X").unwrap()
        Y = check_vector(self.Y, "Y").unwrap()
        check_matching(Y, X, ("Y", "X")).unwrap()

        object.__setattr__(self, "X", X)
        object.__setattr__(self, "Y", Y)

    def __len__(self) -> int:
        return self.X.shape[0]

    @property
    def n_features(self) -> int:
        return self.X.shape[1]


def holdout_split(X: Any, Y: Any, validation_size: int) -> Tuple[TrainingSet, TrainingSet]:
    """
    Deterministic split: the first `validation_size` rows validate,
    the remaining rows train.

    Returns:
        (training, validation)
    """
    data = TrainingSet(X, Y)

    if isinstance(validation_size, bool) or not isinstance(validation_size, numbers.Integral):
        raise InvalidArgumentError(f"validation_size must be an integer, got {validation_size!r}")
    if not 0 < validation_size < len(data):
        raise InvalidArgumentError(
            f"validation_size must be in [1, {len(data) - 1}], got {validation_size}"
        )

    validation = TrainingSet(data.X[:validation_size], data.Y[:validation_size])
    training = TrainingSet(data.X[validation_size:], data.Y[validation_size:])
    return training, validation

# logistical/core/labels.py
from __future__ import annotations

from typing import Any

import numpy as np

from logistical.core.validation import check_vector
from logistical.utils.errors import InvalidArgumentError


def to_signed_labels(Y: Any) -> np.ndarray:
    """
    {0, 1} -> {-1, +1}. Labels already in {-1, +1} pass through.
    """
    Y = check_vector(Y, "Y").unwrap()
    values = set(np.unique(Y).tolist())

    if values <= {-1.0, 1.0}:
        return Y
    if values <= {0.0, 1.0}:
        return 2.0 * Y - 1.0

    raise InvalidArgumentError(f"labels must be in {{0, 1}} or {{-1, +1}}, got {sorted(values)}")


def to_binary_labels(Y: Any) -> np.ndarray:
    """
    {-1, +1} -> {0, 1}. Labels already in {0, 1} pass through.
    """
    signed = to_signed_labels(Y)
    return (signed > 0).astype(int)

# logistical/core/validation.py
"""
Argument checks for the numeric core.

Every check returns a Check instead of raising, so callers decide when
to fail. Check.unwrap() gives back the converted numpy array (or scalar)
or raises the carried error.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from logistical.utils.errors import (
    DimensionMismatchError,
    EmptyInputError,
    InvalidArgumentError,
    LogisticalError,
    TypeArgumentError,
)

_NUMERIC_KINDS = "biuf"


@dataclass(frozen=True)
class Check:
    value: Any = None
    error: Optional[LogisticalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


def _as_numeric_array(value: Any, name: str) -> Check:
    if value is None or isinstance(value, (str, bytes)):
        return Check(error=TypeArgumentError(f"{name} must be numeric, got {type(value).__name__}"))

    try:
        arr = np.asarray(value)
    except (TypeError, ValueError) as exc:
        # ragged nested sequences
        return Check(error=TypeArgumentError(f"{name} is not a numeric array: {exc}"))

    if arr.dtype.kind not in _NUMERIC_KINDS:
        return Check(error=TypeArgumentError(f"{name} must be numeric, got dtype={arr.dtype}"))

    return Check(value=arr.astype(float))


def check_vector(value: Any, name: str = "vector") -> Check:
    """
    1-D numeric, at least one element.
    """
    res = _as_numeric_array(value, name)
    if not res.ok:
        return res

    arr = res.value
    if arr.size == 0:
        return Check(error=EmptyInputError(f"{name} is empty"))
    if arr.ndim != 1:
        return Check(error=TypeArgumentError(f"{name} must be a vector, got ndim={arr.ndim}"))

    return Check(value=arr)


def check_matrix(value: Any, name: str = "matrix") -> Check:
    """
    2-D numeric, at least one row and one column.
    """
    res = _as_numeric_array(value, name)
    if not res.ok:
        return res

    arr = res.value
    if arr.size == 0:
        return Check(error=EmptyInputError(f"{name} is empty"))
    if arr.ndim != 2:
        return Check(error=TypeArgumentError(f"{name} must be a matrix, got ndim={arr.ndim}"))

    return Check(value=arr)


def check_equal_length(
    first: np.ndarray,
    second: np.ndarray,
    names: Tuple[str, str] = ("first", "second"),
) -> Check:
    if len(first) != len(second):
        return Check(
            error=DimensionMismatchError(
                f"{names[0]} has {len(first)} elements, {names[1]} has {len(second)}"
            )
        )
    return Check(value=(first, second))


def check_matching(
    vector: np.ndarray,
    matrix: np.ndarray,
    names: Tuple[str, str] = ("vector", "matrix"),
) -> Check:
    """
    One vector element per matrix row.
    """
    if vector.shape[0] != matrix.shape[0]:
        return Check(
            error=DimensionMismatchError(
                f"{names[0]} has {vector.shape[0]} elements, {names[1]} has {matrix.shape[0]} rows"
            )
        )
    return Check(value=(vector, matrix))


def check_scalar(value: Any, name: str = "value") -> Check:
    """
    Finite real scalar. bool is rejected even though it is an int.
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        return Check(error=InvalidArgumentError(f"{name} must be a real number, got {value!r}"))

    value = float(value)
    if not math.isfinite(value):
        return Check(error=InvalidArgumentError(f"{name} must be finite, got {value!r}"))

    return Check(value=value)

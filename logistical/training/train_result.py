from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np


@dataclass(frozen=True)
class FitResult:
    """
    FitResult

    - in-memory outcome of one converged optimizer run
    - no I/O semantics
    """
    coefficients: np.ndarray
    steps: int
    converged: bool
    metrics: Dict[str, Any] = field(default_factory=dict)

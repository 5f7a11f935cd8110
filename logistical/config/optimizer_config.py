# logistical/config/optimizer_config.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class OptimizerConfig(BaseModel):
    """
    Gradient-ascent settings for one training run.

    warmup_fraction:
        share of max_steps during which a small step never counts as
        convergence (10 of 5000 steps by default)
    """

    learning_rate: float = Field(default=0.0005, gt=0)
    regularization: float = Field(default=0.0007, ge=0)
    max_steps: int = Field(default=5000, ge=1)
    convergence_threshold: float = Field(default=0.0005, gt=0)
    warmup_fraction: float = Field(default=0.002, ge=0, lt=1)
    random_seed: Optional[int] = None

    @property
    def warmup_steps(self) -> float:
        return self.warmup_fraction * self.max_steps

#!filepath: logistical/__init__.py

from .utils.logger import Logging, logs, init_logging
from .config.app_config import AppConfig
from .config.optimizer_config import OptimizerConfig
from .core.functions import logistic, score, scores, add_intercept
from .core.likelihood import log_likelihood, log_likelihood_gradient
from .training.optimizer import GradientAscentOptimizer, generate_random_coefficients
from .classifier import Classifier

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "AppConfig", "OptimizerConfig",
    "logistic", "score", "scores", "add_intercept",
    "log_likelihood", "log_likelihood_gradient",
    "GradientAscentOptimizer", "generate_random_coefficients",
    "Classifier",
]

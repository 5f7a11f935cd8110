#!filepath: logistical/utils/logger.py
import os
import sys
from functools import wraps
from time import perf_counter
from typing import Callable, Optional

from loguru import logger


class Logging:
    """
    Package logger
    ---------------------------------------
    - constructing it replaces every loguru sink (stderr by default)
    - the module-level `logs` does NOT touch sinks: records go to whatever
      handlers the host application registered, until init_logging()
    - optional dated file sink with rotation / retention
    - function-level decorator that logs and re-raises
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        configure: bool = True,
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        if configure:
            if self.log_dir is not None:
                os.makedirs(self.log_dir, exist_ok=True)
            self._configure()

    def _configure(self) -> None:
        """
        Replace every loguru sink with ours.
        """
        logger.remove()

        fmt = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"

        if self.log_dir is None:
            logger.add(sink=sys.stderr, level=self.level, format=fmt)
        else:
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format=fmt,
                backtrace=True,
                diagnose=True,
            )

    # ----------- log methods -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- decorator ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_time: bool = True,
    ) -> Callable:
        """
        Log any exception raised by the wrapped function, then re-raise it.

        Usage:
            @logs.catch("fit failed")
            def fit(self, X, Y): ...
        """

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_time:
                    cost = perf_counter() - start
                    logger.debug(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


# package-wide logs: host sinks untouched until init_logging
logs = Logging(configure=False)


def init_logging(cfg) -> Logging:
    """
    Re-point the package logger at the sinks described by a LogConfig.
    """
    logs.log_dir = cfg.dir
    logs.rotation = cfg.rotation
    logs.retention = cfg.retention
    logs.level = cfg.level

    if logs.log_dir is not None:
        os.makedirs(logs.log_dir, exist_ok=True)
    logs._configure()
    return logs

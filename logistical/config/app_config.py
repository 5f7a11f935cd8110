#!filepath: logistical/config/app_config.py
import os

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .optimizer_config import OptimizerConfig
from logistical.utils.logger import logs

LOG_LEVEL_ENV = "LOGISTICAL_LOG_LEVEL"


def default_config_path() -> str:
    """
    logistical/config/app_config.py → logistical/config/base.yml
    """
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    optimizer: OptimizerConfig = Field(default_factory=OptimizerConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env
        - defaults to the base.yml shipped with the package
        - .env is searched from the current working directory
        - LOGISTICAL_LOG_LEVEL overrides log.level
        """
        env_path = find_dotenv(usecwd=True)
        if env_path:
            load_dotenv(env_path)

        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        level = os.getenv(LOG_LEVEL_ENV)
        if level:
            raw["log"] = {**(raw.get("log") or {}), "level": level}

        logs.debug(f"[AppConfig] loaded {path}")
        return cls(**raw)

#!filepath: rewardpool/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from .log_config import LogConfig
from .pool_config import PoolConfig


def project_root() -> str:
    """
    Project root, derived from this file's location:
    rewardpool/config/app_config.py -> rewardpool/config -> rewardpool -> project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    pool: PoolConfig

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env
        - default file: <project_root>/rewardpool/config/base.yml
        - independent of the current working directory
        - REWARDPOOL_LOG_LEVEL overrides log.level
        """
        root = project_root()

        # 1) .env at the project root
        load_dotenv(os.path.join(root, ".env"))

        # 2) resolve config path
        if path is None:
            path = os.path.join(root, "rewardpool/config/base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) read YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) environment overrides
        level = os.getenv("REWARDPOOL_LOG_LEVEL")
        if level:
            raw.setdefault("log", {})
            raw["log"]["level"] = level

        return cls(**raw)

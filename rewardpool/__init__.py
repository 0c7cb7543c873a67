#!filepath: rewardpool/__init__.py

from .utils.logger import Logging, logs, init_logging
from .config.app_config import AppConfig
from .config.pool_config import PoolConfig
from .pool.controller import RewardPool
from .pool.factory import create_pool

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "AppConfig",
    "PoolConfig",
    "RewardPool",
    "create_pool",
]

#!filepath: tests/config/test_app_config.py
import pytest
import yaml
from pydantic import ValidationError

from rewardpool.config.app_config import AppConfig
from rewardpool.config.log_config import LogConfig
from rewardpool.config.pool_config import PoolConfig


@pytest.fixture
def sample_config_file(tmp_path):
    data = {
        "log": {
            "dir": "logs",
            "rotation": "1 day",
            "retention": "30 days",
            "level": "DEBUG",
        },
        "pool": {
            "staking_token": "STK",
            "reward_token": "RWD",
            "total_reward": 10 ** 24,
            "duration": 86_400,
        },
    }

    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_file


def test_app_config_load(sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    assert isinstance(cfg.log, LogConfig)
    assert isinstance(cfg.pool, PoolConfig)
    assert cfg.log.level == "DEBUG"
    assert cfg.pool.total_reward == 10 ** 24


def test_default_config_file_loads():
    cfg = AppConfig.load()
    assert cfg.pool.staking_token == "STK"
    assert cfg.pool.schedule(start_time=0).reward_rate > 0


def test_env_overrides_log_level(sample_config_file, monkeypatch):
    monkeypatch.setenv("REWARDPOOL_LOG_LEVEL", "WARNING")
    cfg = AppConfig.load(path=str(sample_config_file))
    assert cfg.log.level == "WARNING"


def test_log_section_is_optional(tmp_path):
    f = tmp_path / "pool_only.yaml"
    f.write_text(
        yaml.safe_dump({"pool": {"staking_token": "A", "reward_token": "B", "total_reward": 100, "duration": 10}}),
        encoding="utf-8",
    )
    cfg = AppConfig.load(path=str(f))
    assert cfg.log == LogConfig()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(path=str(tmp_path / "nope.yaml"))


def test_missing_pool_section_should_fail(tmp_path):
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text(yaml.safe_dump({"log": {"dir": "logs"}}))

    with pytest.raises(ValidationError):
        AppConfig.load(path=str(bad_file))

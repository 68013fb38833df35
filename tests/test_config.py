"""Tests for loading device profiles from YAML and the environment."""

import logging
from datetime import timedelta

import pytest
from pydantic import ValidationError

from slowfs.config import SlowFsConfig, UnknownProfileError
from slowfs.device import HARD_DRIVE_DEVICE_CONFIG
from slowfs.strategies import FsyncStrategy, WriteStrategy
from slowfs.units import Gibibyte, Mebibyte

SSD_YAML = """\
device: ssd
profiles:
  ssd:
    seek_window: 4KiB
    seek_time: 100us
    read_bytes_per_second: 500MiB
    write_bytes_per_second: 400MiB
    allocate_bytes_per_second: 2000GiB
    request_reorder_max_delay: 10us
    fsync_strategy: wbc
    write_strategy: simulate
    metadata_op_time: 50us
"""


def test_defaults_select_hard_drive():
    config = SlowFsConfig()
    assert config.device == "hdd"
    assert config.device_config() == HARD_DRIVE_DEVICE_CONFIG
    assert config.profile_names() == ["hdd"]


def test_from_yaml_loads_profiles(tmp_path):
    path = tmp_path / "slowfs.yaml"
    path.write_text(SSD_YAML)
    config = SlowFsConfig.from_yaml(path)

    ssd = config.device_config()
    assert config.device == "ssd"
    assert ssd.seek_time == timedelta(microseconds=100)
    assert ssd.read_bytes_per_second == 500 * Mebibyte
    assert ssd.allocate_bytes_per_second == 2000 * Gibibyte
    assert ssd.fsync_strategy is FsyncStrategy.WRITE_BACK_CACHED_FSYNC
    assert ssd.write_strategy is WriteStrategy.SIMULATE_WRITE
    # Built-ins remain available next to user profiles.
    assert config.device_config("hdd") == HARD_DRIVE_DEVICE_CONFIG
    assert config.profile_names() == ["hdd", "ssd"]


def test_user_profile_overrides_builtin(tmp_path):
    path = tmp_path / "slowfs.yaml"
    path.write_text(SSD_YAML.replace("  ssd:", "  hdd:"))
    config = SlowFsConfig.from_yaml(path)
    assert config.device_config("hdd").seek_time == timedelta(microseconds=100)


def test_missing_file_uses_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="slowfs.config"):
        config = SlowFsConfig.from_yaml(tmp_path / "nope.yaml")
    assert config == SlowFsConfig()
    assert "not found" in caplog.text


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert SlowFsConfig.from_yaml(path) == SlowFsConfig()


def test_invalid_profile_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(SSD_YAML.replace("read_bytes_per_second: 500MiB", "read_bytes_per_second: 0"))
    with pytest.raises(ValidationError):
        SlowFsConfig.from_yaml(path)


def test_bad_strategy_in_file_names_input(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(SSD_YAML.replace("fsync_strategy: wbc", "fsync_strategy: sometimes"))
    with pytest.raises(ValidationError, match="unknown fsync strategy sometimes"):
        SlowFsConfig.from_yaml(path)


def test_unknown_profile_lists_available():
    with pytest.raises(UnknownProfileError) as exc:
        SlowFsConfig(device="nvme").device_config()
    assert isinstance(exc.value, KeyError)
    assert "nvme" in str(exc.value)
    assert "hdd" in str(exc.value)


def test_from_env(tmp_path, monkeypatch):
    path = tmp_path / "slowfs.yaml"
    path.write_text(SSD_YAML)
    monkeypatch.setenv("SLOWFS_CONFIG", str(path))
    monkeypatch.setenv("SLOWFS_DEVICE", "hdd")
    config = SlowFsConfig.from_env()
    assert "ssd" in config.profiles
    assert config.device_config() == HARD_DRIVE_DEVICE_CONFIG


def test_from_env_without_variables(monkeypatch):
    monkeypatch.delenv("SLOWFS_CONFIG", raising=False)
    monkeypatch.delenv("SLOWFS_DEVICE", raising=False)
    assert SlowFsConfig.from_env() == SlowFsConfig()


def test_yaml_no_parses_as_no_fsync(tmp_path):
    """YAML turns a bare `no` into False, which still means NO_FSYNC."""
    path = tmp_path / "slowfs.yaml"
    path.write_text(SSD_YAML.replace("fsync_strategy: wbc", "fsync_strategy: no"))
    config = SlowFsConfig.from_yaml(path)
    assert config.device_config().fsync_strategy is FsyncStrategy.NO_FSYNC


@pytest.mark.parametrize("value", ["yes", "on", "true"])
def test_yaml_true_is_not_a_fsync_strategy(tmp_path, value):
    path = tmp_path / "slowfs.yaml"
    path.write_text(SSD_YAML.replace("fsync_strategy: wbc", f"fsync_strategy: {value}"))
    with pytest.raises(ValidationError, match="unknown fsync strategy True"):
        SlowFsConfig.from_yaml(path)


@pytest.mark.parametrize("value", ["yes", "no"])
def test_yaml_booleans_are_not_write_strategies(tmp_path, value):
    path = tmp_path / "slowfs.yaml"
    path.write_text(SSD_YAML.replace("write_strategy: simulate", f"write_strategy: {value}"))
    with pytest.raises(ValidationError, match="unknown write strategy"):
        SlowFsConfig.from_yaml(path)

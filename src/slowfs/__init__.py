"""Device timing model for the slowfs I/O-latency simulator."""

from slowfs.config import SlowFsConfig, UnknownProfileError
from slowfs.device import DUMB_FSYNC_SEEK_MULTIPLIER, HARD_DRIVE_DEVICE_CONFIG, DeviceConfig
from slowfs.strategies import (
    FsyncStrategy,
    UnknownStrategyError,
    WriteStrategy,
    fsync_strategy_name,
    parse_fsync_strategy,
    parse_write_strategy,
    write_strategy_name,
)
from slowfs.units import (
    Gibibyte,
    Kibibyte,
    Mebibyte,
    NumBytes,
    Tebibyte,
    parse_duration,
    parse_num_bytes,
)

__all__ = [
    "DUMB_FSYNC_SEEK_MULTIPLIER",
    "DeviceConfig",
    "FsyncStrategy",
    "Gibibyte",
    "HARD_DRIVE_DEVICE_CONFIG",
    "Kibibyte",
    "Mebibyte",
    "NumBytes",
    "SlowFsConfig",
    "Tebibyte",
    "UnknownProfileError",
    "UnknownStrategyError",
    "WriteStrategy",
    "fsync_strategy_name",
    "parse_duration",
    "parse_fsync_strategy",
    "parse_num_bytes",
    "parse_write_strategy",
    "write_strategy_name",
]

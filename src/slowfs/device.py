"""Device profiles: how a physical medium converts bytes to time and back."""

from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from slowfs.strategies import (
    FsyncStrategy,
    UnknownStrategyError,
    WriteStrategy,
    parse_fsync_strategy,
    parse_write_strategy,
)
from slowfs.units import (
    MICROSECONDS_PER_SECOND,
    SECOND,
    Kibibyte,
    Mebibyte,
    NumBytes,
    format_duration,
    format_num_bytes,
    parse_duration,
    parse_num_bytes,
)

# Chosen arbitrarily; a dumb fsync costs this many seeks.
DUMB_FSYNC_SEEK_MULTIPLIER = 10

_MAX_MICROS = timedelta.max // timedelta(microseconds=1)
_MIN_MICROS = timedelta.min // timedelta(microseconds=1)


class DeviceConfig(BaseModel):
    """Describes how a physical medium (e.g. a rotational hard drive) behaves.

    Instances are frozen. Byte fields accept ints or strings like ``"4KiB"``,
    duration fields accept timedeltas, seconds or strings like ``"10ms"``,
    and strategy fields accept the enum, its value or any parse synonym.
    """

    model_config = ConfigDict(frozen=True)

    # How many bytes ahead of the last access still count as sequential.
    seek_window: NumBytes
    # Average time of a seek.
    seek_time: timedelta
    read_bytes_per_second: NumBytes
    write_bytes_per_second: NumBytes
    # Throughput of fallocate-style block allocation.
    allocate_bytes_per_second: NumBytes
    # How much later a request may arrive than a previous one and still be
    # reordered before it.
    request_reorder_max_delay: timedelta
    fsync_strategy: FsyncStrategy
    write_strategy: WriteStrategy
    # Cost of metadata-only operations (chmod, chown, rename, ...).
    metadata_op_time: timedelta

    @field_validator(
        "seek_window",
        "read_bytes_per_second",
        "write_bytes_per_second",
        "allocate_bytes_per_second",
        mode="before",
    )
    @classmethod
    def _parse_bytes(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_num_bytes(v)
        return v

    @field_validator(
        "seek_time", "request_reorder_max_delay", "metadata_op_time", mode="before"
    )
    @classmethod
    def _parse_duration(cls, v: Any) -> Any:
        if isinstance(v, (str, int, float)) and not isinstance(v, bool):
            return parse_duration(v)
        return v

    @field_validator("fsync_strategy", mode="before")
    @classmethod
    def _parse_fsync(cls, v: Any) -> Any:
        # YAML reads a bare `no` as False.
        if v is False:
            return parse_fsync_strategy("no")
        if isinstance(v, bool):
            raise UnknownStrategyError("fsync", str(v))
        if isinstance(v, str):
            return parse_fsync_strategy(v)
        return v

    @field_validator("write_strategy", mode="before")
    @classmethod
    def _parse_write(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise UnknownStrategyError("write", str(v))
        if isinstance(v, str):
            return parse_write_strategy(v)
        return v

    @field_validator(
        "read_bytes_per_second", "write_bytes_per_second", "allocate_bytes_per_second"
    )
    @classmethod
    def _check_rate(cls, v: NumBytes) -> NumBytes:
        if v <= 0:
            raise ValueError(f"throughput must be positive, got {v}")
        return v

    @field_validator("seek_window")
    @classmethod
    def _check_window(cls, v: NumBytes) -> NumBytes:
        if v < 0:
            raise ValueError(f"seek window must not be negative, got {v}")
        return v

    @field_validator("seek_time", "request_reorder_max_delay", "metadata_op_time")
    @classmethod
    def _check_duration(cls, v: timedelta) -> timedelta:
        if v < timedelta(0):
            raise ValueError(f"duration must not be negative, got {v}")
        return v

    def write_time(self, num_bytes: NumBytes) -> timedelta:
        """How long writing num_bytes takes."""
        return _time_from_throughput(num_bytes, self.write_bytes_per_second)

    def read_time(self, num_bytes: NumBytes) -> timedelta:
        """How long reading num_bytes takes."""
        return _time_from_throughput(num_bytes, self.read_bytes_per_second)

    def allocate_time(self, num_bytes: NumBytes) -> timedelta:
        """How long allocating num_bytes takes."""
        return _time_from_throughput(num_bytes, self.allocate_bytes_per_second)

    def writable_bytes(self, duration: timedelta) -> NumBytes:
        """How many bytes can be written in duration (0 if duration <= 0)."""
        return _bytes_from_time(duration, self.write_bytes_per_second)

    def readable_bytes(self, duration: timedelta) -> NumBytes:
        """How many bytes can be read in duration (0 if duration <= 0)."""
        return _bytes_from_time(duration, self.read_bytes_per_second)

    @property
    def dumb_fsync_time(self) -> timedelta:
        """Fixed fsync cost under FsyncStrategy.DUMB_FSYNC."""
        return DUMB_FSYNC_SEEK_MULTIPLIER * self.seek_time

    def with_changes(self, **changes: Any) -> "DeviceConfig":
        """Return a validated copy with some fields replaced."""
        return type(self).model_validate({**self.model_dump(), **changes})

    def describe(self) -> dict[str, str]:
        """Human-readable field values, e.g. ``{"seek_time": "10ms", ...}``."""
        return {
            "seek_window": format_num_bytes(self.seek_window),
            "seek_time": format_duration(self.seek_time),
            "read_bytes_per_second": format_num_bytes(self.read_bytes_per_second) + "/s",
            "write_bytes_per_second": format_num_bytes(self.write_bytes_per_second) + "/s",
            "allocate_bytes_per_second": format_num_bytes(self.allocate_bytes_per_second) + "/s",
            "request_reorder_max_delay": format_duration(self.request_reorder_max_delay),
            "fsync_strategy": str(self.fsync_strategy),
            "write_strategy": str(self.write_strategy),
            "metadata_op_time": format_duration(self.metadata_op_time),
        }


def _time_from_throughput(num_bytes: NumBytes, bytes_per_second: NumBytes) -> timedelta:
    # Truncates toward zero at microsecond resolution. Negative sizes are not
    # clamped; results past the timedelta range saturate.
    try:
        micros = num_bytes / bytes_per_second * MICROSECONDS_PER_SECOND
    except OverflowError:
        return timedelta.max if num_bytes > 0 else timedelta.min
    if micros >= _MAX_MICROS:
        return timedelta.max
    if micros <= _MIN_MICROS:
        return timedelta.min
    return timedelta(microseconds=int(micros))


def _bytes_from_time(duration: timedelta, bytes_per_second: NumBytes) -> NumBytes:
    if duration <= timedelta(0):
        return 0
    return int(duration / SECOND * bytes_per_second)


# A basic model of a 7200rpm hard disk.
HARD_DRIVE_DEVICE_CONFIG = DeviceConfig(
    seek_window=4 * Kibibyte,
    seek_time=timedelta(milliseconds=10),
    read_bytes_per_second=100 * Mebibyte,
    write_bytes_per_second=100 * Mebibyte,
    # 4096 times faster than writing, since ext4 blocks are 4 KiB.
    allocate_bytes_per_second=4096 * 100 * Mebibyte,
    request_reorder_max_delay=timedelta(microseconds=100),
    fsync_strategy=FsyncStrategy.WRITE_BACK_CACHED_FSYNC,
    write_strategy=WriteStrategy.FAST_WRITE,
    metadata_op_time=timedelta(milliseconds=10),
)

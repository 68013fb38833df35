"""Byte-size and duration units used by device profiles.

Byte counts are plain ints (``NumBytes``). Durations are ``datetime.timedelta``
values, which carry microsecond resolution and may be negative.
"""

import re
from datetime import timedelta

NumBytes = int

# IEC (power of two)
Byte = 1
Kibibyte = 1024 * Byte
Mebibyte = 1024 * Kibibyte
Gibibyte = 1024 * Mebibyte
Tebibyte = 1024 * Gibibyte

# SI (power of ten)
Kilobyte = 1000 * Byte
Megabyte = 1000 * Kilobyte
Gigabyte = 1000 * Megabyte
Terabyte = 1000 * Gigabyte

SECOND = timedelta(seconds=1)
MICROSECONDS_PER_SECOND = 1_000_000

_BYTE_SUFFIXES: dict[str, int] = {
    "": Byte,
    "b": Byte,
    "k": Kibibyte,
    "kib": Kibibyte,
    "m": Mebibyte,
    "mib": Mebibyte,
    "g": Gibibyte,
    "gib": Gibibyte,
    "t": Tebibyte,
    "tib": Tebibyte,
    "kb": Kilobyte,
    "mb": Megabyte,
    "gb": Gigabyte,
    "tb": Terabyte,
}

_IEC_UNITS = [
    ("TiB", Tebibyte),
    ("GiB", Gibibyte),
    ("MiB", Mebibyte),
    ("KiB", Kibibyte),
]

# Compact durations: "10ms", "1h2m3.5s", "-100us"
_DURATION_UNITS_US: dict[str, float] = {
    "ns": 0.001,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1_000.0,
    "s": 1_000_000.0,
    "m": 60_000_000.0,
    "h": 3_600_000_000.0,
}

_BYTES_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")
_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_num_bytes(value: int | str) -> NumBytes:
    """Parse a byte count such as ``4096``, ``"4KiB"`` or ``"1.5 GB"``.

    Bare ``K``/``M``/``G``/``T`` suffixes are treated as IEC units.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid byte size {value!r}")
    if isinstance(value, int):
        return value
    match = _BYTES_RE.match(str(value))
    if not match:
        raise ValueError(f"invalid byte size {value!r}")
    number, suffix = match.groups()
    multiplier = _BYTE_SUFFIXES.get(suffix.lower())
    if multiplier is None:
        raise ValueError(f"invalid byte size {value!r}: unknown unit {suffix!r}")
    if "." in number:
        return int(float(number) * multiplier)
    return int(number) * multiplier


def format_num_bytes(num_bytes: NumBytes) -> str:
    """Format with the largest IEC unit that divides evenly, e.g. ``100MiB``."""
    for suffix, size in _IEC_UNITS:
        if num_bytes and num_bytes % size == 0:
            return f"{num_bytes // size}{suffix}"
    return f"{num_bytes}B"


def parse_duration(value: timedelta | int | float | str) -> timedelta:
    """Parse a duration.

    Numbers are seconds. Strings are unit-suffixed (``"10ms"``,
    ``"100us"``, ``"1m30s"``); ``"0"`` is accepted without a unit.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"invalid duration {value!r}")
    if isinstance(value, (int, float)):
        try:
            return timedelta(seconds=value)
        except OverflowError:
            raise ValueError(f"duration {value!r} out of range") from None

    text = str(value).strip()
    sign = 1
    body = text
    if body[:1] in ("-", "+"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {value!r}")

    total_us = 0.0
    pos = 0
    for match in _DURATION_PART_RE.finditer(body):
        if match.start() != pos:
            raise ValueError(f"invalid duration {value!r}")
        total_us += float(match.group(1)) * _DURATION_UNITS_US[match.group(2)]
        pos = match.end()
    if pos != len(body):
        raise ValueError(f"invalid duration {value!r}")
    try:
        return timedelta(microseconds=sign * total_us)
    except OverflowError:
        raise ValueError(f"duration {value!r} out of range") from None


def format_duration(duration: timedelta) -> str:
    """Format a duration in the largest whole unit, e.g. ``10ms`` or ``100us``."""
    micros = duration // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    for suffix, size in (("s", 1_000_000), ("ms", 1_000)):
        if micros % size == 0:
            return f"{micros // size}{suffix}"
    return f"{micros}us"

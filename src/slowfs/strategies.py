"""Fsync and write strategies selectable per device profile."""

from enum import IntEnum


class UnknownStrategyError(ValueError):
    """A strategy name did not match any known synonym."""

    def __init__(self, kind: str, text: str):
        super().__init__(f"unknown {kind} strategy {text}")
        self.kind = kind
        self.text = text


class FsyncStrategy(IntEnum):
    """How fsync calls are timed.

    - NO_FSYNC: fsync takes zero time.
    - DUMB_FSYNC: fsync takes ten seek times, regardless of pending data.
    - WRITE_BACK_CACHED_FSYNC: writes are cached and flushed during spare IO
      time; fsync takes as long as writing out the file's unflushed data.
    """

    NO_FSYNC = 0
    DUMB_FSYNC = 1
    WRITE_BACK_CACHED_FSYNC = 2

    def __str__(self) -> str:
        return fsync_strategy_name(self)

    @classmethod
    def parse(cls, text: str) -> "FsyncStrategy":
        return parse_fsync_strategy(text)


class WriteStrategy(IntEnum):
    """How write calls are timed.

    - FAST_WRITE: writes take zero time, as if cached. Pairs with
      WRITE_BACK_CACHED_FSYNC.
    - SIMULATE_WRITE: writes behave like reads, seeking when non-sequential
      and transferring at the write throughput.
    """

    FAST_WRITE = 0
    SIMULATE_WRITE = 1

    def __str__(self) -> str:
        return write_strategy_name(self)

    @classmethod
    def parse(cls, text: str) -> "WriteStrategy":
        return parse_write_strategy(text)


_FSYNC_NAMES = {
    FsyncStrategy.NO_FSYNC: "NoFsync",
    FsyncStrategy.DUMB_FSYNC: "DumbFsync",
    FsyncStrategy.WRITE_BACK_CACHED_FSYNC: "WriteBackCachedFsync",
}

_WRITE_NAMES = {
    WriteStrategy.FAST_WRITE: "FastWrite",
    WriteStrategy.SIMULATE_WRITE: "SimulateWrite",
}

FSYNC_SYNONYMS: dict[str, FsyncStrategy] = {
    "nofsync": FsyncStrategy.NO_FSYNC,
    "none": FsyncStrategy.NO_FSYNC,
    "no": FsyncStrategy.NO_FSYNC,
    "dumbfsync": FsyncStrategy.DUMB_FSYNC,
    "dumb": FsyncStrategy.DUMB_FSYNC,
    "writebackcachedfsync": FsyncStrategy.WRITE_BACK_CACHED_FSYNC,
    "writebackcache": FsyncStrategy.WRITE_BACK_CACHED_FSYNC,
    "wbc": FsyncStrategy.WRITE_BACK_CACHED_FSYNC,
}

WRITE_SYNONYMS: dict[str, WriteStrategy] = {
    "fastwrite": WriteStrategy.FAST_WRITE,
    "fast": WriteStrategy.FAST_WRITE,
    "simulatewrite": WriteStrategy.SIMULATE_WRITE,
    "simulate": WriteStrategy.SIMULATE_WRITE,
}


def fsync_strategy_name(value: int) -> str:
    """Display name for any integer; out-of-range values get a sentinel."""
    return _FSYNC_NAMES.get(value, "unknown fsync strategy")


def write_strategy_name(value: int) -> str:
    """Display name for any integer; out-of-range values get a sentinel."""
    return _WRITE_NAMES.get(value, "unknown write strategy")


def parse_fsync_strategy(text: str) -> FsyncStrategy:
    """Case-insensitive parse, e.g. ``nofsync``, ``none`` and ``no`` all give NO_FSYNC."""
    try:
        return FSYNC_SYNONYMS[text.lower()]
    except KeyError:
        raise UnknownStrategyError("fsync", text) from None


def parse_write_strategy(text: str) -> WriteStrategy:
    """Case-insensitive parse, e.g. ``fastwrite`` and ``fast`` both give FAST_WRITE."""
    try:
        return WRITE_SYNONYMS[text.lower()]
    except KeyError:
        raise UnknownStrategyError("write", text) from None

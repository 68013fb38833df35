"""Inspect device profiles and estimate operation timings.

Usage:
    slowfs-device show                       # Print the selected profile
    slowfs-device --device ssd show          # Print a named profile
    slowfs-device list                       # List available profiles
    slowfs-device time read 100MiB           # How long a 100 MiB read takes
    slowfs-device bytes write 10ms           # Bytes writable in 10 ms
    slowfs-device --config slowfs.yaml show  # Load profiles from a file
"""

import argparse
import logging
import sys

from slowfs.config import SlowFsConfig, UnknownProfileError
from slowfs.units import format_num_bytes, parse_duration, parse_num_bytes

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slowfs-device", description="slowfs device timing model"
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="YAML profile file (default: $SLOWFS_CONFIG)",
    )
    parser.add_argument(
        "--device", type=str, default=None,
        help="Profile name (default: the file's 'device', else hdd)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Print the profile's parameters")
    sub.add_parser("list", help="List available profile names")

    time_p = sub.add_parser("time", help="Time taken to transfer SIZE bytes")
    time_p.add_argument("op", choices=["read", "write", "allocate"])
    time_p.add_argument("size", help="Byte count, e.g. 4096 or 100MiB")

    bytes_p = sub.add_parser("bytes", help="Bytes transferable within DURATION")
    bytes_p.add_argument("op", choices=["read", "write"])
    bytes_p.add_argument("duration", help="Duration, e.g. 10ms or 1.5s")
    return parser


def _load_config(args: argparse.Namespace) -> SlowFsConfig:
    config = SlowFsConfig.from_yaml(args.config) if args.config else SlowFsConfig.from_env()
    if args.device:
        config = config.model_copy(update={"device": args.device})
    return config


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(args)
        if args.command == "list":
            for name in config.profile_names():
                marker = "*" if name == config.device else " "
                print(f"{marker} {name}")
            return 0

        device = config.device_config()
        logger.debug("using device profile %r", config.device)

        if args.command == "show":
            print(f"profile: {config.device}")
            for field, value in device.describe().items():
                print(f"  {field}: {value}")
        elif args.command == "time":
            num_bytes = parse_num_bytes(args.size)
            duration = {
                "read": device.read_time,
                "write": device.write_time,
                "allocate": device.allocate_time,
            }[args.op](num_bytes)
            print(f"{args.op} {format_num_bytes(num_bytes)}: {duration.total_seconds():.6f}s")
        elif args.command == "bytes":
            duration = parse_duration(args.duration)
            convert = device.readable_bytes if args.op == "read" else device.writable_bytes
            num_bytes = convert(duration)
            print(f"{args.op} in {args.duration}: {num_bytes} bytes ({format_num_bytes(num_bytes)})")
    except (UnknownProfileError, ValueError, OverflowError) as e:
        print(f"slowfs-device: error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

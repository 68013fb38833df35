"""Named device profiles loaded from YAML or the environment."""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from slowfs.device import HARD_DRIVE_DEVICE_CONFIG, DeviceConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SLOWFS_CONFIG"
DEVICE_ENV_VAR = "SLOWFS_DEVICE"

BUILTIN_PROFILES: dict[str, DeviceConfig] = {
    "hdd": HARD_DRIVE_DEVICE_CONFIG,
}


class UnknownProfileError(KeyError):
    """No device profile with the requested name."""

    def __init__(self, name: str, available: list[str]):
        super().__init__(name)
        self.name = name
        self.available = available

    def __str__(self) -> str:
        return f"unknown device profile {self.name!r} (available: {', '.join(self.available)})"


class SlowFsConfig(BaseModel):
    """Selected device profile plus user-defined profiles.

    User profiles are merged over the built-in ones, so a file may redefine
    ``hdd`` or add new names.
    """

    device: str = "hdd"
    profiles: dict[str, DeviceConfig] = Field(default_factory=dict)

    def profile_names(self) -> list[str]:
        return sorted({**BUILTIN_PROFILES, **self.profiles})

    def device_config(self, name: str | None = None) -> DeviceConfig:
        """Resolve a profile by name, defaulting to the selected device."""
        name = name or self.device
        if name in self.profiles:
            return self.profiles[name]
        if name in BUILTIN_PROFILES:
            return BUILTIN_PROFILES[name]
        raise UnknownProfileError(name, self.profile_names())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SlowFsConfig":
        """Load config from YAML file; a missing file yields the defaults."""
        path = Path(path)
        if not path.exists():
            logger.warning("config file %s not found, using built-in profiles", path)
            return cls()
        logger.debug("loading device profiles from %s", path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        config = cls.model_validate(data)
        logger.debug(
            "loaded %d profile(s), selected device %r", len(config.profiles), config.device
        )
        return config

    @classmethod
    def from_env(cls) -> "SlowFsConfig":
        """Load config from SLOWFS_CONFIG, selecting SLOWFS_DEVICE if set."""
        config_path = os.getenv(CONFIG_ENV_VAR)
        config = cls.from_yaml(config_path) if config_path else cls()
        device = os.getenv(DEVICE_ENV_VAR)
        if device:
            config = config.model_copy(update={"device": device})
        return config

"""Accessory configuration."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .const.defaults import (
    DEFAULT_ARM_SECONDS,
    DEFAULT_NAME,
    DEFAULT_SIREN_NAME,
    DEFAULT_TRIGGER_SECONDS,
)
from .exceptions import SecuritySystemConfigError

_LOGGER = logging.getLogger(__name__)

# Accessory identifier used in homebridge config.json documents
HOMEBRIDGE_ACCESSORY = "Security system"


@dataclass(frozen=True)
class SecuritySystemConfig:
    """Immutable accessory configuration."""

    name: str = DEFAULT_NAME
    siren_name: str = DEFAULT_SIREN_NAME
    arm_seconds: float = DEFAULT_ARM_SECONDS
    trigger_seconds: float = DEFAULT_TRIGGER_SECONDS
    sounds_dir: Path | None = None

    def __post_init__(self) -> None:
        for key in ("arm_seconds", "trigger_seconds"):
            value = getattr(self, key)
            if value < 0:
                raise SecuritySystemConfigError(f"{key} must not be negative, got {value}")

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SecuritySystemConfig":
        """Build configuration from a raw mapping.

        Accepts the homebridge accessory keys (``name``, ``arm_seconds``,
        ``trigger_seconds``) plus ``siren_name`` and ``sounds_dir``.
        Missing delays default to 0.

        Args:
            raw: Mapping of configuration values

        Returns:
            Parsed configuration

        Raises:
            SecuritySystemConfigError: If a value has the wrong type or range
        """
        if not isinstance(raw, dict):
            raise SecuritySystemConfigError("Configuration must be a mapping")

        sounds_dir = raw.get("sounds_dir")

        config = cls(
            name=str(raw.get("name") or DEFAULT_NAME),
            siren_name=str(raw.get("siren_name") or DEFAULT_SIREN_NAME),
            arm_seconds=_seconds(raw, "arm_seconds", DEFAULT_ARM_SECONDS),
            trigger_seconds=_seconds(raw, "trigger_seconds", DEFAULT_TRIGGER_SECONDS),
            sounds_dir=Path(sounds_dir).expanduser() if sounds_dir else None,
        )
        _LOGGER.debug(f"Configuration parsed: {config}")
        return config

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable view of the configuration."""
        return {
            "name": self.name,
            "siren_name": self.siren_name,
            "arm_seconds": self.arm_seconds,
            "trigger_seconds": self.trigger_seconds,
            "sounds_dir": str(self.sounds_dir) if self.sounds_dir else None,
        }


def _seconds(raw: dict[str, Any], key: str, default: float) -> float:
    value = raw.get(key)
    if value is None or str(value).strip() == "":
        return default
    if isinstance(value, bool):
        raise SecuritySystemConfigError(f"{key} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise SecuritySystemConfigError(f"{key} must be a number, got {value!r}") from e


def normalize_config(raw: Any) -> dict[str, Any] | None:
    """Normalize a loaded document into a flat accessory mapping.

    Accepts these shapes:
    - {arm_seconds, trigger_seconds, ...}
    - {security_system: {...}}
    - {accessories: [{accessory: "Security system", ...}, ...]} (homebridge)
    - [{...}] (list with a single mapping)
    Returns None if unknown.
    """
    data = raw
    if isinstance(raw, list) and raw:
        data = raw[0]
    if not isinstance(data, dict):
        return None
    if isinstance(data.get("security_system"), dict):
        return dict(data["security_system"])
    if isinstance(data.get("accessories"), list):
        for entry in data["accessories"]:
            if isinstance(entry, dict) and entry.get("accessory") == HOMEBRIDGE_ACCESSORY:
                return {k: v for k, v in entry.items() if k != "accessory"}
        return None
    return dict(data)

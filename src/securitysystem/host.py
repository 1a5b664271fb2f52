"""Projection of controller state onto the host accessory."""

import logging
from dataclasses import dataclass
from typing import Callable

from .const.states import CurrentState, Mode

_LOGGER = logging.getLogger(__name__)

CURRENT_STATE = "current_state"
TARGET_STATE = "target_state"
SWITCH_ON = "switch_on"


class AccessoryHost:
    """Receives property updates from the controller.

    The controller calls these after every change, including write-backs it
    initiates itself (switch forced off, target forced to disarmed). The
    base class ignores them.
    """

    def reflect_current_state(self, state: CurrentState) -> None:
        """Publish the current state."""

    def reflect_target_state(self, mode: Mode) -> None:
        """Publish the target state."""

    def reflect_switch_on(self, value: bool) -> None:
        """Publish the siren switch state."""


@dataclass
class PropertyUpdate:
    """A single property update seen by the host."""

    prop: str
    value: CurrentState | Mode | bool

    def to_dict(self) -> dict[str, str | bool]:
        """Convert to dictionary."""
        value = self.value if isinstance(self.value, bool) else self.value.value
        return {"property": self.prop, "value": value}


class RecordingHost(AccessoryHost):
    """In-memory host keeping the last value and history of each property."""

    def __init__(self, on_update: Callable[[PropertyUpdate], None] | None = None):
        """Initialize host.

        Args:
            on_update: Optional callback invoked for every update
        """
        self.current_state = CurrentState.OFF
        self.target_state = Mode.OFF
        self.switch_on = False
        self.history: list[PropertyUpdate] = []
        self._on_update = on_update

    def reflect_current_state(self, state: CurrentState) -> None:
        self.current_state = state
        self._record(PropertyUpdate(CURRENT_STATE, state))

    def reflect_target_state(self, mode: Mode) -> None:
        self.target_state = mode
        self._record(PropertyUpdate(TARGET_STATE, mode))

    def reflect_switch_on(self, value: bool) -> None:
        self.switch_on = value
        self._record(PropertyUpdate(SWITCH_ON, value))

    def updates_for(self, prop: str) -> list[PropertyUpdate]:
        """Get history entries for one property."""
        return [u for u in self.history if u.prop == prop]

    def _record(self, update: PropertyUpdate) -> None:
        self.history.append(update)
        _LOGGER.debug(f"Host property {update.prop} = {update.value!r}")
        if self._on_update:
            try:
                self._on_update(update)
            except Exception as e:
                _LOGGER.error(f"Host update callback failed: {e}", exc_info=True)

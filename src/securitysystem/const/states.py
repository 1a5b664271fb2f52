"""State definitions for the security system accessory."""

from enum import Enum


class Mode(str, Enum):
    """Requested (target) modes: disarmed or one of the armed variants."""

    OFF = "off"
    HOME = "home"
    AWAY = "away"
    NIGHT = "night"

    @property
    def is_armed(self) -> bool:
        """Check if mode is one of the armed variants."""
        return self is not Mode.OFF


class CurrentState(str, Enum):
    """Externally observed states, including the triggered alarm."""

    OFF = "off"
    HOME = "home"
    AWAY = "away"
    NIGHT = "night"
    ALARM_TRIGGERED = "alarm_triggered"

    @classmethod
    def from_mode(cls, mode: Mode) -> "CurrentState":
        """Map a target mode onto the current state it produces."""
        return cls(Mode(mode).value)


class Cue(str, Enum):
    """Sound cues played on state changes."""

    SIREN = "siren-loop"
    ARMED = "armed"
    DISARMED = "disarmed"


class TransitionKind(str, Enum):
    """Which property a logged transition refers to."""

    CURRENT = "Current"
    TARGET = "Target"


def cue_for_state(state: CurrentState) -> Cue:
    """Return the cue matching a resulting state."""
    if state is CurrentState.ALARM_TRIGGERED:
        return Cue.SIREN
    if state is CurrentState.OFF:
        return Cue.DISARMED
    return Cue.ARMED

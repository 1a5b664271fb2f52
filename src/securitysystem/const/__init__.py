"""Constants for the security system accessory."""

from .defaults import (
    DEFAULT_ARM_SECONDS,
    DEFAULT_NAME,
    DEFAULT_SIREN_NAME,
    DEFAULT_TRIGGER_SECONDS,
    SOUND_FILES,
)
from .states import CurrentState, Cue, Mode, TransitionKind, cue_for_state
from .strings import STATE_LABELS, state_label

__all__ = [
    "CurrentState",
    "Cue",
    "Mode",
    "TransitionKind",
    "cue_for_state",
    "STATE_LABELS",
    "state_label",
    "DEFAULT_ARM_SECONDS",
    "DEFAULT_NAME",
    "DEFAULT_SIREN_NAME",
    "DEFAULT_TRIGGER_SECONDS",
    "SOUND_FILES",
]

"""Default configuration values."""

from .states import Cue

DEFAULT_NAME = "Security system"
DEFAULT_SIREN_NAME = "Siren"

# Seconds; 0 means the transition is applied on the next loop iteration
DEFAULT_ARM_SECONDS = 0.0
DEFAULT_TRIGGER_SECONDS = 0.0

SOUND_FILES: dict[Cue, str] = {
    Cue.SIREN: "siren.mp3",
    Cue.ARMED: "armed.mp3",
    Cue.DISARMED: "disarmed.mp3",
}

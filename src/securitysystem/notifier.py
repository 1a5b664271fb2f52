"""Transition logging and sound cues."""

import logging

from .const.states import CurrentState, Cue, Mode, TransitionKind
from .const.strings import state_label
from .sounds import SoundPlayer

_LOGGER = logging.getLogger(__name__)


class Notifier:
    """Reports state transitions.

    Cue failures are logged here and never reach the caller, so a broken
    player cannot block a state change.
    """

    def __init__(self, player: SoundPlayer | None = None):
        """Initialize notifier.

        Args:
            player: Sound player for cues (None disables sound)
        """
        self.player = player

    def log_transition(self, kind: TransitionKind, state: CurrentState | Mode) -> None:
        """Log a transition as e.g. ``Current state (Away)``."""
        _LOGGER.info(f"{TransitionKind(kind).value} state ({state_label(state)})")

    def play_cue(self, cue: Cue) -> None:
        """Play a cue; the siren cue loops until stop_cue()."""
        if self.player is None:
            _LOGGER.debug(f"Sound disabled, skipping cue {cue.value}")
            return
        try:
            self.player.play(cue, loop=cue is Cue.SIREN)
        except Exception as e:
            _LOGGER.error(f"Failed to play cue {cue.value}: {e}")

    def stop_cue(self) -> None:
        """Stop the looping siren cue."""
        if self.player is None:
            return
        try:
            self.player.stop()
        except Exception as e:
            _LOGGER.error(f"Failed to stop cue: {e}")

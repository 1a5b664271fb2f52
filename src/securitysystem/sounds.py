"""Sound cue loading and playback."""

import logging
from pathlib import Path

import pygame

from .const.defaults import SOUND_FILES
from .const.states import Cue
from .exceptions import SoundError

_LOGGER = logging.getLogger(__name__)


class SoundPlayer:
    """Plays cue files through ``pygame.mixer``.

    One-shot cues play to the end on their own. A looping cue repeats until
    ``stop()`` is called; at most one loop plays at a time.
    """

    def __init__(self, sounds_dir: Path | None):
        """Initialize player.

        Args:
            sounds_dir: Directory holding siren.mp3, armed.mp3 and disarmed.mp3
        """
        self.sounds_dir = sounds_dir
        self._sounds: dict[Cue, "pygame.mixer.Sound"] = {}
        self._looping: "pygame.mixer.Sound | None" = None

    @property
    def is_loaded(self) -> bool:
        """Check if every cue was loaded."""
        return len(self._sounds) == len(SOUND_FILES)

    @property
    def is_looping(self) -> bool:
        """Check if a looping cue is playing."""
        return self._looping is not None

    def load(self) -> bool:
        """Initialize the mixer and load every cue file.

        Returns:
            True if all cues are available
        """
        self._sounds = {}
        if self.sounds_dir is None:
            _LOGGER.info("No sounds directory configured, cues disabled")
            return False

        sounds = {}
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            for cue, filename in SOUND_FILES.items():
                path = self.sounds_dir / filename
                if not path.is_file():
                    raise SoundError(f"Missing sound file: {path}")
                sounds[cue] = pygame.mixer.Sound(str(path))
        except (SoundError, pygame.error) as e:
            _LOGGER.error(f"Error loading sounds: {e}")
            return False

        self._sounds = sounds
        _LOGGER.info("Sounds loaded.")
        return True

    def play(self, cue: Cue, loop: bool = False) -> None:
        """Start playing a cue.

        Args:
            cue: Cue to play
            loop: Repeat until stop() is called

        Raises:
            SoundError: If the cue is not loaded or the mixer fails
        """
        cue = Cue(cue)
        sound = self._sounds.get(cue)
        if sound is None:
            raise SoundError(f"Sound for cue '{cue.value}' is not loaded")

        if loop:
            self.stop()
        try:
            sound.play(loops=-1 if loop else 0)
        except pygame.error as e:
            raise SoundError(f"Failed to play {cue.value}: {e}") from e
        if loop:
            self._looping = sound

    def stop(self) -> None:
        """Stop the looping cue, if any."""
        sound = self._looping
        self._looping = None
        if sound is not None:
            sound.stop()
            _LOGGER.debug("Looping cue stopped")

    def close(self) -> None:
        """Stop playback and shut the mixer down."""
        self.stop()
        self._sounds = {}
        if pygame.mixer.get_init():
            pygame.mixer.quit()

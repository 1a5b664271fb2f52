"""Tests for transition logging, cues and sound playback."""

import logging

import pygame
import pytest

from securitysystem import sounds
from securitysystem.const.states import CurrentState, Cue, Mode, TransitionKind, cue_for_state
from securitysystem.exceptions import SoundError
from securitysystem.notifier import Notifier
from securitysystem.sounds import SoundPlayer


class RecordingPlayer:
    def __init__(self):
        self.calls = []

    def play(self, cue, loop=False):
        self.calls.append(("play", cue, loop))

    def stop(self):
        self.calls.append(("stop",))


def write_sounds(directory):
    for name in ("siren.mp3", "armed.mp3", "disarmed.mp3"):
        (directory / name).write_bytes(b"ID3")


class TestNotifier:
    """Test notifier logging and cue dispatch."""

    @pytest.mark.parametrize(
        "kind,state,expected",
        [
            (TransitionKind.CURRENT, CurrentState.HOME, "Current state (Home)"),
            (TransitionKind.CURRENT, CurrentState.ALARM_TRIGGERED, "Current state (Alarm triggered)"),
            (TransitionKind.TARGET, Mode.NIGHT, "Target state (Night)"),
            (TransitionKind.TARGET, Mode.OFF, "Target state (Off)"),
        ],
    )
    def test_log_transition(self, caplog, kind, state, expected):
        """Test transition log lines."""
        with caplog.at_level(logging.INFO, logger="securitysystem.notifier"):
            Notifier().log_transition(kind, state)
        assert caplog.records[-1].getMessage() == expected

    def test_siren_cue_loops(self):
        """Test only the siren cue is played in a loop."""
        player = RecordingPlayer()
        notifier = Notifier(player)

        notifier.play_cue(Cue.SIREN)
        notifier.play_cue(Cue.ARMED)
        notifier.stop_cue()

        assert player.calls == [
            ("play", Cue.SIREN, True),
            ("play", Cue.ARMED, False),
            ("stop",),
        ]

    def test_without_player(self):
        """Test cues are skipped when sound is disabled."""
        notifier = Notifier()
        notifier.play_cue(Cue.DISARMED)
        notifier.stop_cue()

    def test_player_errors_are_logged(self, caplog):
        """Test player failures do not propagate."""

        class BrokenPlayer:
            def play(self, cue, loop=False):
                raise SoundError("no device")

            def stop(self):
                raise RuntimeError("stuck")

        notifier = Notifier(BrokenPlayer())
        with caplog.at_level(logging.ERROR):
            notifier.play_cue(Cue.SIREN)
            notifier.stop_cue()

        assert "Failed to play cue siren-loop: no device" in caplog.text
        assert "Failed to stop cue: stuck" in caplog.text


def test_cue_for_state():
    assert cue_for_state(CurrentState.ALARM_TRIGGERED) is Cue.SIREN
    assert cue_for_state(CurrentState.OFF) is Cue.DISARMED
    for state in (CurrentState.HOME, CurrentState.AWAY, CurrentState.NIGHT):
        assert cue_for_state(state) is Cue.ARMED


class FakeSound:
    def __init__(self, path):
        self.path = path
        self.plays = []
        self.stops = 0

    def play(self, loops=0):
        self.plays.append(loops)

    def stop(self):
        self.stops += 1


class FakeMixer:
    Sound = FakeSound

    def __init__(self, fail_init=False):
        self.initialized = False
        self.fail_init = fail_init
        self.quits = 0

    def get_init(self):
        return (44100, -16, 2) if self.initialized else None

    def init(self):
        if self.fail_init:
            raise pygame.error("No available audio device")
        self.initialized = True

    def quit(self):
        self.initialized = False
        self.quits += 1


@pytest.fixture
def mixer(monkeypatch):
    fake = FakeMixer()
    monkeypatch.setattr(sounds.pygame, "mixer", fake)
    return fake


@pytest.fixture
def loaded_player(tmp_path, mixer):
    write_sounds(tmp_path)
    player = SoundPlayer(tmp_path)
    assert player.load() is True
    return player


class TestSoundPlayer:
    """Test sound loading and playback on the mixer."""

    def test_load(self, tmp_path, mixer, caplog):
        """Test all cue files are loaded through the mixer."""
        write_sounds(tmp_path)
        player = SoundPlayer(tmp_path)

        with caplog.at_level(logging.INFO):
            assert player.load() is True
        assert player.is_loaded
        assert mixer.initialized
        assert "Sounds loaded." in caplog.text

    def test_load_missing_file(self, tmp_path, mixer, caplog):
        """Test a missing cue file fails loading."""
        (tmp_path / "siren.mp3").write_bytes(b"ID3")
        player = SoundPlayer(tmp_path)

        assert player.load() is False
        assert not player.is_loaded
        assert "Error loading sounds" in caplog.text

    def test_load_without_audio_device(self, tmp_path, monkeypatch, caplog):
        """Test a mixer that cannot start fails loading."""
        monkeypatch.setattr(sounds.pygame, "mixer", FakeMixer(fail_init=True))
        write_sounds(tmp_path)
        player = SoundPlayer(tmp_path)

        assert player.load() is False
        assert "No available audio device" in caplog.text

    def test_load_without_directory(self, mixer):
        """Test loading without a sounds directory."""
        player = SoundPlayer(None)
        assert player.load() is False
        assert not mixer.initialized

    def test_play_not_loaded(self, tmp_path, mixer):
        """Test playing before loading raises."""
        player = SoundPlayer(tmp_path)
        with pytest.raises(SoundError):
            player.play(Cue.ARMED)

    def test_play_once(self, loaded_player):
        """Test one-shot cues play without looping."""
        loaded_player.play(Cue.DISARMED)

        sound = loaded_player._sounds[Cue.DISARMED]
        assert sound.plays == [0]
        assert not loaded_player.is_looping

    def test_siren_loops_until_stopped(self, loaded_player):
        """Test the looping cue repeats until stop()."""
        siren = loaded_player._sounds[Cue.SIREN]

        loaded_player.play(Cue.SIREN, loop=True)
        assert siren.plays == [-1]
        assert loaded_player.is_looping

        loaded_player.stop()
        assert siren.stops == 1
        assert not loaded_player.is_looping

        loaded_player.stop()
        assert siren.stops == 1

    def test_new_loop_replaces_running_loop(self, loaded_player):
        """Test only one loop plays at a time."""
        siren = loaded_player._sounds[Cue.SIREN]

        loaded_player.play(Cue.SIREN, loop=True)
        loaded_player.play(Cue.SIREN, loop=True)

        assert siren.plays == [-1, -1]
        assert siren.stops == 1
        assert loaded_player.is_looping

    def test_play_error(self, loaded_player):
        """Test mixer playback errors become SoundError."""

        def broken_play(loops=0):
            raise pygame.error("mixer not initialized")

        loaded_player._sounds[Cue.ARMED].play = broken_play
        with pytest.raises(SoundError, match="mixer not initialized"):
            loaded_player.play(Cue.ARMED)

    def test_close(self, loaded_player, mixer):
        """Test close stops the loop and shuts the mixer down."""
        siren = loaded_player._sounds[Cue.SIREN]
        loaded_player.play(Cue.SIREN, loop=True)

        loaded_player.close()

        assert siren.stops == 1
        assert not loaded_player.is_looping
        assert not loaded_player.is_loaded
        assert mixer.quits == 1

    def test_notifier_drives_siren_loop(self, loaded_player):
        """Test the notifier loops the siren and stops it."""
        notifier = Notifier(loaded_player)

        notifier.play_cue(Cue.SIREN)
        assert loaded_player.is_looping

        notifier.stop_cue()
        assert not loaded_player.is_looping

"""Security system state machine."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from .config import SecuritySystemConfig
from .const.states import CurrentState, Mode, TransitionKind, cue_for_state
from .const.strings import state_label
from .host import AccessoryHost
from .notifier import Notifier
from .timer import AsyncioScheduler, Scheduler

_LOGGER = logging.getLogger(__name__)


@dataclass
class PendingTransition:
    """A scheduled change of the current state."""

    state: CurrentState
    delay: float
    is_trigger: bool
    handle: Any = None
    done: asyncio.Future[bool] | None = field(default=None, repr=False)


class AlarmController:
    """Arm/disarm/trigger state machine for one accessory.

    Holds the current state, the target state and the siren switch, plus at
    most one pending transition. All methods must be called from the event
    loop the scheduler runs on; each stimulus mutates state without awaiting,
    so requests, switch changes and timer callbacks never interleave.
    """

    def __init__(
        self,
        config: SecuritySystemConfig | None = None,
        notifier: Notifier | None = None,
        scheduler: Scheduler | None = None,
        host: AccessoryHost | None = None,
    ):
        """Initialize controller.

        Args:
            config: Accessory configuration (default: no delays)
            notifier: Transition logger and cue player
            scheduler: Timer facility (default: running asyncio loop)
            host: Host accessory receiving property updates
        """
        self.config = config or SecuritySystemConfig()
        self.notifier = notifier or Notifier()
        self.scheduler = scheduler or AsyncioScheduler()
        self.host = host or AccessoryHost()

        self._current_state = CurrentState.OFF
        self._target_state = Mode.OFF
        self._switch_on = False
        self._pending: PendingTransition | None = None

        _LOGGER.debug(
            f"Controller initialized: {self.config.name} "
            f"(arm={self.config.arm_seconds}s, trigger={self.config.trigger_seconds}s)"
        )

    @property
    def current_state(self) -> CurrentState:
        """Get current state."""
        return self._current_state

    @property
    def target_state(self) -> Mode:
        """Get target state."""
        return self._target_state

    @property
    def switch_on(self) -> bool:
        """Get siren switch state."""
        return self._switch_on

    @property
    def pending(self) -> PendingTransition | None:
        """Get the pending transition, if any."""
        return self._pending

    def get_current_state(self) -> CurrentState:
        """Get current state."""
        return self._current_state

    def get_target_state(self) -> Mode:
        """Get target state."""
        return self._target_state

    def get_switch_on(self) -> bool:
        """Get siren switch state."""
        return self._switch_on

    async def set_target_state(self, mode: Mode) -> bool:
        """Request a new mode.

        The target is recorded at once; the current state follows after the
        arm delay (immediately when disarming). Completes once the current
        state has been updated.

        Args:
            mode: Requested mode

        Returns:
            True once the mode is applied, False if a later request
            superseded it before its delay elapsed
        """
        mode = Mode(mode)
        self._target_state = mode
        self.notifier.log_transition(TransitionKind.TARGET, mode)
        self.host.reflect_target_state(mode)

        cancelled = self._cancel_pending()
        if cancelled is not None and cancelled.is_trigger:
            self._force_switch_off()

        if self._current_state is CurrentState.ALARM_TRIGGERED:
            self.notifier.stop_cue()
            self._force_switch_off()

        delay = self.config.arm_seconds if mode.is_armed else 0.0
        done: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
        self._schedule(CurrentState.from_mode(mode), delay, is_trigger=False, done=done)
        return await done

    def set_switch_on(self, value: bool) -> None:
        """Turn the siren switch on or off.

        Turning it on starts the trigger delay, after which the alarm goes
        off. While the alarm is triggered any switch change silences the
        siren and forces the target to disarmed. Turning the switch off does
        not cancel a running trigger delay.

        Args:
            value: New switch state
        """
        value = bool(value)
        self._switch_on = value
        self.host.reflect_switch_on(value)

        if value and self._current_state is not CurrentState.ALARM_TRIGGERED:
            _LOGGER.info("Trigger timeout (Started)")
            self._cancel_pending()
            self._schedule(
                CurrentState.ALARM_TRIGGERED, self.config.trigger_seconds, is_trigger=True
            )
        elif self._current_state is CurrentState.ALARM_TRIGGERED:
            self.notifier.stop_cue()
            self._force_target_off()

    def close(self) -> None:
        """Cancel pending work and silence the siren."""
        self._cancel_pending()
        self.notifier.stop_cue()
        _LOGGER.debug("Controller closed")

    def _schedule(
        self,
        state: CurrentState,
        delay: float,
        is_trigger: bool,
        done: asyncio.Future[bool] | None = None,
    ) -> None:
        pending = PendingTransition(state=state, delay=delay, is_trigger=is_trigger, done=done)
        pending.handle = self.scheduler.call_later(delay, lambda: self._fire(pending))
        self._pending = pending
        _LOGGER.debug(f"Transition to {state_label(state)} scheduled in {delay}s")

    def _cancel_pending(self) -> PendingTransition | None:
        pending = self._pending
        if pending is None:
            return None

        self._pending = None
        pending.handle.cancel()
        if pending.done is not None and not pending.done.done():
            pending.done.set_result(False)

        if pending.is_trigger:
            _LOGGER.info("Trigger timeout (Cancelled)")
        else:
            _LOGGER.info(f"Arm timeout (Cancelled: {state_label(pending.state)})")
        return pending

    def _fire(self, pending: PendingTransition) -> None:
        # Superseded transitions are cancelled before they can fire
        if self._pending is not pending:
            return
        self._pending = None
        self._update_current_state(pending.state)
        if pending.done is not None and not pending.done.done():
            pending.done.set_result(True)

    def _update_current_state(self, state: CurrentState) -> None:
        self._current_state = state
        self.host.reflect_current_state(state)
        self.notifier.log_transition(TransitionKind.CURRENT, state)
        self.notifier.play_cue(cue_for_state(state))

    def _force_switch_off(self) -> None:
        if not self._switch_on:
            return
        self._switch_on = False
        self.host.reflect_switch_on(False)
        _LOGGER.debug("Siren switch forced off")

    def _force_target_off(self) -> None:
        # A pending arm would deliver a mode other than the forced target
        pending = self._pending
        if pending is not None and not pending.is_trigger and pending.state is not CurrentState.OFF:
            self._cancel_pending()
        self._target_state = Mode.OFF
        self.notifier.log_transition(TransitionKind.TARGET, Mode.OFF)
        self.host.reflect_target_state(Mode.OFF)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<AlarmController {self.config.name}: current={self._current_state.value}, "
            f"target={self._target_state.value}, switch={'on' if self._switch_on else 'off'}>"
        )

"""pysecuritysystem - virtual security system accessory.

Arm/disarm/trigger state machine with configurable arm and trigger delays
and an auxiliary siren switch that can set off the alarm.

Example:
    >>> import asyncio
    >>> from securitysystem import AlarmController, Mode, SecuritySystemConfig
    >>>
    >>> async def main():
    ...     controller = AlarmController(SecuritySystemConfig(arm_seconds=10))
    ...     await controller.set_target_state(Mode.AWAY)
    ...     print(controller.current_state)
    >>>
    >>> asyncio.run(main())
"""

from . import const, exceptions
from .config import SecuritySystemConfig
from .const.states import CurrentState, Cue, Mode
from .controller import AlarmController, PendingTransition
from .host import AccessoryHost, RecordingHost
from .notifier import Notifier
from .sounds import SoundPlayer
from .timer import AsyncioScheduler, Scheduler

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "AlarmController",
    "SecuritySystemConfig",
    # States
    "CurrentState",
    "Cue",
    "Mode",
    "PendingTransition",
    # Collaborators
    "AccessoryHost",
    "RecordingHost",
    "Notifier",
    "SoundPlayer",
    "Scheduler",
    "AsyncioScheduler",
    # Submodules
    "const",
    "exceptions",
    # Version
    "__version__",
]

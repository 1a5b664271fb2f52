"""Human-readable labels for states."""

from .states import CurrentState, Mode

STATE_LABELS: dict[str, str] = {
    CurrentState.OFF.value: "Off",
    CurrentState.HOME.value: "Home",
    CurrentState.AWAY.value: "Away",
    CurrentState.NIGHT.value: "Night",
    CurrentState.ALARM_TRIGGERED.value: "Alarm triggered",
}


def state_label(state: CurrentState | Mode | str) -> str:
    """Return the label for a state, or "Unknown state"."""
    value = state.value if isinstance(state, (CurrentState, Mode)) else str(state)
    return STATE_LABELS.get(value, "Unknown state")

"""Command-line interface for the security system accessory."""

import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

try:
    import click
    import yaml
    from rich.console import Console
    from rich.table import Table
except ImportError:
    print("CLI dependencies not installed. Install with: pip install pysecuritysystem[cli]")
    sys.exit(1)

from . import __version__
from .config import SecuritySystemConfig, normalize_config
from .const.defaults import SOUND_FILES
from .const.states import Mode
from .const.strings import state_label
from .controller import AlarmController
from .exceptions import SecuritySystemConfigError
from .host import PropertyUpdate, RecordingHost
from .notifier import Notifier
from .sounds import SoundPlayer

console = Console()

SWITCH_VALUES = {"on": True, "off": False}


def load_config(config_path: Path) -> SecuritySystemConfig:
    """Load configuration from a YAML (or homebridge JSON) file.

    Args:
        config_path: Path to config file

    Returns:
        Parsed configuration
    """
    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config_path}[/red]")
        sys.exit(1)
    except yaml.YAMLError as e:
        console.print(f"[red]Error parsing config: {e}[/red]")
        sys.exit(1)

    data = normalize_config(raw)
    if data is None:
        console.print(
            "[red]Invalid config. Expected mapping with accessory settings, e.g.\n"
            "security_system:\n  name: Security system\n  arm_seconds: 10\n  trigger_seconds: 5[/red]"
        )
        sys.exit(1)
    try:
        return SecuritySystemConfig.from_dict(data)
    except SecuritySystemConfigError as e:
        console.print(f"[red]Invalid config: {e}[/red]")
        sys.exit(1)


def parse_step(step: str) -> tuple[str, Any]:
    """Parse a simulation step such as ``target:away`` or ``wait:1.5``.

    Raises:
        click.BadParameter: If the step is not understood
    """
    action, _, arg = step.partition(":")
    action = action.strip().lower()
    arg = arg.strip().lower()
    try:
        if action == "target":
            return action, Mode(arg)
        if action == "switch" and arg in SWITCH_VALUES:
            return action, SWITCH_VALUES[arg]
        if action == "wait":
            seconds = float(arg)
            if seconds < 0:
                raise ValueError(arg)
            return action, seconds
        if action == "state" and not arg:
            return action, None
    except ValueError:
        pass
    raise click.BadParameter(f"Invalid step: {step!r}", param_hint="STEPS")


def _build_player(config: SecuritySystemConfig) -> SoundPlayer | None:
    if config.sounds_dir is None:
        return None
    player = SoundPlayer(config.sounds_dir)
    player.load()
    return player


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file path",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, debug: bool) -> None:
    """Virtual security system accessory."""
    # Setup logging
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config) if config else SecuritySystemConfig()
    ctx.obj["debug"] = debug


@cli.command("show-config")
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def show_config(ctx: click.Context, as_json: bool) -> None:
    """Show the resolved configuration."""
    config: SecuritySystemConfig = ctx.obj["config"]
    if as_json:
        click.echo(json.dumps({"ok": True, "config": config.to_dict()}))
        return

    table = Table(title=config.name)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    for key, value in config.to_dict().items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)


@cli.command("check-sounds")
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def check_sounds(ctx: click.Context, as_json: bool) -> None:
    """Check that every cue file is present in the sounds directory."""
    config: SecuritySystemConfig = ctx.obj["config"]
    sounds_dir = config.sounds_dir
    found = {
        cue.value: bool(sounds_dir and (sounds_dir / filename).is_file())
        for cue, filename in SOUND_FILES.items()
    }
    ok = all(found.values())

    if as_json:
        click.echo(json.dumps({"ok": ok, "sounds_dir": str(sounds_dir) if sounds_dir else None, "cues": found}))
    else:
        table = Table(title=f"Sounds ({sounds_dir or 'not configured'})")
        table.add_column("Cue", style="cyan")
        table.add_column("File", style="magenta")
        table.add_column("Found")
        for cue, filename in SOUND_FILES.items():
            mark = "[green]yes[/green]" if found[cue.value] else "[red]no[/red]"
            table.add_row(cue.value, filename, mark)
        console.print(table)

    if not ok:
        sys.exit(1)


@cli.command()
@click.argument("steps", nargs=-1, required=True)
@click.option("--arm-seconds", type=float, default=None, help="Override arm delay")
@click.option("--trigger-seconds", type=float, default=None, help="Override trigger delay")
@click.option("--no-sound", is_flag=True, help="Disable sound cues")
@click.option("--json", "as_json", is_flag=True, help="Output updates as JSON (NDJSON)")
@click.pass_context
def simulate(
    ctx: click.Context,
    steps: tuple[str, ...],
    arm_seconds: float | None,
    trigger_seconds: float | None,
    no_sound: bool,
    as_json: bool,
) -> None:
    """Drive the accessory through a script of steps.

    Steps: target:<off|home|away|night>, switch:<on|off>, wait:<seconds>, state
    """
    config: SecuritySystemConfig = ctx.obj["config"]
    overrides: dict[str, float] = {}
    if arm_seconds is not None:
        overrides["arm_seconds"] = arm_seconds
    if trigger_seconds is not None:
        overrides["trigger_seconds"] = trigger_seconds
    try:
        config = dataclasses.replace(config, **overrides)
    except SecuritySystemConfigError as e:
        raise click.BadParameter(str(e)) from e

    script = [parse_step(step) for step in steps]

    def on_update(update: PropertyUpdate) -> None:
        if as_json:
            click.echo(json.dumps(update.to_dict()))
            return
        if isinstance(update.value, bool):
            text = "on" if update.value else "off"
        else:
            text = state_label(update.value)
        console.print(f"[blue]{update.prop}[/blue] -> [yellow]{text}[/yellow]")

    async def run():
        player = None if no_sound else _build_player(config)
        host = RecordingHost(on_update=on_update)
        controller = AlarmController(config, notifier=Notifier(player), host=host)
        requests: list[asyncio.Task[bool]] = []
        try:
            for action, arg in script:
                if action == "target":
                    requests.append(asyncio.create_task(controller.set_target_state(arg)))
                    # Let the request record its target before the next step
                    await asyncio.sleep(0)
                elif action == "switch":
                    controller.set_switch_on(arg)
                elif action == "wait":
                    await asyncio.sleep(arg)
                elif action == "state":
                    _print_state(controller, as_json)
        finally:
            controller.close()
            if requests:
                await asyncio.gather(*requests, return_exceptions=True)
            if player is not None:
                player.close()
        _print_state(controller, as_json)

    asyncio.run(run())


def _print_state(controller: AlarmController, as_json: bool) -> None:
    if as_json:
        click.echo(
            json.dumps(
                {
                    "current_state": controller.current_state.value,
                    "target_state": controller.target_state.value,
                    "switch_on": controller.switch_on,
                }
            )
        )
        return

    table = Table(title=controller.config.name)
    table.add_column("Current", style="cyan")
    table.add_column("Target", style="magenta")
    table.add_column(controller.config.siren_name, style="yellow")
    table.add_row(
        state_label(controller.current_state),
        state_label(controller.target_state),
        "on" if controller.switch_on else "off",
    )
    console.print(table)


def main() -> None:
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()

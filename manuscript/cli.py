import json
import logging
import shutil
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import (
    EXAMPLE_CONFIG,
    PROJECT_DIR_NAME,
    Scope,
    config_path,
    load_config,
    new_config_template,
    resolve_config_path,
    scope_directory,
)
from .connectors import get_connector
from .errors import ConfigError, ManuscriptError
from .interaction.dump import dump_tree
from .interaction.locator import attach
from .runner import Action, StepExecutor, StepOutcome


def scope_options(f):
    f = click.option("--global", "scope", flag_value=Scope.GLOBAL.value, help="Search in global templates.")(f)
    f = click.option("--local", "scope", flag_value=Scope.LOCAL.value, help="Search in current directory.")(f)
    f = click.option("--project", "scope", flag_value=Scope.PROJECT.value, default=True, help="Search in .manuscript folder (default).")(f)
    return f


def echo_outcome(outcome: StepOutcome) -> None:
    if outcome.action is Action.NOT_FOUND:
        click.echo(click.style("[MISSING]", fg="red") + f" Target '{outcome.target}' not found")
        return
    click.echo(click.style("[OK]", fg="green") + f" Found '{outcome.target}' via {outcome.strategy.value}")
    if outcome.action is Action.ENTERED:
        click.echo(f'     Action: Entered "{outcome.value}"')
    elif outcome.action is Action.FAILED_TO_ENTER:
        click.echo("     Action: " + click.style("Failed to enter text", fg="red"))
    elif outcome.action is Action.SKIPPED:
        click.echo(f'     Action: Skipped, already "{outcome.value}"')
    else:
        click.echo(f'     Value: "{outcome.value}"')


@click.group()
@click.version_option(__version__, prog_name="manuscript")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log resolution details to stderr.")
def cli(verbose: bool) -> None:
    """Automate data entry on the iOS Simulator through accessibility."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@cli.command()
@click.argument("filename", type=str)
@scope_options
@click.option("--debug", is_flag=True, default=False, help="Print the full accessibility hierarchy dump of the active window.")
@click.option("--os", "os_override", type=click.Choice(["darwin", "sim"]), default=None, help="Force the tree source: darwin (live) or sim (in-memory).")
@click.option("--sim-tree", type=click.Path(exists=True, dir_okay=False), default=None, help="YAML tree for --os sim (defaults to the demo transfer screen).")
def run(filename: str, scope: str, debug: bool, os_override: Optional[str], sim_tree: Optional[str]) -> None:
    """Run a UI test scenario from a YAML config."""
    if sim_tree and os_override is None:
        os_override = "sim"
    try:
        path = resolve_config_path(filename, Scope(scope))
        click.echo(f"Reading config: {path}...")
        config = load_config(path)
    except ConfigError as e:
        raise click.ClickException(str(e))

    click.echo(click.style(f"\nManuscript: {config.name}", fg="yellow", bold=True))
    if config.description:
        click.echo(click.style(f"   {config.description}", fg="bright_black"))
    click.echo("-----------------------------------------")

    try:
        conn = get_connector(os_override=os_override, sim_tree=sim_tree)
        click.echo("Looking for active simulator window...")
        window, device = attach(conn)
    except ManuscriptError as e:
        raise click.ClickException(str(e))

    click.echo(click.style(f"Target: {device.name} ({device.os_version}) ({device.udid})", fg="green"))

    if debug:
        click.echo(click.style("\n--- Hierarchy Dump ---", fg="bright_black"))
        dump_tree(conn, window)
        click.echo(click.style("----------------------\n", fg="bright_black"))

    click.echo(click.style("\n--- Execution Report ---\n", bold=True))
    report = StepExecutor(conn, on_outcome=echo_outcome).execute(window, config.steps)

    click.echo("\n-----------------------")
    click.echo(report.summary())
    if not report.ok:
        click.get_current_context().exit(report.exit_code)


@cli.command()
def init() -> None:
    """Initialize a new Manuscript project configuration."""
    directory = Path.cwd() / PROJECT_DIR_NAME
    if directory.is_dir():
        raise click.ClickException(f"Manuscript is already initialized in {directory}")
    try:
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "example.yaml").write_text(EXAMPLE_CONFIG, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Failed to initialize: {e}")
    click.echo(click.style(f"Initialized empty Manuscript repository in {PROJECT_DIR_NAME}/", fg="green"))
    click.echo(f"Created example configuration at: {PROJECT_DIR_NAME}/example.yaml")


@cli.command("list")
@scope_options
def list_cmd(scope: str) -> None:
    """List available Manuscript configurations."""
    directory = scope_directory(Scope(scope))
    if not directory.is_dir():
        click.echo(click.style(f"No configurations found in {scope} scope ({directory}).", fg="yellow"))
        return
    try:
        files = sorted(p for p in directory.iterdir() if p.suffix == ".yaml")
    except OSError as e:
        raise click.ClickException(f"Failed to list files: {e}")
    if not files:
        click.echo(f"No .yaml configurations found in {directory}")
        return
    click.echo(f"Configurations in {scope} scope:")
    for path in files:
        try:
            config = load_config(path)
            click.echo(f"  - {path.name} ({config.name})")
        except ConfigError:
            click.echo(f"  - {path.name} " + click.style("[INVALID]", fg="red"))


@cli.command()
@click.argument("filename", type=str)
@scope_options
def new(filename: str, scope: str) -> None:
    """Create a new Manuscript configuration file."""
    if not filename.endswith(".yaml"):
        raise click.ClickException("Filename must end with .yaml")
    target = config_path(filename, Scope(scope))
    if target.exists():
        raise click.ClickException(f"File already exists at {target}")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(new_config_template(filename), encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Failed to write file: {e}")
    click.echo(click.style(f"Created {filename} in {scope} scope.", fg="green"))
    click.echo(f"Path: {target}")


@cli.command()
@click.argument("filename", type=str)
@scope_options
def delete(filename: str, scope: str) -> None:
    """Delete a Manuscript configuration file."""
    try:
        target = resolve_config_path(filename, Scope(scope))
        target.unlink()
    except ConfigError as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.ClickException(f"Failed to delete file: {e}")
    click.echo(click.style(f"Deleted {filename} from {scope} scope.", fg="green"))


@cli.command()
@click.option("--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
def deintegrate(yes: bool) -> None:
    """Remove the Manuscript configuration from the current project."""
    directory = Path.cwd() / PROJECT_DIR_NAME
    if not directory.is_dir():
        click.echo(click.style("Manuscript is not initialized in this directory.", fg="yellow"))
        return
    if not yes and not click.confirm(f"Are you sure you want to delete {PROJECT_DIR_NAME} folder?", default=False):
        click.echo("Operation aborted.")
        return
    try:
        shutil.rmtree(directory)
    except OSError as e:
        raise click.ClickException(f"Failed to remove configuration: {e}")
    click.echo(click.style("Manuscript configuration removed.", fg="green"))


@cli.command()
@click.option("--os", "os_override", type=click.Choice(["darwin", "sim"]), default=None)
def info(os_override: Optional[str]) -> None:
    """Report accessibility access and booted simulators as JSON."""
    try:
        conn = get_connector(os_override=os_override)
        reason = conn.unavailable_reason()
        devices = conn.booted_devices() if reason is None else []
    except ManuscriptError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps({
        "accessibilityAvailable": reason is None,
        "reason": reason,
        "bootedSimulators": [asdict(d) for d in devices],
    }, indent=2))


if __name__ == "__main__":
    cli()

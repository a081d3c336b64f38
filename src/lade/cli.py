"""Command line surface: ``lade set|unset|inject|user``."""
from __future__ import annotations

import asyncio
import os
import subprocess
import textwrap
import time
from pathlib import Path
from typing import Any, Callable, TypeVar

import click

from lade.errors import LadeError
from lade.observability import configure_logging, get_logger, verbosity_to_level
from lade.outputs import remove_files, split_env_files, write_files
from lade.rules import Config, HydrationContext, Output, build_config, resolve_identity
from lade.settings import EnvSettingsLoader, GlobalConfig, LadeSettings
from lade.shell import Shell

logger = get_logger(__name__)

T = TypeVar("T")

BOX_WIDTH = 80
HINT = "Hint: check whether the loader is connected to the correct vault."

COMMAND_SETTINGS = {"ignore_unknown_options": True, "allow_interspersed_args": False}


class State:
    """Per-invocation objects shared by subcommands."""

    def __init__(self, settings: LadeSettings) -> None:
        self.settings = settings
        self._global_config: GlobalConfig | None = None

    @property
    def global_config(self) -> GlobalConfig:
        if self._global_config is None:
            self._global_config = GlobalConfig.load(self.settings.global_config_path)
        return self._global_config

    def context(self) -> HydrationContext:
        environ = dict(os.environ)
        return HydrationContext(user=resolve_identity(self.global_config.user, environ), environ=environ)

    def config(self) -> Config:
        return build_config(Path.cwd())

    def shell(self) -> Shell:
        return Shell.detect(self.settings.shell)


pass_state = click.make_pass_decorator(State)


def render_failure(error: BaseException) -> str:
    """Boxed, wrapped error report for standard error."""
    inner = BOX_WIDTH - 4
    lines = ["Lade could not get secrets from one loader:"]
    lines += [f"> {line}" for line in textwrap.wrap(str(error).strip(), inner - 2)]
    lines += [HINT, "Waiting before continuing..."]
    border = "-" * (BOX_WIDTH - 2)
    body = [f"| {line.ljust(inner)} |" for line in lines]
    return "\n".join([f"+{border}+", *body, f"+{border}+"])


def hydration_or_exit(state: State, command: str) -> dict[Output, dict[str, str]]:
    config = _run_or_fail(state.config)
    try:
        return asyncio.run(config.collect_hydrate(command, state.context()))
    except LadeError as exc:
        logger.error("cli.hydration_failed", error=exc.to_dict())
        click.echo(render_failure(exc), err=True)
        time.sleep(state.settings.error_wait)
        raise SystemExit(1) from exc


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity.")
@click.option("-q", "--quiet", count=True, help="Decrease log verbosity.")
@click.version_option(package_name="lade")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int) -> None:
    """Load secrets into your shell just before a matching command runs."""
    try:
        settings = EnvSettingsLoader().load(LadeSettings)
    except LadeError as exc:
        raise click.ClickException(str(exc)) from exc
    configure_logging(verbosity_to_level(verbose, quiet), json=settings.log_json)
    ctx.obj = State(settings)


@cli.command("set", context_settings=COMMAND_SETTINGS)
@click.argument("commands", nargs=-1, type=click.UNPROCESSED)
@pass_state
def set_cmd(state: State, commands: tuple[str, ...]) -> None:
    """Set environment for shell."""
    shell = _shell_or_fail(state)
    hydration = hydration_or_exit(state, " ".join(commands))
    env, files = split_env_files(hydration, {})
    _run_or_fail(write_files, files)
    click.echo(shell.set(env))


@cli.command("unset", context_settings=COMMAND_SETTINGS)
@click.argument("commands", nargs=-1, type=click.UNPROCESSED)
@pass_state
def unset_cmd(state: State, commands: tuple[str, ...]) -> None:
    """Unset environment for shell."""
    shell = _shell_or_fail(state)
    keys = _run_or_fail(lambda: state.config().collect_keys(" ".join(commands)))
    env, files = split_env_files(keys, [])
    _run_or_fail(remove_files, files)
    click.echo(shell.unset(env))


@cli.command("inject", context_settings=COMMAND_SETTINGS)
@click.argument("commands", nargs=-1, required=True, type=click.UNPROCESSED)
@pass_state
def inject_cmd(state: State, commands: tuple[str, ...]) -> None:
    """Inject environment into nested command."""
    command = " ".join(commands)
    hydration = hydration_or_exit(state, command)
    env, files = split_env_files(hydration, {})
    _run_or_fail(write_files, files)
    try:
        completed = subprocess.run(list(commands), env={**os.environ, **env}, check=False)
    except OSError as exc:
        raise click.ClickException(f"Cannot run {commands[0]}: {exc}") from exc
    finally:
        _run_or_fail(remove_files, files)
    raise SystemExit(completed.returncode)


@cli.command("user")
@click.argument("username", required=False)
@click.option("--reset", is_flag=True, help="Forget the saved user and fall back to the OS user.")
@pass_state
def user_cmd(state: State, username: str | None, reset: bool) -> None:
    """Show, save or reset the user used for per-user secrets."""
    config = state.global_config
    path = state.settings.global_config_path
    if reset:
        config.user = None
        config.save(path)
        click.echo("User reset, falling back to the OS user.")
    elif username:
        config.user = username
        config.save(path)
        click.echo(f"User set to {username}.")
    else:
        current = resolve_identity(config.user, os.environ)
        source = "saved" if config.user else "OS"
        click.echo(f"{current} ({source})" if current else "No user found.")


def _shell_or_fail(state: State) -> Shell:
    return _run_or_fail(state.shell)


def _run_or_fail(fn: Callable[..., T], *args: Any) -> T:
    try:
        return fn(*args)
    except LadeError as exc:
        raise click.ClickException(str(exc)) from exc


def main() -> None:
    cli()


__all__ = ["cli", "main", "render_failure"]

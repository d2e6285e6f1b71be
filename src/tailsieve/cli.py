from __future__ import annotations

import threading
from typing import Optional

import typer

from tailsieve import __version__, config as cfgmod
from tailsieve.errors import TailError
from tailsieve.follow import FollowEngine
from tailsieve.output import Output
from tailsieve.sources import FileSource, open_source
from tailsieve.watcher import install_stop_signals, watch

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def parse_num_lines(s: Optional[str], default: int) -> int:
    """-n value -> signed int. Non-numeric input is rejected before any I/O."""
    if s is None:
        return default
    try:
        return int(s.strip())
    except ValueError:
        raise typer.BadParameter(f"illegal offset: {s}", param_hint="'--num-lines' / '-n'")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tailsieve {__version__}")
        raise typer.Exit()


def _init_config_callback(value: bool) -> None:
    if value:
        path = cfgmod.write_default_config()
        typer.echo(f"[tailsieve] config: {path}")
        raise typer.Exit()


def _fail(e: Exception) -> typer.Exit:
    typer.echo(f"error: {e}", err=True)
    return typer.Exit(code=1)


@app.command()
def main(
    file: Optional[str] = typer.Argument(None, help="Path of the file to tail/follow (default: stdin)."),
    num_lines: Optional[str] = typer.Option(
        None, "--num-lines", "-n", help="Number of lines from the end to tail (default 5)."
    ),
    follow: bool = typer.Option(False, "--follow", "-f", help="Follow the file for live changes."),
    sieve: str = typer.Option(
        "", "--sieve", "-s", help="Only show new lines containing this phrase. Implies --follow."
    ),
    polling: bool = typer.Option(False, "--polling", help="Poll the file instead of using OS notifications."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
    init_config: bool = typer.Option(
        False, "--init-config", callback=_init_config_callback, is_eager=True,
        help="Write a default ~/.config/tailsieve/config.yaml and exit.",
    ),
) -> None:
    """Print the last lines of FILE, optionally following it with a sieve."""
    try:
        cfg = cfgmod.load_config()
    except TailError as e:
        raise _fail(e)

    n = parse_num_lines(num_lines, cfg.num_lines)
    if sieve:
        follow = True

    output = Output(highlight_style=cfg.highlight_style)
    try:
        source = open_source(file)
        output.write(source.last_lines(n))
    except TailError as e:
        raise _fail(e)

    if not follow:
        return
    if not isinstance(source, FileSource):
        typer.echo("[tailsieve] --follow ignored for standard input.", err=True)
        return

    engine = FollowEngine(source, output, sieve=sieve, truncation_notice=cfg.truncation_notice)
    stop = threading.Event()
    install_stop_signals(stop)
    try:
        ok = watch(
            engine,
            stop,
            polling=polling or cfg.watch_polling,
            poll_interval=cfg.poll_interval,
        )
    except TailError as e:
        raise _fail(e)
    if not ok:
        raise typer.Exit(code=1)


def run_cli() -> None:
    app()


if __name__ == "__main__":
    run_cli()

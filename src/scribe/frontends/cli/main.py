"""CLI entry point."""

from __future__ import annotations

import asyncio
import sys

import rich_click as click
from rich.console import Console
from rich.markup import escape

from scribe.core.config import ScribeConfig, load_config
from scribe.core.evaluators import get_flavor, list_flavors
from scribe.core.flavor import ReplFlavor
from scribe.core.logging_config import LOG_LEVELS, configure_logging
from scribe.core.session.engine import SessionEngine
from scribe.core.session.transcript import ERROR_MARKER
from scribe.core.storage import JSONStorage, load_command_history, save_command_history

# Configure rich-click styling
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
click.rich_click.ERRORS_EPILOGUE = ""
click.rich_click.MAX_WIDTH = 100


def _resolve(
    flavor_name: str | None,
    storage_path: str | None,
    buffer_size: int | None = None,
) -> tuple[ScribeConfig, ReplFlavor, JSONStorage]:
    """Resolve config, flavor and storage shared by all commands."""
    try:
        config = load_config(
            storage_path=storage_path,
            history_buffer_size=buffer_size,
            flavor=flavor_name,
        )
        flavor = get_flavor(config.flavor, config)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    storage = JSONStorage.load(config.storage_path)
    return config, flavor, storage


flavor_option = click.option(
    "--flavor",
    "-f",
    "flavor_name",
    default=None,
    help="REPL flavor (default: $SCRIBE_FLAVOR or python)",
)
storage_option = click.option(
    "--storage",
    "storage_path",
    default=None,
    help="Storage file (default: $SCRIBE_STORAGE_PATH or ~/.scribe/storage.json)",
)


# =========================================================================
# Root CLI
# =========================================================================
@click.group()
@click.version_option(package_name="scribe-repl")
def cli() -> None:
    """Scribe - session engine for read-eval-print loops.

    **Commands:**

        scribe repl       Interactive session with persisted command history

        scribe eval       Evaluate one expression and record it in history

        scribe history    Show or clear persisted command history

        scribe flavors    List available REPL flavors
    """
    pass


@cli.command()
@flavor_option
@storage_option
@click.option(
    "--buffer-size",
    type=int,
    default=None,
    help="History buffer size when storage has none",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: $SCRIBE_LOG_LEVEL or WARNING)",
)
@click.option("--theme", default="default", help="Color theme (default, plain)")
def repl(
    flavor_name: str | None,
    storage_path: str | None,
    buffer_size: int | None,
    log_level: str | None,
    theme: str,
) -> None:
    """Start an interactive REPL.

    Type **help** inside the REPL for its special commands. Up/Down
    recall earlier expressions, Ctrl-D exits.

    **Examples:**

        scribe repl

        scribe repl --flavor shell

        scribe repl --storage ./history.json --buffer-size 50
    """
    from scribe.frontends.cli.repl import run_interactive

    configure_logging(level=log_level)
    config, flavor, storage = _resolve(flavor_name, storage_path, buffer_size)
    engine = SessionEngine(flavor, storage, config.history_buffer_size)
    asyncio.run(run_interactive(engine, theme_name=theme))


@cli.command(name="eval")
@click.argument("expression")
@flavor_option
@storage_option
def eval_command(expression: str, flavor_name: str | None, storage_path: str | None) -> None:
    """Evaluate a single expression.

    The expression is recorded in the flavor's command history exactly
    as in an interactive session. Exits with status 1 on an evaluation
    error.

    **Examples:**

        scribe eval "2 ** 10"

        scribe eval --flavor shell "ls -la"
    """
    configure_logging()
    config, flavor, storage = _resolve(flavor_name, storage_path)
    engine = SessionEngine(flavor, storage, config.history_buffer_size)

    before = engine.read()
    engine.evaluate(expression.strip())
    text = engine.read()

    if not text.startswith(before) or text == before:
        # clear/reset replaced the transcript
        return

    output = text[len(before) :]
    # Drop the echoed input line and the trailing prompt
    output = output.split("\n", 1)[1] if "\n" in output else ""
    marker = "\n" + engine.transcript.ready_marker
    if output.endswith(marker):
        output = output[: -len(marker)]

    print(output)
    if output.startswith(ERROR_MARKER):
        sys.exit(1)


@cli.command()
@flavor_option
@storage_option
@click.option("--last", "-n", type=int, default=None, help="Show only the last N commands")
@click.option("--clear", is_flag=True, help="Clear the flavor's command history")
def history(
    flavor_name: str | None,
    storage_path: str | None,
    last: int | None,
    clear: bool,
) -> None:
    """Show or clear persisted command history.

    History is stored per flavor title, so clearing the python
    history leaves the shell history untouched.

    **Examples:**

        scribe history

        scribe history --flavor shell --last 20

        scribe history --clear
    """
    console = Console(highlight=False)
    _, flavor, storage = _resolve(flavor_name, storage_path)

    if clear:
        save_command_history(storage, flavor.title, [])
        console.print(f"Cleared history for {escape(flavor.title)}")
        return

    commands = load_command_history(storage, flavor.title)
    if not commands:
        console.print(f"[dim]No history for {escape(flavor.title)}[/]")
        return

    offset = 0
    if last is not None and last < len(commands):
        offset = len(commands) - last
        commands = commands[offset:]

    for i, command in enumerate(commands, offset + 1):
        console.print(f"[dim]{i:>5}[/]  {escape(command)}")


@cli.command()
def flavors() -> None:
    """List available REPL flavors."""
    console = Console(highlight=False)
    for name in list_flavors():
        flavor = get_flavor(name)
        console.print(
            f"[bold]{name}[/]  {escape(flavor.title)}  [dim]prompt: {escape(flavor.prompt)}[/]"
        )


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

"""CLI entry point for choosy.

Uses Typer for command routing. The picker draws on stderr, so the picked
value printed on stdout can be captured by the shell.
"""

from pathlib import Path
from typing import List, Optional

import typer

__all__ = ["app", "cli_main"]

EXIT_ABORTED = 1
EXIT_CONFIG_ERROR = 2
EXIT_DISPLAY_ERROR = 3

app = typer.Typer(
    name="choosy",
    help="Interactive terminal list picker",
    no_args_is_help=True,
)


def read_choices_file(path: Path) -> list[str]:
    """Read one choice per line, skipping blank lines."""
    return [line for line in path.read_text().splitlines() if line.strip()]


@app.command()
def pick(
    prompt: str = typer.Argument(..., help="Prompt shown above the list (\\n for new lines)"),
    choices: Optional[List[str]] = typer.Argument(None, help="Choices to pick from"),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        help="Read additional choices from a file, one per line",
    ),
    with_id: bool = typer.Option(
        False, "--with-id", "-i", help="Print '<id>\\t<value>' instead of the value"
    ),
    text_color: Optional[str] = typer.Option(None, "--text-color", help="Base foreground"),
    background_color: Optional[str] = typer.Option(
        None, "--background-color", help="Base background"
    ),
    selected_color: Optional[str] = typer.Option(
        None, "--selected-color", help="Foreground of the highlighted row"
    ),
    bold: Optional[bool] = typer.Option(
        None, "--bold/--no-bold", help="Bold highlighted row"
    ),
) -> None:
    """Pick one choice and print it."""
    from choosy.picker import pick as run_pick
    from choosy.utils.config import PickerConfig
    from choosy.utils.exceptions import (
        ConfigurationError,
        DisplaySurfaceError,
        SelectionAborted,
    )

    values = list(choices or [])
    if file is not None:
        values.extend(read_choices_file(file))

    config = PickerConfig()
    if text_color is not None:
        config.text_color = text_color
    if background_color is not None:
        config.background_color = background_color
    if selected_color is not None:
        config.selected_text_color = selected_color
    if bold is not None:
        config.selected_text_bold = bold

    try:
        result = run_pick(prompt.replace("\\n", "\n"), values, config)
    except SelectionAborted:
        raise typer.Exit(EXIT_ABORTED)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR)
    except DisplaySurfaceError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_DISPLAY_ERROR)

    if with_id:
        typer.echo(f"{result.id}\t{result.value}")
    else:
        typer.echo(result.value)


# Config subcommand group
config_app = typer.Typer(help="Inspect configuration")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    from rich.console import Console
    from rich.table import Table

    from choosy.utils.config import PickerConfig

    config = PickerConfig()
    table = Table(title=f"choosy config ({config.choosy_dir})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in config.as_dict().items():
        table.add_row(key, str(value))
    Console().print(table)


# Debug subcommand group
debug_app = typer.Typer(help="Debug mode commands")
app.add_typer(debug_app, name="debug")


def _set_debug(enabled: bool) -> None:
    from choosy.utils.config import PickerConfig
    from choosy.utils.debug import reload_config

    config = PickerConfig()
    config.debug = enabled
    config.save()
    reload_config()
    typer.echo(f"Debug logging {'enabled' if enabled else 'disabled'}")


@debug_app.command("on")
def debug_on() -> None:
    """Enable debug logging."""
    _set_debug(True)


@debug_app.command("off")
def debug_off() -> None:
    """Disable debug logging."""
    _set_debug(False)


def cli_main() -> None:
    """Entry point for pyproject.toml scripts."""
    app()


if __name__ == "__main__":
    cli_main()

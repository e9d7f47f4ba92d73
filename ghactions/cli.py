"""
This file is the entry point for the 'ghactions' command-line tool.
Run 'ghactions --help' in your shell to see the commands.
"""
import os
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from common.app_setup import print_and_log, print_error, setup_logging
from .config import get_settings
from .errors import ActionsError
from .models import ActionDescriptor, ActionInput, ActionOutput, load_action

app = typer.Typer(add_completion=False, help="Inspect and edit GitHub Action metadata files.")


@app.callback()
def main(log_file: Path | None = typer.Option(None, help="Log file (default: ~/.ghactions/log.txt)")):
    settings = get_settings()
    logfile = log_file or settings.log_file
    setup_logging(app_name="ghactions", loglevel=settings.log_level, logfile=str(logfile) if logfile else None)


def _resolve(path: str | Path) -> Path:
    """A directory, or any path ending in a separator, stands for the action file inside it."""
    raw = os.fspath(path)
    if raw.endswith((os.sep, "/")) or Path(raw).is_dir():
        return Path(raw) / get_settings().action_file
    return Path(raw)


def _load_or_exit(path: Path) -> ActionDescriptor:
    try:
        return load_action(path)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        print_error(f"Failed to load {path}: {e}")
        raise typer.Exit(1)


def _write_or_exit(descriptor: ActionDescriptor) -> Path:
    try:
        written = descriptor.write()
    except ActionsError as e:
        print_error(f"Failed to write {descriptor.path}: {e}")
        raise typer.Exit(1)
    print_and_log(f"Wrote {escape(str(written))}")
    return written


@app.command()
def show(path: Path = typer.Argument(..., help="Action file or directory containing it")):
    """Show a human readable summary of an action descriptor."""
    descriptor = _load_or_exit(_resolve(path))
    print_and_log(f"[bold]Name:[/bold] {escape(descriptor.name or '-')}")
    print_and_log(f"[bold]Description:[/bold] {escape(descriptor.description or '-')}")
    print_and_log(f"[bold]Author:[/bold] {escape(descriptor.author or '-')}")
    if descriptor.branding is not None:
        print_and_log(f"[bold]Branding:[/bold] {escape(descriptor.branding.icon)} ({escape(descriptor.branding.color)})")

    console = Console()
    if descriptor.inputs:
        table = Table(title="Inputs")
        for column in ("Name", "Required", "Default", "Description"):
            table.add_column(column)
        for name, item in descriptor.inputs.items():
            required = "-" if item.required is None else str(item.required).lower()
            table.add_row(escape(name), required, escape(item.default or "-"), escape(item.description or "-"))
        console.print(table)
    if descriptor.outputs:
        table = Table(title="Outputs")
        table.add_column("Name")
        table.add_column("Description")
        for name, item in descriptor.outputs.items():
            table.add_row(escape(name), escape(item.description or "-"))
        console.print(table)

    runs = descriptor.runs
    print_and_log(f"[bold]Runs:[/bold] using={escape(runs.using)} image={escape(runs.image or '-')}")
    if runs.args:
        print_and_log(f"[bold]Args:[/bold] {escape(' '.join(runs.args))}")


@app.command()
def check(path: Path = typer.Argument(..., help="Action file or directory containing it")):
    """Load an action descriptor and report whether it is well formed."""
    target = _resolve(path)
    descriptor = _load_or_exit(target)
    print_and_log(
        f"OK: {escape(str(target))} ({len(descriptor.inputs)} inputs, {len(descriptor.outputs)} outputs)"
    )


@app.command()
def init(
    path: str = typer.Argument(
        ...,
        help="Action file, or a directory to create it in (end a new directory with '/')",
    ),
    name: str | None = typer.Option(None, help="Action name (default: configured package name)"),
    description: str | None = typer.Option(None, help="Action description"),
    author: str | None = typer.Option(None, help="Action author"),
    image: str | None = typer.Option(None, help="Container image (default: ./Dockerfile)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Create a new docker based action descriptor."""
    target = _resolve(path)
    if target.exists() and not force:
        print_error(f"Refusing to overwrite {target} (use --force)")
        raise typer.Exit(1)
    fields = {"name": name, "description": description, "author": author}
    descriptor = ActionDescriptor.create(
        get_settings(), path=target, **{k: v for k, v in fields.items() if v is not None}
    )
    if image is not None:
        descriptor.runs.image = image
    _write_or_exit(descriptor)


@app.command()
def add_input(
    path: Path = typer.Argument(..., help="Action file or directory containing it"),
    name: str = typer.Argument(..., help="Input name"),
    description: str | None = typer.Option(None, help="Input description"),
    required: bool | None = typer.Option(None, "--required/--optional", help="Whether the input is required"),
    default: str | None = typer.Option(None, help="Default value"),
    deprecation_message: str | None = typer.Option(None, help="Mark the input as deprecated"),
):
    """Add or replace an input declaration."""
    descriptor = _load_or_exit(_resolve(path))
    descriptor.inputs[name] = ActionInput(
        description=description,
        required=required,
        default=default,
        deprecation_message=deprecation_message,
    )
    _write_or_exit(descriptor)


@app.command()
def add_output(
    path: Path = typer.Argument(..., help="Action file or directory containing it"),
    name: str = typer.Argument(..., help="Output name"),
    description: str | None = typer.Option(None, help="Output description"),
):
    """Add or replace an output declaration."""
    descriptor = _load_or_exit(_resolve(path))
    descriptor.outputs[name] = ActionOutput(description=description)
    _write_or_exit(descriptor)


@app.command()
def dump(path: Path = typer.Argument(..., help="Action file or directory containing it")):
    """Print the document exactly as it would be written back."""
    descriptor = _load_or_exit(_resolve(path))
    typer.echo(descriptor.to_yaml(), nl=False)


if __name__ == "__main__":
    app()

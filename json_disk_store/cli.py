"""Command-line interface for JSON Disk Store."""

import asyncio
import json
import logging
import sys
from typing import Any, Optional

import click

from . import __version__
from .storage.disk_store import DiskStore, JsonValue
from .storage.errors import StoreError

_MISSING = object()


def parse_value(raw: str) -> JsonValue:
    """Parse a command-line value as JSON, falling back to a plain string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def format_value(value: Any) -> str:
    return json.dumps(value)


def fail(message: str):
    click.echo(click.style(message, fg="red"), err=True)
    sys.exit(1)


def run(coro):
    """Run a store coroutine, reporting store and decode errors."""
    store = click.get_current_context().find_object(DiskStore)
    try:
        return asyncio.run(coro)
    except StoreError as e:
        fail(str(e))
    except (ValueError, OSError) as e:
        click.echo(click.style(f"Error accessing {store.file_path}: {e}", fg="red"), err=True)
        click.echo("Check that the password is correct and the file is valid.", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('-f', '--file', 'file_name', default='data.json', show_default=True,
              help='Name of the store file')
@click.option('-d', '--directory', type=click.Path(file_okay=False),
              help='Directory holding the store file (default: current directory)')
@click.option('--cache', is_flag=True, help='Keep the mapping in memory between operations')
@click.option('-p', '--password', help='Password for encrypting the store file')
@click.option('-P', '--ask-password', is_flag=True,
              help='Prompt for the password with hidden input')
@click.option('-v', '--verbose', is_flag=True, help='Log store activity to stderr')
@click.pass_context
def cli(
    ctx: click.Context,
    file_name: str,
    directory: Optional[str],
    cache: bool,
    password: Optional[str],
    ask_password: bool,
    verbose: bool,
):
    """JSON Disk Store - a key-value store persisted to a JSON file."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    if ask_password and not password:
        password = click.prompt("Password", hide_input=True)

    ctx.obj = DiskStore(file_name, directory, use_cache=cache, password=password)


@cli.command()
@click.argument('label')
@click.argument('value')
@click.pass_obj
def write(store: DiskStore, label: str, value: str):
    """
    Store VALUE under a new key built from LABEL.

    Prints the generated key, which is needed to read the value back.
    """
    unique_key = run(store.write(label, parse_value(value)))
    click.echo(unique_key)


@cli.command()
@click.argument('key')
@click.pass_obj
def read(store: DiskStore, key: str):
    """Print the value stored under KEY as JSON."""
    value = run(store.read(key, _MISSING))
    if value is _MISSING:
        fail(f'Key "{key}" not found')
    click.echo(format_value(value))


@cli.command()
@click.argument('key')
@click.argument('value')
@click.pass_obj
def update(store: DiskStore, key: str, value: str):
    """Replace the value stored under KEY."""
    run(store.update(key, parse_value(value)))
    click.echo(f"Updated: {key}")


@cli.command()
@click.argument('key')
@click.pass_obj
def delete(store: DiskStore, key: str):
    """Remove KEY from the store."""
    deleted = run(store.delete(key))
    click.echo(f"Key deleted: {str(deleted).lower()}")


@cli.command()
@click.pass_obj
def demo(store: DiskStore):
    """
    Run a write, read, update and delete against the store.

    Uses the configured file, so run it against a scratch file.
    """

    async def steps():
        click.echo(click.style("JSON Disk Store - Demo", fg="green", bold=True))
        click.echo(f"  File: {store.file_path}")
        click.echo()

        key = await store.write("key1", "value1")
        click.echo(f"Wrote key: {key}")

        value = await store.read(key)
        click.echo(f"Read value: {value}")

        await store.update(key, "newValue")
        value = await store.read(key)
        click.echo(f"Updated value: {value}")

        deleted = await store.delete(key)
        click.echo(f"Key deleted: {str(deleted).lower()}")

    run(steps())


def main():
    """Entry point."""
    cli()


if __name__ == '__main__':
    main()

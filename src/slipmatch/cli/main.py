#!/usr/bin/env python3
"""
Main CLI Entry Point for slipmatch

Provides the command-line interface for enriching PocketSmith transactions
from bank-transfer notifications.
"""

import json
import logging
import os

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    slipmatch - enrich PocketSmith transactions from bank transfer slips.

    Matches each transfer notification to the ledger transaction it describes
    and fills in the payee, reference, category and slip image.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["SLIPMATCH_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("slipmatch").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from slipmatch import __author__, __version__

    click.echo(f"slipmatch v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration (secrets redacted)."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(json.dumps(config_obj.to_dict(), indent=2))


# Import enrich command
from .enrich import enrich  # noqa: E402

main.add_command(enrich)


if __name__ == "__main__":
    main()

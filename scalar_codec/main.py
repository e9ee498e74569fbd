"""CLI entry point for scalar-codec."""

from __future__ import annotations

import logging

import click
from dotenv import load_dotenv
from rich.logging import RichHandler

from scalar_codec.commands.codec.cmd import codec
from scalar_codec.helpers.console import console

load_dotenv()


@click.group()
@click.version_option(version="0.1.0", prog_name="scalar-codec")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs")
def cli(verbose: bool) -> None:
    """Encode and decode custom GraphQL scalars using the schema."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


cli.add_command(codec)


if __name__ == "__main__":
    cli()

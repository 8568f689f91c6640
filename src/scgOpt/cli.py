#!/usr/bin/env python
"""
scgOpt CLI - command-line interface built from the config dataclasses.
"""

import logging
from typing import Optional, Annotated

import typer

from scgOpt.config import config_logger, dataclass_typer, PartitionConfig
from scgOpt.partition import InvalidArgumentError

logger = logging.getLogger("scgOpt")

# Create the Typer app
app = typer.Typer(
    name="scgopt",
    help="scgOpt: optimal partitions of real sequences for spectral coarse graining",
    rich_markup_mode="rich",
    add_completion=False,
)


@app.command(name="partition")
@dataclass_typer
def partition(config: PartitionConfig):
    """
    Split a vector of values into contiguous groups of minimal cost.

    This command:
    - Loads the values (and weights for stochastic matrices)
    - Sorts them and checks the number of groups against the unique values
    - Solves the optimal partition by dynamic programming
    - Saves one group label per input value
    """
    config.show_config(logger)
    logger.info(f"Labels will be saved to: {config.labels_path}")

    try:
        from scgOpt.partition.run import run_partition
        run_partition(config)
        logger.info("✓ Optimal partition computed successfully!")
    except InvalidArgumentError as e:
        logger.error(f"Invalid argument: {e}")
        raise typer.Exit(1)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        try:
            from scgOpt import __version__
            typer.echo(f"scgOpt version {__version__}")
        except ImportError:
            typer.echo("scgOpt version: development")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[Optional[bool], typer.Option(
        "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )] = None,
):
    """
    scgOpt: optimal partitions of real sequences for spectral coarse graining.

    Use 'scgopt COMMAND --help' for more information on a specific command.

    Example:
        scgopt partition --values-file eigvec.txt --n-groups 4
        scgopt partition --values-file eigvec.txt --n-groups 4 --matrix-type stochastic --weights-file p.txt
    """
    config_logger()


if __name__ == "__main__":
    app()

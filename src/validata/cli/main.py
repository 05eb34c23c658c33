"""validata CLI entry point."""

import logging

import click


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool):
    """validata: composable validation rules CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Register subcommands
from validata.cli.check_cmd import check, rules, validators  # noqa: E402

cli.add_command(check)
cli.add_command(rules)
cli.add_command(validators)

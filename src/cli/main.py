"""QuietMind command line."""

import click

from cli.commands import checkin, db, serve, week
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """QuietMind - mood check-ins and weekly reflections."""
    config = load_config_model()
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=config.logging.json_mode, level=level)
    ctx.obj = config


cli.add_command(db)
cli.add_command(serve)
cli.add_command(checkin)
cli.add_command(week)


if __name__ == "__main__":
    cli()

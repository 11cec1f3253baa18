"""Database setup commands."""

import click
from rich.console import Console

console = Console()


@click.group()
def db():
    """Database setup commands."""


@db.command("init")
@click.pass_obj
def db_init(config):
    """Create the users and moods tables."""
    from mood import MoodStore
    from web.user_store import init_db

    path = config.paths.db_path
    init_db(path)
    MoodStore(path)
    console.print(f"[green]Initialized[/] {path}")

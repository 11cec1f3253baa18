"""Mood check-in and weekly view commands."""

import sys
from functools import partial

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _resolve_user(config, email: str) -> int:
    from web.user_store import get_user_by_email, init_db

    init_db(config.paths.db_path)
    user = get_user_by_email(email, db_path=config.paths.db_path)
    if not user:
        console.print(f"[red]No account for[/] {email}")
        sys.exit(1)
    return user["id"]


@click.command()
@click.option("-e", "--email", required=True, help="Account email")
@click.option("-f", "--feeling", required=True, help="Feeling label, e.g. Happy")
@click.option("-d", "--description", default=None, help="Optional note")
@click.pass_obj
def checkin(config, email: str, feeling: str, description: str | None):
    """Record a mood check-in."""
    from mood import MoodStore

    user_id = _resolve_user(config, email)
    record = MoodStore(config.paths.db_path).create(user_id, feeling, description=description)
    console.print(f"[green]Checked in[/] {record.feeling} at {record.created_at.astimezone():%H:%M}")


@click.command()
@click.option("-e", "--email", required=True, help="Account email")
@click.option("-w", "--week-start", default=None, help="Any date in the week (YYYY-MM-DD)")
@click.option("--insight", is_flag=True, help="Also generate the weekly reflection")
@click.pass_obj
def week(config, email: str, week_start: str | None, insight: bool):
    """Show the feeling breakdown for a week."""
    from llm import LLMError, create_llm_provider
    from mood import (
        InvalidDate,
        LLMInsightGenerator,
        MoodStore,
        UpstreamError,
        WeeklyInsightService,
        summarize_week,
    )

    user_id = _resolve_user(config, email)
    store = MoodStore(config.paths.db_path)

    if insight:
        factory = partial(
            create_llm_provider,
            provider=config.llm.provider,
            api_key=config.llm.api_key,
            model=config.llm.model,
            base_url=config.llm.base_url,
            timeout=config.llm.timeout_seconds,
        )
        service = WeeklyInsightService(
            store,
            LLMInsightGenerator(temperature=config.llm.temperature, provider_factory=factory),
        )
        try:
            result = service.weekly_insight(user_id, week_start)
        except LLMError as e:
            console.print(f"[red]LLM error:[/] {e}")
            sys.exit(1)
    else:
        result = summarize_week(store, user_id, week_start)

    if isinstance(result, InvalidDate):
        console.print(f"[red]{result.message}:[/] {result.value}")
        sys.exit(2)
    if isinstance(result, UpstreamError):
        console.print(f"[red]{result.message}:[/] {result.details}")
        sys.exit(1)

    start = result.range.start
    title = f"Week of {start:%Y-%m-%d} - {result.total} check-ins"
    table = Table(show_header=True, title=title)
    table.add_column("Feeling")
    table.add_column("Count", justify="right")
    for feeling, count in sorted(result.breakdown.items(), key=lambda kv: (-kv[1], kv[0])):
        table.add_row(feeling, str(count))
    console.print(table)

    if insight:
        console.print(f"\n[bold]Insight:[/] {result.insight}")
        console.print(f"[bold]Try this:[/] {result.try_this}")

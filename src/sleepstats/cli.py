"""CLI for the sleepstats engine."""

from __future__ import annotations

import json
import logging
from datetime import date
from functools import wraps

import click

from sleepstats.errors import InvalidArgument, SleepStatsError
from sleepstats.repository import JsonlSessionRepository
from sleepstats.service import SleepStatsService
from sleepstats.session import parse_date

GRANULARITIES = ["daily", "weekly", "monthly", "yearly"]


def _service(ctx: click.Context, today: str | None = None) -> SleepStatsService:
    data = ctx.obj["data"]
    if data is None:
        raise click.UsageError("No session file given (use --data or SLEEPSTATS_DATA).")
    repo = JsonlSessionRepository(data)
    if today is None:
        return SleepStatsService(repo)
    pinned = parse_date(today)
    return SleepStatsService(repo, clock=lambda: pinned)


def _engine_errors(func):
    """Turn engine errors into click errors with a non-zero exit status."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except InvalidArgument as e:
            raise click.BadParameter(str(e)) from e
        except SleepStatsError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def range_options(func):
    func = click.option("--end", "-e", default=None, help="Last date (YYYY-MM-DD), inclusive.")(func)
    func = click.option("--start", "-s", default=None, help="First date (YYYY-MM-DD), inclusive.")(func)
    func = click.option("--user", "-u", "user_id", required=True, type=int, help="User ID.")(func)
    return func


@click.group()
@click.option("--data", "-d", envvar="SLEEPSTATS_DATA", type=click.Path(dir_okay=False),
              default=None, help="JSONL file of sleep session records.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, data: str | None, verbose: bool) -> None:
    """sleepstats: statistics and insights for logged sleep sessions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["data"] = data


@main.command()
@range_options
@click.pass_context
@_engine_errors
def summary(ctx: click.Context, user_id: int, start: str | None, end: str | None) -> None:
    """Average duration, quality, bed/wake times and efficiency."""
    result = _service(ctx).get_summary(user_id, start, end)
    click.echo(result.to_json())


@main.command()
@range_options
@click.pass_context
@_engine_errors
def trends(ctx: click.Context, user_id: int, start: str | None, end: str | None) -> None:
    """Date-ordered duration and quality series."""
    result = _service(ctx).get_trends(user_id, start, end)
    click.echo(result.to_json())


@main.command()
@range_options
@click.option("--granularity", "-g", type=click.Choice(GRANULARITIES), default="daily",
              help="Bucket size.")
@click.pass_context
@_engine_errors
def periods(ctx: click.Context, user_id: int, start: str | None, end: str | None,
            granularity: str) -> None:
    """Per-period averages and session counts."""
    buckets = _service(ctx).get_period_stats(user_id, granularity, start, end)
    if not buckets:
        click.echo("No sleep sessions in this range.", err=True)
    click.echo(json.dumps([b.to_dict() for b in buckets], indent=2))


@main.command()
@range_options
@click.pass_context
@_engine_errors
def patterns(ctx: click.Context, user_id: int, start: str | None, end: str | None) -> None:
    """Weekday vs weekend durations and bedtime consistency."""
    result = _service(ctx).get_patterns(user_id, start, end)
    click.echo(result.to_json())


@main.command()
@range_options
@click.pass_context
@_engine_errors
def report(ctx: click.Context, user_id: int, start: str | None, end: str | None) -> None:
    """Summary, trends and patterns in one document."""
    result = _service(ctx).get_report(user_id, start, end)
    click.echo(result.to_json())


@main.command()
@click.option("--user", "-u", "user_id", required=True, type=int, help="User ID.")
@click.option("--today", default=None, help="Pin today's date (YYYY-MM-DD) for the windows.")
@click.pass_context
@_engine_errors
def insights(ctx: click.Context, user_id: int, today: str | None) -> None:
    """Compare the last 30 days with the 30 days before."""
    result = _service(ctx, today).get_insights(user_id)
    click.echo(json.dumps([i.to_dict() for i in result], indent=2, ensure_ascii=False))


@main.command()
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--user", "-u", "user_id", default=1, type=int, help="User ID to generate for.")
@click.option("--days", default=90, type=int, help="Number of evenings to generate.")
@click.option("--end", "-e", default=None, help="Last evening (YYYY-MM-DD, default today).")
@click.option("--missing", default=0.1, type=float, help="Probability of skipping an evening.")
@click.option("--seed", default=None, type=int, help="Random seed.")
@_engine_errors
def generate(output: str, user_id: int, days: int, end: str | None, missing: float,
             seed: int | None) -> None:
    """Write synthetic sleep sessions to OUTPUT as JSONL."""
    from sleepstats.generator import generate_sessions

    last = parse_date(end) if end else date.today()
    sessions = generate_sessions(user_id, days, end=last, missing_probability=missing, seed=seed)
    JsonlSessionRepository.write(output, sessions)
    click.echo(f"Wrote {len(sessions)} sessions for user {user_id} to {output}")


if __name__ == "__main__":
    main()

"""
AgeCompute CLI - Click-based command line interface.

Usage:
    agecompute compute 1995-01-01                  # Age report as of today
    agecompute compute 1995-01-01 --today 2024-06-15 --json
    agecompute compute 1995-01-01 --no-insight     # Skip the Claude request
    agecompute lunar 2024-02-10                    # Lunar date of a day
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Callable
from datetime import date, datetime
from functools import wraps
from typing import TypeVar

import click

from agecompute.age.engine import AgeFacts, compute_age_facts
from agecompute.age.lunar import default_converter, format_full_date
from agecompute.core.config import Config
from agecompute.core.exceptions import ConfigurationError
from agecompute.llm.insight import InsightResponse, InsightService, resolve_insight

# Windows UTF-8 encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])

T = TypeVar("T")


def async_command(f: Callable[..., T]) -> Callable[..., T]:
    """Decorator to convert async function to Click command."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def render_report(birth_date: date, facts: AgeFacts) -> str:
    """Plain-text Chinese report of the age facts."""
    lines = [
        f"出生日期：{format_full_date(birth_date)}",
        f"农历生日：{facts.lunar_birth_date_label}",
        f"今日农历：{facts.lunar_current_date_label}",
        f"周岁：{facts.international_age} 岁",
        f"虚岁：{facts.nominal_age} 岁",
        f"生肖：{facts.zodiac_animal}",
    ]
    if facts.solar_term:
        lines.append(f"出生节气：{facts.solar_term}")
    lines.extend([
        f"已度过：{facts.days_lived:,} 天",
        f"距下次生日：{facts.days_to_next_birthday} 天",
    ])
    return "\n".join(lines)


def render_insight(insight: InsightResponse) -> str:
    return "\n".join([
        f"文化意义：{insight.cultural_significance}",
        f"属相解读：{insight.zodiac_reading}",
        f"人生寄语：{insight.life_stage_advice}",
    ])


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to agecompute.yaml",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """AgeCompute - 周岁、虚岁与生肖计算

    Examples:
        agecompute compute 1995-01-01
        agecompute lunar 2024-02-10
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = Config(config_path=config_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.argument("birth_date", type=DATE_TYPE)
@click.option("--today", type=DATE_TYPE, help="Reference date (defaults to now)")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.option(
    "--insight/--no-insight",
    default=None,
    help="Request a cultural insight from Claude (default from config)",
)
@click.pass_obj
@async_command
async def compute(
    config: Config,
    birth_date: datetime,
    today: datetime | None,
    as_json: bool,
    insight: bool | None,
) -> None:
    """Compute ages, zodiac and birthday countdown for BIRTH_DATE (YYYY-MM-DD)."""
    birth = birth_date.date()
    now = today or datetime.now()
    facts = compute_age_facts(birth, now)

    if birth > now.date():
        click.echo(f"Warning: birth date {birth} is after {now.date()}", err=True)

    if insight is None:
        insight = config.insight_enabled

    insight_result: InsightResponse | None = None
    insight_source = None
    if insight:
        outcome = await InsightService(config=config).fetch(
            birth, facts.international_age, facts.nominal_age, facts.zodiac_animal
        )
        insight_result = resolve_insight(outcome, facts.zodiac_animal)
        insight_source = "model" if outcome.ok else "fallback"

    if as_json:
        payload = {"birthDate": birth.isoformat(), "referenceDate": now.date().isoformat()}
        payload.update(facts.to_dict())
        if insight_result is not None:
            payload["insight"] = insight_result.to_dict()
            payload["insightSource"] = insight_source
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    click.echo(render_report(birth, facts))
    if insight_result is not None:
        click.echo("")
        click.echo(render_insight(insight_result))


@cli.command()
@click.argument("day", type=DATE_TYPE)
def lunar(day: datetime) -> None:
    """Show the lunar calendar date of DAY (YYYY-MM-DD)."""
    d = day.date()
    click.echo(f"公历：{format_full_date(d)}")
    click.echo(f"农历：{default_converter.lunar_label_of(d)}")
    click.echo(f"农历年：{default_converter.lunar_year_of(d)}")
    term = default_converter.solar_term_of(d)
    if term:
        click.echo(f"节气：{term}")


if __name__ == "__main__":
    cli()

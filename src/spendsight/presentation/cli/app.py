"""SpendSight CLI application using Typer.

Database maintenance and one-off analytics runs for a single user, mostly
for operators and local development.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from spendsight.application.commands import (
    DetectRecurringPaymentsCommand,
    DetectSpendingAnomaliesCommand,
    GenerateRecommendationsCommand,
)
from spendsight.application.context import UserContext
from spendsight.application.queries import BudgetStatusQuery
from spendsight.domain.shared.exceptions import DomainException
from spendsight.domain.shared.time import ensure_tz_aware
from spendsight.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    display_database_url,
    drop_tables,
)
from spendsight.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
    create_savings_advisor_from_settings,
)
from spendsight_config.settings import get_settings

app = typer.Typer(
    name="spendsight",
    help="SpendSight - spending analytics CLI",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(
    name="db",
    help="Database schema utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)

analyze_app = typer.Typer(
    name="analyze",
    help="Run one analytics invocation for a user",
    no_args_is_help=True,
)
app.add_typer(analyze_app)

UserIdOption = typer.Option(..., "--user-id", "-u", help="User to analyze")
AsOfOption = typer.Option(
    None,
    "--as-of",
    help="Evaluate as of this instant (ISO 8601, defaults to now)",
)

RunFn = Callable[[SQLAlchemyRepositoryFactory, Optional[datetime]], Awaitable[Any]]


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@db_app.command("init")
def db_init() -> None:
    """Create all missing tables (existing data is never touched)."""
    asyncio.run(create_tables())
    console.print("[green]Database schema is up to date.[/green]")


@db_app.command("drop")
def db_drop(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Drop all tables (USE WITH CAUTION!)."""
    database_url = get_settings().database_url
    console.print(f"Database: {display_database_url(database_url)}\n")

    if not force:
        console.print("[yellow]WARNING: This will DELETE ALL DATA![/yellow]")
        typer.confirm("Continue?", abort=True)

    asyncio.run(drop_tables())
    console.print("[green]Database tables dropped.[/green]")


# ---------------------------------------------------------------------------
# Analytics runs
# ---------------------------------------------------------------------------


async def _run(user_id: UUID, as_of: Optional[datetime], run: RunFn) -> Any:
    engine = create_async_engine(get_settings().database_url, echo=False)
    session_maker = async_sessionmaker(engine, class_=AsyncSession)
    try:
        async with session_maker() as session:
            factory = SQLAlchemyRepositoryFactory(
                session=session,
                user_context=UserContext.from_values(user_id=user_id),
            )
            try:
                result = await run(factory, as_of)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            return result
    finally:
        await engine.dispose()


def _execute(user_id: UUID, as_of: Optional[datetime], run: RunFn) -> Any:
    if as_of is not None:
        as_of = ensure_tz_aware(as_of)
    try:
        return asyncio.run(_run(user_id, as_of, run))
    except DomainException as e:
        console.print(f"[red]{e.code.value}[/red]: {e.message}")
        raise typer.Exit(code=1) from e


@analyze_app.command("recurring")
def analyze_recurring(
    user_id: UUID = UserIdOption,
    as_of: Optional[datetime] = AsOfOption,
) -> None:
    """Detect recurring payments and replace the active set."""

    async def run(factory, now):
        return await DetectRecurringPaymentsCommand.from_factory(factory).execute(now)

    result = _execute(user_id, as_of, run)

    table = Table(title=f"Recurring payments ({result.count})")
    table.add_column("Merchant")
    table.add_column("Amount", justify="right")
    table.add_column("Frequency")
    table.add_column("Next expected")
    table.add_column("Confidence", justify="right")
    for p in result.patterns:
        table.add_row(
            p.merchant,
            f"{p.amount:.2f}",
            p.frequency.value,
            p.next_expected_date.date().isoformat(),
            f"{p.confidence:.2f}",
        )
    console.print(table)


@analyze_app.command("anomalies")
def analyze_anomalies(
    user_id: UUID = UserIdOption,
    as_of: Optional[datetime] = AsOfOption,
) -> None:
    """Detect spending anomalies and trends."""

    async def run(factory, now):
        return await DetectSpendingAnomaliesCommand.from_factory(factory).execute(now)

    result = _execute(user_id, as_of, run)

    table = Table(title=f"Insights ({result.count})")
    table.add_column("Type")
    table.add_column("Severity")
    table.add_column("Title")
    table.add_column("Amount", justify="right")
    for i in result.insights:
        color = "yellow" if i.severity.value == "warning" else "cyan"
        table.add_row(
            i.insight_type.value,
            f"[{color}]{i.severity.value}[/{color}]",
            i.title,
            f"{i.amount:.2f}",
        )
    console.print(table)


@analyze_app.command("budgets")
def analyze_budgets(
    user_id: UUID = UserIdOption,
    as_of: Optional[datetime] = AsOfOption,
) -> None:
    """Show month-to-date spend against monthly budgets."""

    async def run(factory, now):
        return await BudgetStatusQuery.from_factory(factory).execute(now)

    result = _execute(user_id, as_of, run)

    table = Table(title=f"Budgets since {result.period_start.date().isoformat()}")
    table.add_column("Budget")
    table.add_column("Spent", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Used", justify="right")
    table.add_column("Alert")
    for s in result.statuses:
        table.add_row(
            s.budget_name,
            f"{s.spent:.2f}",
            f"{s.limit_amount:.2f}",
            f"{s.percentage:.0f}%",
            s.alert_level.value,
        )
    console.print(table)


@analyze_app.command("recommendations")
def analyze_recommendations(
    user_id: UUID = UserIdOption,
    as_of: Optional[datetime] = AsOfOption,
) -> None:
    """Generate savings recommendations via the reasoning service."""
    advisor = create_savings_advisor_from_settings()

    async def run(factory, now):
        command = GenerateRecommendationsCommand.from_factory(factory, advisor=advisor)
        return await command.execute(now)

    result = _execute(user_id, as_of, run)

    title = f"Recommendations ({result.count})"
    if result.used_fallback:
        title += " [dim](fallback)[/dim]"
    table = Table(title=title)
    table.add_column("Title")
    table.add_column("Description")
    table.add_column("Savings", justify="right")
    for r in result.recommendations:
        savings = "-"
        if r.potential_savings is not None:
            savings = f"{r.potential_savings:.2f}"
        table.add_row(r.title, r.description, savings)
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    logging.basicConfig(level=get_settings().log_level.upper())
    app()


if __name__ == "__main__":
    cli()

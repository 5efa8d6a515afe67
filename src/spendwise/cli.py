"""CLI for spendwise."""

import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .balances import is_settled
from .budgets import usage_percent
from .config import load_settings
from .exceptions import GroupNotFoundError
from .service import BudgetAlertSession, ExpenseService
from .snapshot import load_snapshot
from .ui import confirm_dismiss, select_category_interactive

app = typer.Typer(
    name="spendwise",
    help="Group balances, budget alerts and spending insights from a backend export",
)

console = Console()

SNAPSHOT_OPTION = typer.Option(
    None, "--snapshot", "-s", help="Snapshot JSON file (defaults to SNAPSHOT_PATH)"
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Verbose output")


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _build_service(snapshot_path: Path | None) -> ExpenseService:
    """Load settings and the snapshot, and wire up the service."""
    settings = load_settings()
    if snapshot_path is not None:
        settings.snapshot_path = snapshot_path

    snapshot = load_snapshot(settings.snapshot_path)
    return ExpenseService(settings, snapshot)


def _fail(e: Exception, verbose: bool):
    """Print an error and exit, re-raising in verbose mode."""
    console.print(f"\n[bold red]Error:[/bold red] {e}")
    if verbose:
        raise e
    sys.exit(1)


def format_money(amount: Decimal, use_color: bool = True) -> str:
    """
    Format money in accounting style with alignment.

    Negative amounts use parentheses: (85.02)
    Positive amounts have spaces:      85.02
    """
    abs_amount = abs(amount)
    if amount < 0:
        if use_color:
            return f"([red]{abs_amount:,.2f}[/red])"
        return f"({abs_amount:,.2f})"
    if use_color:
        return f" [green]{abs_amount:,.2f}[/green] "
    return f" {abs_amount:,.2f} "


@app.command()
def balances(
    group_id: str = typer.Argument(..., help="Group id to compute balances for"),
    snapshot: Path | None = SNAPSHOT_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Show who owes whom in a group.

    Lists each member's net balance and the transfers that would settle it.
    """
    setup_logging(verbose)

    try:
        service = _build_service(snapshot)
        group = service.get_group(group_id)
        member_balances = service.group_balances(group_id)
        tolerance = service.settings.settled_tolerance

        table = Table(
            title=f"Balances: {group.name}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Member", style="cyan")
        table.add_column("Balance", justify="right", width=14)
        table.add_column("Status")

        for member_id, balance in member_balances.items():
            if is_settled(balance, tolerance):
                status = "[dim]Settled[/dim]"
            elif balance > 0:
                status = f"Gets back {abs(balance):,.2f}"
            else:
                status = f"Has to pay {abs(balance):,.2f}"

            table.add_row(group.display_name(member_id), format_money(balance), status)

        console.print(table)

        settlements = service.settlement_plan(group_id)
        if not settlements:
            console.print("\n[green]Everyone is settled up.[/green]")
            return

        console.print("\n[bold]Suggested transfers:[/bold]")
        for settlement in settlements:
            console.print(
                f"  {group.display_name(settlement.from_member)} → "
                f"{group.display_name(settlement.to_member)}: "
                f"[bold]{settlement.amount:,.2f}[/bold]"
            )

    except GroupNotFoundError as e:
        console.print(f"\n[yellow]{e}[/yellow]\n")
        sys.exit(1)
    except Exception as e:
        _fail(e, verbose)


@app.command()
def budgets(
    threshold: float | None = typer.Option(
        None, "--threshold", "-t", help="Alert ratio in (0, 1], overrides settings"
    ),
    interactive: bool = typer.Option(
        False, "--interactive", "-i", help="Dismiss alerts one at a time"
    ),
    snapshot: Path | None = SNAPSHOT_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Show budget usage and the current budget alert.

    Use --interactive to dismiss alerts for this session and see the next one.
    """
    setup_logging(verbose)

    if threshold is not None and not 0 < threshold <= 1:
        console.print("[bold red]Error:[/bold red] --threshold must be in (0, 1]")
        sys.exit(2)

    try:
        service = _build_service(snapshot)

        table = Table(title="Budgets", show_header=True, header_style="bold magenta")
        table.add_column("Category", style="cyan")
        table.add_column("Limit", justify="right", width=12)
        table.add_column("Spent", justify="right", width=12)
        table.add_column("Used", justify="right", width=8)

        for usage in service.budget_overview():
            ratio = usage.ratio
            used = "—" if ratio is None else f"{ratio * 100:.0f}%"
            table.add_row(
                usage.budget.category_name,
                f"{usage.budget.limit:,.2f}",
                f"{usage.spent:,.2f}",
                used,
            )

        console.print(table)

        session = BudgetAlertSession(service, threshold)
        alert = session.next_alert()

        if alert is None:
            console.print("\n[green]No budgets need attention.[/green]")
            return

        if not interactive:
            console.print(
                f"\n[bold yellow]Budget alert:[/bold yellow] {alert.category_name} "
                f"is at {usage_percent(alert)}% "
                f"({alert.spent:,.2f} of {alert.limit:,.2f})"
            )
            return

        while alert is not None:
            if not confirm_dismiss(alert):
                break
            session.dismiss(alert)
            alert = session.next_alert()

        if alert is None:
            console.print("\n[green]No more budget alerts this session.[/green]")

    except Exception as e:
        _fail(e, verbose)


@app.command()
def categorize(
    merchant: str = typer.Argument(..., help="Merchant or description to categorize"),
    interactive: bool = typer.Option(
        False, "--interactive", "-i", help="Pick a different category interactively"
    ),
    snapshot: Path | None = SNAPSHOT_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Categorize a merchant using the keyword rules."""
    setup_logging(verbose)

    try:
        service = _build_service(snapshot)
        category = service.categorize(merchant)

        console.print(f"[cyan]{merchant}[/cyan] → [bold]{category}[/bold]")

        if interactive:
            selected = select_category_interactive(
                service.snapshot.categories, merchant, suggested_name=category
            )
            if selected and selected != category:
                console.print(f"[green]Using {selected}[/green]")

    except Exception as e:
        _fail(e, verbose)


@app.command()
def insights(
    today: str | None = typer.Option(
        None, "--today", help="Reference date (YYYY-MM-DD), defaults to today"
    ),
    snapshot: Path | None = SNAPSHOT_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Show this month's spending insights and the weekly budget pace."""
    setup_logging(verbose)

    try:
        reference = date.fromisoformat(today) if today else date.today()
    except ValueError:
        console.print(f"[bold red]Error:[/bold red] invalid date '{today}'")
        sys.exit(2)

    try:
        service = _build_service(snapshot)
        summary = service.insights(reference)
        weekly = service.weekly_summary(reference)

        console.print(f"\n[bold]Spending for {reference:%B %Y}:[/bold]")
        console.print(f"  Spent: {format_money(summary.total_spent_this_month)}")
        console.print(f"  Income: {format_money(summary.total_income_this_month)}")
        console.print(f"  Net: {format_money(summary.net_balance)}")
        console.print(f"  Change vs last month: {summary.spending_change:+d}%")
        console.print(
            f"  Top category: {summary.top_category} "
            f"({summary.top_category_amount:,.2f})"
        )
        console.print(f"  Average per day: {summary.avg_daily_spend:,.2f}")

        if summary.distribution:
            table = Table(
                title="Where it went", show_header=True, header_style="bold magenta"
            )
            table.add_column("Category", style="cyan")
            table.add_column("Share", justify="right", width=8)
            for share in summary.distribution:
                table.add_row(share.name, f"{share.percent}%")
            console.print(table)

        trend = Table(title="Trend", show_header=True, header_style="bold magenta")
        trend.add_column("Month", style="cyan")
        trend.add_column("Spent", justify="right", width=12)
        for month in summary.trend:
            trend.add_row(f"{month.label} {month.year}", f"{month.amount:,.2f}")
        console.print(trend)

        console.print("\n[bold]This week:[/bold]")
        console.print(f"  Today: {weekly.today_spend:,.2f}")
        console.print(f"  Week: {weekly.week_spend:,.2f}")
        if weekly.weekly_budget > 0:
            color = "red" if weekly.is_over_budget else "green"
            direction = "over" if weekly.is_over_budget else "under"
            console.print(
                f"  [{color}]{abs(weekly.budget_difference)}% {direction}[/{color}] "
                f"the weekly budget of {weekly.weekly_budget:,.2f}"
            )

    except Exception as e:
        _fail(e, verbose)


if __name__ == "__main__":
    app()

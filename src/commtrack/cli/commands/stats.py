"""Commission statistics commands."""

import click
from commtrack.cli.error_handling import handle_domain_error
from commtrack.domain.analytics import AnalyticsService
from commtrack.domain.entities import PeriodKind
from commtrack.domain.errors import DataAccessError
from commtrack.domain.stats import CommissionStatsService
from commtrack.utils.date_parser import parse_date


def _format_change(pct: float) -> str:
    return f"{pct:+.1f}%"


def _parse_reference_date(ctx, value: str | None):
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


@click.group()
def stats_group():
    """Show commission statistics."""
    pass


@stats_group.command("period")
@click.option(
    "--period",
    type=click.Choice([kind.value for kind in PeriodKind], case_sensitive=False),
    default=PeriodKind.MONTH.value,
    show_default=True,
    help="Period to compare",
)
@click.option("--date", "reference", help="Any date inside the period (default: today)")
@click.pass_context
def period_stats(ctx, period: str, reference: str | None):
    """Compare a period with the previous one and the same period last year.

    Years are financial years running from April to March.

    Examples:
        commtrack stats period
        commtrack stats period --period quarter --date 2024-02-10
        commtrack stats period --period year --date "last year"
    """
    service = CommissionStatsService(ctx.obj["db"])
    reference_date = _parse_reference_date(ctx, reference)

    try:
        stats = service.get_commission_stats_by_period(period, reference_date)
    except (ValueError, DataAccessError) as e:
        handle_domain_error(ctx, e)
        return

    rows = [
        ("Current", stats.current.start, stats.current.end, stats.current.total, None),
        ("Previous", stats.previous.start, stats.previous.end, stats.previous.total, stats.previous.pct_change),
        (
            "Same period last year",
            stats.same_period_last_year.start,
            stats.same_period_last_year.end,
            stats.same_period_last_year.total,
            stats.same_period_last_year.pct_change,
        ),
    ]

    click.echo(f"\nCommission stats ({stats.period.value})")
    click.echo("-" * 80)
    for label, start, end, total, pct in rows:
        change = "" if pct is None else _format_change(pct)
        click.echo(f"{label:22} {start} to {end}  {total:>15,.2f}  {change:>9}")


@stats_group.command("overview")
@click.pass_context
def overview_stats(ctx):
    """Show all-time, financial-year and current-month totals."""
    db = ctx.obj["db"]
    service = CommissionStatsService(db)
    analytics = AnalyticsService(db)

    try:
        stats = service.get_commission_stats()
        overview = analytics.get_overview_stats()
    except DataAccessError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nCommission overview")
    click.echo("-" * 60)
    click.echo(f"{'Total commissions':30} {stats.total_commissions:>15,.2f}")
    click.echo(
        f"{'Current financial year':30} {stats.current_financial_year.total:>15,.2f}  "
        f"{_format_change(stats.current_financial_year.pct_change):>9}"
    )
    click.echo(
        f"{'Current month':30} {stats.current_month.total:>15,.2f}  "
        f"{_format_change(stats.current_month.pct_change):>9}"
    )
    click.echo(f"{'Monthly average (this FY)':30} {stats.monthly_average:>15,.2f}")
    click.echo(f"{'Partners':30} {overview.total_partners:>15}")
    click.echo(f"{'Entity types':30} {overview.total_product_types:>15}")
    click.echo(f"{'Average per transaction':30} {overview.avg_commission_per_transaction:>15,.2f}")


@stats_group.command("types")
@click.option("--date", "reference", help="Any date inside the financial year (default: today)")
@click.pass_context
def entity_type_stats(ctx, reference: str | None):
    """Break the financial year down by entity type.

    Examples:
        commtrack stats types
        commtrack stats types --date 2024-01-15
    """
    service = CommissionStatsService(ctx.obj["db"])
    reference_date = _parse_reference_date(ctx, reference)

    try:
        data = service.get_recent_commissions_data(reference_date)
    except DataAccessError as e:
        handle_domain_error(ctx, e)
        return

    if not data.entity_type_totals:
        click.echo("No entity types found.")
        return

    click.echo(f"\n{'Entity type':30} {'Current FY':>15} {'Previous FY':>15} {'Change':>9}")
    click.echo("-" * 72)
    for total in data.entity_type_totals:
        click.echo(
            f"{total.entity_type_name[:30]:30} {total.current_fy_total:>15,.2f} "
            f"{total.previous_fy_total:>15,.2f} {_format_change(total.pct_change):>9}"
        )
    click.echo("-" * 72)
    grand = data.grand_total
    click.echo(
        f"{'Total':30} {grand.current_fy_total:>15,.2f} "
        f"{grand.previous_fy_total:>15,.2f} {_format_change(grand.pct_change):>9}"
    )


def register_commands(cli):
    """Register stats commands with main CLI."""
    cli.add_command(stats_group, name="stats")

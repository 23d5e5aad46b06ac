"""Period boundary calculations.

Months and quarters follow the calendar. Years are Indian financial years,
running April 1 to March 31, so a reference date in January to March belongs
to the financial year that started in the previous calendar year.
"""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from commtrack.domain.entities import PeriodBoundaries, PeriodBoundary, PeriodKind

FINANCIAL_YEAR_START_MONTH = 4
MONTHS_PER_QUARTER = 3


def month_bounds(year: int, month: int) -> PeriodBoundary:
    """Get the first and last day of a calendar month.

    Args:
        year: Calendar year
        month: Month number (1-12)

    Returns:
        PeriodBoundary covering the whole month
    """
    start = date(year, month, 1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return PeriodBoundary(start=start, end=end)


def quarter_of(month: int) -> int:
    """Return the calendar quarter (1-4) containing a month."""
    return (month - 1) // MONTHS_PER_QUARTER + 1


def quarter_bounds(year: int, quarter: int) -> PeriodBoundary:
    """Get the boundaries of a calendar quarter.

    Quarters are fixed blocks starting in January, April, July and October.
    """
    if quarter not in (1, 2, 3, 4):
        raise ValueError(f"Quarter must be between 1 and 4, got {quarter}")
    start = date(year, (quarter - 1) * MONTHS_PER_QUARTER + 1, 1)
    end = start + relativedelta(months=MONTHS_PER_QUARTER) - timedelta(days=1)
    return PeriodBoundary(start=start, end=end)


def financial_year_start_year(reference_date: date) -> int:
    """Return the calendar year in which the reference date's financial year starts."""
    if reference_date.month < FINANCIAL_YEAR_START_MONTH:
        return reference_date.year - 1
    return reference_date.year


def financial_year_bounds(reference_date: date) -> PeriodBoundary:
    """Get April 1 to March 31 boundaries of the financial year containing a date."""
    start = date(financial_year_start_year(reference_date), FINANCIAL_YEAR_START_MONTH, 1)
    end = start + relativedelta(years=1) - timedelta(days=1)
    return PeriodBoundary(start=start, end=end)


def shift_years(boundary: PeriodBoundary, years: int) -> PeriodBoundary:
    """Shift both ends of a month-aligned boundary by whole years."""
    start = boundary.start + relativedelta(years=years)
    end = boundary.end.replace(day=1) + relativedelta(years=years, months=1) - timedelta(days=1)
    return PeriodBoundary(start=start, end=end)


def get_period_range(kind: PeriodKind, reference_date: date) -> PeriodBoundary:
    """Get the boundaries of the period of the given kind containing a date."""
    if kind == PeriodKind.MONTH:
        return month_bounds(reference_date.year, reference_date.month)
    if kind == PeriodKind.QUARTER:
        return quarter_bounds(reference_date.year, quarter_of(reference_date.month))
    return financial_year_bounds(reference_date)


def get_period_boundaries(kind: PeriodKind, reference_date: date) -> PeriodBoundaries:
    """Compute current, previous and same-period-last-year boundaries.

    Args:
        kind: Period kind (already validated)
        reference_date: Any date inside the current period

    Returns:
        PeriodBoundaries for the three compared periods. For financial years
        the previous period already is the same period last year, so both
        fields hold the same boundary.
    """
    current = get_period_range(kind, reference_date)

    if kind == PeriodKind.MONTH:
        previous_start = current.start - relativedelta(months=1)
        previous = month_bounds(previous_start.year, previous_start.month)
        same_period_last_year = month_bounds(current.start.year - 1, current.start.month)
    elif kind == PeriodKind.QUARTER:
        previous_start = current.start - relativedelta(months=MONTHS_PER_QUARTER)
        previous = quarter_bounds(previous_start.year, quarter_of(previous_start.month))
        same_period_last_year = shift_years(current, -1)
    else:
        previous = shift_years(current, -1)
        same_period_last_year = previous

    return PeriodBoundaries(
        kind=kind,
        current=current,
        previous=previous,
        same_period_last_year=same_period_last_year,
    )

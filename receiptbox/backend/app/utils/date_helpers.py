import datetime

_MONTH_NAMES = [
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def get_month_name(month: int) -> str:
    """Return full month name (1-indexed). E.g. 1 -> 'January'."""
    if 1 <= month <= 12:
        return _MONTH_NAMES[month]
    raise ValueError(f"Invalid month: {month}")


def format_display_date(year: int, month: int, day: int) -> str:
    """Format a ledger date for the sheet, e.g. 'January 05, 2025'.

    Formats the submitted month/day as-is, so "02-31" is shown as
    'February 31, ...' and stays in the February sheet.
    """
    return f"{get_month_name(month)} {day:02d}, {year}"


def normalize_date(year: int, month: int, day: int) -> datetime.date:
    """Build a date, rolling overflow days into the next month.

    E.g. (2025, 2, 31) -> 2025-03-03.
    """
    first = datetime.date(year, month, 1)
    return first + datetime.timedelta(days=day - 1)

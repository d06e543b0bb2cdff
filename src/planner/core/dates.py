"""Day-granularity date arithmetic - no I/O dependencies."""

from datetime import date, timedelta

GRID_DAYS = 42
WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def to_date_key(d: date) -> str:
    """Canonical day key (zero-padded ISO date, sorts chronologically)."""
    return d.isoformat()


def parse_date_key(key: str) -> date:
    """Inverse of to_date_key."""
    return date.fromisoformat(key)


def add_days(d: date, n: int) -> date:
    """Return the date n days from d (n may be negative)."""
    return d + timedelta(days=n)


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative if end is earlier)."""
    return (end - start).days


def first_of_month(d: date) -> date:
    return d.replace(day=1)


def shift_month(anchor: date, delta: int) -> date:
    """First day of the month `delta` months away from anchor's month."""
    index = anchor.year * 12 + (anchor.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def month_title(anchor: date) -> str:
    """Header label for a month, e.g. 'March 2024'."""
    return anchor.strftime("%B %Y")


def days_in_month_grid(anchor: date) -> list[date]:
    """
    The 42 dates (6 full weeks) shown for anchor's month.

    The grid starts on the Sunday on or before the 1st, so it always
    holds whole weeks with leading/trailing days from adjacent months.
    """
    first = first_of_month(anchor)
    # date.weekday(): Monday=0 ... Sunday=6
    lead = (first.weekday() + 1) % 7
    start = add_days(first, -lead)
    return [add_days(start, i) for i in range(GRID_DAYS)]


def in_range(d: date, start: date, end: date) -> bool:
    """Inclusive containment: start <= d <= end."""
    return start <= d <= end


def ranges_intersect(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """True if two inclusive ranges share at least one day."""
    return a_start <= b_end and b_start <= a_end


def normalize_range(a: date, b: date) -> tuple[date, date]:
    """Order two dates into (start, end)."""
    return (a, b) if a <= b else (b, a)


def date_span(a: date, b: date) -> list[date]:
    """Every date between a and b inclusive, chronological regardless of argument order."""
    start, end = normalize_range(a, b)
    return [add_days(start, i) for i in range(days_between(start, end) + 1)]

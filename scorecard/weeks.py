"""
SCORECARD App - Week helpers

Weeks are written "YYYY-Www" and run Sunday to Saturday: the Sunday of a
week is the ISO Monday minus one day.
"""

import re
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple

WEEK_RE = re.compile(r'^(\d{4})-W(\d{2})$')
FILENAME_WEEK_PATTERNS = (
    re.compile(r'(\d{4})-W(\d{1,2})'),             # 2026-W05, 2026-W5
    re.compile(r'(\d{4})[_-]WEEK[_-]?(\d{1,2})'),  # 2026_week-5, 2026-WEEK_05
)
DAY_NAMES = ('Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday')

DATE_FORMATS = (
    '%Y-%m-%d',
    '%m/%d/%Y',
    '%m/%d/%y',
    '%Y/%m/%d',
    '%m-%d-%Y',
    '%d-%b-%Y',
    '%b %d, %Y',
)


def is_valid_week(week) -> bool:
    """True for "YYYY-Www" strings naming a week the ISO year actually has."""
    if not isinstance(week, str):
        return False
    match = WEEK_RE.match(week)
    if not match:
        return False
    try:
        date.fromisocalendar(int(match.group(1)), int(match.group(2)), 1)
    except ValueError:
        return False
    return True


def parse_week(week: str) -> Tuple[int, int]:
    """Split "2026-W07" into (2026, 7); raises ValueError when malformed."""
    if not is_valid_week(week):
        raise ValueError(f"Invalid week format: {week!r} (expected YYYY-Www)")
    match = WEEK_RE.match(week)
    return int(match.group(1)), int(match.group(2))


def format_week(year: int, week_number: int) -> str:
    return f"{year}-W{week_number:02d}"


def week_range(week: str) -> Tuple[date, date]:
    """Sunday and Saturday of the week."""
    year, week_number = parse_week(week)
    monday = date.fromisocalendar(year, week_number, 1)
    sunday = monday - timedelta(days=1)
    return sunday, sunday + timedelta(days=6)


def week_dates(week: str) -> List[date]:
    sunday, _ = week_range(week)
    return [sunday + timedelta(days=i) for i in range(7)]


def date_to_week(value: date) -> str:
    if isinstance(value, datetime):
        value = value.date()
    iso = (value + timedelta(days=1)).isocalendar()
    return format_week(iso[0], iso[1])


def next_week(week: str) -> str:
    year, week_number = parse_week(week)
    monday = date.fromisocalendar(year, week_number, 1)
    return date_to_week(monday + timedelta(days=6))


def parse_date(value) -> Optional[date]:
    """Parse a spreadsheet date cell; None when it is not a date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        pass

    # Drop a trailing time component ("02/03/2026 7:45 AM")
    candidates = [text, text.split(' ')[0], text.split('T')[0]]
    for candidate in candidates:
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(candidate, fmt).date()
            except ValueError:
                continue
    return None


def extract_week_from_filename(filename: str) -> Optional[str]:
    name = (filename or '').upper()
    for pattern in FILENAME_WEEK_PATTERNS:
        match = pattern.search(name)
        if match:
            week = format_week(int(match.group(1)), int(match.group(2)))
            if is_valid_week(week):
                return week
    return None


def detect_week_from_rows(rows: Iterable[dict]) -> Optional[str]:
    """Week of the first parseable value in a column whose header mentions "date"."""
    for row in rows:
        for key, value in row.items():
            if key and 'date' in str(key).lower():
                parsed = parse_date(value)
                if parsed:
                    return date_to_week(parsed)
    return None

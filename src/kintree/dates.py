"""Date normalization and age comparisons."""

from datetime import date
import re

# Month name mappings (abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}

_QUALIFIERS = re.compile(
    r"^(ABOUT|AROUND|BEFORE|AFTER|CIRCA|ABT|BEF|AFT|EST|CAL|CA)\b\.?:?\s*",
    flags=re.IGNORECASE,
)


def _iso(year: int, month: int | None, day: int | None) -> str | None:
    # Handle 00 month/day as defaults
    month = month or 1
    day = day or 1
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def parse_date_string(date_str: str | None) -> str | None:
    """
    Normalize a date string into ISO format (YYYY-MM-DD).
    Returns None if the date cannot be parsed.

    Handles formats like:
    - "1978-03-02", "1978-3-2", "1978/03/02"
    - "25 NOV 1954", "08 March 1893", "11 Aug. 1968"
    - "NOV 1954", "May, 1837"
    - "April 17, 1850", "SEPT. 17,1910"
    - "1698", "ABT 1905", "(about 1833)", "1789?"
    - "01/27/1920", "01-27-1920" (month first)

    Missing month or day default to 1.
    """
    if not date_str:
        return None

    s = str(date_str).strip().strip("()").rstrip("?")
    s = _QUALIFIERS.sub("", s).strip()
    if not s:
        return None

    # ISO-like, possibly with a time part: "1978-03-02T00:00:00"
    match = re.match(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})(?:[T ].*)?$", s)
    if match:
        return _iso(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    # "1978-03" (year and month)
    match = re.match(r"^(\d{4})-(\d{1,2})$", s)
    if match:
        return _iso(int(match.group(1)), int(match.group(2)), None)

    # "1698" (year only)
    match = re.match(r"^(\d{4})$", s)
    if match:
        return _iso(int(match.group(1)), None, None)

    # "25 NOV 1954", "02 May1838", "11 Aug. 1968" (day month year)
    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(2).upper())
        if month:
            return _iso(int(match.group(3)), month, int(match.group(1)))

    # "NOV 1954", "May, 1837" (month year)
    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _iso(int(match.group(2)), month, None)

    # "April 17, 1850", "Oct.12,1929" (month day, year)
    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _iso(int(match.group(3)), month, int(match.group(2)))

    # "01-27-1920", "01/27/1920", "04 05 1911" (month day year)
    match = re.match(r"^(\d{1,2})[-/ ](\d{1,2})[-/ ](\d{4})$", s)
    if match:
        return _iso(int(match.group(3)), int(match.group(1)), int(match.group(2)))

    return None


def birth_order_key(person) -> tuple[int, str]:
    """Sort key for birth order; people with an unknown birth date come first."""
    born = parse_date_string(person.birth_date)
    if born is None:
        return (0, "")
    return (1, born)


def is_older(a, b) -> bool:
    """
    True when person `a` comes before person `b` in birth order.

    Uses the same ordering as `birth_order_key`: an unknown birth date counts
    as earliest, and equal or unknown dates fall back to the person id.
    """
    return (birth_order_key(a), a.id) < (birth_order_key(b), b.id)


def age_in_years(
    birth_date: str | None, death_date: str | None = None, today: date | None = None
) -> int | None:
    """Completed years between birth and death (or today). None if unknown."""
    born = parse_date_string(birth_date)
    if born is None:
        return None
    end = parse_date_string(death_date) if death_date else None
    end_date = date.fromisoformat(end) if end else (today or date.today())
    birth = date.fromisoformat(born)

    age = end_date.year - birth.year
    if (end_date.month, end_date.day) < (birth.month, birth.day):
        age -= 1
    return max(age, 0)

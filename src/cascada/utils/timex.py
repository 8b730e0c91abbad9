"""TIMEX date expressions: recognition from user text and natural-language rendering.

Only the subset the dialogs exchange is supported: definite dates
(``2024-05-01``), dates without a year (``XXXX-05-01``) and an optional
time of day (``2024-05-01T15`` / ``2024-05-01T15:30``).
"""

import re
from datetime import date, datetime, timedelta

_TIMEX_RE = re.compile(
    r"^(?P<year>\d{4}|XXXX)-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2})(?::(?P<minute>\d{2}))?(?::\d{2})?)?$"
)
_SLASH_DATE_RE = re.compile(r"^(?P<day>\d{1,2})/(?P<month>\d{1,2})(?:/(?P<year>\d{2,4}))?$")

_RELATIVE_DAYS = {
    "today": 0,
    "hoy": 0,
    "tomorrow": 1,
    "mañana": 1,
    "manana": 1,
    "yesterday": -1,
    "ayer": -1,
}

_MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def ordinal(day: int) -> str:
    """1 -> '1st', 22 -> '22nd', 13 -> '13th'."""
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_time(hour: int, minute: int) -> str:
    """15, 0 -> '3PM'; 9, 30 -> '9:30AM'; 0, 0 -> 'midnight'."""
    if hour == 0 and minute == 0:
        return "midnight"
    if hour == 12 and minute == 0:
        return "midday"
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    if minute:
        return f"{display}:{minute:02d}{suffix}"
    return f"{display}{suffix}"


def to_natural_language(timex: str, reference: date | datetime | None = None) -> str:
    """Render a TIMEX expression as English text relative to ``reference``.

    Raises:
        ValueError: If ``timex`` is not a supported expression.
    """
    match = _TIMEX_RE.match(timex.strip())
    if match is None:
        raise ValueError(f"Unsupported TIMEX expression: {timex!r}")

    ref = reference or datetime.now()
    if isinstance(ref, datetime):
        ref = ref.date()

    month = int(match["month"])
    day = int(match["day"])
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in TIMEX expression: {timex!r}")

    if match["year"] == "XXXX":
        text = f"{ordinal(day)} {_MONTHS[month - 1]}"
    else:
        value = date(int(match["year"]), month, day)
        delta = (value - ref).days
        if delta == 0:
            text = "today"
        elif delta == 1:
            text = "tomorrow"
        elif delta == -1:
            text = "yesterday"
        else:
            text = f"{ordinal(day)} {_MONTHS[month - 1]} {value.year}"

    if match["hour"] is not None:
        text = f"{text} {format_time(int(match['hour']), int(match['minute'] or 0))}"
    return text


def recognize_date(text: str, reference: date | datetime | None = None) -> str | None:
    """Recognize a date in user text and return it as a ``YYYY-MM-DD`` TIMEX.

    Accepts ISO dates, ``dd/mm[/yyyy]`` and the relative words in
    ``_RELATIVE_DAYS``. Returns None when nothing is recognized.
    """
    ref = reference or datetime.now()
    if isinstance(ref, datetime):
        ref = ref.date()

    cleaned = text.strip().lower().rstrip(".!?")
    if cleaned in _RELATIVE_DAYS:
        return (ref + timedelta(days=_RELATIVE_DAYS[cleaned])).isoformat()

    try:
        return date.fromisoformat(cleaned).isoformat()
    except ValueError:
        pass

    match = _SLASH_DATE_RE.match(cleaned)
    if match is None:
        return None

    year = ref.year
    if match["year"] is not None:
        year = int(match["year"])
        if year < 100:
            year += 2000
    try:
        return date(year, int(match["month"]), int(match["day"])).isoformat()
    except ValueError:
        return None

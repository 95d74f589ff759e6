from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from rich.color import Color
from rich.style import Style
from rich.text import Text

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
MONTH = 365 // 12 * DAY
YEAR = 365 * DAY

# Shown for dates the server sends that can't be parsed. In practice it's the
# release date of the "Music" category, which was invented about that long ago.
INVALID_DATE = "200,000 years ago"

HEADER_STYLE = Style(underline=True)


def format_seconds(seconds: int) -> str:
    """Format a number of seconds in the largest unit that fits, i.e. "18 Hours"."""
    if seconds < MINUTE:
        return f"{seconds} Seconds"
    if seconds < HOUR:
        return f"{seconds // MINUTE} Minutes"
    if seconds < DAY:
        return f"{seconds // HOUR} Hours"
    if seconds < MONTH:
        return f"{seconds // DAY} Days"
    if seconds < YEAR:
        return f"{seconds // MONTH} Months"
    return f"{seconds // YEAR} Years"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    s = value.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_date(
    value: Optional[str],
    *,
    date_format: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """Format an ISO 8601 timestamp, either with ``date_format`` or relative to now."""
    dt = parse_timestamp(value)
    if dt is None:
        return INVALID_DATE

    if date_format:
        return dt.strftime(date_format)

    now = now or utc_now()
    delta = int((now - dt).total_seconds())
    if delta < 0:
        return f"In {format_seconds(-delta)}"
    return f"{format_seconds(delta)} ago"


def parse_colour(value: Optional[str]) -> Optional[Color]:
    """Parse a hex colour such as ``"9146FF"``. Invalid colours are ignored."""
    if not value:
        return None
    try:
        parsed = int(value.lstrip("#"), 16)
    except ValueError:
        return None
    return Color.from_rgb((parsed >> 16) & 0xFF, (parsed >> 8) & 0xFF, parsed & 0xFF)


def colour_style(value: Optional[str]) -> Style:
    colour = parse_colour(value)
    return Style(color=colour) if colour is not None else Style()


def header(content: str) -> Text:
    return Text(content, style=HEADER_STYLE)


def lines(items: Iterable[str], style: Optional[Style] = None) -> Text:
    """Join detail lines into one block of text."""
    return Text("\n".join(items), style=style or "")


def join_names(names: Iterable[str]) -> str:
    return ", ".join(names)


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"

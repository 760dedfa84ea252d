"""
Prompt for the upstream events search.

The template is fixed; the only per-request input is today's date, rendered
in the zh-TW long date style the frontend displays.
"""

from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

Clock = Callable[[], date]

REGION_CITIES = ("Taipei", "New Taipei", "Keelung", "Taoyuan")

EVENTS_SEARCH_PROMPT = """You are a trendy lifestyle editor for "Weekend Vibes North".
CURRENT DATE: {today}
SEARCH RANGE: From NOW until {search_range_end}.
TASK: Search for REAL, CONFIRMED events in Northern Taiwan ({cities}). CRITICAL: ONLY return events happening ON or AFTER today ({today}).
OUTPUT REQUIREMENTS: Return a valid JSON array. DO NOT include any conversational text, markdown formatting, or introductory phrases. Just the raw JSON array."""


def format_display_date(day: date) -> str:
    """Render ``day`` like the zh-TW long date format, e.g. 2026年10月19日."""
    return f"{day.year}年{day.month}月{day.day}日"


def build_events_query(today: date, search_range_end: str = "December 2026") -> str:
    """Build the natural-language instruction sent upstream."""
    return EVENTS_SEARCH_PROMPT.format(
        today=format_display_date(today),
        search_range_end=search_range_end,
        cities=", ".join(REGION_CITIES),
    )


def today_in(tz_name: str) -> Clock:
    """Return a clock giving the current calendar date in ``tz_name``."""
    tz = ZoneInfo(tz_name)

    def _today() -> date:
        return datetime.now(tz).date()

    return _today

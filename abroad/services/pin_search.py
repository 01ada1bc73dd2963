"""Free-text search over saved pins."""

from __future__ import annotations

import re
from datetime import date
from typing import Iterable

from abroad.models.pin import Pin

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_search_date(value: date | None) -> str:
    """Format a date as "Feb 2, 2025" regardless of the process locale."""
    if value is None:
        return ""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day}, {value.year}"


class PinSearchFilter:
    """
    Match pins against one query string.

    A pin matches when any of these hold (case-insensitive):
    the title contains the query, the query is ``rating = N`` and the
    rating is N, the category name contains the query, the formatted start
    date contains the query, or the query is ``emissions < N`` and the trip
    budget is below N.
    """

    RATING_PATTERN = re.compile(r"^rating\s*=\s*(\d+)$", re.IGNORECASE)
    # Compares against the trip budget, not emissions
    EMISSIONS_PATTERN = re.compile(r"^emissions\s*<\s*(\d+(?:\.\d+)?)$", re.IGNORECASE)

    def filter(self, pins: Iterable[Pin], query: str) -> list[Pin]:
        """
        Return the matching pins in their original order.

        Args:
            pins: Pins to search
            query: Text typed by the user

        Returns:
            Matching pins; an empty list for a blank query
        """
        text = (query or "").strip()
        if not text:
            return []

        needle = text.lower()
        rating = self._parse_rating(text)
        budget_limit = self._parse_budget_limit(text)

        return [pin for pin in pins if self._matches(pin, needle, rating, budget_limit)]

    def _parse_rating(self, text: str) -> int | None:
        match = self.RATING_PATTERN.match(text)
        return int(match.group(1)) if match else None

    def _parse_budget_limit(self, text: str) -> float | None:
        match = self.EMISSIONS_PATTERN.match(text)
        return float(match.group(1)) if match else None

    def _matches(
        self, pin: Pin, needle: str, rating: int | None, budget_limit: float | None
    ) -> bool:
        if needle in pin.title.lower():
            return True
        if rating is not None and pin.trip_rating is not None and pin.trip_rating == rating:
            return True
        if needle in pin.category.value.lower():
            return True
        if needle in format_search_date(pin.start_date).lower():
            return True
        if budget_limit is not None and (pin.trip_budget or 0.0) < budget_limit:
            return True
        return False


def filter_pins(pins: Iterable[Pin], query: str) -> list[Pin]:
    return PinSearchFilter().filter(pins, query)

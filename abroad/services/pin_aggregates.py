"""Collection-wide rollups for the insights dashboard."""

from collections import Counter
from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from abroad.models.pin import Pin, PinCategory
from abroad.models.session import DEFAULT_CARBON_GOAL
from abroad.services.eco_scoring import (
    Badge,
    average_efficiency_score,
    badge_details,
    car_equivalent,
    global_rank_percentile,
    travel_efficiency_score,
    tree_equivalent,
)
from abroad.services.trip_emissions import (
    all_entries,
    best_transport,
    emissions_by_mode_for_pins,
    footprint_feedback,
    highest_flight_distance,
    projected_savings,
    worst_transport,
)

SAVINGS_RATE = 0.1  # placeholder heuristic: 10% of the trip budget
NO_REGION = "Not yet available"
NO_TITLE = "Unknown"
NO_NEXT_TRIP = "Plan one!"


def _most_common(values: list[str]) -> Optional[str]:
    # Counter keeps insertion order, so ties go to the value seen first
    if not values:
        return None
    return Counter(values).most_common(1)[0][0]


def most_visited_region(pins: Iterable[Pin]) -> str:
    regions = [pin.eco_region for pin in pins if pin.eco_region]
    return _most_common(regions) or NO_REGION


def most_visited_title(pins: Iterable[Pin]) -> str:
    titles = [pin.title for pin in pins if pin.title]
    return _most_common(titles) or NO_TITLE


def next_future_trip(pins: Iterable[Pin]) -> Pin | None:
    """First future-plan pin in collection order (not by date)."""
    return next((pin for pin in pins if pin.category == PinCategory.FUTURE), None)


def total_savings_estimate(pins: Iterable[Pin]) -> float:
    return sum((pin.trip_budget or 0.0) * SAVINGS_RATE for pin in pins)


def average_rating(pins: Iterable[Pin]) -> float | None:
    """Mean of 1-5 ratings; 0 and unset both mean no rating."""
    ratings = [pin.trip_rating for pin in pins if pin.trip_rating]
    if not ratings:
        return None
    return sum(ratings) / len(ratings)


def carbon_goal_progress(total_kg: float, goal_kg: float) -> float:
    """Fraction of the carbon goal used, clamped to [0, 1]."""
    if goal_kg <= 0:
        return 1.0 if total_kg > 0 else 0.0
    return max(0.0, min(total_kg / goal_kg, 1.0))


def is_abandoned_draft(
    pin: Pin,
    initial_start: date | None = None,
    initial_end: date | None = None,
) -> bool:
    """
    Decide whether a pin closed from the editor was never filled in.

    All four must hold: blank title, start date unset or still the editor's
    default, end date unset or still the default, and no places visited.
    """
    if pin.title.strip():
        return False
    if pin.start_date is not None and pin.start_date != initial_start:
        return False
    if pin.end_date is not None and pin.end_date != initial_end:
        return False
    return not pin.places_visited


class TravelInsights(BaseModel):
    """Everything the insights panel shows, computed from one snapshot."""

    locations_saved: int = 0
    total_emissions: float = 0.0
    carbon_goal: float = DEFAULT_CARBON_GOAL
    carbon_goal_progress: float = 0.0
    emissions_by_mode: dict[str, float] = Field(default_factory=dict)
    best_transport: str = "N/A"
    worst_transport: str = "N/A"
    highest_flight_km: Optional[float] = None
    projected_savings: float = 0.0
    travel_efficiency_score: int = 100
    average_efficiency_score: int = 0
    global_rank: int = 100
    badges: list[Badge] = Field(default_factory=list)
    tree_equivalent: int = 0
    car_equivalent: int = 0
    most_visited_region: str = NO_REGION
    most_visited_title: str = NO_TITLE
    next_trip: str = NO_NEXT_TRIP
    savings_estimate: float = 0.0
    average_rating: Optional[float] = None
    feedback: str = ""


def build_insights(pins: Iterable[Pin], carbon_goal: float = DEFAULT_CARBON_GOAL) -> TravelInsights:
    """Compute the dashboard rollup over a snapshot of the pins."""
    snapshot = list(pins)
    entries = all_entries(snapshot)
    by_mode = emissions_by_mode_for_pins(snapshot)
    total = sum(by_mode.values())
    next_trip = next_future_trip(snapshot)

    return TravelInsights(
        locations_saved=len(snapshot),
        total_emissions=total,
        carbon_goal=carbon_goal,
        carbon_goal_progress=carbon_goal_progress(total, carbon_goal),
        emissions_by_mode=by_mode,
        best_transport=best_transport(snapshot),
        worst_transport=worst_transport(snapshot),
        highest_flight_km=highest_flight_distance(snapshot),
        projected_savings=projected_savings(entries),
        travel_efficiency_score=travel_efficiency_score(entries),
        average_efficiency_score=average_efficiency_score(snapshot),
        global_rank=global_rank_percentile(total),
        badges=badge_details(entries, total),
        tree_equivalent=tree_equivalent(total),
        car_equivalent=car_equivalent(total),
        most_visited_region=most_visited_region(snapshot),
        most_visited_title=most_visited_title(snapshot),
        next_trip=(next_trip.title or NO_NEXT_TRIP) if next_trip else NO_NEXT_TRIP,
        savings_estimate=total_savings_estimate(snapshot),
        average_rating=average_rating(snapshot),
        feedback=footprint_feedback(total),
    )

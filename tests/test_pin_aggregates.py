"""Tests for collection rollups and the abandoned-draft rule."""

from datetime import date

import pytest

from abroad.models import Pin, PinCategory, TransportEntry
from abroad.services.pin_aggregates import (
    average_rating,
    build_insights,
    carbon_goal_progress,
    is_abandoned_draft,
    most_visited_region,
    most_visited_title,
    next_future_trip,
    total_savings_estimate,
)


class TestMostVisited:
    """Tests for the most common region and title."""

    def test_region(self):
        """Test that the most frequent region wins."""
        pins = [
            Pin(title="Paris", eco_region="Europe"),
            Pin(title="Delhi", eco_region="India & South Asia"),
            Pin(title="Rome", eco_region="Europe"),
        ]
        assert most_visited_region(pins) == "Europe"

    def test_region_tie_goes_to_first_seen(self):
        """Test that a tie resolves to the region seen first."""
        pins = [Pin(eco_region="Africa"), Pin(eco_region="Europe")]
        assert most_visited_region(pins) == "Africa"

    def test_no_regions(self):
        """Test the placeholder when no pin has a region."""
        assert most_visited_region([Pin(title="A")]) == "Not yet available"
        assert most_visited_region([]) == "Not yet available"

    def test_title(self):
        """Test the most frequent title."""
        pins = [Pin(title="Paris"), Pin(title="Rome"), Pin(title="Paris")]
        assert most_visited_title(pins) == "Paris"
        assert most_visited_title([]) == "Unknown"


class TestNextFutureTrip:
    """Tests for next_future_trip."""

    def test_first_future_in_order(self):
        """Test that collection order decides, not the date."""
        later = Pin(title="Later", category=PinCategory.FUTURE, start_date=date(2027, 1, 1))
        sooner = Pin(title="Sooner", category=PinCategory.FUTURE, start_date=date(2026, 1, 1))
        pins = [Pin(title="Done"), later, sooner]
        assert next_future_trip(pins) is later

    def test_none(self):
        """Test that no planned trip gives None."""
        assert next_future_trip([Pin(title="Done")]) is None


class TestSavingsAndRating:
    """Tests for budget savings and rating averages."""

    def test_savings(self):
        """Test ten percent of the budget, missing budgets counting 0."""
        pins = [Pin(trip_budget=200), Pin()]
        assert total_savings_estimate(pins) == pytest.approx(20)

    def test_average_rating(self):
        """Test that unrated and zero ratings are left out."""
        pins = [Pin(trip_rating=4), Pin(trip_rating=5), Pin(trip_rating=0), Pin()]
        assert average_rating(pins) == pytest.approx(4.5)
        assert average_rating([Pin()]) is None

    @pytest.mark.parametrize(
        "total,goal,expected",
        [(0, 5000, 0.0), (2500, 5000, 0.5), (9000, 5000, 1.0), (10, 0, 1.0)],
    )
    def test_goal_progress(self, total, goal, expected):
        """Test that progress is clamped to [0, 1]."""
        assert carbon_goal_progress(total, goal) == pytest.approx(expected)


class TestAbandonedDraft:
    """Tests for is_abandoned_draft."""

    def setup_method(self):
        """Set up test fixtures."""
        self.today = date(2025, 6, 1)

    def test_untouched_draft(self):
        """Test a draft with default dates and nothing filled in."""
        pin = Pin(title="  ", start_date=self.today, end_date=self.today)
        assert is_abandoned_draft(pin, self.today, self.today)

    def test_no_dates(self):
        """Test a draft with no dates at all."""
        assert is_abandoned_draft(Pin())

    def test_places_keep_draft(self):
        """Test that a visited place means the pin was used."""
        pin = Pin(start_date=self.today, end_date=self.today, places_visited=["Louvre"])
        assert not is_abandoned_draft(pin, self.today, self.today)

    def test_title_keeps_draft(self):
        """Test that a title means the pin was used."""
        assert not is_abandoned_draft(Pin(title="Paris"))

    def test_changed_date_keeps_draft(self):
        """Test that moving either date means the pin was used."""
        moved = Pin(start_date=self.today, end_date=date(2025, 6, 5))
        assert not is_abandoned_draft(moved, self.today, self.today)


class TestBuildInsights:
    """Tests for the dashboard rollup."""

    def test_empty(self):
        """Test the rollup with no pins."""
        insights = build_insights([])
        assert insights.locations_saved == 0
        assert insights.total_emissions == 0
        assert insights.global_rank == 100
        assert insights.next_trip == "Plan one!"
        assert insights.most_visited_region == "Not yet available"
        assert insights.best_transport == "N/A"
        assert "Zero Carbon Footprint" in [badge.name for badge in insights.badges]

    def test_rollup(self):
        """Test the rollup for a small collection."""
        pins = [
            Pin(
                title="Paris",
                eco_region="Europe",
                trip_budget=1000,
                transport_entries=[TransportEntry(mode="Plane", distance="1000")],
            ),
            Pin(title="Kyoto", category=PinCategory.FUTURE),
        ]
        insights = build_insights(pins, carbon_goal=1000)
        assert insights.locations_saved == 2
        assert insights.total_emissions == pytest.approx(250)
        assert insights.carbon_goal_progress == pytest.approx(0.25)
        assert insights.emissions_by_mode == {"Plane": pytest.approx(250)}
        assert insights.worst_transport == "Plane"
        assert insights.highest_flight_km == 1000
        assert insights.projected_savings == pytest.approx(209)
        assert insights.travel_efficiency_score == 95
        assert insights.average_efficiency_score == 95
        assert insights.global_rank == 94
        assert insights.tree_equivalent == 12
        assert insights.next_trip == "Kyoto"
        assert insights.most_visited_region == "Europe"
        assert insights.savings_estimate == pytest.approx(100)
        assert insights.feedback.startswith("Switching to trains")

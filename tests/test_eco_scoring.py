"""Tests for efficiency score, global rank and badges."""

import pytest

from abroad.models import Pin, TransportEntry
from abroad.services.eco_scoring import (
    average_efficiency_score,
    badge_details,
    badges,
    car_equivalent,
    global_rank_percentile,
    travel_efficiency_score,
    tree_equivalent,
)


def legs(mode: str, count: int, distance: str = "") -> list[TransportEntry]:
    return [TransportEntry(mode=mode, distance=distance) for _ in range(count)]


class TestTravelEfficiencyScore:
    """Tests for the 0-100 transport mix score."""

    def test_empty_is_perfect(self):
        """Test that no entries scores 100."""
        assert travel_efficiency_score([]) == 100

    def test_penalty_and_bonus(self):
        """Test one high and one low emission leg."""
        entries = legs("Plane", 2) + legs("Train", 1)
        assert travel_efficiency_score(entries) == 93

    def test_clamped_at_zero(self):
        """Test that many flights never go below 0."""
        assert travel_efficiency_score(legs("Plane", 50)) == 0

    def test_clamped_at_hundred(self):
        """Test that many train rides never go above 100."""
        assert travel_efficiency_score(legs("Train", 40)) == 100

    def test_neutral_modes(self):
        """Test that modes in neither list leave the score alone."""
        entries = legs("Carpooling", 3) + legs("Electric Car", 2) + legs("Zeppelin", 1)
        assert travel_efficiency_score(legs("Plane", 1) + entries) == 95


class TestGlobalRank:
    """Tests for the rank against the average traveller."""

    @pytest.mark.parametrize(
        "total,expected",
        [(0, 100), (-10, 100), (2250, 50), (4500, 0), (9000, 0), (1000, 77)],
    )
    def test_rank(self, total, expected):
        """Test the rank at representative totals."""
        assert global_rank_percentile(total) == expected


class TestBadges:
    """Tests for badge rules."""

    def test_no_travel(self):
        """Test the badges earned with no emissions and no entries."""
        assert badges([], 0) == [
            "Carbon Saver",
            "Green Traveler",
            "Zero Carbon Footprint",
            "Flight-Free Traveler",
            "Conscious Flyer",
        ]

    def test_high_carbon_user(self):
        """Test that a heavy flyer only gets the high carbon badge."""
        names = badges(legs("Plane", 3, "2000"), 1500)
        assert names == ["High Carbon User"]

    def test_train_tiers_by_count(self):
        """Test that train tiers count trips and lower tiers also fire."""
        names = badges(legs("Train", 10), 0)
        assert "Train Enthusiast" in names
        assert "Rail Explorer" in names
        assert "Rail Master" not in names

    def test_walking_tiers_by_distance(self):
        """Test that walking tiers sum distances and use strict thresholds."""
        names = badges(legs("Walking", 2, "50"), 0)
        assert "Walking Champion" not in names
        assert "Walking Hero" in names
        assert "Walking Hero" not in badges(legs("Walking", 1, "50"), 0)

    def test_ferry_and_ev_tiers(self):
        """Test the ferry and electric car ladders."""
        entries = legs("Ferry", 1, "250") + legs("Electric Car", 1, "600")
        names = badges(entries, 0.16 * 250 + 0.05 * 600)
        assert {"Ferry Rider", "Ferry Navigator", "EV Driver", "EV Champion"} <= set(names)
        assert "Ferry Captain" not in names
        assert "EV Legend" not in names

    def test_conscious_flyer(self):
        """Test few flights with a low total."""
        names = badges(legs("Plane", 2, "100"), 50)
        assert "Conscious Flyer" in names
        assert "Flight-Free Traveler" not in names

    def test_details_have_descriptions(self):
        """Test that detailed badges carry a description."""
        details = badge_details([], 0)
        assert all(badge.description for badge in details)
        assert details[0].name == "Carbon Saver"


class TestEquivalents:
    """Tests for tree and car equivalents."""

    def test_floor(self):
        """Test that equivalents are floored."""
        assert tree_equivalent(250) == 12
        assert car_equivalent(250) == 108

    def test_zero(self):
        """Test that nothing emitted is nothing offset."""
        assert tree_equivalent(0) == 0
        assert car_equivalent(0) == 0


class TestAverageEfficiencyScore:
    """Tests for the mean score over pins."""

    def test_mean_over_pins_with_entries(self):
        """Test that pins without transport are left out."""
        pins = [
            Pin(title="A", transport_entries=legs("Plane", 1)),
            Pin(title="B", transport_entries=legs("Train", 1)),
            Pin(title="C"),
        ]
        assert average_efficiency_score(pins) == 97

    def test_no_entries(self):
        """Test that no transport at all gives 0."""
        assert average_efficiency_score([Pin(title="A")]) == 0

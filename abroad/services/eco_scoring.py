"""Travel efficiency score, global rank and eco badges."""

import math
from collections.abc import Callable, Iterable

from pydantic import BaseModel

from abroad.models.pin import Pin, TransportEntry, TransportMode, normalize_mode
from abroad.services.emission_factors import parse_distance

GLOBAL_AVERAGE_EMISSIONS_KG = 4500.0  # average traveller, per year
KG_CO2_PER_TREE = 20.0  # absorbed by one tree per year
KG_CO2_PER_CAR_UNIT = 2.3  # per litre of petrol burned

HIGH_EMISSION_MODES = frozenset(
    {
        TransportMode.PLANE.value,
        TransportMode.CAR.value,
        TransportMode.MOTORBIKE.value,
        TransportMode.FERRY.value,
    }
)
LOW_EMISSION_MODES = frozenset(
    {
        TransportMode.TRAIN.value,
        TransportMode.SUBWAY.value,
        TransportMode.BICYCLE.value,
        TransportMode.WALKING.value,
        TransportMode.BUS.value,
    }
)
HIGH_EMISSION_PENALTY = 5
LOW_EMISSION_BONUS = 3


class Badge(BaseModel):
    name: str
    description: str


class TravelStats(BaseModel):
    """Per-mode counts and distances the badge rules look at."""

    total_emissions: float
    trip_counts: dict[str, int]
    distances: dict[str, float]

    def count(self, mode: TransportMode) -> int:
        return self.trip_counts.get(mode.value, 0)

    def distance(self, mode: TransportMode) -> float:
        return self.distances.get(mode.value, 0.0)

    @classmethod
    def from_entries(cls, entries: Iterable[TransportEntry], total_emissions: float) -> "TravelStats":
        counts: dict[str, int] = {}
        distances: dict[str, float] = {}
        for entry in entries:
            mode = normalize_mode(entry.mode)
            counts[mode] = counts.get(mode, 0) + 1
            distances[mode] = distances.get(mode, 0.0) + parse_distance(entry.distance)
        return cls(total_emissions=total_emissions, trip_counts=counts, distances=distances)


def _tiers(
    mode: TransportMode,
    thresholds: tuple[float, float, float],
    names: tuple[str, str, str],
    unit: str,
    by_count: bool = False,
) -> list[tuple[Badge, Callable[[TravelStats], bool]]]:
    rules = []
    for threshold, name in zip(thresholds, names):
        if by_count:
            description = f"{threshold:g}+ {mode.value.lower()} trips"
            check = lambda s, m=mode, t=threshold: s.count(m) >= t
        else:
            description = f"{mode.value} over {threshold:g} {unit}"
            check = lambda s, m=mode, t=threshold: s.distance(m) > t
        rules.append((Badge(name=name, description=description), check))
    return rules


# Every matching rule fires, including all lower tiers of a tiered badge.
BADGE_RULES: list[tuple[Badge, Callable[[TravelStats], bool]]] = [
    (
        Badge(name="Carbon Saver", description="Emitted less than 500 kg CO₂"),
        lambda s: s.total_emissions < 500,
    ),
    (
        Badge(name="Green Traveler", description="Emitted less than 100 kg CO₂"),
        lambda s: s.total_emissions < 100,
    ),
    (
        Badge(name="Zero Carbon Footprint", description="No transport emissions at all"),
        lambda s: s.total_emissions == 0,
    ),
    (
        Badge(name="High Carbon User", description="Over 1000 kg CO₂"),
        lambda s: s.total_emissions > 1000,
    ),
    *_tiers(
        TransportMode.TRAIN,
        (5, 10, 20),
        ("Train Enthusiast", "Rail Explorer", "Rail Master"),
        "trips",
        by_count=True,
    ),
    *_tiers(
        TransportMode.WALKING,
        (50, 100, 250),
        ("Walking Hero", "Walking Champion", "Walking Legend"),
        "km",
    ),
    *_tiers(
        TransportMode.BICYCLE,
        (50, 100, 250),
        ("Cycling Hero", "Cycling Champion", "Cycling Legend"),
        "km",
    ),
    *_tiers(
        TransportMode.CARPOOLING,
        (100, 500, 1000),
        ("Carpool Buddy", "Carpool Champion", "Carpool Legend"),
        "km",
    ),
    *_tiers(
        TransportMode.ELECTRIC_CAR,
        (100, 500, 1000),
        ("EV Driver", "EV Champion", "EV Legend"),
        "km",
    ),
    *_tiers(
        TransportMode.FERRY,
        (50, 200, 500),
        ("Ferry Rider", "Ferry Navigator", "Ferry Captain"),
        "km",
    ),
    (
        Badge(name="Flight-Free Traveler", description="No flights logged"),
        lambda s: s.count(TransportMode.PLANE) == 0,
    ),
    (
        Badge(name="Conscious Flyer", description="Fewer than 3 flights and under 500 kg CO₂"),
        lambda s: s.count(TransportMode.PLANE) < 3 and s.total_emissions < 500,
    ),
]


def travel_efficiency_score(entries: Iterable[TransportEntry]) -> int:
    """Score a transport mix from 0 to 100, starting at 100."""
    score = 100
    for entry in entries:
        mode = normalize_mode(entry.mode)
        if mode in HIGH_EMISSION_MODES:
            score -= HIGH_EMISSION_PENALTY
        elif mode in LOW_EMISSION_MODES:
            score += LOW_EMISSION_BONUS
    return max(0, min(score, 100))


def global_rank_percentile(total_emissions_kg: float) -> int:
    """How much better than the average traveller, as a 0-100 percentage."""
    if total_emissions_kg <= 0:
        # No emissions is the best possible rank, whatever the formula says
        return 100
    rank = 100 - (total_emissions_kg / GLOBAL_AVERAGE_EMISSIONS_KG) * 100
    return max(0, min(int(rank), 100))


def badge_details(entries: Iterable[TransportEntry], total_emissions: float) -> list[Badge]:
    stats = TravelStats.from_entries(entries, total_emissions)
    return [badge for badge, check in BADGE_RULES if check(stats)]


def badges(entries: Iterable[TransportEntry], total_emissions: float) -> list[str]:
    """Names of every badge whose rule matches, in rule order."""
    return [badge.name for badge in badge_details(entries, total_emissions)]


def tree_equivalent(total_emissions_kg: float) -> int:
    return max(0, math.floor(total_emissions_kg / KG_CO2_PER_TREE))


def car_equivalent(total_emissions_kg: float) -> int:
    return max(0, math.floor(total_emissions_kg / KG_CO2_PER_CAR_UNIT))


def average_efficiency_score(pins: Iterable[Pin]) -> int:
    """Floor of the mean per-pin score over pins with transport entries."""
    scores = [
        travel_efficiency_score(pin.transport_entries) for pin in pins if pin.transport_entries
    ]
    if not scores:
        return 0
    return sum(scores) // len(scores)

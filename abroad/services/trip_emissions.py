"""Emission totals for a pin's transport entries."""

from collections.abc import Iterable

from abroad.models.pin import Pin, TransportEntry, TransportMode, normalize_mode
from abroad.services.emission_factors import EMISSION_FACTORS, factor, parse_distance

# Fixed substitution used to suggest a greener alternative
HIGH_EMISSION_REFERENCE = TransportMode.PLANE.value
LOW_EMISSION_ALTERNATIVE = TransportMode.TRAIN.value


def entry_emissions(entry: TransportEntry) -> float:
    """kg CO2 for one leg; unknown modes and bad distances give 0."""
    return factor(entry.mode) * parse_distance(entry.distance)


def emissions_by_mode(entries: Iterable[TransportEntry]) -> dict[str, float]:
    """Sum emissions per mode, in the order modes first appear."""
    totals: dict[str, float] = {}
    for entry in entries:
        mode = normalize_mode(entry.mode)
        totals[mode] = totals.get(mode, 0.0) + entry_emissions(entry)
    return totals


def total_emissions(entries: Iterable[TransportEntry]) -> float:
    return sum(emissions_by_mode(entries).values())


def projected_savings(entries: Iterable[TransportEntry]) -> float:
    """kg CO2 saved if every plane leg had been taken by train instead."""
    per_km = (
        EMISSION_FACTORS[HIGH_EMISSION_REFERENCE] - EMISSION_FACTORS[LOW_EMISSION_ALTERNATIVE]
    )
    return sum(
        per_km * parse_distance(entry.distance)
        for entry in entries
        if normalize_mode(entry.mode) == HIGH_EMISSION_REFERENCE
    )


def all_entries(pins: Iterable[Pin]) -> list[TransportEntry]:
    """Flatten the transport entries of every pin, in collection order."""
    return [entry for pin in pins for entry in pin.transport_entries]


def emissions_by_mode_for_pins(pins: Iterable[Pin]) -> dict[str, float]:
    return emissions_by_mode(all_entries(pins))


def total_emissions_for_pins(pins: Iterable[Pin]) -> float:
    return total_emissions(all_entries(pins))


def best_transport(pins: Iterable[Pin]) -> str:
    """Mode with the lowest accumulated emissions, or "N/A"."""
    totals = emissions_by_mode_for_pins(pins)
    if not totals:
        return "N/A"
    return min(totals, key=totals.get)


def worst_transport(pins: Iterable[Pin]) -> str:
    """Mode with the highest accumulated emissions, or "N/A"."""
    totals = emissions_by_mode_for_pins(pins)
    if not totals:
        return "N/A"
    return max(totals, key=totals.get)


def highest_flight_distance(pins: Iterable[Pin]) -> float | None:
    """Longest plane leg in km, or None if there is no usable plane leg."""
    distances = [
        parse_distance(entry.distance)
        for entry in all_entries(pins)
        if normalize_mode(entry.mode) == HIGH_EMISSION_REFERENCE
    ]
    longest = max(distances, default=0.0)
    return longest if longest > 0 else None


def footprint_feedback(total_kg: float) -> str:
    """Short advice line for a trip's total emissions."""
    if total_kg > 500:
        return "Consider reducing flights and opting for trains."
    if total_kg > 100:
        return "Switching to trains could cut emissions significantly."
    return "Great job! Your trip has a relatively low carbon footprint."

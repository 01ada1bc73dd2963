"""Static CO2-per-kilometre factors for each transport mode."""

import math

from abroad.models.pin import TransportMode, normalize_mode

# kg CO2 per passenger-km. Product constants, not sourced per region.
EMISSION_FACTORS: dict[str, float] = {
    TransportMode.PLANE.value: 0.25,
    TransportMode.TRAIN.value: 0.041,
    TransportMode.CAR.value: 0.18,
    TransportMode.BUS.value: 0.08,
    TransportMode.BICYCLE.value: 0.0,
    TransportMode.WALKING.value: 0.0,
    TransportMode.ELECTRIC_CAR.value: 0.05,
    TransportMode.FERRY.value: 0.16,
    TransportMode.CARPOOLING.value: 0.06,
    TransportMode.SUBWAY.value: 0.04,
    TransportMode.MOTORBIKE.value: 0.10,
}


def factor(mode: str) -> float:
    """Return kg CO2 per km for a mode label, 0.0 for unknown modes."""
    return EMISSION_FACTORS.get(normalize_mode(mode), 0.0)


def parse_distance(text) -> float:
    """Parse a typed distance in km; anything unusable counts as 0."""
    if text is None or isinstance(text, bool):
        return 0.0
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        cleaned = str(text).strip().replace(",", ".")
        if not cleaned:
            return 0.0
        try:
            value = float(cleaned)
        except ValueError:
            return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value

from .pin import (
    MAX_IMAGES,
    Pin,
    PinCategory,
    TransportEntry,
    parse_budget,
    parse_date,
    parse_rating,
)
from .region import RegionGuide
from .session import AppSession

__all__ = [
    "MAX_IMAGES",
    "Pin",
    "PinCategory",
    "TransportEntry",
    "parse_budget",
    "parse_date",
    "parse_rating",
    "RegionGuide",
    "AppSession",
]

from .emission_factors import EMISSION_FACTORS, factor, parse_distance
from .region_guides import GUIDES, RegionGuideCatalog, enrich_pin, sample_packing, sample_tips
from .trip_emissions import emissions_by_mode, projected_savings, total_emissions
from .eco_scoring import (
    badges,
    car_equivalent,
    global_rank_percentile,
    travel_efficiency_score,
    tree_equivalent,
)
from .pin_search import PinSearchFilter, filter_pins
from .pin_aggregates import (
    TravelInsights,
    build_insights,
    is_abandoned_draft,
    most_visited_region,
    next_future_trip,
    total_savings_estimate,
)
from .pin_editing import (
    EmptyTitleError,
    InvalidDateRangeError,
    PinEditSession,
    PinValidationError,
    close_stored_pin,
)

__all__ = [
    "EMISSION_FACTORS",
    "factor",
    "parse_distance",
    "GUIDES",
    "RegionGuideCatalog",
    "enrich_pin",
    "sample_packing",
    "sample_tips",
    "emissions_by_mode",
    "projected_savings",
    "total_emissions",
    "badges",
    "car_equivalent",
    "global_rank_percentile",
    "travel_efficiency_score",
    "tree_equivalent",
    "PinSearchFilter",
    "filter_pins",
    "TravelInsights",
    "build_insights",
    "is_abandoned_draft",
    "most_visited_region",
    "next_future_trip",
    "total_savings_estimate",
    "EmptyTitleError",
    "InvalidDateRangeError",
    "PinEditSession",
    "PinValidationError",
    "close_stored_pin",
]

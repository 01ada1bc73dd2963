import math
import re
from datetime import date as DateType, datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_IMAGES = 10


def parse_date(v) -> DateType | None:
    """Parse various date formats to date object."""
    if v is None or v == "null" or v == "":
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, DateType):
        return v
    if isinstance(v, str):
        try:
            return datetime.strptime(v, "%Y-%m-%d").date()
        except ValueError:
            pass
        try:
            # Accept full ISO-8601 timestamps, including a trailing "Z"
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    return None


def parse_rating(v) -> int | None:
    """Parse a trip rating; anything outside 0-5 means no rating."""
    if v is None or isinstance(v, bool):
        return None
    try:
        rating = float(v)
    except (TypeError, ValueError):
        return None
    if not rating.is_integer() or not 0 <= rating <= 5:
        return None
    return int(rating)


def parse_budget(v) -> float | None:
    """Parse a trip budget; negative or non-numeric values mean no budget."""
    if v is None or v == "" or isinstance(v, bool):
        return None
    try:
        budget = float(v)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(budget) or budget < 0:
        return None
    return budget


class TransportMode(str, Enum):
    PLANE = "Plane"
    TRAIN = "Train"
    CAR = "Car"
    BUS = "Bus"
    BICYCLE = "Bicycle"
    WALKING = "Walking"
    ELECTRIC_CAR = "Electric Car"
    FERRY = "Ferry"
    CARPOOLING = "Carpooling"
    SUBWAY = "Subway"
    MOTORBIKE = "Motorbike"


# Map common label variations to valid enum values
TRANSPORT_MODE_ALIASES = {
    "flight": "Plane",
    "airplane": "Plane",
    "aeroplane": "Plane",
    "rail": "Train",
    "bike": "Bicycle",
    "cycling": "Bicycle",
    "walk": "Walking",
    "ev": "Electric Car",
    "electric vehicle": "Electric Car",
    "boat": "Ferry",
    "carpool": "Carpooling",
    "metro": "Subway",
    "underground": "Subway",
    "motorcycle": "Motorbike",
}

_MODE_BY_KEY = {mode.value.lower(): mode.value for mode in TransportMode}

# Emoji, variation selectors and other decoration around a label
_DECORATION = re.compile(r"[^\w\s-]+")


def normalize_mode(label) -> str:
    """Map a transport label onto its canonical TransportMode value.

    Unknown labels come back stripped but otherwise unchanged.
    """
    if isinstance(label, TransportMode):
        return label.value
    if not isinstance(label, str):
        return ""
    stripped = label.strip()
    key = " ".join(_DECORATION.sub("", stripped).split()).lower()
    if key in TRANSPORT_MODE_ALIASES:
        key = TRANSPORT_MODE_ALIASES[key].lower()
    return _MODE_BY_KEY.get(key, stripped)


def transport_mode_options(current: str | None = None) -> list[str]:
    """Mode choices for a picker, keeping an unknown current label as typed."""
    options = [mode.value for mode in TransportMode]
    if current is not None and current not in options:
        options.append(current)
    return options


class PinCategory(str, Enum):
    NONE = "None"
    VISITED = "Visited"
    FUTURE = "Future Travel Plan"


class TransportEntry(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    mode: str = TransportMode.PLANE.value
    distance: str = ""  # kilometers, as typed

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode_field(cls, v):
        """Normalize legacy emoji-suffixed labels to canonical modes."""
        return normalize_mode(v)

    @field_validator("distance", mode="before")
    @classmethod
    def distance_as_text(cls, v):
        """Keep the distance as text even when stored as a number."""
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class Pin(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(default_factory=uuid4)
    title: str = ""
    latitude: float = Field(default=0.0, ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(default=0.0, ge=-180, le=180, allow_inf_nan=False)
    category: PinCategory = PinCategory.VISITED
    start_date: DateType | None = Field(default=None, alias="startDate")
    end_date: DateType | None = Field(default=None, alias="endDate")
    places_visited: list[str] = Field(default_factory=list, alias="placesVisited")
    trip_rating: Optional[int] = Field(default=None, alias="tripRating")
    trip_budget: Optional[float] = Field(default=None, alias="tripBudget")
    eco_region: Optional[str] = Field(default=None, alias="ecoRegion")
    eco_tips: list[str] = Field(default_factory=list, alias="ecoTips")
    packing_list: list[str] = Field(default_factory=list, alias="packingList")
    image_filenames: list[str] = Field(default_factory=list, alias="imageFilenames")
    transport_entries: list[TransportEntry] = Field(
        default_factory=list, alias="transportEntries"
    )
    icon: str = "📍"

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_date_fields(cls, v):
        """Parse date strings to date objects."""
        return parse_date(v)

    @field_validator("trip_rating", mode="before")
    @classmethod
    def parse_rating_field(cls, v):
        return parse_rating(v)

    @field_validator("trip_budget", mode="before")
    @classmethod
    def parse_budget_field(cls, v):
        return parse_budget(v)

    @field_validator(
        "places_visited", "eco_tips", "packing_list", "image_filenames", "transport_entries",
        mode="before",
    )
    @classmethod
    def none_as_empty_list(cls, v):
        return [] if v is None else v

    @property
    def coordinate(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    @property
    def trip_duration(self) -> int | None:
        """Days between start and end date, if both are set."""
        if self.start_date is None or self.end_date is None:
            return None
        return (self.end_date - self.start_date).days

    @property
    def has_valid_trip_dates(self) -> bool:
        if self.start_date is None or self.end_date is None:
            return False
        return self.start_date < self.end_date

    def add_transport_entry(
        self, mode: str = TransportMode.PLANE.value, distance: str = ""
    ) -> TransportEntry:
        entry = TransportEntry(mode=mode, distance=distance)
        self.transport_entries.append(entry)
        return entry

    def remove_transport_entry(self, entry_id: UUID) -> bool:
        before = len(self.transport_entries)
        self.transport_entries = [e for e in self.transport_entries if e.id != entry_id]
        return len(self.transport_entries) != before

    def add_image(self, filename: str) -> bool:
        """Attach an image reference; returns False when full or already attached."""
        if len(self.image_filenames) >= MAX_IMAGES or filename in self.image_filenames:
            return False
        self.image_filenames.append(filename)
        return True

    def remove_image(self, filename: str) -> bool:
        if filename not in self.image_filenames:
            return False
        self.image_filenames.remove(filename)
        return True

    def to_storage(self) -> dict:
        """Dump to the flat camelCase JSON object used on disk."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_storage(cls, data: dict) -> "Pin":
        return cls.model_validate(data)

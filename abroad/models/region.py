"""Region guide model for sustainable travel tips."""

from pydantic import BaseModel, Field


class RegionGuide(BaseModel):
    """A named geographic bounding box with eco tips and a packing list."""

    region: str  # e.g., "Europe", "Tropical Regions"
    latitude_range: tuple[float, float]  # closed interval (min, max)
    longitude_range: tuple[float, float]

    eco_tips: list[str] = Field(default_factory=list)
    packing_list: list[str] = Field(default_factory=list)

    def contains(self, latitude: float, longitude: float) -> bool:
        """Return True if the point lies inside both closed ranges."""
        lat_min, lat_max = self.latitude_range
        lon_min, lon_max = self.longitude_range
        return lat_min <= latitude <= lat_max and lon_min <= longitude <= lon_max

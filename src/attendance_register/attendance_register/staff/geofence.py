from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import DEFAULT_OFFICE_RADIUS_METERS

EARTH_RADIUS_METERS = 6378137


@dataclass(frozen=True)
class OfficeLocation:
    latitude: float
    longitude: float
    radius: float = DEFAULT_OFFICE_RADIUS_METERS

    @classmethod
    def from_settings(cls, value: dict) -> "OfficeLocation":
        return cls(
            latitude=float(value["latitude"]),
            longitude=float(value["longitude"]),
            radius=float(value.get("radius", DEFAULT_OFFICE_RADIUS_METERS)),
        )

    def distance_to(self, latitude: float, longitude: float) -> float:
        return distance_meters(latitude, longitude, self.latitude, self.longitude)

    def contains(self, latitude: float, longitude: float) -> bool:
        return self.distance_to(latitude, longitude) <= self.radius


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle (haversine) distance in metres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(a)))

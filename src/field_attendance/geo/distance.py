"""Great-circle distance between two coordinates."""

from __future__ import annotations

import math

from ..clients.model import Coordinate
from ..common.numbers import round_half_up
from ..core.constants import EARTH_RADIUS_KM


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in kilometres.

    Inputs are signed degrees and are expected to be validated by the caller.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = (math.sin(delta_lat / 2) * math.sin(delta_lat / 2) +
         math.cos(lat1) * math.cos(lat2) *
         math.sin(delta_lon / 2) * math.sin(delta_lon / 2))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def rounded_distance_km(a: Coordinate, b: Coordinate) -> float:
    """Distance rounded to 2 decimals, the precision stored on a session."""
    return round_half_up(distance_km(a, b), 2)

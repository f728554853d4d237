# backend/utils/distance.py
import math
from typing import Any, List, Sequence

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres (haversine).

    Inputs are degrees. Out-of-range coordinates still produce a number but it
    carries no geographic meaning.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    # Rounding can push a a hair above 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def filter_by_radius(rows: Sequence[Any], latitude: float, longitude: float, radius: float) -> List[Any]:
    """Keep rows within ``radius`` km of the point, nearest first.

    Rows only need ``latitude`` and ``longitude`` attributes. Ties keep their
    incoming order.
    """
    with_distance = []
    for row in rows:
        d = distance_km(latitude, longitude, row.latitude, row.longitude)
        if d <= radius:
            with_distance.append((d, row))

    with_distance.sort(key=lambda pair: pair[0])
    return [row for _, row in with_distance]

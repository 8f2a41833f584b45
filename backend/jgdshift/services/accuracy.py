from typing import List, Optional, Sequence

import numpy as np
from pyproj import Geod

# Japanese geodetic datums (JGD2000, JGD2011) are defined on GRS80.
_GRS80 = Geod(ellps="GRS80")


def horizontal_shift_meters(
    lat_from: Sequence[float],
    lon_from: Sequence[float],
    lat_to: Sequence[float],
    lon_to: Sequence[float],
) -> np.ndarray:
    """Geodesic distance in metres between matching source/target positions."""
    _, _, distance = _GRS80.inv(
        np.asarray(lon_from, dtype=float),
        np.asarray(lat_from, dtype=float),
        np.asarray(lon_to, dtype=float),
        np.asarray(lat_to, dtype=float),
    )
    return np.atleast_1d(np.asarray(distance, dtype=float))


def point_shift_meters(lat_from: float, lon_from: float, lat_to: float, lon_to: float) -> float:
    return float(horizontal_shift_meters([lat_from], [lon_from], [lat_to], [lon_to])[0])


def max_shift_meters(shifts: List[Optional[float]]) -> Optional[float]:
    vals = [s for s in shifts if s is not None]
    if not vals:
        return None
    return float(max(vals))

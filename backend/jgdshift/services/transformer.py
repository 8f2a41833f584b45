import logging
from typing import Callable, Dict, List, Optional

import numpy as np

from jgdshift.services.accuracy import horizontal_shift_meters, max_shift_meters
from jgdshift.services.engine import Transformer
from jgdshift.services.errors import JgdShiftError
from jgdshift.services.point import Correction, Point
from jgdshift.services.registry import ParameterRegistry, registry as default_registry

logger = logging.getLogger(__name__)


DIRECTIONS: Dict[str, Callable[[Transformer, Point], Correction]] = {
    "forward": Transformer.forward_correction,
    "backward": Transformer.backward_correction,
    "backward_compat": Transformer.backward_compat_correction,
    "backward_safe": Transformer.backward_safe_correction,
}


class TransformationService:
    def __init__(self, registry: Optional[ParameterRegistry] = None):
        self.registry = registry if registry is not None else default_registry

    @staticmethod
    def _correction_for(transformer: Transformer, direction: str, point: Point) -> Correction:
        try:
            method = DIRECTIONS[direction]
        except KeyError:
            raise ValueError(f"Unknown direction: {direction}") from None
        return method(transformer, point)

    @staticmethod
    def _point(latitude: float, longitude: float, altitude: Optional[float], normalize: bool) -> Point:
        point = Point(latitude, longitude, 0.0 if altitude is None else altitude)
        return point.normalize() if normalize else point

    @staticmethod
    def _point_dict(point: Point) -> Dict[str, float]:
        return {
            "latitude": point.latitude,
            "longitude": point.longitude,
            "altitude": point.altitude,
        }

    @staticmethod
    def _correction_dict(correction: Correction) -> Dict[str, float]:
        return {
            "latitude": correction.latitude,
            "longitude": correction.longitude,
            "altitude": correction.altitude,
        }

    def _format_response(
        self,
        name: str,
        transformer: Transformer,
        direction: str,
        source: Point,
        correction: Correction,
    ) -> Dict:
        target = source + correction
        shift = horizontal_shift_meters(
            [source.latitude], [source.longitude], [target.latitude], [target.longitude]
        )
        return {
            "parameter_set": name,
            "format": transformer.format.value,
            "direction": direction,
            "source": self._point_dict(source),
            "target": self._point_dict(target),
            "correction": self._correction_dict(correction),
            "horizontal_shift_m": float(shift[0]),
        }

    def transform_point(
        self,
        name: str,
        direction: str,
        latitude: float,
        longitude: float,
        altitude: Optional[float] = None,
        normalize: bool = False,
    ) -> Dict:
        transformer = self.registry.get(name)
        source = self._point(latitude, longitude, altitude, normalize)
        correction = self._correction_for(transformer, direction, source)
        return self._format_response(name, transformer, direction, source, correction)

    def correction(
        self,
        name: str,
        direction: str,
        latitude: float,
        longitude: float,
        normalize: bool = False,
    ) -> Dict:
        transformer = self.registry.get(name)
        source = self._point(latitude, longitude, None, normalize)
        correction = self._correction_for(transformer, direction, source)
        return {
            "parameter_set": name,
            "direction": direction,
            "correction": self._correction_dict(correction),
            "horizontal_degree": correction.horizontal(),
        }

    def transform_trajectory(
        self,
        name: str,
        direction: str,
        points: List[Dict],
        normalize: bool = False,
        skip_errors: bool = False,
    ) -> Dict:
        """Transform many points with one parameter set.

        With ``skip_errors`` a failing point is reported with null coordinates
        and its error detail; otherwise the first failure propagates.
        """
        transformer = self.registry.get(name)
        count = len(points)

        coords = np.array(
            [[p["latitude"], p["longitude"], p.get("altitude") or 0.0] for p in points],
            dtype=float,
        ).reshape(count, 3)
        corrections = np.zeros((count, 3), dtype=float)
        ok = np.ones(count, dtype=bool)
        errors: Dict[int, Dict] = {}

        for i, (lat, lon, alt) in enumerate(coords):
            source = self._point(float(lat), float(lon), float(alt), normalize)
            coords[i] = (source.latitude, source.longitude, source.altitude)
            try:
                correction = self._correction_for(transformer, direction, source)
            except JgdShiftError as exc:
                if not skip_errors:
                    raise
                ok[i] = False
                errors[i] = exc.to_detail()
                continue
            corrections[i] = (correction.latitude, correction.longitude, correction.altitude)

        targets = coords + corrections
        shifts = np.full(count, np.nan)
        if ok.any():
            shifts[ok] = horizontal_shift_meters(
                coords[ok, 0], coords[ok, 1], targets[ok, 0], targets[ok, 1]
            )

        results: List[Dict] = []
        for i in range(count):
            point_id = points[i].get("id")
            entry: Dict = {"id": i if point_id is None else point_id, "original": points[i]}
            if ok[i]:
                entry.update(
                    {
                        "latitude": float(targets[i, 0]),
                        "longitude": float(targets[i, 1]),
                        "altitude": float(targets[i, 2]),
                        "horizontal_shift_m": float(shifts[i]),
                        "error": None,
                    }
                )
            else:
                entry.update(
                    {
                        "latitude": None,
                        "longitude": None,
                        "altitude": None,
                        "horizontal_shift_m": None,
                        "error": errors[i],
                    }
                )
            results.append(entry)

        if errors:
            logger.info("%d of %d trajectory points failed on %r", len(errors), count, name)

        return {
            "parameter_set": name,
            "direction": direction,
            "transformed_trajectory": results,
            "failed": len(errors),
            "max_horizontal_shift_m": max_shift_meters([r["horizontal_shift_m"] for r in results]),
        }

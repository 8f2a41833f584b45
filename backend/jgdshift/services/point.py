import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import cycle with mesh
    from jgdshift.services.mesh import MeshCell, MeshNode, MeshUnit


@dataclass(frozen=True)
class Parameter:
    """One row of a parameter file: shifts in arc-seconds and metres."""

    latitude: float
    longitude: float
    altitude: float

    def horizontal(self) -> float:
        return math.hypot(self.latitude, self.longitude)


@dataclass(frozen=True)
class Correction:
    """Shift in degrees (latitude, longitude) and metres (altitude)."""

    latitude: float
    longitude: float
    altitude: float

    def horizontal(self) -> float:
        return math.hypot(self.latitude, self.longitude)

    def __neg__(self) -> "Correction":
        return Correction(-self.latitude, -self.longitude, -self.altitude)


def _normalize_latitude(t: float) -> float:
    if math.isnan(t) or -90.0 <= t <= 90.0:
        return t

    s = math.fmod(t, 360.0)
    if s < -270.0 or 270.0 < s:
        return s - math.copysign(360.0, s)
    if s < -90.0 or 90.0 < s:
        return math.copysign(180.0, s) - s
    return math.copysign(s, t)


def _normalize_longitude(t: float) -> float:
    if math.isnan(t) or -180.0 <= t <= 180.0:
        return t

    s = math.fmod(t, 360.0)
    if s < -180.0 or 180.0 < s:
        return s - math.copysign(360.0, s)
    return s


@dataclass(frozen=True)
class Point:
    latitude: float
    longitude: float
    altitude: float = 0.0

    @classmethod
    def from_meshcode(cls, meshcode: int) -> "Point":
        from jgdshift.services.mesh import MeshNode

        return MeshNode.from_meshcode(meshcode).to_point()

    @classmethod
    def from_node(cls, node: "MeshNode") -> "Point":
        return node.to_point()

    def mesh_node(self, unit: "MeshUnit") -> "MeshNode":
        from jgdshift.services.mesh import MeshNode

        return MeshNode.from_point(self, unit)

    def mesh_cell(self, unit: "MeshUnit") -> "MeshCell":
        from jgdshift.services.mesh import MeshCell

        return MeshCell.from_point(self, unit)

    def to_meshcode(self, unit: "MeshUnit") -> int:
        return self.mesh_node(unit).to_meshcode()

    def normalize(self) -> "Point":
        """Latitude folded into [-90, 90] (reflected at the poles), longitude into [-180, 180]."""
        return Point(
            _normalize_latitude(self.latitude),
            _normalize_longitude(self.longitude),
            self.altitude,
        )

    def __add__(self, correction: Correction) -> "Point":
        if not isinstance(correction, Correction):
            return NotImplemented
        return Point(
            self.latitude + correction.latitude,
            self.longitude + correction.longitude,
            self.altitude + correction.altitude,
        )

    def __sub__(self, correction: Correction) -> "Point":
        if not isinstance(correction, Correction):
            return NotImplemented
        return Point(
            self.latitude - correction.latitude,
            self.longitude - correction.longitude,
            self.altitude - correction.altitude,
        )

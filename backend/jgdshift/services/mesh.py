"""Discrete mesh (grid) addressing used by the gridded correction parameters.

A mesh coordinate is a digit triplet ``(first, second, third)`` on one axis.
Latitude is counted in units of 2/3 degree and longitude in units of one
degree east of 100E, so the same triplet encoding serves both axes.  Two
triplets interleaved make the 8-digit meshcode that keys a parameter file.
"""
import enum
import math
import struct
from dataclasses import dataclass
from typing import Tuple

from jgdshift.services.errors import (
    InvalidCellError,
    InvalidUnitError,
    MeshCoordOverflowError,
    OutOfRangeError,
)
from jgdshift.services.point import Point


class MeshUnit(enum.Enum):
    """Mesh resolution: ONE is the ~1 km (third mesh) grid, FIVE the ~5 km grid."""

    ONE = 1
    FIVE = 5

    def bound(self) -> int:
        """Largest ``third`` digit on this unit's grid."""
        return 9 if self is MeshUnit.ONE else 5


def _lowest_bit_set(value: float) -> bool:
    (bits,) = struct.unpack("<q", struct.pack("<d", value))
    return bits & 1 == 1


@dataclass(frozen=True, order=True)
class MeshCoord:
    first: int
    second: int
    third: int

    def __post_init__(self):
        if not 0 <= self.first < 100:
            raise OutOfRangeError("first")
        if not 0 <= self.second < 8:
            raise OutOfRangeError("second")
        if not 0 <= self.third < 10:
            raise OutOfRangeError("third")

    @classmethod
    def _from_degree(cls, value: float, unit: MeshUnit) -> "MeshCoord":
        integer = math.floor(value)

        first = integer % 100
        second = math.floor(8.0 * value) - 8 * integer
        third = math.floor(80.0 * value) - 80 * integer - 10 * second

        if unit is MeshUnit.FIVE:
            third = 0 if third < 5 else 5
        return cls(first, second, third)

    @classmethod
    def from_latitude(cls, degree: float, unit: MeshUnit) -> "MeshCoord":
        """Coordinate of the grid line at or south of ``degree``.

        Valid for ``0 <= degree < 66.666...``.  When the least significant bit
        of ``degree`` is set the scaled value is moved one ULP up before
        flooring; this reproduces how the GSI tools resolve points lying
        exactly on a grid line.
        """
        value = 3.0 * degree / 2.0
        if _lowest_bit_set(degree):
            value = math.nextafter(value, math.inf)

        if not 0.0 <= value < 100.0:
            raise OutOfRangeError("degree (latitude)")
        return cls._from_degree(value, unit)

    @classmethod
    def from_longitude(cls, degree: float, unit: MeshUnit) -> "MeshCoord":
        """Coordinate of the grid line at or west of ``degree``, for 100 <= degree <= 180."""
        if not 100.0 <= degree <= 180.0:
            raise OutOfRangeError("degree (longitude)")
        return cls._from_degree(degree, unit)

    def is_unit(self, unit: MeshUnit) -> bool:
        if unit is MeshUnit.FIVE:
            return self.third % unit.value == 0
        return True

    def _to_degree(self) -> float:
        return float(self.first) + float(self.second) / 8.0 + float(self.third) / 80.0

    def to_latitude(self) -> float:
        return 2.0 * self._to_degree() / 3.0

    def to_longitude(self) -> float:
        return 100.0 + self._to_degree()

    def next_up(self, unit: MeshUnit) -> "MeshCoord":
        if not self.is_unit(unit):
            raise InvalidUnitError()

        if self.third == unit.bound():
            if self.second == 7:
                if self.first == 99:
                    raise MeshCoordOverflowError("next up")
                return MeshCoord(self.first + 1, 0, 0)
            return MeshCoord(self.first, self.second + 1, 0)
        return MeshCoord(self.first, self.second, self.third + unit.value)

    def next_down(self, unit: MeshUnit) -> "MeshCoord":
        if not self.is_unit(unit):
            raise InvalidUnitError()

        if self.third == 0:
            if self.second == 0:
                if self.first == 0:
                    raise MeshCoordOverflowError("next down")
                return MeshCoord(self.first - 1, 7, unit.bound())
            return MeshCoord(self.first, self.second - 1, unit.bound())
        return MeshCoord(self.first, self.second, self.third - unit.value)


_LONGITUDE_MAX = MeshCoord(80, 0, 0)


@dataclass(frozen=True)
class MeshNode:
    """Grid line intersection; longitude never exceeds ``MeshCoord(80, 0, 0)`` (180E)."""

    latitude: MeshCoord
    longitude: MeshCoord

    def __post_init__(self):
        if self.longitude > _LONGITUDE_MAX:
            if self.longitude.first > 80:
                raise OutOfRangeError("first of longitude")
            if self.longitude.second > 0:
                raise OutOfRangeError("second of longitude")
            raise OutOfRangeError("third of longitude")

    @classmethod
    def from_meshcode(cls, meshcode: int) -> "MeshNode":
        if not 0 <= meshcode < 100_000_000:
            raise OutOfRangeError("meshcode")

        lat_first, rest = divmod(meshcode, 1_000_000)
        lng_first, rest = divmod(rest, 10_000)
        lat_second, rest = divmod(rest, 1_000)
        lng_second, rest = divmod(rest, 100)
        lat_third, lng_third = divmod(rest, 10)

        return cls(
            MeshCoord(lat_first, lat_second, lat_third),
            MeshCoord(lng_first, lng_second, lng_third),
        )

    @classmethod
    def from_point(cls, point: Point, unit: MeshUnit) -> "MeshNode":
        """Node at the south-west of ``point`` on the ``unit`` grid."""
        latitude = MeshCoord.from_latitude(point.latitude, unit)
        longitude = MeshCoord.from_longitude(point.longitude, unit)
        return cls(latitude, longitude)

    def is_unit(self, unit: MeshUnit) -> bool:
        return self.latitude.is_unit(unit) and self.longitude.is_unit(unit)

    def to_meshcode(self) -> int:
        return (
            (self.latitude.first * 100 + self.longitude.first) * 10_000
            + (self.latitude.second * 10 + self.longitude.second) * 100
            + (self.latitude.third * 10 + self.longitude.third)
        )

    def to_point(self) -> Point:
        return Point(self.latitude.to_latitude(), self.longitude.to_longitude(), 0.0)


def is_meshcode(meshcode: int) -> bool:
    try:
        MeshNode.from_meshcode(meshcode)
    except OutOfRangeError:
        return False
    return True


# Reciprocal cell size in degrees, (longitude, latitude).
_CELL_SCALE = {
    MeshUnit.ONE: (80.0, 120.0),
    MeshUnit.FIVE: (16.0, 24.0),
}


@dataclass(frozen=True)
class MeshCell:
    south_west: MeshNode
    south_east: MeshNode
    north_west: MeshNode
    north_east: MeshNode
    unit: MeshUnit

    def __post_init__(self):
        for name in ("south_west", "south_east", "north_west", "north_east"):
            if not getattr(self, name).is_unit(self.unit):
                raise InvalidUnitError(name)

        next_latitude = self.south_west.latitude.next_up(self.unit)
        next_longitude = self.south_west.longitude.next_up(self.unit)

        if self.south_east != MeshNode(self.south_west.latitude, next_longitude):
            raise InvalidCellError("south_east")
        if self.north_west != MeshNode(next_latitude, self.south_west.longitude):
            raise InvalidCellError("north_west")
        if self.north_east != MeshNode(next_latitude, next_longitude):
            raise InvalidCellError("north_east")

    @classmethod
    def from_node(cls, node: MeshNode, unit: MeshUnit) -> "MeshCell":
        next_latitude = node.latitude.next_up(unit)
        next_longitude = node.longitude.next_up(unit)

        return cls(
            south_west=node,
            south_east=MeshNode(node.latitude, next_longitude),
            north_west=MeshNode(next_latitude, node.longitude),
            north_east=MeshNode(next_latitude, next_longitude),
            unit=unit,
        )

    @classmethod
    def from_meshcode(cls, meshcode: int, unit: MeshUnit) -> "MeshCell":
        return cls.from_node(MeshNode.from_meshcode(meshcode), unit)

    @classmethod
    def from_point(cls, point: Point, unit: MeshUnit) -> "MeshCell":
        return cls.from_node(MeshNode.from_point(point, unit), unit)

    def corners(self) -> Tuple[MeshNode, MeshNode, MeshNode, MeshNode]:
        return self.south_west, self.south_east, self.north_west, self.north_east

    def scale(self) -> Tuple[float, float]:
        """Cells per degree as ``(longitude, latitude)``."""
        return _CELL_SCALE[self.unit]

    def position(self, point: Point) -> Tuple[float, float]:
        """Fractional ``(x, y)`` offset of ``point`` from the south-west corner.

        ``x`` follows longitude and ``y`` latitude; both lie in [0, 1] when the
        cell was built from the same point.
        """
        latitude = point.latitude - self.south_west.latitude.to_latitude()
        longitude = point.longitude - self.south_west.longitude.to_longitude()

        scale_x, scale_y = self.scale()
        return scale_x * longitude, scale_y * latitude

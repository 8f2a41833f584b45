import math

import pytest

from jgdshift.services.mesh import MeshNode, MeshUnit
from jgdshift.services.point import Correction, Parameter, Point


@pytest.mark.parametrize(
    "latitude, expected",
    [
        (0.0, 0.0),
        (-0.0, -0.0),
        (20.0, 20.0),
        (-20.0, -20.0),
        (360.0, 0.0),
        (270.0, -90.0),
        (180.0, 0.0),
        (90.0, 90.0),
        (-360.0, -0.0),
        (-270.0, 90.0),
        (-180.0, 0.0),
        (-90.0, -90.0),
        (380.0, 20.0),
        (290.0, -70.0),
        (200.0, -20.0),
        (110.0, 70.0),
        (-380.0, -20.0),
        (-290.0, 70.0),
        (-200.0, 20.0),
        (-110.0, -70.0),
    ],
)
def test_normalize_latitude(latitude, expected):
    assert Point(latitude, 0.0).normalize() == Point(expected, 0.0)


@pytest.mark.parametrize(
    "longitude, expected",
    [
        (0.0, 0.0),
        (-0.0, -0.0),
        (20.0, 20.0),
        (-20.0, -20.0),
        (360.0, 0.0),
        (270.0, -90.0),
        (180.0, 180.0),
        (90.0, 90.0),
        (-360.0, -0.0),
        (-270.0, 90.0),
        (-180.0, -180.0),
        (-90.0, -90.0),
        (380.0, 20.0),
        (290.0, -70.0),
        (200.0, -160.0),
        (110.0, 110.0),
        (-380.0, -20.0),
        (-290.0, 70.0),
        (-200.0, 160.0),
        (-110.0, -110.0),
    ],
)
def test_normalize_longitude(longitude, expected):
    assert Point(0.0, longitude).normalize() == Point(0.0, expected)


def test_normalize_keeps_altitude_and_nan():
    point = Point(float("nan"), 400.0, 12.5).normalize()
    assert math.isnan(point.latitude)
    assert point.longitude == 40.0
    assert point.altitude == 12.5


@pytest.mark.parametrize(
    "latitude, longitude",
    [
        (0.0, 0.0),
        (-0.0, -0.0),
        (90.0, 180.0),
        (-90.0, -180.0),
        (270.0, 540.0),
        (-450.0, -900.0),
        (123.456, 1234.5678),
        (-1e5, 1e5),
        (89.99999999999999, 179.99999999999997),
        (1e300, -1e300),
    ],
)
def test_normalize_is_idempotent(latitude, longitude):
    once = Point(latitude, longitude, 7.0).normalize()
    assert once.normalize() == once
    assert -90.0 <= once.latitude <= 90.0
    assert -180.0 <= once.longitude <= 180.0


def test_point_plus_and_minus_correction():
    point = Point(36.0, 140.0, 1.0)
    correction = Correction(0.5, -0.25, 2.0)
    assert point + correction == Point(36.5, 139.75, 3.0)
    assert point - correction == Point(35.5, 140.25, -1.0)
    assert point + correction - correction == point


def test_correction_negation_and_horizontal():
    correction = Correction(3.0, 4.0, 1.0)
    assert -correction == Correction(-3.0, -4.0, -1.0)
    assert correction.horizontal() == 5.0
    assert Parameter(3.0, 4.0, 0.0).horizontal() == 5.0


def test_point_from_meshcode():
    point = Point.from_meshcode(54401027)
    assert point == MeshNode.from_meshcode(54401027).to_point()
    assert point.to_meshcode(MeshUnit.ONE) == 54401027
    assert Point.from_node(MeshNode.from_meshcode(54401027)) == point


def test_point_mesh_cell():
    point = Point(36.103774791666666, 140.08785504166664)
    assert point.mesh_node(MeshUnit.FIVE).to_meshcode() == 54401005
    assert point.mesh_cell(MeshUnit.ONE).south_west.to_meshcode() == 54401027

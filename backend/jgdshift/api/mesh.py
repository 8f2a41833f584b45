from typing import Dict

from fastapi import APIRouter, Query

from jgdshift.api.errors import http_error
from jgdshift.services.errors import JgdShiftError
from jgdshift.services.mesh import MeshCell, MeshNode, MeshUnit, is_meshcode
from jgdshift.services.point import Point

router = APIRouter(prefix="/api/mesh", tags=["mesh"])


def _unit(name: str) -> MeshUnit:
    return MeshUnit[name]


def _node_dict(node: MeshNode) -> Dict:
    point = node.to_point()
    return {
        "meshcode": node.to_meshcode(),
        "latitude": {
            "first": node.latitude.first,
            "second": node.latitude.second,
            "third": node.latitude.third,
        },
        "longitude": {
            "first": node.longitude.first,
            "second": node.longitude.second,
            "third": node.longitude.third,
        },
        "point": {"latitude": point.latitude, "longitude": point.longitude},
    }


@router.get("/node")
def mesh_node(
    latitude: float,
    longitude: float,
    unit: str = Query("ONE", pattern="^(ONE|FIVE)$"),
):
    try:
        node = MeshNode.from_point(Point(latitude, longitude), _unit(unit))
    except JgdShiftError as e:
        raise http_error(e)
    return {"unit": unit, **_node_dict(node)}


@router.get("/meshcode/{code}")
def mesh_meshcode(code: int):
    try:
        node = MeshNode.from_meshcode(code)
    except JgdShiftError as e:
        raise http_error(e)
    return {
        **_node_dict(node),
        "is_unit": {unit.name: node.is_unit(unit) for unit in MeshUnit},
    }


@router.get("/cell")
def mesh_cell(
    latitude: float,
    longitude: float,
    unit: str = Query("ONE", pattern="^(ONE|FIVE)$"),
):
    point = Point(latitude, longitude)
    try:
        cell = MeshCell.from_point(point, _unit(unit))
    except JgdShiftError as e:
        raise http_error(e)
    x, y = cell.position(point)
    return {
        "unit": unit,
        "south_west": cell.south_west.to_meshcode(),
        "south_east": cell.south_east.to_meshcode(),
        "north_west": cell.north_west.to_meshcode(),
        "north_east": cell.north_east.to_meshcode(),
        "position": {"x": x, "y": y},
    }


@router.get("/is-meshcode/{code}")
def mesh_is_meshcode(code: int):
    return {"meshcode": code, "valid": is_meshcode(code)}

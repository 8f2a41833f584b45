from fastapi import APIRouter, HTTPException

from jgdshift.api.errors import http_error
from jgdshift.models.schemas import ParameterLoadRequest
from jgdshift.services.errors import JgdShiftError
from jgdshift.services.formats import Format
from jgdshift.services.registry import describe, registry

router = APIRouter(prefix="/api/parameters", tags=["parameters"])


@router.get("/formats")
def list_formats():
    return {
        "formats": [
            {
                "name": fmt.value,
                "mesh_unit": fmt.mesh_unit().name,
                "header_lines": fmt.layout().header,
                "description": fmt.summary(),
            }
            for fmt in Format
        ]
    }


@router.post("", status_code=201)
def load_parameters(request: ParameterLoadRequest):
    try:
        transformer = registry.load(
            request.name, request.format, request.content, request.description
        )
    except JgdShiftError as e:
        raise http_error(e)
    return describe(request.name, transformer)


@router.get("")
def list_parameters():
    return {"parameter_sets": registry.summaries()}


@router.get("/{name}")
def get_parameters(name: str):
    try:
        return registry.summary(name)
    except JgdShiftError as e:
        raise http_error(e)


@router.get("/{name}/meshcode/{code}")
def get_parameter(name: str, code: int):
    try:
        transformer = registry.get(name)
    except JgdShiftError as e:
        raise http_error(e)
    parameter = transformer.parameter.get(code)
    if parameter is None:
        raise HTTPException(status_code=404, detail=f"No parameter at meshcode {code} in {name}")
    return {
        "name": name,
        "meshcode": code,
        "latitude": parameter.latitude,
        "longitude": parameter.longitude,
        "altitude": parameter.altitude,
    }


@router.delete("/{name}", status_code=204)
def delete_parameters(name: str):
    try:
        registry.remove(name)
    except JgdShiftError as e:
        raise http_error(e)

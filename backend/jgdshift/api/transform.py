from fastapi import APIRouter, HTTPException

from jgdshift.api.errors import http_error
from jgdshift.config import settings
from jgdshift.models.schemas import CorrectionRequest, TrajectoryRequest, TransformRequest
from jgdshift.services.errors import JgdShiftError
from jgdshift.services.transformer import TransformationService

router = APIRouter(prefix="/api/transform", tags=["transform"])


@router.post("/direct")
async def transform_direct(request: TransformRequest):
    try:
        service = TransformationService()
        return service.transform_point(
            request.parameter_set,
            request.direction,
            request.point.latitude,
            request.point.longitude,
            request.point.altitude,
            normalize=request.normalize,
        )
    except JgdShiftError as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/correction")
async def transform_correction(request: CorrectionRequest):
    try:
        service = TransformationService()
        return service.correction(
            request.parameter_set,
            request.direction,
            request.latitude,
            request.longitude,
            normalize=request.normalize,
        )
    except JgdShiftError as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/trajectory")
async def transform_trajectory(request: TrajectoryRequest):
    if len(request.trajectory_points) > settings.max_trajectory_points:
        raise HTTPException(
            status_code=413,
            detail=f"At most {settings.max_trajectory_points} points per request",
        )
    try:
        service = TransformationService()
        return service.transform_trajectory(
            request.parameter_set,
            request.direction,
            [p.model_dump() for p in request.trajectory_points],
            normalize=request.normalize,
            skip_errors=request.skip_errors,
        )
    except JgdShiftError as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

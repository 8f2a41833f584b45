from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from jgdshift.services.formats import Format

Direction = Literal["forward", "backward", "backward_compat", "backward_safe"]


class PointModel(BaseModel):
    latitude: float
    longitude: float
    altitude: Optional[float] = 0.0


class TransformRequest(BaseModel):
    parameter_set: str
    direction: Direction = "forward"
    point: PointModel
    normalize: bool = False


class CorrectionRequest(BaseModel):
    parameter_set: str
    direction: Direction = "forward"
    latitude: float
    longitude: float
    normalize: bool = False


class TrajectoryPoint(BaseModel):
    id: Optional[str] = None
    latitude: float
    longitude: float
    altitude: Optional[float] = None


class TrajectoryRequest(BaseModel):
    parameter_set: str
    direction: Direction = "forward"
    trajectory_points: List[TrajectoryPoint] = Field(..., min_length=1)
    normalize: bool = False
    skip_errors: bool = False


class ParameterLoadRequest(BaseModel):
    name: str = Field(..., min_length=1)
    format: Format
    content: str
    description: Optional[str] = None

"""Forward and backward transformation by gridded correction parameters.

The forward correction at a point is the bilinear interpolation of the four
parameters on the corners of the mesh cell containing it.  The map has no
closed-form inverse, so backward corrections are found either by a single
compatibility step (``backward``) or by Newton-Raphson iteration
(``backward_safe``).
"""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from jgdshift.services.errors import (
    CorrectionNotFoundError,
    JgdShiftError,
    ParameterNotFoundError,
    PointOutOfRangeError,
)
from jgdshift.services.formats import Format
from jgdshift.services.mesh import MeshCell, MeshUnit
from jgdshift.services.par_parser import parse_par
from jgdshift.services.point import Correction, Parameter, Point

logger = logging.getLogger(__name__)

# Convergence contract of backward_safe.  Its Newton step uses the analytic
# Jacobian (cell scale and fractional position included) and the determinant
# fx_x*fy_y - fx_y*fy_x; the GSI formula fx_x*fy_y - fy_x*fy_x with raw
# coordinates converges to the same point along a different path.
ERROR_MAX = 5e-14
MAX_ITERATION = 4

# Contract of the earlier solver generation, kept for comparison runs.
LEGACY_ERROR_MAX = 2.5e-9
LEGACY_MAX_ITERATION = 3

# Offset (degree) applied before the first lookup of the fast backward step.
BACKWARD_DELTA = 1.0 / 300.0

# Parameters are tabulated in arc-seconds.
ARCSEC = 3600.0

CORNERS = ("SW", "SE", "NW", "NE")


def bilinear_interpolation(
    sw: float, se: float, nw: float, ne: float, x: float, y: float
) -> float:
    return (
        sw * (1.0 - x) * (1.0 - y)
        + se * x * (1.0 - y)
        + nw * (1.0 - x) * y
        + ne * x * y
    )


@dataclass(frozen=True)
class Quadruple:
    sw: Parameter
    se: Parameter
    nw: Parameter
    ne: Parameter


@dataclass(frozen=True)
class Transformer:
    """Coordinate transformer over a parameter mapping keyed by meshcode.

    The mapping is held by reference and never mutated, so one instance can
    serve concurrent callers.
    """

    format: Format
    parameter: Mapping[int, Parameter] = field(repr=False)
    description: Optional[str] = None
    error_max: float = ERROR_MAX
    max_iteration: int = MAX_ITERATION

    def __post_init__(self):
        if self.max_iteration < 1:
            raise ValueError("max_iteration must be positive")
        if not self.error_max > 0.0:
            raise ValueError("error_max must be positive")

    @classmethod
    def from_string(
        cls, content: str, format: Format, description: Optional[str] = None
    ) -> "Transformer":
        description, parameter = parse_par(content, format, description)
        return cls(format, parameter, description)

    @staticmethod
    def builder() -> "TransformerBuilder":
        return TransformerBuilder()

    def mesh_unit(self) -> MeshUnit:
        return self.format.mesh_unit()

    def mesh_cell(self, point: Point) -> MeshCell:
        try:
            return MeshCell.from_point(point, self.mesh_unit())
        except JgdShiftError as exc:
            raise PointOutOfRangeError(exc) from exc

    def parameter_quadruple(self, cell: MeshCell) -> Quadruple:
        found = []
        for corner, node in zip(CORNERS, cell.corners()):
            meshcode = node.to_meshcode()
            parameter = self.parameter.get(meshcode)
            if parameter is None:
                raise ParameterNotFoundError(corner, meshcode)
            found.append(parameter)
        return Quadruple(*found)

    @staticmethod
    def _interpolate(quadruple: Quadruple, x: float, y: float) -> Correction:
        sw, se, nw, ne = quadruple.sw, quadruple.se, quadruple.nw, quadruple.ne
        latitude = bilinear_interpolation(sw.latitude, se.latitude, nw.latitude, ne.latitude, x, y)
        longitude = bilinear_interpolation(
            sw.longitude, se.longitude, nw.longitude, ne.longitude, x, y
        )
        altitude = bilinear_interpolation(sw.altitude, se.altitude, nw.altitude, ne.altitude, x, y)
        return Correction(latitude / ARCSEC, longitude / ARCSEC, altitude)

    def forward_correction(self, point: Point) -> Correction:
        cell = self.mesh_cell(point)
        quadruple = self.parameter_quadruple(cell)
        x, y = cell.position(point)
        return self._interpolate(quadruple, x, y)

    def backward_correction(self, point: Point) -> Correction:
        """Single-step approximate inverse, compatible with the GSI tools.

        Not exact: the error grows with the gradient of the parameters.  Use
        :meth:`backward_safe_correction` when the inverse must be verified.
        """
        temporal = Point(point.latitude - BACKWARD_DELTA, point.longitude + BACKWARD_DELTA, point.altitude)
        reference = point - self.forward_correction(temporal)
        return -self.forward_correction(reference)

    def backward_compat_correction(self, point: Point) -> Correction:
        return self.backward_correction(point)

    def backward_safe_correction(self, point: Point) -> Correction:
        """Newton-Raphson inverse of the forward map.

        Raises :class:`CorrectionNotFoundError` when the residual does not drop
        below ``error_max`` within ``max_iteration`` steps.
        """
        yn = point.latitude
        xn = point.longitude

        for iteration in range(1, self.max_iteration + 1):
            current = Point(yn, xn, 0.0)
            cell = self.mesh_cell(current)
            q = self.parameter_quadruple(cell)
            x, y = cell.position(current)
            scale_x, scale_y = cell.scale()

            corr_y = bilinear_interpolation(
                q.sw.latitude, q.se.latitude, q.nw.latitude, q.ne.latitude, x, y
            ) / ARCSEC
            corr_x = bilinear_interpolation(
                q.sw.longitude, q.se.longitude, q.nw.longitude, q.ne.longitude, x, y
            ) / ARCSEC

            fx = point.longitude - (xn + corr_x)
            fy = point.latitude - (yn + corr_y)

            # Partial derivatives of the residual, chain rule through the cell position.
            fx_x = -1.0 - scale_x * (
                (q.se.longitude - q.sw.longitude) * (1.0 - y) + (q.ne.longitude - q.nw.longitude) * y
            ) / ARCSEC
            fx_y = -scale_y * (
                (q.nw.longitude - q.sw.longitude) * (1.0 - x) + (q.ne.longitude - q.se.longitude) * x
            ) / ARCSEC
            fy_x = -scale_x * (
                (q.se.latitude - q.sw.latitude) * (1.0 - y) + (q.ne.latitude - q.nw.latitude) * y
            ) / ARCSEC
            fy_y = -1.0 - scale_y * (
                (q.nw.latitude - q.sw.latitude) * (1.0 - x) + (q.ne.latitude - q.se.latitude) * x
            ) / ARCSEC

            det = fx_x * fy_y - fx_y * fy_x

            xn -= (fy_y * fx - fx_y * fy) / det
            yn -= (fx_x * fy - fy_x * fx) / det

            correction = self.forward_correction(Point(yn, xn, 0.0))
            delta_x = point.longitude - (xn + correction.longitude)
            delta_y = point.latitude - (yn + correction.latitude)

            if abs(delta_x) < self.error_max and abs(delta_y) < self.error_max:
                logger.debug("backward_safe converged after %d iteration(s)", iteration)
                return -correction

        raise CorrectionNotFoundError(self.max_iteration, self.error_max)

    def forward(self, point: Point) -> Point:
        return point + self.forward_correction(point)

    def backward(self, point: Point) -> Point:
        return point + self.backward_correction(point)

    def backward_compat(self, point: Point) -> Point:
        return point + self.backward_compat_correction(point)

    def backward_safe(self, point: Point) -> Point:
        return point + self.backward_safe_correction(point)


ParameterItems = Union[Mapping[int, Parameter], Iterable[Tuple[int, Parameter]]]


class TransformerBuilder:
    """Accumulate parameters, then freeze them into a :class:`Transformer`."""

    def __init__(self):
        self._format: Optional[Format] = None
        self._parameter: Dict[int, Parameter] = {}
        self._description: Optional[str] = None

    def format(self, format: Format) -> "TransformerBuilder":
        self._format = format
        return self

    def parameter(self, meshcode: int, parameter: Parameter) -> "TransformerBuilder":
        self._parameter[meshcode] = parameter
        return self

    def parameters(self, parameters: ParameterItems) -> "TransformerBuilder":
        items = parameters.items() if isinstance(parameters, Mapping) else parameters
        for meshcode, parameter in items:
            self.parameter(meshcode, parameter)
        return self

    def description(self, description: Optional[str]) -> "TransformerBuilder":
        self._description = description
        return self

    def build(self) -> Transformer:
        if self._format is None:
            raise ValueError("format is not assigned")
        return Transformer(
            self._format,
            MappingProxyType(dict(self._parameter)),
            self._description,
        )

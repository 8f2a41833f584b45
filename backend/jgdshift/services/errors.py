from typing import Optional


class JgdShiftError(Exception):
    """Base class of every failure raised by the transformation core."""

    kind = "error"

    def to_detail(self) -> dict:
        return {"error": self.kind, "message": str(self)}


class OutOfRangeError(JgdShiftError, ValueError):
    kind = "out_of_range"

    def __init__(self, field: str):
        super().__init__(f"{field} out of range")
        self.field = field

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["field"] = self.field
        return detail


class InvalidUnitError(JgdShiftError, ValueError):
    kind = "invalid_unit"

    def __init__(self, corner: Optional[str] = None):
        if corner is None:
            super().__init__("mesh coord is not aligned to the mesh unit")
        else:
            super().__init__(f"{corner} is not aligned to the mesh unit")
        self.corner = corner


class InvalidCellError(JgdShiftError, ValueError):
    kind = "invalid_cell"

    def __init__(self, corner: str):
        super().__init__(f"{corner} is not adjacent to south west")
        self.corner = corner


class MeshCoordOverflowError(JgdShiftError, ArithmeticError):
    kind = "overflow"

    def __init__(self, direction: str):
        super().__init__(f"mesh coord overflows on {direction}")
        self.direction = direction


class PointOutOfRangeError(JgdShiftError, ValueError):
    kind = "point_out_of_range"

    def __init__(self, cause: JgdShiftError):
        super().__init__(f"point out of range: {cause}")
        self.cause = cause

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["cause"] = self.cause.to_detail()
        return detail


class ParameterNotFoundError(JgdShiftError, LookupError):
    kind = "parameter_not_found"

    def __init__(self, corner: str, meshcode: int):
        super().__init__(f"parameter not found at {corner} corner (meshcode {meshcode})")
        self.corner = corner
        self.meshcode = meshcode

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["corner"] = self.corner
        detail["meshcode"] = self.meshcode
        return detail


class CorrectionNotFoundError(JgdShiftError, ArithmeticError):
    kind = "correction_not_found"

    def __init__(self, iterations: int, error_max: float):
        super().__init__(
            f"backward correction did not converge within {iterations} iterations "
            f"(tolerance {error_max:g} degree)"
        )
        self.iterations = iterations
        self.error_max = error_max


class ParseParError(JgdShiftError, ValueError):
    kind = "parse_error"

    def __init__(self, message: str, line_no: Optional[int] = None):
        if line_no is None:
            super().__init__(message)
        else:
            super().__init__(f"{message}, line {line_no}")
        self.line_no = line_no

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["line"] = self.line_no
        return detail


class ParameterSetNotFoundError(JgdShiftError, LookupError):
    kind = "parameter_set_not_found"

    def __init__(self, name: str):
        super().__init__(f"parameter set not loaded: {name}")
        self.name = name

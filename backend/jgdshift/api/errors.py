from fastapi import HTTPException

from jgdshift.services.errors import (
    CorrectionNotFoundError,
    JgdShiftError,
    ParameterNotFoundError,
    ParameterSetNotFoundError,
)


def http_error(exc: JgdShiftError) -> HTTPException:
    if isinstance(exc, ParameterSetNotFoundError):
        status = 404
    elif isinstance(exc, (ParameterNotFoundError, CorrectionNotFoundError)):
        status = 422
    else:
        status = 400
    return HTTPException(status_code=status, detail=exc.to_detail())

from collections.abc import Sequence
from typing import NoReturn, Protocol

from fastapi import HTTPException, status

STATUS_BY_CODE: dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "connection_unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
    "store_failure": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ComponentError(Protocol):
    code: str
    message: str


def raise_for_errors(errors: Sequence[ComponentError]) -> NoReturn:
    """Map the first component error onto an HTTP error response."""
    if not errors:
        raise HTTPException(status_code=500, detail="Operation failed")
    err = errors[0]
    raise HTTPException(status_code=STATUS_BY_CODE.get(err.code, 400), detail=err.message)

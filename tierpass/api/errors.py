from fastapi import HTTPException, status

from tierpass.domain.errors import TierPassError

_STATUS_BY_KIND = {
    "unauthorized": status.HTTP_403_FORBIDDEN,
    "invalid_argument": status.HTTP_400_BAD_REQUEST,
    "precondition_failed": status.HTTP_409_CONFLICT,
}

# Codes that name a missing resource rather than a malformed argument
_NOT_FOUND_CODES = {"invalid_content_id"}


def http_error(exc: TierPassError) -> HTTPException:
    """Map a rejected operation to an HTTPException."""
    if exc.code in _NOT_FOUND_CODES:
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = _STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    return HTTPException(
        status_code=status_code,
        detail={"code": exc.code, "message": exc.message},
    )

from fastapi import status

from careshare.libs.result import Error

STATUS_BY_CODE = {
    "UNAUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "INSUFFICIENT_PERMISSIONS": status.HTTP_403_FORBIDDEN,
    "EMAIL_MISMATCH": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "ALREADY_USED": status.HTTP_409_CONFLICT,
    "ALREADY_PENDING": status.HTTP_409_CONFLICT,
    "INVARIANT_VIOLATION": status.HTTP_409_CONFLICT,
    "EXPIRED": status.HTTP_410_GONE,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_PERMISSIONS": status.HTTP_400_BAD_REQUEST,
    "INVALID_EXPIRY": status.HTTP_400_BAD_REQUEST,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "INVALID_CODE": status.HTTP_400_BAD_REQUEST,
    "INVALID_ORGANIZATION_TYPE": status.HTTP_400_BAD_REQUEST,
    "INVALID_PARTNERSHIP_TYPE": status.HTTP_400_BAD_REQUEST,
    "OTP_NOT_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "RATE_LIMITED": status.HTTP_429_TOO_MANY_REQUESTS,
    "TOO_MANY_ATTEMPTS": status.HTTP_429_TOO_MANY_REQUESTS,
    "NOTIFICATION_FAILED": status.HTTP_503_SERVICE_UNAVAILABLE,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Raise the HTTP-facing exception for a use case error"""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)

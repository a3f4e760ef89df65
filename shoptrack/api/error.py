from typing import NoReturn

from fastapi import status

from shoptrack.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Codes not listed here are server errors
ERROR_STATUS = {
    "NOT_AUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "PROFILE_MISSING": status.HTTP_403_FORBIDDEN,
    "USER_INACTIVE": status.HTTP_403_FORBIDDEN,
    "INSUFFICIENT_ROLE": status.HTTP_403_FORBIDDEN,
    "SELF_PRIVILEGE_ESCALATION": status.HTTP_403_FORBIDDEN,
    "NO_TENANT_ASSIGNED": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TENANT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TENANT_AT_CAPACITY": status.HTTP_409_CONFLICT,
    "CATEGORY_NOT_EMPTY": status.HTTP_409_CONFLICT,
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "TENANT_ALREADY_ASSIGNED": status.HTTP_409_CONFLICT,
    "VALIDATION_FAILED": status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def raise_for_error(error: Error) -> NoReturn:
    """Raise the HTTP-level exception for a use case error"""
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)

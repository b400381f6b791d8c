from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class APIException(HTTPException):
    """
    Base exception class for application errors.
    Extends HTTPException with an error code and optional field/params details.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: Optional[str] = None,
        field: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.field = field
        self.params = params


class BadRequestException(APIException):
    """400 Bad Request exception."""

    def __init__(
        self,
        detail: str = "Bad request",
        code: Optional[str] = "bad_request",
        field: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=code,
            field=field,
            headers=headers,
        )


class NotFoundException(APIException):
    """404 Not Found exception."""

    def __init__(
        self,
        detail: str = "Resource not found",
        code: Optional[str] = "not_found",
        field: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=code,
            field=field,
            headers=headers,
        )


class ServerException(APIException):
    """500 Internal Server Error exception."""

    def __init__(
        self,
        detail: str = "Internal server error",
        code: Optional[str] = "server_error",
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code=code,
            headers=headers,
        )


class StoreTimeoutException(ServerException):
    """A concurrent store read did not finish within the configured bound."""

    def __init__(self, detail: str = "Store read timed out"):
        super().__init__(detail=detail, code="store_timeout")


class NotImplementedException(APIException):
    """501 Not Implemented exception."""

    def __init__(
        self,
        detail: str = "Not implemented",
        code: Optional[str] = "not_implemented",
    ):
        super().__init__(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            detail=detail,
            code=code,
        )

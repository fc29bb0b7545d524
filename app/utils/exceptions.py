"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error kinds the
product service reports. Routers never translate errors themselves:
raising one of these from a service is enough for FastAPI to answer with
the right status code.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Product with red-shoes not found")
    raise DuplicateError("Key (title)=(Red Shoes) already exists.")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 상품을 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when an id/slug/title lookup matches no product.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 유니크 제약 위반 시 사용.

    409 Conflict exception.
    Raised when a write violates a uniqueness constraint
    (e.g. duplicate product title or slug).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request refers to state that does not exist at the point
    of a merge (e.g. updating an unknown product id).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InternalServerError(HTTPException):
    """500 Internal Server Error 예외 — 예기치 않은 DB 오류 시 사용.

    500 Internal Server Error exception.
    The underlying error is logged server-side; the caller only gets a
    generic message.

    Args:
        detail: 오류 메시지 (Error message, default: "Please check server logs")
    """

    def __init__(self, detail: str = "Please check server logs") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)

"""Base domain exceptions.

领域异常通过 http_status_code / error_code 类属性声明 HTTP 映射；
details 携带引发错误的原始输入（例如无法解析的日期、非法链接），
由 HTTP 层原样输出。
"""

from typing import Any

from fastapi import status


class DomainException(Exception):
    """Base exception for all domain errors."""

    http_status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str = "A domain error occurred",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.error_code, "message": self.message}
        if self.details:
            error["details"] = self.details
        return error


class ValidationError(DomainException):
    """Raised when a user-supplied value cannot be used."""

    http_status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, value: Any = None):
        self.value = value
        super().__init__(message, details={"value": value} if value is not None else None)

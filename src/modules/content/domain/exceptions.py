"""Content domain exceptions."""

from fastapi import status

from src.core.domain.exceptions import DomainException


class ContentQueryError(DomainException):
    """Raised when the content store cannot answer a query."""

    http_status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "CONTENT_QUERY_FAILED"

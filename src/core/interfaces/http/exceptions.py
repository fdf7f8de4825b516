"""HTTP exception handlers.

领域异常按 http_status_code 输出 {"error": {...}}；内容存储不可用（503）时
附带 Retry-After，便于上游缓存/反向代理稍后重试。
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from src.core.domain.exceptions import DomainException

RETRY_AFTER_SECONDS = "30"


async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Handle domain exceptions."""
    logger.warning(
        f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}"
    )

    headers = None
    if exc.http_status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        headers = {"Retry-After": RETRY_AFTER_SECONDS}

    return JSONResponse(
        status_code=exc.http_status_code,
        content={"error": exc.to_dict()},
        headers=headers,
    )


async def global_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An internal error occurred",
            }
        },
    )

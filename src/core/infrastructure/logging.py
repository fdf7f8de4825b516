"""Logging configuration with structlog integration.

提供两种日志记录方式：
1. loguru: 用于一般调试日志
2. structlog: 用于关键业务事件的结构化日志
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    _configure_structlog()
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    """配置 structlog 处理器链。"""
    if settings.ENVIRONMENT == "local":
        # 本地开发使用人类可读格式
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """配置 loguru。"""
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if settings.ENVIRONMENT != "local":
        logger.add(
            "logs/news_events_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    """将日志级别字符串转换为数字。"""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# 业务事件日志记录器
# ============================================================================


class BusinessEvents:
    """业务事件日志助手类。

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.listing_built(content_types=["news"], item_count=3)
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def listing_built(
        cls,
        content_types: list[str],
        requested: int,
        item_count: int,
        has_view_all: bool,
        **extra: Any,
    ) -> None:
        """记录列表构建完成事件。"""
        cls._log.info(
            "listing_built",
            event_type="listing",
            content_types=content_types,
            requested=requested,
            item_count=item_count,
            has_view_all=has_view_all,
            **extra,
        )

    @classmethod
    def listing_degraded(
        cls,
        stage: str,
        reason: str,
        **extra: Any,
    ) -> None:
        """记录列表降级事件（查询失败、条目跳过等）。"""
        cls._log.warning(
            "listing_degraded",
            event_type="degradation",
            stage=stage,
            reason=reason,
            **extra,
        )

    @classmethod
    def log_warning(
        cls,
        message: str,
        context: dict[str, Any] | None = None,
        **extra: Any,
    ) -> None:
        """记录警告。"""
        cls._log.warning(message, **(context or {}), **extra)

    @classmethod
    def log_error(
        cls,
        error: Exception,
        context: dict[str, Any] | None = None,
        **extra: Any,
    ) -> None:
        """记录错误及上下文。"""
        cls._log.error(
            "error",
            error_type=type(error).__name__,
            error=str(error),
            **(context or {}),
            **extra,
        )

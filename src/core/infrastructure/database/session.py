"""Database session management."""

from collections.abc import AsyncGenerator

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from src.core.config import settings
from src.core.infrastructure.health import DatabaseHealthResult, HealthStatus

async_engine = create_async_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    echo=settings.ENVIRONMENT == "local",
    pool_pre_ping=True,
    pool_size=settings.POSTGRES_POOL_SIZE,
    max_overflow=settings.POSTGRES_MAX_OVERFLOW,
    connect_args={
        "options": f"-c statement_timeout={settings.POSTGRES_STATEMENT_TIMEOUT_MS}"
    },
    # 每个事务以 READ ONLY 开始，由驱动在首条语句前设置
    execution_options={"postgresql_readonly": True},
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a read-only session for the current request.

    不在此处执行 SQL：连接失败应发生在仓储调用内部，由仓储转换为
    ContentQueryError，列表据此降级。会话关闭时事务回滚。
    """
    async with AsyncSession(async_engine, expire_on_commit=False) as session:
        yield session


async def init_db() -> None:
    """Verify the content store is reachable at startup."""
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Content store connection established")
    except Exception as e:
        logger.error(f"Failed to connect to content store: {e}")
        raise


async def check_db_health() -> DatabaseHealthResult:
    """检查内容库连接状态。"""
    try:
        async with async_engine.connect() as conn:
            version = (await conn.execute(text("SHOW server_version"))).scalar()
    except Exception as e:
        logger.warning(f"Content store health check failed: {e}")
        return DatabaseHealthResult(
            status=HealthStatus.ERROR,
            connected=False,
            error=str(e),
        )

    return DatabaseHealthResult(
        status=HealthStatus.OK,
        connected=True,
        version=f"PostgreSQL {version}" if version else "unknown",
    )

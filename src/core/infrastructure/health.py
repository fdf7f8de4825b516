"""健康检查类型定义。"""

from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """组件健康状态。"""

    OK = "ok"
    ERROR = "error"


class DatabaseHealthResult(BaseModel):
    """内容库（PostgreSQL）健康检查结果。"""

    status: HealthStatus = Field(..., description="健康状态")
    connected: bool = Field(..., description="是否已连接")
    version: str | None = Field(None, description="PostgreSQL 版本")
    error: str | None = Field(None, description="错误信息")


class HealthReport(BaseModel):
    """服务整体健康状态。

    内容库不可用时列表只能降级为空，因此视为 unhealthy。
    """

    status: str = Field(..., description="healthy / unhealthy")
    environment: str
    version: str
    components: dict[str, DatabaseHealthResult] = Field(default_factory=dict)

    @classmethod
    def from_content_store(
        cls, content_store: DatabaseHealthResult, environment: str, version: str
    ) -> "HealthReport":
        return cls(
            status="healthy" if content_store.status == HealthStatus.OK else "unhealthy",
            environment=environment,
            version=version,
            components={"content_store": content_store},
        )

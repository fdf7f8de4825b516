"""Standard API response models."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ResponseMeta(BaseModel):
    """Render context of a response."""

    language: str | None = Field(None, description="语言上下文")
    cache_tags: list[str] = Field(default_factory=list, description="缓存失效标签")
    cache_contexts: list[str] = Field(default_factory=list, description="缓存上下文")


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response envelope."""

    code: int = 200
    message: str = "OK"
    data: T | None = None
    meta: ResponseMeta | None = None

    @classmethod
    def success(
        cls,
        data: T = None,
        message: str = "OK",
        meta: ResponseMeta | None = None,
    ) -> "ApiResponse[T]":
        return cls(data=data, message=message, meta=meta)

"""Viewer (current visitor) value object."""

from pydantic import Field

from src.core.domain.base_entity import ValueObject

ACCESS_CONTENT = "access content"


class Viewer(ValueObject):
    """当前访问者：权限集合 + 语言上下文。"""

    permissions: frozenset[str] = Field(default_factory=frozenset)
    language: str = Field(default="en", description="语言上下文")

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    @property
    def can_access_content(self) -> bool:
        return self.has_permission(ACCESS_CONTENT)

"""Listing domain entities.

ListingConfiguration 的字段名即区块配置项的键名；ListingPayload 及其组成部分
在每次渲染时新建，构建完成后不可变。
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from src.core.domain.base_entity import ValueObject

DEFAULT_CONTENT_TYPES: tuple[str, ...] = ("news", "events")


def _drop_unchecked(values: Any) -> list[str]:
    """Drop unchecked checkbox entries (0, "0", "", None)."""
    if values is None:
        return []
    if isinstance(values, dict):
        values = list(values.values())
    if isinstance(values, str | int):
        values = [values]
    return [str(v) for v in values if v not in (0, "0", "", None, False)]


def _none_to_empty(v: Any) -> Any:
    return "" if v is None else v


CheckboxValues = Annotated[list[str], BeforeValidator(_drop_unchecked)]
OptionalText = Annotated[str, BeforeValidator(_none_to_empty)]


class ListingConfiguration(BaseModel):
    """News & Events listing configuration."""

    block_title: str = Field(default="News & Events", description="区块标题")
    content_types: CheckboxValues = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_TYPES),
        description="要展示的内容类型",
    )
    filter_by_category: bool = Field(default=False, description="是否按分类过滤")
    category_tids: CheckboxValues = Field(default_factory=list, description="分类 Term ID")
    number_of_items: int = Field(default=3, description="条目数量（编辑界面限制 1-20）")
    image_style: OptionalText = Field(default="medium", description="图片样式，空为原图")
    date_format: str = Field(default="F j, Y", description="PHP 风格日期格式")
    show_view_all: bool = Field(default=True, description="是否显示“查看全部”链接")
    view_all_url: OptionalText = Field(default="/news-events", description="“查看全部”链接地址")
    view_all_text: OptionalText = Field(default="View All", description="“查看全部”链接文本")

    @property
    def effective_content_types(self) -> list[str]:
        """Configured content types, or the defaults when none are selected."""
        types = list(dict.fromkeys(self.content_types))
        return types or list(DEFAULT_CONTENT_TYPES)

    @property
    def effective_item_count(self) -> int:
        """Item limit; non-positive values mean no items."""
        return max(0, self.number_of_items)

    @property
    def category_filter(self) -> frozenset[str] | None:
        """Category IDs to filter by, None when no restriction applies."""
        if not self.filter_by_category or not self.category_tids:
            return None
        return frozenset(self.category_tids)


class SummaryText(ValueObject):
    """Summary text with its text format."""

    text: str
    format: str = "plain_text"


class ImageDescriptor(ValueObject):
    """Image to render; style_name None means the original image."""

    uri: str
    alt: str
    title: str
    style_name: str | None = None


class CategoryTag(ValueObject):
    """Category shown on a list item."""

    label: str
    url: str
    id: str


class ListItem(ValueObject):
    """Normalized display item."""

    title: str
    url: str
    content_type: str
    content_type_label: str
    summary: SummaryText | None = None
    image: ImageDescriptor | None = None
    date: str | None = None
    date_start: str | None = None
    date_end: str | None = None
    is_date_range: bool = False
    categories: tuple[CategoryTag, ...] = ()


class ViewAllLink(ValueObject):
    """Secondary "view all" navigation link."""

    text: str
    url: str
    css_classes: tuple[str, ...] = ()


class CacheMetadata(ValueObject):
    """Cache tags and contexts for invalidation by the host."""

    tags: tuple[str, ...] = ()
    contexts: tuple[str, ...] = ()


class ListingPayload(ValueObject):
    """Assembled listing handed to the presentation layer."""

    title: str
    items: tuple[ListItem, ...] = ()
    view_all_link: ViewAllLink | None = None
    cache: CacheMetadata = Field(default_factory=CacheMetadata)

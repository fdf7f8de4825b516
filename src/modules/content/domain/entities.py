"""Content domain entities."""

from enum import Enum

from pydantic import Field

from src.core.domain.base_entity import BaseEntity, ValueObject


class PublishStatus(int, Enum):
    """Publish status enum."""

    UNPUBLISHED = 0
    PUBLISHED = 1


class SortDirection(str, Enum):
    """Sort direction enum."""

    ASC = "ASC"
    DESC = "DESC"


class FormattedText(ValueObject):
    """Rich text value with its text format tag."""

    value: str = Field(..., description="文本内容")
    format: str | None = Field(default=None, description="文本格式，如 basic_html")

    @property
    def is_empty(self) -> bool:
        return not self.value or not self.value.strip()


class BodyText(FormattedText):
    """Long-form body with an optional hand-written summary."""

    summary: str | None = Field(default=None, description="正文摘要")


class ImageReference(ValueObject):
    """Reference from a content record to an image file."""

    file_id: str | None = Field(default=None, description="文件ID")
    alt: str | None = Field(default=None, description="替代文本")


class TermRef(ValueObject):
    """Taxonomy term - 分类标签。"""

    id: str = Field(..., description="Term ID")
    label: str = Field(..., description="名称")
    url: str = Field(..., description="规范URL")
    vocabulary: str | None = Field(default=None, description="所属词汇表")


class ImageStyleRef(ValueObject):
    """Named image preset."""

    name: str = Field(..., description="机器名")
    label: str = Field(..., description="显示名")


class ContentRecord(BaseEntity):
    """Content record - 单条新闻或活动。

    date / date_end 保存原始字符串值（例如 "2024-05-01T10:00:00"），
    格式化由列表层负责。
    """

    kind: str = Field(..., description="内容类型，如 news / events")
    title: str = Field(..., description="标题")
    status: PublishStatus = Field(default=PublishStatus.PUBLISHED)
    url: str = Field(..., description="规范URL")
    summary: FormattedText | None = Field(default=None, description="摘要字段")
    body: BodyText | None = Field(default=None, description="正文字段")
    image: ImageReference | None = Field(default=None, description="图片字段")
    date: str | None = Field(default=None, description="主日期（原始值）")
    date_end: str | None = Field(default=None, description="结束日期（原始值）")
    category_ids: list[str] = Field(default_factory=list, description="分类 Term ID")

    @property
    def is_published(self) -> bool:
        return self.status == PublishStatus.PUBLISHED


class SortSpec(ValueObject):
    """Sort field and direction."""

    field: str = "date"
    direction: SortDirection = SortDirection.DESC


class ContentQuery(ValueObject):
    """Content query - 按类型/状态/分类查询，排序并限制条数。"""

    kinds: frozenset[str] = Field(..., description="内容类型集合")
    only_published: bool = Field(default=True)
    sort: SortSpec = Field(default_factory=SortSpec)
    limit: int = Field(..., ge=0, description="最大条数")
    category_ids: frozenset[str] | None = Field(
        default=None, description="分类过滤，None 表示不过滤"
    )

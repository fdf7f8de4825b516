"""Item normalizer - 将内容记录转换为统一的列表条目。

各字段独立解析：
- summary: 摘要字段 -> 正文摘要/正文节选 -> 无
- image: 文件存在才输出；样式存在时带样式名
- dates: 活动类型先解析开始/结束日期，其余情况回退到主日期
- categories: 按引用顺序输出可解析的分类，无法解析的跳过

仓储查询失败只会让对应字段缺失，不会影响整条记录。
"""

from collections.abc import Callable

from loguru import logger

from src.core.config import settings
from src.modules.content.domain.entities import ContentRecord
from src.modules.content.domain.repository import ContentRepository
from src.modules.listings.application.date_format import DateFormatter
from src.modules.listings.application.text_summary import trim_summary
from src.modules.listings.domain.entities import (
    CategoryTag,
    ImageDescriptor,
    ListingConfiguration,
    ListItem,
    SummaryText,
)

PLAIN_TEXT = "plain_text"

SummaryResolver = Callable[[ContentRecord], SummaryText | None]


def summary_from_summary_field(record: ContentRecord) -> SummaryText | None:
    """Dedicated summary field, passed through with its format."""
    if record.summary is None or record.summary.is_empty:
        return None
    return SummaryText(
        text=record.summary.value,
        format=record.summary.format or PLAIN_TEXT,
    )


def summary_from_body(record: ContentRecord) -> SummaryText | None:
    """Body summary, or an excerpt of the body, trimmed to plain text."""
    body = record.body
    if body is None:
        return None
    source = body.summary if body.summary and body.summary.strip() else body.value
    if not source or not source.strip():
        return None
    text = trim_summary(source, settings.SUMMARY_TRIM_LENGTH)
    if not text:
        return None
    return SummaryText(text=text, format=body.format or PLAIN_TEXT)


DEFAULT_SUMMARY_RESOLVERS: tuple[SummaryResolver, ...] = (
    summary_from_summary_field,
    summary_from_body,
)


class ItemNormalizer:
    """Converts a ContentRecord into a ListItem."""

    def __init__(
        self,
        repository: ContentRepository,
        date_formatter: DateFormatter | None = None,
        summary_resolvers: tuple[SummaryResolver, ...] = DEFAULT_SUMMARY_RESOLVERS,
        event_content_type: str | None = None,
    ):
        self.repository = repository
        self.date_formatter = date_formatter or DateFormatter(settings.TIMEZONE)
        self.summary_resolvers = summary_resolvers
        self.event_content_type = event_content_type or settings.EVENT_CONTENT_TYPE

    async def normalize(
        self, record: ContentRecord, config: ListingConfiguration
    ) -> ListItem:
        dates = self.resolve_dates(record, config.date_format)
        return ListItem(
            title=record.title,
            url=record.url,
            content_type=record.kind,
            content_type_label=await self.resolve_content_type_label(record.kind),
            summary=self.resolve_summary(record),
            image=await self.resolve_image(record, config.image_style),
            categories=tuple(await self.resolve_categories(record)),
            **dates,
        )

    def resolve_summary(self, record: ContentRecord) -> SummaryText | None:
        """First resolver returning a value wins."""
        for resolver in self.summary_resolvers:
            summary = resolver(record)
            if summary is not None:
                return summary
        return None

    async def resolve_image(
        self, record: ContentRecord, image_style: str
    ) -> ImageDescriptor | None:
        image = record.image
        if image is None or not image.file_id:
            return None

        try:
            uri = await self.repository.resolve_file_uri(image.file_id)
        except Exception as e:
            logger.warning(f"Failed to resolve image file {image.file_id}: {e}")
            return None
        if not uri:
            logger.debug(f"Image file {image.file_id} of {record.id} is missing")
            return None

        style_name = None
        if image_style:
            try:
                style = await self.repository.load_image_style(image_style)
            except Exception as e:
                logger.warning(f"Failed to load image style {image_style}: {e}")
                style = None
            if style is not None:
                style_name = image_style

        return ImageDescriptor(
            uri=uri,
            alt=image.alt or record.title,
            title=record.title,
            style_name=style_name,
        )

    def resolve_dates(self, record: ContentRecord, pattern: str) -> dict:
        """Resolve date, date_start, date_end and is_date_range.

        同一个 pattern 同时用于开始、结束和回退日期。
        """
        dates: dict = {
            "date": None,
            "date_start": None,
            "date_end": None,
            "is_date_range": False,
        }

        if record.kind == self.event_content_type and record.date:
            dates["date_start"] = self.date_formatter.format(record.date, pattern)
            dates["date"] = dates["date_start"]

            if record.date_end and record.date_end != record.date:
                dates["date_end"] = self.date_formatter.format(
                    record.date_end, pattern
                )
                dates["is_date_range"] = True

        # 回退：非活动类型，或活动没有开始日期
        if not dates["date"] and record.date:
            dates["date"] = self.date_formatter.format(record.date, pattern)

        return dates

    async def resolve_categories(self, record: ContentRecord) -> list[CategoryTag]:
        categories: list[CategoryTag] = []
        for term_id in record.category_ids:
            try:
                term = await self.repository.load_term(term_id)
            except Exception as e:
                logger.warning(f"Failed to load term {term_id}: {e}")
                continue
            if term is None:
                continue
            categories.append(CategoryTag(label=term.label, url=term.url, id=term.id))
        return categories

    async def resolve_content_type_label(self, kind: str) -> str:
        try:
            label = await self.repository.get_kind_label(kind)
        except Exception as e:
            logger.warning(f"Failed to load label of content type {kind}: {e}")
            label = None
        return label or kind

"""News & events listing services.

ListingBuilder 负责：
- 根据配置构造内容查询
- 逐条调用 ItemNormalizer（保持仓储返回的顺序）
- 组装“查看全部”链接与缓存元数据

任何协作方的错误都降级为空列表/部分列表，build 永远返回 ListingPayload。
"""

from loguru import logger

from src.core.config import settings
from src.core.infrastructure.logging import BusinessEvents
from src.modules.content.domain.entities import (
    ContentQuery,
    ContentRecord,
    ImageStyleRef,
    SortDirection,
    SortSpec,
    TermRef,
)
from src.modules.content.domain.repository import ContentRepository
from src.modules.listings.application.cache import get_cache_metadata
from src.modules.listings.application.link_resolver import resolve_link_target
from src.modules.listings.application.normalizer import ItemNormalizer
from src.modules.listings.domain.entities import (
    ListingConfiguration,
    ListingPayload,
    ListItem,
    ViewAllLink,
)
from src.modules.listings.domain.exceptions import InvalidLinkTargetError


class ListingBuilder:
    """Builds the news & events listing payload."""

    def __init__(
        self,
        repository: ContentRepository,
        normalizer: ItemNormalizer | None = None,
    ):
        self.repository = repository
        self.normalizer = normalizer or ItemNormalizer(repository)

    @staticmethod
    def build_query(config: ListingConfiguration) -> ContentQuery:
        """Build the content query for a configuration."""
        return ContentQuery(
            kinds=frozenset(config.effective_content_types),
            only_published=True,
            sort=SortSpec(field="date", direction=SortDirection.DESC),
            limit=config.effective_item_count,
            category_ids=config.category_filter,
        )

    async def build(self, config: ListingConfiguration) -> ListingPayload:
        records = await self._fetch_records(config)
        items = await self._normalize_all(records, config)
        view_all_link = self.build_view_all_link(config)

        BusinessEvents.listing_built(
            content_types=config.effective_content_types,
            requested=config.effective_item_count,
            item_count=len(items),
            has_view_all=view_all_link is not None,
        )

        return ListingPayload(
            title=config.block_title,
            items=tuple(items),
            view_all_link=view_all_link,
            cache=get_cache_metadata(config),
        )

    async def _fetch_records(self, config: ListingConfiguration) -> list[ContentRecord]:
        if config.effective_item_count <= 0:
            return []

        query = self.build_query(config)
        try:
            records = await self.repository.query(query)
        except Exception as e:
            logger.warning(f"Content query failed, rendering empty listing: {e}")
            BusinessEvents.listing_degraded(stage="query", reason=str(e))
            return []

        # 仓储实现应遵守 limit，这里再保证一次
        return list(records)[: query.limit]

    async def _normalize_all(
        self, records: list[ContentRecord], config: ListingConfiguration
    ) -> list[ListItem]:
        items: list[ListItem] = []
        for record in records:
            try:
                items.append(await self.normalizer.normalize(record, config))
            except Exception as e:
                BusinessEvents.log_error(
                    e, context={"stage": "normalize", "record_id": record.id}
                )
                continue
        return items

    @staticmethod
    def build_view_all_link(config: ListingConfiguration) -> ViewAllLink | None:
        if not config.show_view_all or not config.view_all_url:
            return None

        try:
            url = resolve_link_target(config.view_all_url)
        except InvalidLinkTargetError as e:
            BusinessEvents.log_warning(
                "view_all_link_suppressed",
                context={"url": config.view_all_url, "reason": e.message},
            )
            return None

        return ViewAllLink(
            text=config.view_all_text,
            url=url,
            css_classes=(settings.VIEW_ALL_LINK_CLASS,),
        )


class ListingOptionsService:
    """Choices an editing surface offers for a listing configuration."""

    def __init__(self, repository: ContentRepository):
        self.repository = repository

    async def list_categories(self) -> list[TermRef]:
        """Terms of the category vocabulary; empty if it does not exist yet."""
        try:
            return await self.repository.list_terms(settings.CATEGORY_VOCABULARY)
        except Exception as e:
            logger.warning(f"Failed to list category terms: {e}")
            return []

    async def list_image_styles(self) -> list[ImageStyleRef]:
        try:
            return await self.repository.list_image_styles()
        except Exception as e:
            logger.warning(f"Failed to list image styles: {e}")
            return []

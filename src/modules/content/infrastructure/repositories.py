"""Content repository implementations."""

from collections import defaultdict

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from src.core.domain.viewer import Viewer
from src.modules.content.domain.entities import (
    ContentQuery,
    ContentRecord,
    ImageStyleRef,
    PublishStatus,
    SortDirection,
    TermRef,
)
from src.modules.content.domain.exceptions import ContentQueryError
from src.modules.content.domain.repository import ContentRepository
from src.modules.content.infrastructure.mappers import (
    ContentRecordMapper,
    ImageStyleMapper,
    TermMapper,
)
from src.modules.content.infrastructure.models import (
    ContentKindModel,
    ContentRecordModel,
    ContentRecordTermModel,
    FileModel,
    ImageStyleModel,
    TaxonomyTermModel,
)

_SORT_COLUMNS = {
    "date": ContentRecordModel.date,
    "created_at": ContentRecordModel.created_at,
    "title": ContentRecordModel.title,
}


class PostgreSQLContentRepository(ContentRepository):
    """PostgreSQL content repository implementation.

    可见性规则：访问者缺少 "access content" 权限时不可见任何内容；
    未发布记录仅在查询显式要求时返回。
    主排序字段相同时按 created_at DESC、id ASC 打破平局。
    """

    def __init__(
        self,
        session: AsyncSession,
        viewer: Viewer,
        record_mapper: ContentRecordMapper,
        term_mapper: TermMapper,
        image_style_mapper: ImageStyleMapper,
    ):
        self.session = session
        self.viewer = viewer
        self.record_mapper = record_mapper
        self.term_mapper = term_mapper
        self.image_style_mapper = image_style_mapper
        self.logger = logger

    async def _execute(self, statement):
        """Run a statement inside a savepoint.

        请求内所有查找共用一个事务；失败只回滚到保存点，后续查找仍可用。
        """
        async with self.session.begin_nested():
            return await self.session.execute(statement)

    async def query(self, query: ContentQuery) -> list[ContentRecord]:
        if not self.viewer.can_access_content:
            self.logger.debug("Viewer lacks content access, returning no records")
            return []
        if query.limit <= 0 or not query.kinds:
            return []

        sort_column = _SORT_COLUMNS.get(query.sort.field)
        if sort_column is None:
            raise ContentQueryError(f"Unsupported sort field: {query.sort.field}")

        statement = select(ContentRecordModel).where(
            col(ContentRecordModel.kind).in_(sorted(query.kinds)),
            col(ContentRecordModel.is_deleted).is_(False),
        )
        if query.only_published:
            statement = statement.where(
                ContentRecordModel.status == PublishStatus.PUBLISHED.value
            )

        if query.category_ids:
            # 子查询过滤，避免多分类记录在结果中重复
            tagged = select(ContentRecordTermModel.record_id).where(
                col(ContentRecordTermModel.term_id).in_(sorted(query.category_ids)),
                col(ContentRecordTermModel.is_deleted).is_(False),
            )
            statement = statement.where(col(ContentRecordModel.id).in_(tagged))

        primary = col(sort_column)
        primary = (
            primary.desc().nullslast()
            if query.sort.direction == SortDirection.DESC
            else primary.asc().nullslast()
        )
        statement = (
            statement.order_by(
                primary,
                col(ContentRecordModel.created_at).desc(),
                col(ContentRecordModel.id).asc(),
            )
            .limit(query.limit)
        )

        try:
            result = await self._execute(statement)
            models = list(result.scalars().all())
            term_ids = await self._load_term_ids([m.id for m in models])
        except SQLAlchemyError as e:
            raise ContentQueryError(f"Content query failed: {e}") from e

        return [
            self.record_mapper.to_domain_with_terms(model, term_ids.get(model.id, []))
            for model in models
        ]

    async def _load_term_ids(self, record_ids: list[str]) -> dict[str, list[str]]:
        """Load category term IDs per record, in reference order."""
        if not record_ids:
            return {}

        statement = (
            select(ContentRecordTermModel)
            .where(
                col(ContentRecordTermModel.record_id).in_(record_ids),
                col(ContentRecordTermModel.is_deleted).is_(False),
            )
            .order_by(
                col(ContentRecordTermModel.record_id),
                col(ContentRecordTermModel.delta).asc(),
            )
        )
        result = await self._execute(statement)

        term_ids: dict[str, list[str]] = defaultdict(list)
        for link in result.scalars().all():
            term_ids[link.record_id].append(link.term_id)
        return term_ids

    async def load_term(self, term_id: str) -> TermRef | None:
        if not self.viewer.can_access_content:
            return None

        statement = select(TaxonomyTermModel).where(
            TaxonomyTermModel.id == term_id,
            col(TaxonomyTermModel.is_deleted).is_(False),
        )
        try:
            result = await self._execute(statement)
        except SQLAlchemyError as e:
            raise ContentQueryError(f"Failed to load term {term_id}: {e}") from e
        model = result.scalar_one_or_none()
        return self.term_mapper.to_domain(model) if model else None

    async def list_terms(self, vocabulary: str) -> list[TermRef]:
        if not self.viewer.can_access_content:
            return []

        statement = (
            select(TaxonomyTermModel)
            .where(
                TaxonomyTermModel.vocabulary == vocabulary,
                col(TaxonomyTermModel.is_deleted).is_(False),
            )
            .order_by(
                col(TaxonomyTermModel.weight).asc(),
                col(TaxonomyTermModel.name).asc(),
            )
        )
        try:
            result = await self._execute(statement)
        except SQLAlchemyError as e:
            raise ContentQueryError(f"Failed to list terms of {vocabulary}: {e}") from e
        return self.term_mapper.to_domain_list(list(result.scalars().all()))

    async def load_image_style(self, name: str) -> ImageStyleRef | None:
        statement = select(ImageStyleModel).where(
            ImageStyleModel.name == name,
            col(ImageStyleModel.is_deleted).is_(False),
        )
        try:
            result = await self._execute(statement)
        except SQLAlchemyError as e:
            raise ContentQueryError(f"Failed to load image style {name}: {e}") from e
        model = result.scalar_one_or_none()
        return self.image_style_mapper.to_domain(model) if model else None

    async def list_image_styles(self) -> list[ImageStyleRef]:
        statement = (
            select(ImageStyleModel)
            .where(col(ImageStyleModel.is_deleted).is_(False))
            .order_by(col(ImageStyleModel.label).asc())
        )
        try:
            result = await self._execute(statement)
        except SQLAlchemyError as e:
            raise ContentQueryError(f"Failed to list image styles: {e}") from e
        return self.image_style_mapper.to_domain_list(list(result.scalars().all()))

    async def resolve_file_uri(self, file_id: str) -> str | None:
        if not self.viewer.can_access_content:
            return None

        statement = select(FileModel.uri).where(
            FileModel.id == file_id,
            col(FileModel.is_deleted).is_(False),
        )
        try:
            result = await self._execute(statement)
        except SQLAlchemyError as e:
            raise ContentQueryError(f"Failed to resolve file {file_id}: {e}") from e
        return result.scalar_one_or_none()

    async def get_kind_label(self, kind: str) -> str | None:
        statement = select(ContentKindModel.label).where(
            ContentKindModel.machine_name == kind,
            col(ContentKindModel.is_deleted).is_(False),
        )
        try:
            result = await self._execute(statement)
        except SQLAlchemyError as e:
            raise ContentQueryError(f"Failed to load kind label {kind}: {e}") from e
        return result.scalar_one_or_none()

"""Content module dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.application.security import get_current_viewer
from src.core.domain.viewer import Viewer
from src.core.infrastructure.database.session import get_db_session
from src.modules.content.infrastructure.mappers import (
    ContentRecordMapper,
    ImageStyleMapper,
    TermMapper,
)
from src.modules.content.infrastructure.repositories import (
    PostgreSQLContentRepository,
)


def get_content_record_mapper() -> ContentRecordMapper:
    return ContentRecordMapper()


def get_term_mapper() -> TermMapper:
    return TermMapper()


def get_image_style_mapper() -> ImageStyleMapper:
    return ImageStyleMapper()


async def get_content_repository(
    session: AsyncSession = Depends(get_db_session),
    viewer: Viewer = Depends(get_current_viewer),
    record_mapper: ContentRecordMapper = Depends(get_content_record_mapper),
    term_mapper: TermMapper = Depends(get_term_mapper),
    image_style_mapper: ImageStyleMapper = Depends(get_image_style_mapper),
) -> PostgreSQLContentRepository:
    return PostgreSQLContentRepository(
        session, viewer, record_mapper, term_mapper, image_style_mapper
    )

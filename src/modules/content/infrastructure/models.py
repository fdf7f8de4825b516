"""Content database models.

内容数据由外部 CMS 写入，本服务只读；is_deleted 的行对所有查询不可见。
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, Text, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.modules.content.domain.entities import PublishStatus


class ContentTable(SQLModel):
    """Shared columns of every content table."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
    is_deleted: bool = Field(default=False, nullable=False)


class ContentKindModel(ContentTable, table=True):
    """Content kind (bundle) database model."""

    __tablename__ = "content_kinds"

    machine_name: str = Field(nullable=False, unique=True, index=True)
    label: str = Field(nullable=False)


class ContentRecordModel(ContentTable, table=True):
    """Content record database model."""

    __tablename__ = "content_records"

    kind: str = Field(nullable=False, index=True)
    title: str = Field(nullable=False, sa_type=Text)
    status: int = Field(
        default=PublishStatus.PUBLISHED.value,
        sa_type=Integer,
        nullable=False,
        index=True,
    )
    url: str = Field(nullable=False, sa_type=Text)

    # Summary
    summary_value: str | None = Field(default=None, sa_type=Text, nullable=True)
    summary_format: str | None = Field(default=None, nullable=True)

    # Body
    body_value: str | None = Field(default=None, sa_type=Text, nullable=True)
    body_summary: str | None = Field(default=None, sa_type=Text, nullable=True)
    body_format: str | None = Field(default=None, nullable=True)

    # Image
    image_file_id: str | None = Field(default=None, nullable=True)
    image_alt: str | None = Field(default=None, nullable=True)

    # Dates - 原始字符串（ISO 8601），按字符串排序即时间顺序
    date: str | None = Field(default=None, nullable=True, index=True)
    date_end: str | None = Field(default=None, nullable=True)


class TaxonomyTermModel(ContentTable, table=True):
    """Taxonomy term database model."""

    __tablename__ = "taxonomy_terms"

    vocabulary: str = Field(nullable=False, index=True)
    name: str = Field(nullable=False)
    url: str = Field(nullable=False, sa_type=Text)
    weight: int = Field(default=0, nullable=False)


class ContentRecordTermModel(ContentTable, table=True):
    """Content record - taxonomy term reference."""

    __tablename__ = "content_record_terms"
    __table_args__ = (UniqueConstraint("record_id", "term_id"),)

    record_id: str = Field(nullable=False, index=True)
    term_id: str = Field(nullable=False, index=True)
    delta: int = Field(default=0, nullable=False)  # 引用顺序


class FileModel(ContentTable, table=True):
    """Managed file database model."""

    __tablename__ = "files"

    uri: str = Field(nullable=False, sa_type=Text)
    filename: str | None = Field(default=None, nullable=True)
    mime_type: str | None = Field(default=None, nullable=True)


class ImageStyleModel(ContentTable, table=True):
    """Image style (preset) database model."""

    __tablename__ = "image_styles"

    name: str = Field(nullable=False, unique=True, index=True)
    label: str = Field(nullable=False)

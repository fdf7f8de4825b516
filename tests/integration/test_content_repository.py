"""PostgreSQLContentRepository 集成测试。

注意：需要运行 docker-compose up -d postgres，并创建 news_events_test 数据库：
    python scripts/create_test_db.py --database news_events_test
"""

from datetime import UTC, datetime

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

from src.core.domain.viewer import ACCESS_CONTENT, Viewer
from src.modules.content.domain.entities import ContentQuery, SortSpec
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
from src.modules.content.infrastructure.repositories import (
    PostgreSQLContentRepository,
)

pytestmark = [pytest.mark.integration, pytest.mark.anyio]


def _repository(session, viewer: Viewer | None = None) -> PostgreSQLContentRepository:
    return PostgreSQLContentRepository(
        session,
        viewer or Viewer(permissions=frozenset({ACCESS_CONTENT})),
        ContentRecordMapper(),
        TermMapper(),
        ImageStyleMapper(),
    )


def _query(**overrides) -> ContentQuery:
    data = {"kinds": frozenset({"news", "events"}), "limit": 10, "sort": SortSpec()}
    data.update(overrides)
    return ContentQuery(**data)


@pytest.fixture
async def seeded(db_session):
    """写入示例内容（事务结束时回滚）。"""
    db_session.add_all(
        [
            ContentKindModel(machine_name="news", label="News"),
            ContentKindModel(machine_name="events", label="Events"),
            ImageStyleModel(name="medium", label="Medium"),
            FileModel(id="file-1", uri="public://images/open-day.jpg"),
            TaxonomyTermModel(
                id="term-campus",
                vocabulary="news_events_category",
                name="Campus",
                url="/taxonomy/term/5",
            ),
            TaxonomyTermModel(
                id="term-research",
                vocabulary="news_events_category",
                name="Research",
                url="/taxonomy/term/7",
                weight=1,
            ),
            ContentRecordModel(
                id="rec-a",
                kind="news",
                title="A",
                url="/news/a",
                date="2024-04-10T09:00:00",
                created_at=datetime(2024, 4, 1, tzinfo=UTC),
            ),
            ContentRecordModel(
                id="rec-b",
                kind="events",
                title="B",
                url="/events/b",
                date="2024-05-01",
                date_end="2024-05-03",
                image_file_id="file-1",
                created_at=datetime(2024, 4, 2, tzinfo=UTC),
            ),
            # 与 rec-a 同日期、更晚创建
            ContentRecordModel(
                id="rec-c",
                kind="news",
                title="C",
                url="/news/c",
                date="2024-04-10T09:00:00",
                created_at=datetime(2024, 4, 3, tzinfo=UTC),
            ),
            ContentRecordModel(
                id="rec-draft",
                kind="news",
                title="Draft",
                url="/news/draft",
                status=0,
                date="2024-06-01",
            ),
            ContentRecordModel(
                id="rec-undated",
                kind="news",
                title="Undated",
                url="/news/undated",
                date=None,
            ),
            ContentRecordTermModel(record_id="rec-b", term_id="term-research", delta=0),
            ContentRecordTermModel(record_id="rec-b", term_id="term-campus", delta=1),
            ContentRecordTermModel(record_id="rec-a", term_id="term-campus", delta=0),
        ]
    )
    await db_session.flush()
    return db_session


class TestQuery:
    """query 测试。"""

    async def test_order_and_tie_break(self, seeded):
        records = await _repository(seeded).query(_query())
        assert [r.id for r in records] == ["rec-b", "rec-c", "rec-a", "rec-undated"]

    async def test_limit(self, seeded):
        records = await _repository(seeded).query(_query(limit=2))
        assert [r.id for r in records] == ["rec-b", "rec-c"]

    async def test_zero_limit(self, seeded):
        assert await _repository(seeded).query(_query(limit=0)) == []

    async def test_kind_filter(self, seeded):
        records = await _repository(seeded).query(_query(kinds=frozenset({"events"})))
        assert [r.id for r in records] == ["rec-b"]

    async def test_category_filter_has_no_duplicates(self, seeded):
        records = await _repository(seeded).query(
            _query(category_ids=frozenset({"term-campus", "term-research"}))
        )
        assert [r.id for r in records] == ["rec-b", "rec-a"]

    async def test_category_ids_in_reference_order(self, seeded):
        records = await _repository(seeded).query(_query(kinds=frozenset({"events"})))
        assert records[0].category_ids == ["term-research", "term-campus"]

    async def test_unpublished_included_only_on_request(self, seeded):
        records = await _repository(seeded).query(_query(only_published=False))
        assert "rec-draft" in [r.id for r in records]

    async def test_viewer_without_access_sees_nothing(self, seeded):
        repo = _repository(seeded, Viewer(permissions=frozenset()))
        assert await repo.query(_query()) == []
        assert await repo.load_term("term-campus") is None
        assert await repo.resolve_file_uri("file-1") is None


class TestLookups:
    """单项查找测试。"""

    async def test_load_term(self, seeded):
        term = await _repository(seeded).load_term("term-campus")
        assert term.label == "Campus"
        assert term.url == "/taxonomy/term/5"

    async def test_list_terms_by_weight(self, seeded):
        terms = await _repository(seeded).list_terms("news_events_category")
        assert [t.label for t in terms] == ["Campus", "Research"]

    async def test_list_terms_unknown_vocabulary(self, seeded):
        assert await _repository(seeded).list_terms("tags") == []

    async def test_image_styles(self, seeded):
        repo = _repository(seeded)
        assert (await repo.load_image_style("medium")).label == "Medium"
        assert await repo.load_image_style("huge") is None
        assert [s.name for s in await repo.list_image_styles()] == ["medium"]

    async def test_resolve_file_uri(self, seeded):
        repo = _repository(seeded)
        assert await repo.resolve_file_uri("file-1") == "public://images/open-day.jpg"
        assert await repo.resolve_file_uri("missing") is None

    async def test_kind_label(self, seeded):
        repo = _repository(seeded)
        assert await repo.get_kind_label("events") == "Events"
        assert await repo.get_kind_label("blog") is None


class TestFailedStatementIsolation:
    """单条语句失败不影响同一事务内的后续查找。"""

    async def test_later_lookups_survive_failed_statement(self, seeded):
        repo = _repository(seeded)

        with pytest.raises(DBAPIError):
            await repo._execute(text("SELECT 1 / 0"))

        assert (await repo.load_term("term-campus")).label == "Campus"
        assert await repo.resolve_file_uri("file-1") == "public://images/open-day.jpg"
        records = await repo.query(_query(kinds=frozenset({"events"})))
        assert records[0].category_ids == ["term-research", "term-campus"]

"""ItemNormalizer 单元测试。

测试覆盖：
- 摘要解析顺序（摘要字段 > 正文摘要 > 正文节选）
- 图片与图片样式
- 活动日期区间与回退日期
- 分类解析与跳过
- 内容类型名称回退
"""

from unittest.mock import AsyncMock

import pytest

from src.modules.content.domain.entities import (
    BodyText,
    FormattedText,
    ImageReference,
)
from src.modules.listings.application.date_format import DateFormatter
from src.modules.listings.application.normalizer import (
    ItemNormalizer,
    summary_from_body,
    summary_from_summary_field,
)
from src.modules.listings.domain.entities import (
    CategoryTag,
    ListingConfiguration,
    SummaryText,
)

# 使用 anyio 作为异步测试后端
pytestmark = pytest.mark.anyio


@pytest.fixture
def normalizer(content_repository) -> ItemNormalizer:
    return ItemNormalizer(content_repository, date_formatter=DateFormatter("UTC"))


@pytest.fixture
def config() -> ListingConfiguration:
    return ListingConfiguration()


# ============================================
# 摘要
# ============================================


class TestSummary:
    """摘要解析测试。"""

    def test_summary_field_is_passed_through(self, make_record):
        record = make_record(
            summary=FormattedText(value="<p>Short <em>teaser</em></p>", format="basic_html"),
            body=BodyText(value="Body text", format="basic_html"),
        )
        assert summary_from_summary_field(record) == SummaryText(
            text="<p>Short <em>teaser</em></p>", format="basic_html"
        )

    def test_blank_summary_field_is_skipped(self, make_record, normalizer):
        record = make_record(
            summary=FormattedText(value="   "),
            body=BodyText(value="Body text here.", format="plain_text"),
        )
        assert normalizer.resolve_summary(record) == SummaryText(
            text="Body text here.", format="plain_text"
        )

    def test_body_summary_preferred_over_body(self, make_record):
        record = make_record(
            body=BodyText(
                value="<p>The long body.</p>",
                summary="Hand-written summary.",
                format="basic_html",
            )
        )
        summary = summary_from_body(record)
        assert summary.text == "Hand-written summary."
        assert summary.format == "basic_html"

    def test_body_excerpt_is_trimmed_to_200_chars(self, make_record):
        record = make_record(body=BodyText(value="word " * 100))
        summary = summary_from_body(record)
        assert len(summary.text) <= 200
        assert summary.format == "plain_text"

    def test_no_summary_sources(self, make_record, normalizer):
        assert normalizer.resolve_summary(make_record()) is None

    def test_custom_resolver_chain(self, make_record, content_repository):
        normalizer = ItemNormalizer(
            content_repository,
            summary_resolvers=(lambda r: SummaryText(text=r.title),),
        )
        record = make_record(title="Only the title")
        assert normalizer.resolve_summary(record).text == "Only the title"


# ============================================
# 图片
# ============================================


class TestImage:
    """图片解析测试。"""

    async def test_image_with_existing_style(self, make_record, normalizer):
        record = make_record(image=ImageReference(file_id="file-1", alt="Lawn"))
        image = await normalizer.resolve_image(record, "medium")
        assert image.uri == "public://images/open-day.jpg"
        assert image.alt == "Lawn"
        assert image.title == record.title
        assert image.style_name == "medium"

    async def test_unknown_style_falls_back_to_original(self, make_record, normalizer):
        record = make_record(image=ImageReference(file_id="file-1"))
        image = await normalizer.resolve_image(record, "huge")
        assert image is not None
        assert image.style_name is None

    async def test_empty_style_means_original(self, make_record, normalizer):
        record = make_record(image=ImageReference(file_id="file-1"))
        image = await normalizer.resolve_image(record, "")
        assert image.style_name is None

    async def test_alt_falls_back_to_title(self, make_record, normalizer):
        record = make_record(title="Spring Open Day", image=ImageReference(file_id="file-1"))
        image = await normalizer.resolve_image(record, "medium")
        assert image.alt == "Spring Open Day"

    async def test_missing_file_gives_no_image(self, make_record, normalizer):
        record = make_record(image=ImageReference(file_id="gone"))
        assert await normalizer.resolve_image(record, "medium") is None

    async def test_record_without_image(self, make_record, normalizer):
        assert await normalizer.resolve_image(make_record(), "medium") is None

    async def test_file_lookup_error_gives_no_image(
        self, make_record, content_repository
    ):
        content_repository.resolve_file_uri = AsyncMock(side_effect=RuntimeError("io"))
        normalizer = ItemNormalizer(content_repository)
        record = make_record(image=ImageReference(file_id="file-1"))
        assert await normalizer.resolve_image(record, "medium") is None


# ============================================
# 日期
# ============================================


class TestDates:
    """日期解析测试。"""

    def test_event_with_date_range(self, make_record, normalizer):
        record = make_record(kind="events", date="2024-05-01", date_end="2024-05-03")
        dates = normalizer.resolve_dates(record, "F j, Y")
        assert dates == {
            "date": "May 1, 2024",
            "date_start": "May 1, 2024",
            "date_end": "May 3, 2024",
            "is_date_range": True,
        }

    def test_event_with_equal_end_date_is_not_a_range(self, make_record, normalizer):
        record = make_record(kind="events", date="2024-05-01", date_end="2024-05-01")
        dates = normalizer.resolve_dates(record, "F j, Y")
        assert dates["date_start"] == "May 1, 2024"
        assert dates["date_end"] is None
        assert dates["is_date_range"] is False

    def test_single_pattern_applies_to_start_and_end(self, make_record, normalizer):
        record = make_record(kind="events", date="2024-05-01", date_end="2024-05-03")
        dates = normalizer.resolve_dates(record, "D j M")
        assert dates["date_start"] == "Wed 1 May"
        assert dates["date_end"] == "Fri 3 May"

    def test_event_without_end_date(self, make_record, normalizer):
        record = make_record(kind="events", date="2024-05-01", date_end=None)
        dates = normalizer.resolve_dates(record, "Y-m-d")
        assert dates["date"] == "2024-05-01"
        assert dates["is_date_range"] is False

    def test_event_without_any_date(self, make_record, normalizer):
        record = make_record(kind="events", date=None)
        dates = normalizer.resolve_dates(record, "F j, Y")
        assert dates == {
            "date": None,
            "date_start": None,
            "date_end": None,
            "is_date_range": False,
        }

    def test_news_uses_fallback_date_only(self, make_record, normalizer):
        record = make_record(kind="news", date="2024-04-10T09:00:00", date_end="2024-04-12")
        dates = normalizer.resolve_dates(record, "F j, Y")
        assert dates["date"] == "April 10, 2024"
        assert dates["date_start"] is None
        assert dates["date_end"] is None
        assert dates["is_date_range"] is False

    def test_malformed_date_is_passed_through(self, make_record, normalizer):
        record = make_record(kind="news", date="not-a-date")
        assert normalizer.resolve_dates(record, "F j, Y")["date"] == "not-a-date"

    def test_custom_event_content_type(self, make_record, content_repository):
        normalizer = ItemNormalizer(content_repository, event_content_type="seminar")
        record = make_record(kind="seminar", date="2024-05-01", date_end="2024-05-02")
        assert normalizer.resolve_dates(record, "j")["is_date_range"] is True


# ============================================
# 分类与内容类型
# ============================================


class TestCategoriesAndLabels:
    """分类与内容类型名称测试。"""

    async def test_categories_keep_reference_order(self, make_record, normalizer):
        record = make_record(category_ids=["7", "5"])
        categories = await normalizer.resolve_categories(record)
        assert categories == [
            CategoryTag(label="Research", url="/taxonomy/term/7", id="7"),
            CategoryTag(label="Campus", url="/taxonomy/term/5", id="5"),
        ]

    async def test_unresolvable_terms_are_skipped(self, make_record, normalizer):
        record = make_record(category_ids=["5", "404"])
        categories = await normalizer.resolve_categories(record)
        assert [c.id for c in categories] == ["5"]

    async def test_term_lookup_error_skips_only_that_term(
        self, make_record, content_repository
    ):
        original = content_repository.load_term

        async def flaky_load_term(term_id: str):
            if term_id == "5":
                raise RuntimeError("timeout")
            return await original(term_id)

        content_repository.load_term = flaky_load_term
        normalizer = ItemNormalizer(content_repository)
        record = make_record(category_ids=["5", "7"])
        assert [c.id for c in await normalizer.resolve_categories(record)] == ["7"]

    async def test_content_type_label(self, normalizer):
        assert await normalizer.resolve_content_type_label("events") == "Events"

    async def test_unknown_content_type_label_falls_back_to_kind(self, normalizer):
        assert await normalizer.resolve_content_type_label("blog") == "blog"


# ============================================
# 完整条目
# ============================================


class TestNormalize:
    """normalize 测试。"""

    async def test_full_event_item(self, sample_records, normalizer, config):
        event = next(r for r in sample_records if r.id == "event-1")
        item = await normalizer.normalize(event, config)

        assert item.title == "Spring Open Day"
        assert item.url == "/events/spring-open-day"
        assert item.content_type == "events"
        assert item.content_type_label == "Events"
        assert item.summary == SummaryText(
            text="Join us on campus for tours and talks.", format="basic_html"
        )
        assert item.image.style_name == "medium"
        assert item.image.alt == "Students on the lawn"
        assert item.date == "May 1, 2024"
        assert item.date_end == "May 3, 2024"
        assert item.is_date_range is True
        assert [c.label for c in item.categories] == ["Campus", "Research"]

    async def test_minimal_news_item(self, make_record, normalizer, config):
        record = make_record(date=None, category_ids=[])
        item = await normalizer.normalize(record, config)

        assert item.summary is None
        assert item.image is None
        assert item.date is None
        assert item.categories == ()

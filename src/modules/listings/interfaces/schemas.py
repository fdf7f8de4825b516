"""Listing API schemas."""

from pydantic import BaseModel, Field


class SummaryResponse(BaseModel):
    """Summary text."""

    text: str = Field(..., description="摘要文本")
    format: str = Field(..., description="文本格式")


class ImageResponse(BaseModel):
    """Image descriptor."""

    uri: str = Field(..., description="文件URI")
    alt: str = Field(..., description="替代文本")
    title: str = Field(..., description="标题")
    style_name: str | None = Field(None, description="图片样式，空为原图")


class CategoryResponse(BaseModel):
    """Category tag."""

    id: str = Field(..., description="Term ID")
    label: str = Field(..., description="名称")
    url: str = Field(..., description="链接")


class ListItemResponse(BaseModel):
    """Listing item."""

    title: str = Field(..., description="标题")
    url: str = Field(..., description="链接")
    content_type: str = Field(..., description="内容类型")
    content_type_label: str = Field(..., description="内容类型名称")
    summary: SummaryResponse | None = Field(None, description="摘要")
    image: ImageResponse | None = Field(None, description="图片")
    date: str | None = Field(None, description="日期")
    date_start: str | None = Field(None, description="开始日期")
    date_end: str | None = Field(None, description="结束日期")
    is_date_range: bool = Field(False, description="是否为日期区间")
    categories: list[CategoryResponse] = Field(default_factory=list)


class ViewAllLinkResponse(BaseModel):
    """View all link."""

    text: str
    url: str
    css_classes: list[str] = Field(default_factory=list)


class CacheMetadataResponse(BaseModel):
    """Cache tags and contexts."""

    tags: list[str] = Field(default_factory=list)
    contexts: list[str] = Field(default_factory=list)


class ListingResponse(BaseModel):
    """News & events listing."""

    title: str = Field(..., description="区块标题")
    items: list[ListItemResponse] = Field(default_factory=list)
    view_all_link: ViewAllLinkResponse | None = None
    cache: CacheMetadataResponse

    class Config:
        json_schema_extra = {
            "example": {
                "title": "News & Events",
                "items": [
                    {
                        "title": "Spring Open Day",
                        "url": "/events/spring-open-day",
                        "content_type": "events",
                        "content_type_label": "Events",
                        "summary": {"text": "Join us on campus.", "format": "plain_text"},
                        "image": None,
                        "date": "May 1, 2024",
                        "date_start": "May 1, 2024",
                        "date_end": "May 3, 2024",
                        "is_date_range": True,
                        "categories": [
                            {"id": "5", "label": "Campus", "url": "/taxonomy/term/5"}
                        ],
                    }
                ],
                "view_all_link": {
                    "text": "View All",
                    "url": "/news-events",
                    "css_classes": ["news-events-view-all-link"],
                },
                "cache": {
                    "tags": [
                        "taxonomy_term_list:news_events_category",
                        "node_list:news",
                        "node_list:events",
                    ],
                    "contexts": ["languages"],
                },
            }
        }


class TermOptionResponse(BaseModel):
    """Category option."""

    id: str
    label: str


class ImageStyleOptionResponse(BaseModel):
    """Image style option."""

    name: str
    label: str

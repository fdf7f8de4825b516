"""Listing API routes."""

from typing import Any

from fastapi import APIRouter, Depends, Query, Response

from src.core.application.security import get_current_viewer
from src.core.config import settings
from src.core.domain.viewer import Viewer
from src.core.interfaces.http.response import ApiResponse, ResponseMeta
from src.modules.listings.application.cache import (
    get_cache_contexts,
    get_cache_tags,
)
from src.modules.listings.application.dependencies import (
    get_listing_builder,
    get_listing_options_service,
)
from src.modules.listings.application.services import (
    ListingBuilder,
    ListingOptionsService,
)
from src.modules.listings.domain.entities import ListingConfiguration, ListingPayload
from src.modules.listings.interfaces.schemas import (
    CacheMetadataResponse,
    CategoryResponse,
    ImageResponse,
    ImageStyleOptionResponse,
    ListingResponse,
    ListItemResponse,
    SummaryResponse,
    TermOptionResponse,
    ViewAllLinkResponse,
)

router = APIRouter(prefix="/listings", tags=["listings"])


def get_listing_configuration(
    block_title: str | None = Query(None, description="区块标题"),
    content_types: list[str] | None = Query(None, description="内容类型"),
    filter_by_category: bool | None = Query(None, description="是否按分类过滤"),
    category_tids: list[str] | None = Query(None, description="分类 Term ID"),
    number_of_items: int | None = Query(
        None, le=settings.MAX_NUMBER_OF_ITEMS, description="条目数量"
    ),
    image_style: str | None = Query(None, description="图片样式，空为原图"),
    date_format: str | None = Query(None, description="PHP 风格日期格式"),
    show_view_all: bool | None = Query(None, description="是否显示“查看全部”"),
    view_all_url: str | None = Query(None, description="“查看全部”地址"),
    view_all_text: str | None = Query(None, description="“查看全部”文本"),
) -> ListingConfiguration:
    """Build a configuration from query parameters; omitted keys use defaults."""
    values: dict[str, Any] = {
        "block_title": block_title,
        "content_types": content_types,
        "filter_by_category": filter_by_category,
        "category_tids": category_tids,
        "number_of_items": number_of_items,
        "image_style": image_style,
        "date_format": date_format,
        "show_view_all": show_view_all,
        "view_all_url": view_all_url,
        "view_all_text": view_all_text,
    }
    return ListingConfiguration(**{k: v for k, v in values.items() if v is not None})


def _to_listing_response(payload: ListingPayload) -> ListingResponse:
    items = [
        ListItemResponse(
            title=item.title,
            url=item.url,
            content_type=item.content_type,
            content_type_label=item.content_type_label,
            summary=SummaryResponse(text=item.summary.text, format=item.summary.format)
            if item.summary
            else None,
            image=ImageResponse(
                uri=item.image.uri,
                alt=item.image.alt,
                title=item.image.title,
                style_name=item.image.style_name,
            )
            if item.image
            else None,
            date=item.date,
            date_start=item.date_start,
            date_end=item.date_end,
            is_date_range=item.is_date_range,
            categories=[
                CategoryResponse(id=c.id, label=c.label, url=c.url)
                for c in item.categories
            ],
        )
        for item in payload.items
    ]
    link = payload.view_all_link
    return ListingResponse(
        title=payload.title,
        items=items,
        view_all_link=ViewAllLinkResponse(
            text=link.text, url=link.url, css_classes=list(link.css_classes)
        )
        if link
        else None,
        cache=CacheMetadataResponse(
            tags=list(payload.cache.tags),
            contexts=list(payload.cache.contexts),
        ),
    )


def _apply_cache_headers(response: Response, tags: list[str]) -> None:
    response.headers["Cache-Tag"] = " ".join(tags)
    response.headers["Vary"] = "Accept-Language"


@router.get("/news-events", response_model=ApiResponse[ListingResponse])
async def get_news_events_listing(
    response: Response,
    config: ListingConfiguration = Depends(get_listing_configuration),
    builder: ListingBuilder = Depends(get_listing_builder),
    viewer: Viewer = Depends(get_current_viewer),
) -> ApiResponse[ListingResponse]:
    """Build the news & events listing for a configuration."""
    payload = await builder.build(config)
    _apply_cache_headers(response, list(payload.cache.tags))
    return ApiResponse.success(
        data=_to_listing_response(payload),
        meta=ResponseMeta(
            language=viewer.language,
            cache_tags=list(payload.cache.tags),
            cache_contexts=list(payload.cache.contexts),
        ),
    )


@router.get(
    "/news-events/cache-metadata",
    response_model=ApiResponse[CacheMetadataResponse],
)
async def get_news_events_cache_metadata(
    config: ListingConfiguration = Depends(get_listing_configuration),
) -> ApiResponse[CacheMetadataResponse]:
    """Cache tags and contexts, without building the listing."""
    return ApiResponse.success(
        data=CacheMetadataResponse(
            tags=get_cache_tags(config),
            contexts=get_cache_contexts(config),
        )
    )


@router.get(
    "/news-events/categories",
    response_model=ApiResponse[list[TermOptionResponse]],
)
async def list_category_options(
    service: ListingOptionsService = Depends(get_listing_options_service),
) -> ApiResponse[list[TermOptionResponse]]:
    """Category choices for the category filter."""
    terms = await service.list_categories()
    return ApiResponse.success(
        data=[TermOptionResponse(id=t.id, label=t.label) for t in terms]
    )


@router.get(
    "/news-events/image-styles",
    response_model=ApiResponse[list[ImageStyleOptionResponse]],
)
async def list_image_style_options(
    service: ListingOptionsService = Depends(get_listing_options_service),
) -> ApiResponse[list[ImageStyleOptionResponse]]:
    """Image style choices; an empty style means the original image."""
    styles = await service.list_image_styles()
    return ApiResponse.success(
        data=[ImageStyleOptionResponse(name=s.name, label=s.label) for s in styles]
    )

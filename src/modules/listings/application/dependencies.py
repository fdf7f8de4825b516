"""Listings module application dependencies."""

from typing import NoReturn

from fastapi import Depends

from src.modules.content.domain.repository import ContentRepository
from src.modules.listings.application.services import (
    ListingBuilder,
    ListingOptionsService,
)


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_content_repository() -> ContentRepository:
    _missing_dependency("ContentRepository")


async def get_listing_builder(
    repository: ContentRepository = Depends(get_content_repository),
) -> ListingBuilder:
    return ListingBuilder(repository)


async def get_listing_options_service(
    repository: ContentRepository = Depends(get_content_repository),
) -> ListingOptionsService:
    return ListingOptionsService(repository)

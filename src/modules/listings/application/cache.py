"""Cache metadata for news & events listings.

标签只依赖配置（使用默认值补全后的内容类型），因此无论在 build 之前
还是之后调用，结果都相同。
"""

from src.core.config import settings
from src.modules.listings.domain.entities import CacheMetadata, ListingConfiguration

LANGUAGES_CONTEXT = "languages"


def get_cache_tags(config: ListingConfiguration) -> list[str]:
    """Invalidation tags: category vocabulary + one list tag per content type."""
    tags = [f"taxonomy_term_list:{settings.CATEGORY_VOCABULARY}"]
    for content_type in config.effective_content_types:
        tags.append(f"node_list:{content_type}")
    return tags


def get_cache_contexts(config: ListingConfiguration) -> list[str]:
    """Cache contexts; the listing varies by language only."""
    return [LANGUAGES_CONTEXT]


def get_cache_metadata(config: ListingConfiguration) -> CacheMetadata:
    return CacheMetadata(
        tags=tuple(get_cache_tags(config)),
        contexts=tuple(get_cache_contexts(config)),
    )

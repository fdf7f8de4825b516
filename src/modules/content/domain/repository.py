"""Content repository interfaces."""

from abc import ABC, abstractmethod

from src.modules.content.domain.entities import (
    ContentQuery,
    ContentRecord,
    ImageStyleRef,
    TermRef,
)


class ContentRepository(ABC):
    """Content repository interface.

    所有方法都必须应用当前访问者的可见性规则：访问者不可见的记录、
    分类不得返回。
    """

    @abstractmethod
    async def query(self, query: ContentQuery) -> list[ContentRecord]:
        """Run a content query.

        Returns:
            Up to ``query.limit`` records in the requested sort order.
        """
        pass

    @abstractmethod
    async def load_term(self, term_id: str) -> TermRef | None:
        """Load a taxonomy term by ID."""
        pass

    @abstractmethod
    async def list_terms(self, vocabulary: str) -> list[TermRef]:
        """List the terms of a vocabulary (empty if it does not exist)."""
        pass

    @abstractmethod
    async def load_image_style(self, name: str) -> ImageStyleRef | None:
        """Load an image style (preset) by machine name."""
        pass

    @abstractmethod
    async def list_image_styles(self) -> list[ImageStyleRef]:
        """List all image styles."""
        pass

    @abstractmethod
    async def resolve_file_uri(self, file_id: str) -> str | None:
        """Resolve a file reference to its URI, None if the file is missing."""
        pass

    @abstractmethod
    async def get_kind_label(self, kind: str) -> str | None:
        """Get the human-readable label of a content kind."""
        pass

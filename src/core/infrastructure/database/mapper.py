"""Base mapper for model-to-entity conversion."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

E = TypeVar("E")  # Entity type
M = TypeVar("M")  # Model type


class BaseMapper(ABC, Generic[E, M]):
    """Read-side mapper from database models to domain objects.

    内容仓储只读，因此不提供 to_model。
    """

    @abstractmethod
    def to_domain(self, model: M) -> E:
        """Convert database model to domain object."""
        pass

    def to_domain_list(self, models: list[M]) -> list[E]:
        """Convert list of models to list of domain objects."""
        return [self.to_domain(model) for model in models]

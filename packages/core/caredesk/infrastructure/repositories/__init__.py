"""Entity repository implementations."""

from caredesk.infrastructure.repositories.memory_repository import (
    InMemoryEntityRepository,
)

__all__ = ["InMemoryEntityRepository"]

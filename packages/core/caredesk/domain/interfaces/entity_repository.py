"""EntityRepository interface for entity lookup and status persistence.

The transition engine does not own entity storage. Each entity kind is
served by a repository supplied by the storage layer; the engine only needs
to look an entity up and write its new status.

Example:
    ```python
    from caredesk.infrastructure.repositories.memory_repository import (
        InMemoryEntityRepository,
    )

    jobs: EntityRepository = InMemoryEntityRepository(Job)
    await jobs.add(Job(id="job-1", status=JobStatus.Open))

    job = await jobs.find_by_id("job-1")
    updated = await jobs.update_status("job-1", "confirmed", changed_by="admin-1")
    ```
"""

from abc import ABC, abstractmethod

from caredesk.domain.models.entity import TransitionableEntity


class EntityRepository(ABC):
    """Abstract per-kind repository consumed by the transition engine.

    Implementations are responsible for their own concurrency control. The
    engine assumes last-writer-wins semantics and does not pass version
    tokens.
    """

    @abstractmethod
    async def find_by_id(self, entity_id: str) -> TransitionableEntity | None:
        """Retrieve an entity by ID.

        Args:
            entity_id: Identifier of the entity.

        Returns:
            The entity if found, None otherwise.

        Raises:
            RepositoryError: If the lookup fails.
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        entity_id: str,
        status: str,
        reason: str | None = None,
        changed_by: str | None = None,
    ) -> TransitionableEntity:
        """Persist a new status for an entity and return the updated entity.

        Args:
            entity_id: Identifier of the entity.
            status: New status value. Must belong to the entity kind's status set.
            reason: Optional free-text reason stored alongside the status
                where the entity kind keeps one.
            changed_by: Optional id of the administrator applying the change.

        Returns:
            The updated entity.

        Raises:
            RepositoryError: If the entity is missing, the status is not valid
                for the kind, or the write fails.
        """
        pass


class RepositoryError(Exception):
    """Raised when repository operations fail."""

    pass

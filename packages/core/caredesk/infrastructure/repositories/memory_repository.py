"""In-memory entity repository implementation.

The default backend for every entity kind. Entities are held in a dict keyed
by id and returned as copies, so callers never mutate stored state except
through :meth:`InMemoryEntityRepository.update_status`.

Example:
    ```python
    from caredesk.domain.models.booking import Booking, BookingStatus
    from caredesk.infrastructure.repositories.memory_repository import (
        InMemoryEntityRepository,
    )

    bookings = InMemoryEntityRepository(Booking)
    await bookings.add(Booking(id="b-1", status=BookingStatus.Pending))

    booking = await bookings.find_by_id("b-1")
    ```
"""

import asyncio
from collections.abc import Iterable

from pydantic import ValidationError

from caredesk.domain.interfaces.entity_repository import (
    EntityRepository,
    RepositoryError,
)
from caredesk.domain.models.entity import TransitionableEntity


class InMemoryEntityRepository(EntityRepository):
    """In-memory repository for one entity kind.

    Thread Safety:
        - Write operations (add, update_status) use an asyncio.Lock
        - Reads return copies and take no lock

    Concurrent ``update_status`` calls on the same entity are serialized;
    the last writer wins.
    """

    def __init__(
        self,
        model_cls: type[TransitionableEntity],
        entities: Iterable[TransitionableEntity] | None = None,
    ) -> None:
        """Initialize InMemoryEntityRepository.

        Args:
            model_cls: Entity model served by this repository (Job, User, ...).
            entities: Optional initial entities.
        """
        self._model_cls = model_cls
        self._entities: dict[str, TransitionableEntity] = {}
        self._write_lock = asyncio.Lock()

        for entity in entities or ():
            self._check_type(entity)
            self._entities[entity.id] = entity.model_copy(deep=True)

    @property
    def model_cls(self) -> type[TransitionableEntity]:
        return self._model_cls

    def _check_type(self, entity: TransitionableEntity) -> None:
        if not isinstance(entity, self._model_cls):
            raise RepositoryError(
                f"{type(entity).__name__} cannot be stored in a "
                f"{self._model_cls.__name__} repository"
            )

    async def add(self, entity: TransitionableEntity) -> None:
        """Insert or replace an entity.

        Raises:
            RepositoryError: If the entity is of the wrong kind.
        """
        self._check_type(entity)
        async with self._write_lock:
            self._entities[entity.id] = entity.model_copy(deep=True)

    async def find_by_id(self, entity_id: str) -> TransitionableEntity | None:
        entity = self._entities.get(entity_id)
        return entity.model_copy(deep=True) if entity is not None else None

    async def list_all(self) -> list[TransitionableEntity]:
        """Return copies of every stored entity."""
        return [entity.model_copy(deep=True) for entity in self._entities.values()]

    async def update_status(
        self,
        entity_id: str,
        status: str,
        reason: str | None = None,
        changed_by: str | None = None,
    ) -> TransitionableEntity:
        async with self._write_lock:
            stored = self._entities.get(entity_id)
            if stored is None:
                raise RepositoryError(
                    f"{self._model_cls.kind.label} {entity_id} does not exist"
                )

            updated = stored.model_copy(deep=True)
            try:
                updated.apply_status(status, reason=reason, changed_by=changed_by)
            except ValidationError as e:
                raise RepositoryError(
                    f"Invalid status '{status}' for {self._model_cls.kind.value}: {e}"
                ) from e

            self._entities[entity_id] = updated
            return updated.model_copy(deep=True)

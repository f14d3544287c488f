"""Ordered, id-keyed projection of rendered entities."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, Protocol, TypeVar


class _HasId(Protocol):
    @property
    def id(self) -> int: ...


E = TypeVar("E", bound=_HasId)


class ViewState(Generic[E]):
    """Entities currently shown in a list, in display order.

    Ids are unique. :meth:`merge` replaces in place (keeping the
    position) or appends; the last write for an id wins.
    """

    def __init__(self, entities: Iterable[E] = ()) -> None:
        self._entities: dict[int, E] = {}
        for entity in entities:
            self.merge(entity)

    def merge(self, entity: E) -> None:
        # dict assignment keeps the original insertion slot for known keys.
        self._entities[entity.id] = entity

    def merge_all(self, entities: Iterable[E]) -> None:
        for entity in entities:
            self.merge(entity)

    def remove_by_id(self, entity_id: int) -> bool:
        return self._entities.pop(entity_id, None) is not None

    def get(self, entity_id: int) -> E | None:
        return self._entities.get(entity_id)

    def items(self) -> list[E]:
        return list(self._entities.values())

    def ids(self) -> list[int]:
        return list(self._entities)

    def update_all(self, fn: Callable[[E], E]) -> None:
        self._entities = {entity_id: fn(entity) for entity_id, entity in self._entities.items()}

    def replace_all(self, entities: Iterable[E]) -> None:
        self._entities = {}
        self.merge_all(entities)

    def snapshot(self) -> tuple[E, ...]:
        """Immutable copy of the current contents, for rollback."""
        return tuple(self._entities.values())

    def restore(self, snapshot: tuple[E, ...]) -> None:
        self.replace_all(snapshot)

    def clear(self) -> None:
        self._entities.clear()

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._entities.values()))

    def __repr__(self) -> str:
        return f"ViewState(ids={self.ids()!r})"

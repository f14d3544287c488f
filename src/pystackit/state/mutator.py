"""Optimistic mutation with server reconciliation and rollback."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pystackit.exceptions import StackItMutationError, StackItMutationInFlightError, describe_error
from pystackit.state.events import ChangeSource, EntityKind, StateChange

_logger = logging.getLogger(__name__)

T = TypeVar("T")

Observer = Callable[[StateChange], None]


class OptimisticMutator:
    """Local-then-remote state transitions.

    :meth:`apply_mutation` writes the predicted state before the first
    await, issues exactly one remote call, then either writes the server's
    confirmed value or restores the previous state. A second mutation on a
    key whose remote call has not settled yet is rejected with
    :class:`StackItMutationInFlightError` and has no effect.
    """

    def __init__(self) -> None:
        self._in_flight: set[str] = set()
        self._observers: list[Observer] = []

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer*; returns a callable that unregisters it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _notify(self, change: StateChange) -> None:
        for observer in list(self._observers):
            try:
                observer(change)
            except Exception:
                _logger.debug("State observer failed for %s", change.key, exc_info=True)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def is_in_flight(self, key: str) -> bool:
        return key in self._in_flight

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._in_flight)

    async def apply_mutation(
        self,
        key: str,
        *,
        kind: EntityKind,
        current: T,
        predicted: T,
        remote_call: Callable[[], Awaitable[T]],
        write: Callable[[T], Any],
    ) -> T:
        """Apply *predicted* now, confirm or roll back once *remote_call* settles.

        Returns the confirmed state. On failure *current* is written back and
        :class:`StackItMutationError` is raised with the original error as
        its cause.
        """
        if key in self._in_flight:
            raise StackItMutationInFlightError(key)
        self._in_flight.add(key)
        try:
            write(predicted)
            self._notify(StateChange(key=key, kind=kind, source=ChangeSource.OPTIMISTIC, value=predicted))
            try:
                confirmed = await remote_call()
            except asyncio.CancelledError:
                write(current)
                self._notify(StateChange(key=key, kind=kind, source=ChangeSource.ROLLBACK, value=current))
                raise
            except Exception as exc:
                write(current)
                message = describe_error(exc)
                _logger.debug("Mutation %s rolled back: %s", key, exc)
                self._notify(
                    StateChange(key=key, kind=kind, source=ChangeSource.ROLLBACK, value=current, error=message)
                )
                raise StackItMutationError(message, key=key) from exc
            write(confirmed)
            if confirmed != predicted:
                _logger.debug("Mutation %s reconciled to server value", key)
            self._notify(StateChange(key=key, kind=kind, source=ChangeSource.SERVER, value=confirmed))
            return confirmed
        finally:
            self._in_flight.discard(key)

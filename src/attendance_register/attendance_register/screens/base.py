from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from ..catalog.cascade import ScopeToken, SelectionCascade
from ..core.exceptions import BusyError, ValidationError

logger = logging.getLogger(__name__)


class SingleFlight:
    """Rejects a second (scope, action) while the first one is still running."""

    def __init__(self):
        self._lock = threading.Lock()
        self._in_flight: set[tuple[str, str]] = set()

    @property
    def busy(self) -> bool:
        return bool(self._in_flight)

    @contextmanager
    def guard(self, scope_key: str, action: str) -> Iterator[None]:
        key = (scope_key, action)
        with self._lock:
            if key in self._in_flight:
                raise BusyError("Please wait, the previous request is still running")
            self._in_flight.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._in_flight.discard(key)


@dataclass(frozen=True)
class Ticket:
    epoch: int
    scope: Optional[ScopeToken] = None


class ScreenSession:
    """State private to one screen instance.

    A fetch takes a ``Ticket`` before calling out and only applies its result while the
    ticket is still fresh: the screen's own scope (date, month) and the cascade's token
    must be unchanged and the screen must not have been torn down.
    """

    def __init__(self, cascade: Optional[SelectionCascade] = None):
        self._cascade = cascade
        self._epoch = 0
        self._closed = False
        self._flight = SingleFlight()
        if cascade is not None:
            cascade.subscribe(lambda _state: self._on_scope_change())

    @property
    def cascade(self) -> Optional[SelectionCascade]:
        return self._cascade

    @property
    def loading(self) -> bool:
        return self._flight.busy

    @property
    def closed(self) -> bool:
        return self._closed

    def teardown(self) -> None:
        self._closed = True
        self._epoch += 1
        self._clear()
        logger.debug("%s torn down", type(self).__name__)

    def _ticket(self) -> Ticket:
        if self._closed:
            raise ValidationError("This screen has been closed")
        return Ticket(self._epoch, self._cascade.token if self._cascade is not None else None)

    def _is_fresh(self, ticket: Ticket) -> bool:
        if self._closed or ticket.epoch != self._epoch:
            return False
        if ticket.scope is not None and self._cascade is not None:
            return self._cascade.is_current(ticket.scope)
        return True

    def _discard_stale(self, what: str) -> None:
        logger.debug("Discarding stale %s result on %s", what, type(self).__name__)

    def _on_scope_change(self) -> None:
        self._epoch += 1
        self._clear()

    def _clear(self) -> None:
        """Drop fetched data; subclasses override."""

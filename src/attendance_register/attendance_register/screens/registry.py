from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable, Generic, TypeVar

from ..core.constants import MAX_SCREENS_PER_OWNER, SCREEN_IDLE_SECONDS
from ..core.exceptions import ValidationError
from .base import ScreenSession

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=ScreenSession)


class ScreenRegistry(Generic[S]):
    """Keeps stateful screens alive between HTTP requests.

    Each screen belongs to the user that opened it; closing it tears it down so a
    request still running for it has its result discarded. Screens left idle for
    longer than ``idle_seconds`` are closed, and an owner keeps at most
    ``max_per_owner`` screens open (the least recently used one goes first).
    """

    def __init__(
        self,
        *,
        idle_seconds: float = SCREEN_IDLE_SECONDS,
        max_per_owner: int = MAX_SCREENS_PER_OWNER,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._lock = threading.Lock()
        self._screens: dict[str, tuple[str, S]] = {}
        self._last_used: dict[str, float] = {}
        self._idle_seconds = idle_seconds
        self._max_per_owner = max_per_owner
        self._clock = clock

    def __len__(self) -> int:
        return len(self._screens)

    def open(self, owner: str, screen: S) -> str:
        screen_id = uuid.uuid4().hex
        with self._lock:
            evicted = self._expired()
            mine = sorted(
                (self._last_used[sid], sid) for sid, (o, _s) in self._screens.items() if o == owner
            )
            overflow = len(mine) + 1 - self._max_per_owner
            evicted += [self._pop(sid) for _used, sid in mine[: max(overflow, 0)]]
            self._screens[screen_id] = (owner, screen)
            self._last_used[screen_id] = self._clock()
        self._teardown(evicted)
        return screen_id

    def get(self, owner: str, screen_id: str) -> S:
        with self._lock:
            evicted = self._expired()
            entry = self._screens.get(screen_id)
            if entry is not None and entry[0] == owner:
                self._last_used[screen_id] = self._clock()
        self._teardown(evicted)
        if entry is None or entry[0] != owner:
            raise ValidationError("Screen not found, please start again")
        return entry[1]

    def close(self, owner: str, screen_id: str) -> None:
        screen = self.get(owner, screen_id)
        with self._lock:
            self._screens.pop(screen_id, None)
            self._last_used.pop(screen_id, None)
        screen.teardown()

    def close_all(self, owner: str) -> int:
        with self._lock:
            ids = [sid for sid, (o, _s) in self._screens.items() if o == owner]
            screens = [self._pop(sid) for sid in ids]
        self._teardown(screens)
        return len(screens)

    def _expired(self) -> list[S]:
        cutoff = self._clock() - self._idle_seconds
        ids = [sid for sid, used in self._last_used.items() if used <= cutoff]
        return [self._pop(sid) for sid in ids]

    def _pop(self, screen_id: str) -> S:
        self._last_used.pop(screen_id, None)
        return self._screens.pop(screen_id)[1]

    def _teardown(self, screens: list[S]) -> None:
        if screens:
            logger.info("Evicted %s screen(s)", len(screens))
        for screen in screens:
            screen.teardown()

from __future__ import annotations

import itertools
import threading
from typing import Hashable


class LatestRequestGate:
    """Last invocation wins: each key remembers only its newest ticket.

    A report run takes a ticket when it starts and checks it before handing
    back its result; if a newer run for the same key started meanwhile, the
    older result is stale. Tickets are unique across keys, and a key is
    dropped once its newest run finishes.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._tickets = itertools.count(1)
        self._latest: dict[Hashable, int] = {}

    def begin(self, key: Hashable) -> int:
        with self._lock:
            ticket = next(self._tickets)
            self._latest[key] = ticket
            return ticket

    def is_latest(self, key: Hashable, ticket: int) -> bool:
        with self._lock:
            return self._latest.get(key) == ticket

    def finish(self, key: Hashable, ticket: int) -> None:
        with self._lock:
            if self._latest.get(key) == ticket:
                del self._latest[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)

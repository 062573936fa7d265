# myobridge/runtime/observers.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

from myobridge.model.enums import ObserverKind

Observer = Callable[[Any], None]


class ObserverSet:
    """
    Ordered observers for one notification kind.

    - add() appends; the same callable may be registered more than once.
    - remove() drops the first matching registration.
    - notify() calls observers in registration order on the calling thread.
      An observer that raises is logged and skipped; the rest still run.
    """

    def __init__(self, kind: ObserverKind, *, logger: Optional[logging.Logger] = None):
        self.kind = kind
        self._log = logger or logging.getLogger(__name__)
        self._observers: List[Observer] = []

    def add(self, observer: Observer) -> Observer:
        if not callable(observer):
            raise TypeError(f"observer for {self.kind.value} must be callable, got {observer!r}")
        self._observers.append(observer)
        return observer

    def remove(self, observer: Observer) -> bool:
        try:
            self._observers.remove(observer)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._observers.clear()

    def notify(self, event: Any) -> int:
        """Deliver event to every observer; returns how many were called."""
        if not self._observers:
            return 0

        called = 0
        for observer in tuple(self._observers):
            called += 1
            try:
                observer(event)
            except Exception:
                self._log.exception("OBSERVER_FAILED kind=%s observer=%r", self.kind.value, observer)
        return called

    def __len__(self) -> int:
        return len(self._observers)

    def __bool__(self) -> bool:
        return bool(self._observers)

    def __iter__(self) -> Iterator[Observer]:
        return iter(tuple(self._observers))

    def __repr__(self) -> str:
        return f"ObserverSet(kind={self.kind.value}, count={len(self._observers)})"


class ObserverRegistry:
    """Exactly one ObserverSet per ObserverKind, created up front."""

    def __init__(self, *, logger: Optional[logging.Logger] = None):
        self._sets: Dict[ObserverKind, ObserverSet] = {
            kind: ObserverSet(kind, logger=logger) for kind in ObserverKind
        }

    def __getitem__(self, kind: ObserverKind) -> ObserverSet:
        return self._sets[ObserverKind(kind)]

    def __iter__(self) -> Iterator[ObserverKind]:
        return iter(self._sets)

    def __len__(self) -> int:
        return len(self._sets)

    def has_observers(self, kind: ObserverKind) -> bool:
        return bool(self._sets[ObserverKind(kind)])

    def counts(self) -> Dict[ObserverKind, int]:
        return {kind: len(s) for kind, s in self._sets.items()}

    def clear(self) -> None:
        for s in self._sets.values():
            s.clear()

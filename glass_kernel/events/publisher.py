"""
State Publisher: the observable half of the read model.

Components call `publish()` after every change. Subscribers receive a deep
copy, so nothing a presentation layer does can reach back into live state.
"""

import logging
from typing import Callable, Generic, List, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=BaseModel)


class StatePublisher(Generic[StateT]):
    def __init__(self):
        self._listeners: List[Callable[[StateT], None]] = []

    def subscribe(self, listener: Callable[[StateT], None]) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, state: StateT) -> None:
        """Deliver a snapshot to every listener. A failing listener does not stop the rest."""
        for listener in list(self._listeners):
            try:
                listener(state.model_copy(deep=True))
            except Exception:
                logger.exception("State listener %r failed", listener)

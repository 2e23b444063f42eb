import logging
from typing import Callable, List

from .types import ProgressType

logger = logging.getLogger(__name__)

ProgressListener = Callable[[str, ProgressType], None]


class ProgressEmitter:
    def __init__(self, company_id: str):
        self.company_id = company_id
        self._listeners: List[ProgressListener] = []

    def on_progress(self, listener: ProgressListener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unregisters it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def emit(self, progress: ProgressType) -> None:
        logger.debug("[%s] progress: %s", self.company_id, progress.value)
        for listener in list(self._listeners):
            listener(self.company_id, progress)

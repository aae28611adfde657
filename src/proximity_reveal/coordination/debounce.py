"""Regroupement des rafales de demandes de recalcul."""

import asyncio
import logging
from typing import Any, Callable, Optional

from proximity_reveal.config import DEFAULT_DEBOUNCE_DELAY

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Garde une seule tâche planifiée: chaque `schedule` annule la précédente

    Avec un délai de 0, toutes les demandes faites dans le même tick de la
    boucle asyncio aboutissent à un seul appel (le dernier).
    """

    def __init__(self, delay: float = DEFAULT_DEBOUNCE_DELAY):
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def last_task(self) -> Optional[asyncio.Task]:
        """Tâche créée au dernier déclenchement si `fn` était une coroutine"""
        return self._task

    def schedule(self, fn: Callable[[], Any]) -> asyncio.TimerHandle:
        """Planifier `fn` sur la boucle courante en annulant l'appel en attente"""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, fn)
        return self._handle

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, fn: Callable[[], Any]) -> None:
        self._handle = None
        result = fn()
        if asyncio.iscoroutine(result):
            self._task = asyncio.ensure_future(result)
            self._task.add_done_callback(_log_task_failure)


def _log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error("Recalcul différé en échec: %s", error, exc_info=error)

"""Registre d'événements de l'hôte (token créé, déplacé, scène modifiée...)."""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

CANVAS_READY = "canvasReady"
CREATE_TOKEN = "createToken"
DELETE_TOKEN = "deleteToken"
UPDATE_TOKEN = "updateToken"
UPDATE_ACTOR = "updateActor"
SIGHT_REFRESH = "sightRefresh"
UPDATE_SCENE = "updateScene"


class HookRegistry:
    """Callbacks par nom d'événement, appelés dans l'ordre d'enregistrement"""

    def __init__(self):
        self._callbacks: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event: str, fn: Callable[..., Any]) -> None:
        self._callbacks[event].append(fn)

    def off(self, event: str, fn: Callable[..., Any]) -> None:
        if fn in self._callbacks.get(event, []):
            self._callbacks[event].remove(fn)

    def call(self, event: str, *args: Any) -> int:
        """
        Appeler tous les callbacks d'un événement

        Un callback en échec est loggé, les suivants sont quand même appelés.

        Returns:
            Nombre de callbacks appelés
        """
        callbacks = list(self._callbacks.get(event, []))
        for fn in callbacks:
            try:
                fn(*args)
            except Exception:
                logger.exception("Hook %s en échec (%s)", event, getattr(fn, '__name__', fn))
        return len(callbacks)

"""
Jet de Discrétion (Stealth) automatique à la création d'un token
Le jet lui-même appartient au moteur de règles externe, on ne fait que le déclencher
"""

import asyncio
import logging
from typing import Dict, List, Optional, Set

import numpy as np

from proximity_reveal.config import STEALTH_DELAY, STEALTH_SKILL
from proximity_reveal.scene.documents import Actor, Token

logger = logging.getLogger(__name__)


class RulesEngine:
    """
    Moteur de règles du système de jeu

    `roll_skill` retourne False quand le système ne sait pas lancer la
    compétence: on passe alors au d20 de secours.
    """

    async def roll_skill(self, actor: Actor, skill: str, speaker: Dict) -> bool:
        return False


class ChatLog:
    """Messages de chat postés par le module (gardés en mémoire)"""

    def __init__(self):
        self.messages: List[Dict] = []

    async def post(self, message: Dict) -> None:
        self.messages.append(message)
        logger.info("%s: %s", message.get('flavor'), message.get('total'))


def should_roll(token: Token, actor: Optional[Actor]) -> bool:
    """Flag du token, sinon celui du prototype de l'acteur"""
    enabled = token.config.stealth_on_create
    if enabled is None and actor is not None:
        enabled = actor.prototype_config.stealth_on_create
    return bool(enabled)


def speaker_for(token: Token, actor: Actor, scene_id: Optional[str]) -> Dict:
    return {
        'actor': actor.id,
        'token': token.id,
        'scene': scene_id,
        'alias': token.name or actor.name,
    }


class StealthRoller:
    """Planifie le jet de Discrétion d'un token qui vient d'être posé"""

    def __init__(
        self,
        rules: Optional[RulesEngine] = None,
        chat: Optional[ChatLog] = None,
        rng: Optional[np.random.Generator] = None,
        delay: float = STEALTH_DELAY
    ):
        self.rules = rules
        self.chat = chat or ChatLog()
        self.rng = rng or np.random.default_rng()
        self.delay = delay
        # Références fortes: la boucle ne garde les tâches que faiblement
        self._tasks: Set[asyncio.Task] = set()

    def schedule(
        self,
        token: Token,
        actor: Optional[Actor],
        scene_id: Optional[str],
        is_writer: bool
    ) -> Optional[asyncio.Task]:
        """
        Planifier le jet après un court délai (le token doit d'abord être
        enregistré sur le canvas)

        Returns:
            La tâche planifiée, ou None si aucun jet n'est dû
        """
        if not should_roll(token, actor):
            return None
        # Un seul client lance le jet
        if not is_writer:
            return None
        if actor is None:
            return None

        task = asyncio.ensure_future(self._roll_later(token, actor, scene_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        """Nombre de jets planifiés non terminés"""
        return len(self._tasks)

    async def _roll_later(self, token: Token, actor: Actor, scene_id: Optional[str]) -> Optional[Dict]:
        await asyncio.sleep(self.delay)
        return await self.perform_roll(token, actor, scene_id)

    async def perform_roll(self, token: Token, actor: Actor, scene_id: Optional[str]) -> Optional[Dict]:
        """
        Lancer la Discrétion via le moteur de règles, sinon 1d20

        Les erreurs sont loggées et ne remontent jamais.

        Returns:
            Le message de secours posté, ou None
        """
        try:
            speaker = speaker_for(token, actor, scene_id)

            if self.rules is not None and await self.rules.roll_skill(actor, STEALTH_SKILL, speaker):
                return None

            total = int(self.rng.integers(1, 21))
            message = {
                'flavor': "Stealth (fallback)",
                'formula': "1d20",
                'total': total,
                'speaker': speaker,
            }
            await self.chat.post(message)
            return message
        except Exception:
            logger.exception("Stealth à la création en échec pour %s", token.id)
            return None

"""
Service de visibilité: relie les événements de l'hôte au resolver
Seul le writer (MJ désigné) écrit, les autres lui transmettent la demande
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from proximity_reveal.config import MODULE_ID
from proximity_reveal.coordination import hooks as hook_names
from proximity_reveal.coordination.channel import HttpWriterChannel, RecomputeRequest
from proximity_reveal.coordination.debounce import Debouncer
from proximity_reveal.coordination.hooks import HookRegistry
from proximity_reveal.coordination.participants import current_writer, is_current_writer
from proximity_reveal.scene.documents import Actor, Participant, Token
from proximity_reveal.scene.store import WorldStore
from proximity_reveal.stealth import StealthRoller
from proximity_reveal.visibility.resolver import TokenUpdate, resolve

logger = logging.getLogger(__name__)

# Champs d'un token dont la modification change la visibilité
_TOKEN_TRIGGER_FIELDS = ("x", "y", "hidden")


class VisibilityService:
    """Point d'entrée du module côté client (joueur ou MJ)"""

    def __init__(
        self,
        store: WorldStore,
        participant_id: Optional[str],
        channel: Optional[HttpWriterChannel] = None,
        stealth: Optional[StealthRoller] = None,
        debouncer: Optional[Debouncer] = None
    ):
        self.store = store
        self.participant_id = participant_id
        self.channel = channel
        self.stealth = stealth
        self.debouncer = debouncer or Debouncer()

    @property
    def local_participant(self) -> Optional[Participant]:
        return self.store.get_participant(self.participant_id)

    @property
    def is_privileged(self) -> bool:
        participant = self.local_participant
        return bool(participant and participant.privileged)

    @property
    def is_writer(self) -> bool:
        return is_current_writer(self.store.participants, self.participant_id)

    # --- recalcul (côté MJ) ---

    async def recompute_scene_visibility(self, scene_id: Optional[str] = None) -> List[TokenUpdate]:
        """
        Recalculer et écrire la visibilité de la scène active

        Idempotent: peut être appelé plusieurs fois sans effet de bord si
        rien n'a changé.

        Args:
            scene_id: Scène visée; ignorée si ce n'est pas la scène active

        Returns:
            Les changements appliqués
        """
        if not self.is_privileged:
            return []

        scene = self.store.active_scene
        if scene is None:
            return []
        if scene_id and scene_id != scene.id:
            logger.debug("Recalcul ignoré: scène %s non active", scene_id)
            return []

        updates = resolve(scene, self.store.actors)
        if not updates:
            return []

        try:
            await asyncio.to_thread(self.store.update_tokens, scene.id, [u.to_dict() for u in updates])
        except Exception as e:
            logger.error("Écriture de la visibilité refusée pour %s: %s", scene.id, e)
            raise

        logger.info("Scène %s: %d tokens mis à jour", scene.id, len(updates))
        return updates

    async def handle_message(self, payload: Optional[Dict]) -> List[TokenUpdate]:
        """Message reçu d'un autre participant"""
        request = RecomputeRequest.from_dict(payload)
        if request is None or not self.is_privileged:
            return []
        return await self.recompute_scene_visibility(request.scene_id)

    # --- routage ---

    def request_recompute(self) -> None:
        """Demander un recalcul; les rafales du même tick sont regroupées"""
        self.debouncer.schedule(self._route_recompute)

    def _route_recompute(self):
        scene_id = self.store.active_scene_id
        participants = self.store.participants

        if is_current_writer(participants, self.participant_id):
            return self.recompute_scene_visibility(scene_id)

        # Pas de MJ connecté: rien à faire, le prochain événement relancera
        writer = current_writer(participants)
        if writer is None or not writer.active or self.channel is None:
            return None

        return self._forward(writer, RecomputeRequest(scene_id=scene_id))

    async def _forward(self, writer: Participant, request: RecomputeRequest) -> bool:
        return await asyncio.to_thread(self.channel.send, writer, request)

    # --- événements de l'hôte ---

    def on_canvas_ready(self, *args: Any) -> None:
        self.request_recompute()

    def on_token_created(self, token: Token, scene_id: Optional[str] = None) -> None:
        self.request_recompute()
        if self.stealth is None:
            return
        try:
            actor: Optional[Actor] = self.store.get_actor(token.actor_id)
            self.stealth.schedule(token, actor, scene_id or self.store.active_scene_id, self.is_writer)
        except Exception:
            logger.exception("Stealth à la création impossible pour %s", token.id)

    def on_token_deleted(self, *args: Any) -> None:
        self.request_recompute()

    def on_token_updated(self, token: Token, changes: Dict) -> None:
        flags = changes.get('flags') or {}
        if any(key in changes for key in _TOKEN_TRIGGER_FIELDS) or MODULE_ID in flags:
            self.request_recompute()

    def on_actor_updated(self, actor: Actor, changes: Dict) -> None:
        if 'ownership' in changes:
            self.request_recompute()

    def on_sight_refresh(self, *args: Any) -> None:
        self.request_recompute()

    def on_scene_updated(self, *args: Any) -> None:
        self.request_recompute()

    def register(self, hooks: HookRegistry) -> None:
        """Brancher le service sur les événements de l'hôte"""
        hooks.on(hook_names.CANVAS_READY, self.on_canvas_ready)
        hooks.on(hook_names.CREATE_TOKEN, self.on_token_created)
        hooks.on(hook_names.DELETE_TOKEN, self.on_token_deleted)
        hooks.on(hook_names.UPDATE_TOKEN, self.on_token_updated)
        hooks.on(hook_names.UPDATE_ACTOR, self.on_actor_updated)
        hooks.on(hook_names.SIGHT_REFRESH, self.on_sight_refresh)
        hooks.on(hook_names.UPDATE_SCENE, self.on_scene_updated)

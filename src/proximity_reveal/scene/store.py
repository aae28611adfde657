"""
Store en mémoire du monde (scènes, acteurs, participants)
Joue le rôle du store de documents externe: lectures + écritures par lot
"""

import json
import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from proximity_reveal.scene.documents import Actor, Participant, Scene
from proximity_reveal.scene.flags import TokenConfig

logger = logging.getLogger(__name__)


class StoreUpdateError(Exception):
    """Le store a rejeté une écriture (scène ou token inconnu)"""


class WorldStore:
    """Monde VTT: scènes, acteurs, participants, scène active"""

    def __init__(
        self,
        scenes: Iterable[Scene] = (),
        actors: Iterable[Actor] = (),
        participants: Iterable[Participant] = (),
        active_scene_id: Optional[str] = None
    ):
        self._scenes: Dict[str, Scene] = {s.id: s for s in scenes}
        self._actors: Dict[str, Actor] = {a.id: a for a in actors}
        self._participants: List[Participant] = list(participants)
        self.active_scene_id = active_scene_id
        self._lock = threading.Lock()

    @classmethod
    def from_dict(cls, data: Dict) -> 'WorldStore':
        scenes = [Scene.from_dict(s) for s in data.get('scenes', [])]
        active = data.get('activeScene')
        if active is None and scenes:
            active = scenes[0].id
        return cls(
            scenes=scenes,
            actors=[Actor.from_dict(a) for a in data.get('actors', [])],
            participants=[Participant.from_dict(u) for u in data.get('users', [])],
            active_scene_id=active,
        )

    @classmethod
    def load(cls, world_path: Path) -> 'WorldStore':
        """Charger un monde depuis un fichier JSON"""
        with open(world_path) as f:
            store = cls.from_dict(json.load(f))
        logger.info("Monde chargé: %s (%d scènes, %d acteurs)",
                    world_path, len(store._scenes), len(store._actors))
        return store

    # --- lectures ---

    def get_scene(self, scene_id: Optional[str]) -> Optional[Scene]:
        if scene_id is None:
            return None
        return self._scenes.get(scene_id)

    @property
    def active_scene(self) -> Optional[Scene]:
        return self.get_scene(self.active_scene_id)

    def get_actor(self, actor_id: Optional[str]) -> Optional[Actor]:
        if actor_id is None:
            return None
        return self._actors.get(actor_id)

    @property
    def actors(self) -> Mapping[str, Actor]:
        return dict(self._actors)

    @property
    def participants(self) -> List[Participant]:
        return list(self._participants)

    def get_participant(self, participant_id: Optional[str]) -> Optional[Participant]:
        for participant in self._participants:
            if participant.id == participant_id:
                return participant
        return None

    # --- écritures ---

    def update_tokens(self, scene_id: str, updates: List[Dict]) -> None:
        """
        Appliquer un lot `[{"_id": ..., "hidden": ...}, ...]` de façon atomique

        Tous les ids sont validés avant la moindre écriture.

        Raises:
            StoreUpdateError: scène inconnue ou token absent de la scène
        """
        with self._lock:
            scene = self._scenes.get(scene_id)
            if scene is None:
                raise StoreUpdateError(f"Scène inconnue: {scene_id}")

            changes = {}
            for update in updates:
                token_id = update.get('_id')
                if scene.get_token(token_id) is None:
                    raise StoreUpdateError(f"Token inconnu dans {scene_id}: {token_id}")
                changes[token_id] = bool(update['hidden'])

            tokens = [
                replace(t, hidden=changes[t.id]) if t.id in changes else t
                for t in scene.tokens
            ]
            self._scenes[scene_id] = replace(scene, tokens=tokens)

        logger.debug("Scène %s: %d tokens mis à jour", scene_id, len(changes))

    def set_token_config(self, scene_id: str, token_id: str, config: TokenConfig) -> None:
        with self._lock:
            scene = self._scenes.get(scene_id)
            if scene is None or scene.get_token(token_id) is None:
                raise StoreUpdateError(f"Token inconnu: {scene_id}/{token_id}")
            tokens = [replace(t, config=config) if t.id == token_id else t for t in scene.tokens]
            self._scenes[scene_id] = replace(scene, tokens=tokens)

"""
Canal vers le writer (MJ) pour les demandes de recalcul
Les joueurs n'ont pas les droits d'écriture: ils demandent au MJ de le faire
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from proximity_reveal.config import RECOMPUTE_OP, REQUEST_TIMEOUT
from proximity_reveal.scene.documents import Participant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecomputeRequest:
    """Message `{"op": "applyAll", "sceneId": ...}`"""
    scene_id: Optional[str]

    def to_dict(self) -> Dict:
        return {'op': RECOMPUTE_OP, 'sceneId': self.scene_id}

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> Optional['RecomputeRequest']:
        """None si le message n'est pas une demande de recalcul"""
        if not isinstance(data, dict) or data.get('op') != RECOMPUTE_OP:
            return None
        scene_id = data.get('sceneId')
        return cls(scene_id=str(scene_id) if scene_id is not None else None)


class HttpWriterChannel:
    """Envoie les demandes de recalcul à l'endpoint HTTP du writer"""

    RECOMPUTE_PATH = "/api/recompute"

    def __init__(self, timeout: float = REQUEST_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, writer: Participant, request: RecomputeRequest) -> bool:
        """
        Transmettre une demande au writer

        Pas de retry ni de file d'attente: le prochain événement relancera
        un recalcul de lui-même.

        Returns:
            True si le writer a accepté la demande
        """
        if not writer.endpoint:
            logger.debug("Writer %s sans endpoint, demande ignorée", writer.id)
            return False

        url = f"{writer.endpoint.rstrip('/')}{self.RECOMPUTE_PATH}"
        try:
            response = self.session.post(url, json=request.to_dict(), timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug("Writer injoignable (%s): %s", url, e)
            return False

        if response.status_code == 200:
            return True

        logger.warning("Demande refusée par le writer %s: HTTP %s", writer.id, response.status_code)
        return False

"""
Choix du participant qui écrit l'état de la scène
Un seul writer par monde évite les écritures en double
"""

from typing import Iterable, Optional

from proximity_reveal.scene.documents import Participant


def current_writer(participants: Iterable[Participant]) -> Optional[Participant]:
    """
    Premier MJ actif, sinon premier MJ connu, sinon None
    """
    privileged = [p for p in participants if p.privileged]
    for participant in privileged:
        if participant.active:
            return participant
    return privileged[0] if privileged else None


def is_current_writer(participants: Iterable[Participant], participant_id: Optional[str]) -> bool:
    writer = current_writer(participants)
    return writer is not None and writer.id == participant_id

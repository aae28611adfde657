"""
Résolution de la visibilité des tokens non-joueurs
Un token avec un seuil n'est révélé que si un token joueur est assez proche
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping

from proximity_reveal.scene.documents import Actor, Grid, Scene, Token
from proximity_reveal.visibility.distance import feet_to_scene_units, distance_between


@dataclass(frozen=True)
class TokenUpdate:
    """Changement d'état caché à écrire pour un token"""
    token_id: str
    hidden: bool

    def to_dict(self) -> Dict:
        return {'_id': self.token_id, 'hidden': self.hidden}


def is_player_owned(token: Token, actors: Mapping[str, Actor]) -> bool:
    actor = actors.get(token.actor_id) if token.actor_id is not None else None
    return bool(actor and actor.has_player_owner)


def player_anchors(scene: Scene, actors: Mapping[str, Actor]) -> List[Token]:
    """Tokens joueurs de la scène, servant de points de référence"""
    return [t for t in scene.tokens if is_player_owned(t, actors)]


def nearest_anchor_distance(token: Token, anchors: List[Token], grid: Grid) -> float:
    return min(distance_between(anchor, token, grid) for anchor in anchors)


def desired_hidden_state(
    token: Token,
    anchors: List[Token],
    grid: Grid,
    actors: Mapping[str, Actor]
) -> bool:
    """
    État caché voulu pour un token

    Args:
        token: Token à évaluer
        anchors: Tokens joueurs de la scène
        grid: Grille de la scène
        actors: Acteurs du monde, par id

    Returns:
        True si le token doit être caché
    """
    # Les tokens joueurs ne sont jamais cachés automatiquement
    if is_player_owned(token, actors):
        return False

    # Pas de seuil valide: on garde l'état actuel tel quel
    feet = token.config.min_visibility_distance_feet
    if feet is None:
        return token.hidden

    # Aucun joueur sur la scène: impossible de vérifier la proximité
    if not anchors:
        return True

    cutoff = feet_to_scene_units(feet, grid.units)
    within = nearest_anchor_distance(token, anchors, grid) <= cutoff
    return not within


def resolve(scene: Scene, actors: Mapping[str, Actor]) -> List[TokenUpdate]:
    """
    Calculer le lot minimal de changements pour une scène

    Returns:
        Uniquement les tokens dont l'état caché doit changer
    """
    anchors = player_anchors(scene, actors)

    updates = []
    for token in scene.tokens:
        should_hide = desired_hidden_state(token, anchors, scene.grid, actors)
        if token.hidden != should_hide:
            updates.append(TokenUpdate(token_id=token.id, hidden=should_hide))

    return updates

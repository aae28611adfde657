"""
Documents de la scène (tokens, acteurs, grille, participants)
Représentation en lecture seule des données possédées par l'hôte VTT
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from proximity_reveal.config import DEFAULT_GRID_SIZE, DEFAULT_GRID_DISTANCE, DEFAULT_GRID_UNITS
from proximity_reveal.scene.flags import TokenConfig


@dataclass(frozen=True)
class Grid:
    """Métadonnées de grille d'une scène"""
    size: float = DEFAULT_GRID_SIZE  # pixels par case
    distance: float = DEFAULT_GRID_DISTANCE  # unités de scène par case
    units: str = DEFAULT_GRID_UNITS

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'Grid':
        data = data or {}
        return cls(
            size=float(data.get('size') or DEFAULT_GRID_SIZE),
            distance=float(data.get('distance') or DEFAULT_GRID_DISTANCE),
            units=data.get('units', DEFAULT_GRID_UNITS) or "",
        )


@dataclass(frozen=True)
class Token:
    """Token positionné sur une scène"""
    id: str
    actor_id: Optional[str] = None
    x: Optional[float] = None  # pixels
    y: Optional[float] = None
    width: Optional[float] = None  # cases
    height: Optional[float] = None
    hidden: bool = False
    name: str = ""
    config: TokenConfig = field(default_factory=TokenConfig)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Token':
        return cls(
            id=str(data['_id'] if '_id' in data else data['id']),
            actor_id=data.get('actorId'),
            x=data.get('x'),
            y=data.get('y'),
            width=data.get('width'),
            height=data.get('height'),
            hidden=bool(data.get('hidden', False)),
            name=data.get('name', ""),
            config=TokenConfig.from_flags(data.get('flags')),
        )

    def to_dict(self) -> Dict:
        return {
            '_id': self.id,
            'actorId': self.actor_id,
            'name': self.name,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'hidden': self.hidden,
            'flags': self.config.to_flags(),
        }


@dataclass(frozen=True)
class Actor:
    """Acteur associé aux tokens"""
    id: str
    name: str = ""
    has_player_owner: bool = False
    prototype_config: TokenConfig = field(default_factory=TokenConfig)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Actor':
        prototype = data.get('prototypeToken')
        if not isinstance(prototype, dict):
            prototype = {}
        return cls(
            id=str(data['_id'] if '_id' in data else data['id']),
            name=data.get('name', ""),
            has_player_owner=bool(data.get('hasPlayerOwner', False)),
            prototype_config=TokenConfig.from_flags(prototype.get('flags')),
        )


@dataclass(frozen=True)
class Scene:
    """Scène: grille + tokens"""
    id: str
    grid: Grid = field(default_factory=Grid)
    tokens: List[Token] = field(default_factory=list)
    name: str = ""

    @classmethod
    def from_dict(cls, data: Dict) -> 'Scene':
        return cls(
            id=str(data['_id'] if '_id' in data else data['id']),
            name=data.get('name', ""),
            grid=Grid.from_dict(data.get('grid')),
            tokens=[Token.from_dict(t) for t in data.get('tokens', [])],
        )

    def get_token(self, token_id: str) -> Optional[Token]:
        for token in self.tokens:
            if token.id == token_id:
                return token
        return None


@dataclass(frozen=True)
class Participant:
    """Client connecté au monde (joueur ou MJ)"""
    id: str
    name: str = ""
    privileged: bool = False  # MJ
    active: bool = False
    endpoint: Optional[str] = None  # URL HTTP du client, si joignable

    @classmethod
    def from_dict(cls, data: Dict) -> 'Participant':
        return cls(
            id=str(data['_id'] if '_id' in data else data['id']),
            name=data.get('name', ""),
            privileged=bool(data.get('isGM', False)),
            active=bool(data.get('active', False)),
            endpoint=data.get('endpoint'),
        )

"""Scene documents module."""

from .flags import TokenConfig, parse_distance, parse_flag_bool
from .documents import Grid, Token, Actor, Scene, Participant
from .store import WorldStore, StoreUpdateError

__all__ = [
    'TokenConfig',
    'parse_distance',
    'parse_flag_bool',
    'Grid',
    'Token',
    'Actor',
    'Scene',
    'Participant',
    'WorldStore',
    'StoreUpdateError',
]

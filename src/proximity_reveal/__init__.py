"""Proximity-based token visibility for virtual tabletop scenes."""

from .config import MODULE_ID, Settings
from .scene import TokenConfig, Grid, Token, Actor, Scene, Participant, WorldStore
from .visibility import feet_to_scene_units, center_of, distance_between, resolve, TokenUpdate
from .coordination import VisibilityService, Debouncer, HookRegistry, current_writer

__all__ = [
    'MODULE_ID',
    'Settings',
    'TokenConfig',
    'Grid',
    'Token',
    'Actor',
    'Scene',
    'Participant',
    'WorldStore',
    'feet_to_scene_units',
    'center_of',
    'distance_between',
    'resolve',
    'TokenUpdate',
    'VisibilityService',
    'Debouncer',
    'HookRegistry',
    'current_writer',
]

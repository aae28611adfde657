"""Proximity visibility module."""

from .distance import feet_to_scene_units, center_of, distance_between
from .resolver import TokenUpdate, desired_hidden_state, player_anchors, resolve
from .report import build_visibility_report, summarize_report, write_report_csv

__all__ = [
    'feet_to_scene_units',
    'center_of',
    'distance_between',
    'TokenUpdate',
    'desired_hidden_state',
    'player_anchors',
    'resolve',
    'build_visibility_report',
    'summarize_report',
    'write_report_csv',
]

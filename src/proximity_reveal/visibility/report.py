"""
Rapport de visibilité d'une scène
Une ligne par token: seuil, distance au joueur le plus proche, état avant/après
"""

from pathlib import Path
from typing import Dict, Mapping

import polars as pl

from proximity_reveal.scene.documents import Actor, Scene
from proximity_reveal.visibility.distance import feet_to_scene_units
from proximity_reveal.visibility.resolver import (
    desired_hidden_state,
    is_player_owned,
    nearest_anchor_distance,
    player_anchors,
)


REPORT_SCHEMA = {
    'token_id': pl.Utf8,
    'name': pl.Utf8,
    'player_owned': pl.Boolean,
    'threshold_ft': pl.Float64,
    'threshold_scene_units': pl.Float64,
    'nearest_anchor_distance': pl.Float64,
    'hidden': pl.Boolean,
    'desired_hidden': pl.Boolean,
    'changed': pl.Boolean,
}


def build_visibility_report(scene: Scene, actors: Mapping[str, Actor]) -> pl.DataFrame:
    """
    Construire le rapport de visibilité d'une scène

    Returns:
        DataFrame avec colonnes:
        - token_id, name
        - player_owned: token d'un joueur (ancre)
        - threshold_ft / threshold_scene_units: seuil configuré (null si aucun)
        - nearest_anchor_distance: distance au joueur le plus proche (null si
          aucune ancre ou token joueur)
        - hidden / desired_hidden / changed
    """
    anchors = player_anchors(scene, actors)
    grid = scene.grid

    rows = []
    for token in scene.tokens:
        owned = is_player_owned(token, actors)
        feet = token.config.min_visibility_distance_feet

        nearest = None
        if anchors and not owned:
            nearest = nearest_anchor_distance(token, anchors, grid)

        desired = desired_hidden_state(token, anchors, grid, actors)
        rows.append({
            'token_id': token.id,
            'name': token.name,
            'player_owned': owned,
            'threshold_ft': feet,
            'threshold_scene_units': feet_to_scene_units(feet, grid.units) if feet is not None else None,
            'nearest_anchor_distance': nearest,
            'hidden': token.hidden,
            'desired_hidden': desired,
            'changed': desired != token.hidden,
        })

    return pl.DataFrame(rows, schema=REPORT_SCHEMA)


def summarize_report(df: pl.DataFrame) -> Dict[str, int]:
    """Compteurs globaux du rapport"""
    return {
        'tokens': df.height,
        'anchors': df.filter(pl.col('player_owned')).height,
        'hidden_before': df.filter(pl.col('hidden')).height,
        'hidden_after': df.filter(pl.col('desired_hidden')).height,
        'changes': df.filter(pl.col('changed')).height,
    }


def write_report_csv(df: pl.DataFrame, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.write_csv(output_path)
    return output_path

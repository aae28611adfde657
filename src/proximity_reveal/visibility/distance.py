"""Calcul des distances entre tokens, en unités de la scène."""

import numpy as np
from typing import Optional, Tuple

from proximity_reveal.config import FEET_TO_METERS, FEET_TO_KILOMETERS, FEET_PER_MILE
from proximity_reveal.scene.documents import Grid, Token


def feet_to_scene_units(feet: float, units: Optional[str]) -> float:
    """
    Convertir un seuil en pieds vers les unités de la grille

    Le label d'unité est libre, on le matche par sous-chaîne (insensible à la casse).
    Un label inconnu ou vide est traité comme des pieds.
    """
    label = (units or "").lower()
    if not label:
        return feet
    if "ft" in label:
        return feet
    if "meter" in label or label == "m":
        return feet * FEET_TO_METERS
    if "km" in label:
        return feet * FEET_TO_KILOMETERS
    if "mi" in label:
        return feet / FEET_PER_MILE
    return feet


def center_of(token: Token, cell_size: float) -> Tuple[float, float]:
    """Centre du token en pixels (position absente = 0, taille absente = 1 case)"""
    x = (token.x if token.x is not None else 0) + (token.width if token.width is not None else 1) * cell_size / 2
    y = (token.y if token.y is not None else 0) + (token.height if token.height is not None else 1) * cell_size / 2
    return (x, y)


def distance_between(a: Token, b: Token, grid: Grid) -> float:
    """Distance euclidienne centre à centre, convertie en unités de scène."""
    ax, ay = center_of(a, grid.size)
    bx, by = center_of(b, grid.size)
    px = np.hypot(ax - bx, ay - by)
    return float((px / grid.size) * grid.distance)

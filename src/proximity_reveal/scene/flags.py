"""
Lecture des flags du module attachés aux documents de l'hôte
Les flags sont un dict opaque, on les valide une seule fois ici
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from proximity_reveal.config import MODULE_ID, DISTANCE_FLAG, STEALTH_FLAG


_FALSY_STRINGS = {"", "0", "false", "off", "no"}


def parse_distance(raw: Any) -> Optional[float]:
    """
    Convertir la distance brute (pieds) en seuil utilisable

    Returns:
        La distance en pieds, ou None si absente, vide, non numérique,
        NaN ou <= 0 (pas de seuil: l'état caché du token ne change pas)
    """
    if raw is None or raw == "":
        return None
    try:
        feet = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(feet) or feet <= 0:
        return None
    return feet


def parse_flag_bool(raw: Any) -> Optional[bool]:
    """Booléen tolérant: None reste None (= non défini)"""
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw.strip().lower() not in _FALSY_STRINGS
    return bool(raw)


@dataclass(frozen=True)
class TokenConfig:
    """Configuration du module pour un token (ou un prototype de token)"""
    min_visibility_distance_feet: Optional[float] = None
    stealth_on_create: Optional[bool] = None  # None = non défini, fallback prototype

    @classmethod
    def from_flags(cls, flags: Optional[Dict]) -> 'TokenConfig':
        """Construire depuis le dict `flags` complet d'un document"""
        module_flags = flags.get(MODULE_ID) if isinstance(flags, dict) else None
        # Namespace mal formé: on garde l'état courant du token
        if not isinstance(module_flags, dict):
            module_flags = {}
        return cls(
            min_visibility_distance_feet=parse_distance(module_flags.get(DISTANCE_FLAG)),
            stealth_on_create=parse_flag_bool(module_flags.get(STEALTH_FLAG)),
        )

    def to_flags(self) -> Dict[str, Dict[str, Any]]:
        """Sérialiser vers le format flags de l'hôte"""
        module_flags: Dict[str, Any] = {}
        if self.min_visibility_distance_feet is not None:
            module_flags[DISTANCE_FLAG] = self.min_visibility_distance_feet
        if self.stealth_on_create is not None:
            module_flags[STEALTH_FLAG] = self.stealth_on_create
        return {MODULE_ID: module_flags}

    @property
    def has_threshold(self) -> bool:
        return self.min_visibility_distance_feet is not None

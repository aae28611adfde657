"""
Configuration du module de visibilité par proximité
Constantes globales + réglages lus depuis l'environnement
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


MODULE_ID = "the-horses-actor-visibility-tools"

# Clés des flags stockés sur les tokens (namespace MODULE_ID)
DISTANCE_FLAG = "distance"
STEALTH_FLAG = "stealthOnCreate"

# Conversion pieds → unités de scène
FEET_TO_METERS = 0.3048
FEET_TO_KILOMETERS = 0.0003048
FEET_PER_MILE = 5280

# Grille par défaut (Foundry: 100px par case, 5ft par case)
DEFAULT_GRID_SIZE = 100.0
DEFAULT_GRID_DISTANCE = 5.0
DEFAULT_GRID_UNITS = "ft"

STEALTH_DELAY = 0.1  # secondes, laisse le token s'enregistrer sur le canvas
STEALTH_SKILL = "ste"
DEFAULT_DEBOUNCE_DELAY = 0.0  # même tick
REQUEST_TIMEOUT = 10

RECOMPUTE_OP = "applyAll"


@dataclass
class Settings:
    """Réglages d'exécution du writer"""
    world_path: Optional[Path] = None
    participant_id: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: int = logging.INFO

    @classmethod
    def from_env(cls) -> 'Settings':
        """Construire les réglages depuis les variables PROXIMITY_REVEAL_*"""
        world = os.environ.get("PROXIMITY_REVEAL_WORLD")
        level_name = os.environ.get("PROXIMITY_REVEAL_LOG_LEVEL", "INFO").upper()

        return cls(
            world_path=Path(world) if world else None,
            participant_id=os.environ.get("PROXIMITY_REVEAL_PARTICIPANT") or None,
            host=os.environ.get("PROXIMITY_REVEAL_HOST", "127.0.0.1"),
            port=int(os.environ.get("PROXIMITY_REVEAL_PORT", "5000")),
            log_level=getattr(logging, level_name, logging.INFO),
        )

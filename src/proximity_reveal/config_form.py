"""
Description déclarative de la section "Minimum Visibility" des feuilles de token
Le rendu HTML appartient à l'hôte, on ne décrit que les champs
"""

from typing import Any, Dict, Mapping

from proximity_reveal.config import MODULE_ID, DISTANCE_FLAG, STEALTH_FLAG
from proximity_reveal.scene.flags import TokenConfig, parse_distance, parse_flag_bool


DISTANCE_FIELD = f"flags.{MODULE_ID}.{DISTANCE_FLAG}"
STEALTH_FIELD = f"flags.{MODULE_ID}.{STEALTH_FLAG}"


def build_config_form(config: TokenConfig) -> Dict[str, Any]:
    """Décrire la section de configuration pour une config donnée"""
    distance = config.min_visibility_distance_feet

    return {
        'legend': "Minimum Visibility",
        'tab': "appearance",
        'fields': [
            {
                'name': DISTANCE_FIELD,
                'type': "number",
                'label': "Minimum Visibility Distance (ft)",
                'value': distance if distance is not None else "",
                'min': 0,
                'step': 1,
                'hint': "Minimum distance in feet. If blank or zero, the token will not be auto-hidden.",
            },
            {
                'name': STEALTH_FIELD,
                'type': "checkbox",
                'label': "Stealth on Creation",
                'value': bool(config.stealth_on_create),
                'hint': "When placed on the scene, this token immediately rolls Stealth as the token.",
            },
        ],
    }


def parse_config_form(form_data: Mapping[str, Any], checkbox_form: bool = False) -> TokenConfig:
    """
    Soumission du formulaire (noms aplatis) → TokenConfig

    Args:
        form_data: Champs soumis
        checkbox_form: Soumission HTML; une case non cochée n'est pas
            envoyée par le navigateur, absente = False. En JSON une clé
            absente reste non définie (fallback prototype).
    """
    stealth = parse_flag_bool(form_data.get(STEALTH_FIELD))
    if stealth is None and checkbox_form:
        stealth = False
    return TokenConfig(
        min_visibility_distance_feet=parse_distance(form_data.get(DISTANCE_FIELD)),
        stealth_on_create=stealth,
    )

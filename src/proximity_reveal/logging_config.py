"""Handlers console (et fichier) du logger 'proximity_reveal'."""

import logging
import sys
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Brancher les handlers du package; un nouvel appel remplace les anciens

    Args:
        level: Niveau appliqué au logger et à ses handlers
        log_file: Copie des logs (réécrite à chaque lancement)
    """
    logger = logging.getLogger("proximity_reveal")
    logger.setLevel(level)
    logger.handlers.clear()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging: niveau %s, fichier %s", logging.getLevelName(level), log_file)
    return logger

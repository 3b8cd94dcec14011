"""Configuration de la journalisation pour Rent a Cat.

Un handler console sur le logger racine ; le DBHandler (voir ``app.logging_db``)
s'ajoute a cote hors tests.
"""

import logging
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_level: str = "INFO") -> None:
    """Configure le logger racine de l'application."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)

    # Le journal d'acces de werkzeug double chaque requete en DEBUG
    logging.getLogger("werkzeug").setLevel(max(level, logging.INFO))

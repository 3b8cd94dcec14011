"""Numero de version de l'application (fichier VERSION, sinon metadonnees du paquet)."""

from functools import lru_cache
from importlib import metadata
from pathlib import Path

VERSION_FILE = Path(__file__).resolve().parent.parent / "VERSION"


@lru_cache(maxsize=1)
def get_version() -> str:
    try:
        return VERSION_FILE.read_text().strip()
    except FileNotFoundError:
        pass
    try:
        return metadata.version("rent-a-cat")
    except metadata.PackageNotFoundError:
        return "0.0.0"

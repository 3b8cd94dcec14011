"""Images de profil : validation (extension, taille, octets reels), stockage, nettoyage."""

import logging
import os
import secrets
import time
from pathlib import Path

import filetype
from flask import current_app
from werkzeug.datastructures import FileStorage

from app.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp"})
ALLOWED_MIME = frozenset({"image/jpeg", "image/png", "image/webp"})
PROFILE_DIR = "profiles"

_FORMAT_MESSAGE = "Format de fichier non autorisé. Utilisez JPG, PNG ou WebP."


def upload_root() -> Path:
    return Path(current_app.config["UPLOAD_FOLDER"])


def validate_file(file: FileStorage | None) -> str:
    """Controle nom et extension ; retourne l'extension normalisee."""
    if file is None or not file.filename:
        raise ValidationError("Aucun fichier sélectionné.")
    ext = os.path.splitext(file.filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(_FORMAT_MESSAGE)
    return ext


def sniff_image(data: bytes) -> str:
    """Retourne le type MIME detecte dans les octets, rejette tout sauf JPEG/PNG/WebP.

    Le Content-Type declare par le client n'est jamais consulte.
    """
    max_size = current_app.config.get("MAX_IMAGE_SIZE", 2 * 1024 * 1024)
    if not data:
        raise ValidationError("Le fichier est vide.")
    if len(data) > max_size:
        raise ValidationError("Le fichier est trop volumineux. Taille maximum: 2MB.")

    kind = filetype.guess(data)
    if kind is None or kind.mime not in ALLOWED_MIME:
        raise ValidationError("Type de fichier non autorisé. Utilisez JPG, PNG ou WebP.")
    return kind.mime


def save_profile_image(file: FileStorage, user_id: int) -> str:
    """Valide puis ecrit l'image ; retourne son chemin relatif a UPLOAD_FOLDER.

    Le fichier n'atteint le disque qu'apres validation complete.
    """
    ext = validate_file(file)
    data = file.read()
    sniff_image(data)

    target_dir = upload_root() / PROFILE_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    name = f"profile-{user_id}-{int(time.time() * 1000)}-{secrets.token_hex(4)}{ext}"
    (target_dir / name).write_bytes(data)
    logger.info("Profile image stored for user %s: %s", user_id, name)
    return f"{PROFILE_DIR}/{name}"


def cleanup_file(relative_path: str | None) -> None:
    """Supprime un fichier stocke ; une erreur est journalisee, jamais levee."""
    if not relative_path:
        return
    root = upload_root().resolve()
    path = (root / relative_path).resolve()
    if root not in path.parents:
        logger.warning("Refusing to delete outside upload folder: %s", relative_path)
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.error("Could not delete %s: %s", path, exc)


def remove_old_profile_image(relative_path: str | None) -> None:
    """Supprime l'ancienne photo de profil apres un remplacement reussi."""
    cleanup_file(relative_path)

"""Edition du profil utilisateur, photo comprise."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.datastructures import FileStorage

from app.errors import ConflictError, InternalError
from app.extensions import db
from app.models.user import User
from app.services import upload_service

logger = logging.getLogger(__name__)


def email_taken(email: str, exclude_user_id: int | None = None) -> bool:
    query = User.query.filter(User.email == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return db.session.query(query.exists()).scalar()


def update_profile(
    user: User,
    nom: str,
    prenom: str,
    email: str,
    description: str | None,
    image: FileStorage | None = None,
) -> User:
    """Met a jour le profil et, si fournie, remplace la photo.

    La nouvelle photo est supprimee si le commit echoue ; l'ancienne n'est
    supprimee qu'apres un commit reussi.

    Raises:
        ConflictError: l'email appartient a un autre compte.
        ValidationError: image refusee.
        InternalError: echec du stockage.
    """
    if email_taken(email, exclude_user_id=user.id):
        raise ConflictError("Un autre compte utilise déjà cet email.")

    new_image = None
    if image is not None and image.filename:
        new_image = upload_service.save_profile_image(image, user.id)

    old_image = user.image
    user.nom = nom
    user.prenom = prenom
    user.email = email
    user.description = description or None
    if new_image:
        user.image = new_image

    try:
        db.session.commit()
    except IntegrityError as exc:
        # Email pris entre la verification et le commit
        db.session.rollback()
        upload_service.cleanup_file(new_image)
        raise ConflictError("Un autre compte utilise déjà cet email.") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        upload_service.cleanup_file(new_image)
        logger.error("Profile update failed for user %s: %s", user.id, exc)
        raise InternalError("Erreur serveur. Veuillez réessayer plus tard.") from exc

    if new_image and old_image:
        upload_service.remove_old_profile_image(old_image)

    logger.info("Profile updated for user %s", user.id)
    return user

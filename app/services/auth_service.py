"""Authentification : hachage des mots de passe, inscription, ouverture/fermeture de session.

L'identite de session est geree par Flask-Login dans une session cote serveur
(Flask-Session) ; les jetons CSRF vivent dans leur propre registre.
"""

import logging

from flask import current_app, session
from flask_login import login_user, logout_user
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from app.errors import AuthenticationError, ConflictError
from app.extensions import db
from app.models.user import User

logger = logging.getLogger(__name__)

PASSWORD_METHOD = "scrypt"

# Verifie a la place d'un vrai hash quand l'email est inconnu, pour que les deux
# echecs coutent le meme temps.
_DUMMY_HASH: str | None = None


def hash_password(password: str) -> str:
    return generate_password_hash(password, method=PASSWORD_METHOD)


def verify_password(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        logger.error("Unreadable password hash format")
        return False


def _dummy_hash() -> str:
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password("rent-a-cat-dummy-password")
    return _DUMMY_HASH


def authenticate(email: str, password: str) -> User:
    """Retourne l'utilisateur si le couple email/mot de passe est valide.

    Raises:
        AuthenticationError: email inconnu ou mot de passe faux (meme message).
    """
    user = User.query.filter_by(email=email).first()
    if user is None:
        verify_password(_dummy_hash(), password)
        logger.warning("Login failed: unknown email")
        raise AuthenticationError()

    if not verify_password(user.password_hash, password):
        logger.warning("Login failed for user %s", user.id)
        raise AuthenticationError()

    return user


def register_user(nom: str, prenom: str, email: str, password: str) -> User:
    """Cree un compte client.

    Raises:
        ConflictError: un compte utilise deja cet email.
    """
    if User.query.filter_by(email=email).first() is not None:
        raise ConflictError("Un compte avec cet email existe déjà.")

    user = User(nom=nom, prenom=prenom, email=email, password_hash=hash_password(password))
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as exc:
        # Inscription concurrente avec le meme email
        db.session.rollback()
        raise ConflictError("Un compte avec cet email existe déjà.") from exc

    logger.info("New user registered (id=%s)", user.id)
    return user


def open_session(user: User) -> None:
    """Lie la session courante a ``user`` (cookie permanent, duree limitee).

    L'enregistrement serveur de la session anonyme est supprime et un nouvel
    identifiant est emis : un identifiant connu avant la connexion ne vaut rien.
    """
    session.clear()
    session.permanent = True
    login_user(user)
    current_app.session_interface.regenerate(session)
    logger.info("User %s logged in", user.id)


def close_session() -> None:
    """Detruit la session courante, enregistrement serveur compris.

    Une session videe est supprimee du stockage par Flask-Session : un cookie
    copie avant la deconnexion ne retrouve plus rien. Les erreurs sont
    journalisees, jamais propagees.
    """
    try:
        logout_user()
    except (RuntimeError, KeyError) as exc:
        logger.error("Logout failed: %s", exc)
    finally:
        session.clear()

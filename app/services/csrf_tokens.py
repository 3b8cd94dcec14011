"""Jetons CSRF a usage unique, lies a la session et a un formulaire nomme.

Le registre ne connait qu'un mapping mutable ; la couche Flask en bas de module
le branche sur la session et fournit le decorateur ``csrf_required``.

Chaque entree : ``{"token": <hex>, "expires_at": <epoch secondes>}``.
Toute verification consomme l'entree, qu'elle reussisse ou non.
"""

import hmac
import logging
import secrets
import time
from collections.abc import Callable, MutableMapping
from functools import wraps

from flask import current_app, request, session

from app.errors import SecurityTokenError

logger = logging.getLogger(__name__)

SESSION_KEY = "csrf_tokens"
DEFAULT_TTL_SECONDS = 600
TOKEN_BYTES = 32
HEADER_NAME = "X-CSRF-Token"
FORM_FIELD = "csrf_token"


class CsrfTokenRegistry:
    """Registre des jetons d'une session : au plus un jeton vivant par formulaire."""

    def __init__(
        self,
        store: MutableMapping,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self._ttl = ttl_seconds
        self._clock = clock

    def issue(self, form_name: str) -> str:
        """Genere un jeton pour ``form_name`` et remplace le precedent."""
        self.sweep()
        token = secrets.token_hex(TOKEN_BYTES)
        self._store[form_name] = {"token": token, "expires_at": self._clock() + self._ttl}
        return token

    def verify(self, form_name: str, submitted: str | None) -> bool:
        """Verifie puis consomme le jeton de ``form_name``."""
        entry = self._store.pop(form_name, None)
        if entry is None or self._clock() > entry["expires_at"]:
            return False
        if not submitted:
            return False
        # Octets : compare_digest refuse les chaines non ASCII
        return hmac.compare_digest(entry["token"].encode(), submitted.encode("utf-8", "replace"))

    def sweep(self) -> int:
        """Supprime les entrees expirees et retourne leur nombre."""
        now = self._clock()
        expired = [name for name, entry in self._store.items() if now > entry["expires_at"]]
        for name in expired:
            del self._store[name]
        return len(expired)

    def __len__(self):
        return len(self._store)


# ── Integration Flask ──────────────────────────────────────────


def _session_registry() -> CsrfTokenRegistry:
    store = session.setdefault(SESSION_KEY, {})
    # Mapping imbrique : Flask ne detecte pas les mutations internes
    session.modified = True
    return CsrfTokenRegistry(store, ttl_seconds=current_app.config.get("CSRF_TOKEN_TTL", 600))


def issue_csrf_token(form_name: str) -> str:
    """Emet un jeton pour le formulaire ``form_name`` de la session courante."""
    return _session_registry().issue(form_name)


def verify_csrf_token(form_name: str, submitted: str | None) -> bool:
    """Verifie (et consomme) le jeton soumis pour ``form_name``."""
    valid = _session_registry().verify(form_name, submitted)
    if not valid:
        logger.warning("CSRF token rejected for form '%s' (%s)", form_name, request.path)
    return valid


def submitted_token() -> str | None:
    """Jeton soumis : champ de formulaire, sinon en-tete HTTP (appels JSON)."""
    return request.form.get(FORM_FIELD) or request.headers.get(HEADER_NAME)


def csrf_required(form_name: str):
    """Decorateur de vue : rejette la requete si le jeton de ``form_name`` est invalide."""

    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if not verify_csrf_token(form_name, submitted_token()):
                raise SecurityTokenError()
            return view(*args, **kwargs)

        return wrapped

    return decorator

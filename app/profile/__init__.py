"""Blueprint profil -- consultation et edition du profil connecte."""

from flask import Blueprint

profile_bp = Blueprint("profile", __name__)

from app.profile import routes  # noqa: E402, F401

"""Blueprint API -- points d'acces JSON des reservations."""

from flask import Blueprint

api_bp = Blueprint("api", __name__)

from app.api import errors, routes  # noqa: E402, F401

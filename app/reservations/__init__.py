"""Blueprint reservations -- pages HTML de reservation et d'annulation."""

from flask import Blueprint

reservations_bp = Blueprint("reservations", __name__)

from app.reservations import routes  # noqa: E402, F401

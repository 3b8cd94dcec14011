"""Blueprint principal -- catalogue des chats, fichiers uploades, pages d'erreur."""

from flask import Blueprint

main_bp = Blueprint("main", __name__)

from app.main import errors, routes  # noqa: E402, F401

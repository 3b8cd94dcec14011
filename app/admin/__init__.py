"""Blueprint d'administration -- gestion du catalogue et journal applicatif."""

from flask import Blueprint

admin_bp = Blueprint(
    "admin",
    __name__,
    template_folder="templates",
)

from app.admin import routes  # noqa: E402, F401

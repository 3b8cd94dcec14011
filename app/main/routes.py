"""Catalogue : page d'accueil, fiche d'un chat, images uploadees."""

import logging

from flask import current_app, render_template, send_from_directory
from flask_login import current_user

from app.main import main_bp
from app.services import cat_service

logger = logging.getLogger(__name__)


@main_bp.route("/")
def index():
    """Page d'accueil : les chats disponibles, par nom."""
    return render_template("main/index.html", chats=cat_service.list_available_cats())


@main_bp.route("/chats/<int:cat_id>")
def cat_detail(cat_id):
    """Fiche d'un chat avec le formulaire de reservation."""
    include_unavailable = current_user.is_authenticated and current_user.is_admin
    cat = cat_service.get_cat(cat_id, include_unavailable=include_unavailable)
    return render_template("main/cat.html", chat=cat)


@main_bp.route("/uploads/<path:filename>")
def uploaded_file(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)

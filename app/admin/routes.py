"""Routes du blueprint admin : ajout et edition des chats, journal applicatif."""

import logging
from functools import wraps

from flask import current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required
from werkzeug.security import generate_password_hash

from app.admin import admin_bp
from app.errors import AuthorizationError, InternalError, SecurityTokenError
from app.extensions import db
from app.forms import CatForm, first_error
from app.models.log import AppLog
from app.models.user import User
from app.services import cat_service
from app.services.auth_service import PASSWORD_METHOD
from app.services.csrf_tokens import submitted_token, verify_csrf_token

logger = logging.getLogger(__name__)

LOGS_PAGE_SIZE = 200


def admin_required(view):
    """Reserve la vue aux administrateurs (403 sinon)."""

    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not current_user.is_admin:
            logger.warning("Admin access denied for user %s on %s", current_user.id, request.path)
            raise AuthorizationError(
                "Accès refusé : cette page est réservée aux administrateurs."
            )
        return view(*args, **kwargs)

    return wrapped


@admin_bp.route("/")
@admin_bp.route("/chats")
@admin_required
def cats():
    """Tous les chats, disponibles ou non."""
    return render_template("admin/cats.html", chats=cat_service.list_all_cats())


@admin_bp.route("/chats/ajout", methods=["GET", "POST"])
@admin_required
def add_cat():
    """Formulaire d'ajout d'un chat au catalogue."""
    form = CatForm()
    if request.method == "GET":
        return render_template("admin/cat_form.html", form=form, chat=None, error=None)

    if not verify_csrf_token("cat-add", submitted_token()):
        return _render_form(form, None, SecurityTokenError().message, 403)
    if not form.validate():
        return _render_form(form, None, first_error(form), 400)

    try:
        cat = cat_service.create_cat(form.to_dict())
    except InternalError as exc:
        return _render_form(form, None, exc.message, exc.status_code)

    flash(f"{cat.nom} a été ajouté au catalogue.", "success")
    return redirect(url_for("admin.cats"))


@admin_bp.route("/chats/<int:cat_id>/edit", methods=["GET", "POST"])
@admin_required
def edit_cat(cat_id):
    """Edition d'un chat, disponibilite comprise."""
    cat = cat_service.get_cat(cat_id, include_unavailable=True)
    if request.method == "GET":
        form = CatForm(obj=cat)
        return render_template("admin/cat_form.html", form=form, chat=cat, error=None)

    form = CatForm()
    if not verify_csrf_token(f"cat-edit-{cat.id}", submitted_token()):
        return _render_form(form, cat, SecurityTokenError().message, 403)
    if not form.validate():
        return _render_form(form, cat, first_error(form), 400)

    try:
        cat_service.update_cat(cat, form.to_dict())
    except InternalError as exc:
        return _render_form(form, cat, exc.message, exc.status_code)

    flash(f"{cat.nom} a été mis à jour.", "success")
    return redirect(url_for("admin.cats"))


def _render_form(form, cat, error, status):
    return render_template("admin/cat_form.html", form=form, chat=cat, error=error), status


@admin_bp.route("/logs")
@admin_required
def logs():
    """Dernieres entrees WARNING/ERROR persistees par le DBHandler."""
    level = request.args.get("level", "").upper()
    query = AppLog.query
    if level in ("WARNING", "ERROR", "CRITICAL"):
        query = query.filter(AppLog.level == level)
    entries = query.order_by(AppLog.created_at.desc()).limit(LOGS_PAGE_SIZE).all()
    return render_template("admin/logs.html", entries=entries, level=level)


def ensure_admin_user():
    """Cree le compte administrateur s'il n'existe pas encore."""
    email = current_app.config.get("ADMIN_EMAIL", "admin@rentacat.local")
    password_hash = current_app.config.get("ADMIN_PASSWORD_HASH", "")

    if User.query.filter_by(email=email).first() is not None:
        return

    if not password_hash:
        # Dev uniquement : generer un hash par defaut (bloque en prod par create_app)
        logger.warning("ADMIN_PASSWORD_HASH non defini -- utilisation d'un mot de passe dev")
        password_hash = generate_password_hash("Dev-password-change-me1", method=PASSWORD_METHOD)

    db.session.add(
        User(
            nom="Admin",
            prenom="Rent a Cat",
            email=email,
            password_hash=password_hash,
            administrateur=True,
        )
    )
    db.session.commit()
    logger.info("Utilisateur admin '%s' cree", email)

"""Routes du blueprint auth : login, register, logout."""

import logging

from flask import current_app, flash, redirect, render_template, request, url_for
from flask_limiter.util import get_remote_address
from flask_login import current_user

from app.auth import auth_bp
from app.errors import AuthenticationError, ConflictError, SecurityTokenError
from app.extensions import limiter
from app.forms import LoginForm, RegisterForm, first_error
from app.services import auth_service
from app.services.csrf_tokens import submitted_token, verify_csrf_token

logger = logging.getLogger(__name__)


def login_rate_key() -> str:
    """Cle de limitation : adresse du client + email soumis."""
    return f"{get_remote_address()}:{request.form.get('email', 'unknown')}"


def _login_limit() -> str:
    return current_app.config["LOGIN_RATE_LIMIT"]


@auth_bp.route("/login", methods=["GET", "POST"])
@limiter.limit(_login_limit, key_func=login_rate_key, methods=["POST"])
def login():
    """Page de connexion."""
    if current_user.is_authenticated:
        return redirect(url_for("main.index"))

    form = LoginForm()
    if request.method == "GET":
        return render_template("auth/login.html", form=form, error=None)

    if not verify_csrf_token("login", submitted_token()):
        return _render_login(form, SecurityTokenError().message, 403)

    if not form.validate():
        return _render_login(form, first_error(form), 400)

    try:
        user = auth_service.authenticate(form.email.data, form.password.data)
    except AuthenticationError as exc:
        return _render_login(form, exc.message, exc.status_code)

    auth_service.open_session(user)
    return redirect(url_for("main.index"))


def _render_login(form, error, status):
    form.password.data = ""
    return render_template("auth/login.html", form=form, error=error), status


@auth_bp.route("/register", methods=["GET", "POST"])
def register():
    """Creation de compte ; l'utilisateur se connecte ensuite."""
    if current_user.is_authenticated:
        return redirect(url_for("main.index"))

    form = RegisterForm()
    if request.method == "GET":
        return render_template("auth/register.html", form=form, error=None)

    if not verify_csrf_token("register", submitted_token()):
        return _render_register(form, SecurityTokenError().message, 403)

    if not form.validate():
        return _render_register(form, first_error(form), 400)

    try:
        auth_service.register_user(
            nom=form.nom.data,
            prenom=form.prenom.data,
            email=form.email.data,
            password=form.password.data,
        )
    except ConflictError as exc:
        return _render_register(form, exc.message, exc.status_code)

    flash("Inscription réussie ! Vous pouvez maintenant vous connecter.", "success")
    return redirect(url_for("auth.login"))


def _render_register(form, error, status):
    form.password.data = ""
    form.confirm_password.data = ""
    return render_template("auth/register.html", form=form, error=error), status


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Deconnexion : la session est detruite quoi qu'il arrive."""
    auth_service.close_session()
    return redirect(url_for("main.index"))

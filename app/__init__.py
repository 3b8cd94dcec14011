"""Fabrique d'application Flask pour Rent a Cat."""

import logging
import os
from pathlib import Path

from flask import Flask, flash, jsonify, redirect, request, url_for

from app.extensions import cors, db, limiter, login_manager, sess
from app.logging_config import DATE_FORMAT, LOG_FORMAT, setup_logging
from app.version import get_version
from config import config_by_name

logger = logging.getLogger(__name__)

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; style-src 'self' 'unsafe-inline'; script-src 'self'; "
    "img-src 'self' data: https:; connect-src 'self'; font-src 'self'; "
    "object-src 'none'; media-src 'self'; frame-src 'none'"
)


def create_app(config_name: str | None = None) -> Flask:
    """Construit l'application Rent a Cat.

    ``config_name`` choisit une classe de ``config.config_by_name`` ; a defaut,
    la variable FLASK_ENV, puis "development".
    """
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.setdefault("APP_VERSION", get_version())

    # Garde-fous production : interdire les secrets par defaut
    if config_name == "production":
        if app.config["SECRET_KEY"] == "dev-only-insecure-key":
            raise RuntimeError(
                "SECRET_KEY absente : la cle de developpement est refusee en production."
            )
        if not app.config.get("ADMIN_PASSWORD_HASH"):
            raise RuntimeError(
                "ADMIN_PASSWORD_HASH absent : pas de mot de passe admin par defaut en production."
            )

    setup_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Initialisation des extensions
    db.init_app(app)
    # Table des sessions dans la meme base ; init apres db
    app.config["SESSION_SQLALCHEMY"] = db
    sess.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"
    login_manager.login_message = "Veuillez vous connecter pour accéder à cette page."
    login_manager.login_message_category = "error"
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )
    limiter.init_app(app)

    Path(app.config["UPLOAD_FOLDER"]).mkdir(parents=True, exist_ok=True)

    # Headers de securite HTTP
    @app.after_request
    def add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        resp.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)
        return resp

    # DBHandler : persiste WARNING/ERROR dans app_logs (desactive en tests)
    if not app.config.get("TESTING"):
        from app.logging_db import DBHandler

        db_handler = DBHandler(app=app, level=logging.WARNING)
        db_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logging.getLogger().addHandler(db_handler)

    # User loader pour Flask-Login
    from app.models.user import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        if request.blueprint == "api":
            return jsonify(
                {
                    "success": False,
                    "error": "AUTHENTICATION_REQUIRED",
                    "message": "Vous devez être connecté.",
                    "data": None,
                }
            ), 401
        flash(login_manager.login_message, login_manager.login_message_category)
        return redirect(url_for("auth.login"))

    # Jetons CSRF disponibles dans tous les templates : {{ csrf_token('login') }}
    from app.services.csrf_tokens import issue_csrf_token

    @app.context_processor
    def inject_csrf_token():
        return {"csrf_token": issue_csrf_token}

    # Enregistrement des blueprints
    from app.admin import admin_bp
    from app.api import api_bp
    from app.auth import auth_bp
    from app.main import main_bp
    from app.profile import profile_bp
    from app.reservations import reservations_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(profile_bp, url_prefix="/profile")
    app.register_blueprint(reservations_bp, url_prefix="/reservations")
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/admin")

    # Creer l'administrateur s'il n'existe pas
    with app.app_context():
        from app.admin.routes import ensure_admin_user

        db.create_all()
        ensure_admin_user()

    logger.info("Rent a Cat app created with config '%s'", config_name)
    return app

"""Gestionnaires d'erreurs des pages HTML -- n'exposent jamais les details internes."""

import logging

from flask import jsonify, render_template, request
from sqlalchemy.exc import SQLAlchemyError

from app.errors import RentACatError
from app.extensions import db
from app.main import main_bp
from app.schemas.common import error_envelope

logger = logging.getLogger(__name__)


def render_error(status: int, title: str, message: str):
    return render_template(
        "errors/error.html", status=status, title=title, message=message
    ), status


@main_bp.app_errorhandler(RentACatError)
def handle_rentacat_error(exc):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.path, exc)
    else:
        logger.info("%s on %s: %s", type(exc).__name__, request.path, exc)
    return render_error(exc.status_code, "Erreur", exc.message)


@main_bp.app_errorhandler(SQLAlchemyError)
def handle_database_error(exc):
    db.session.rollback()
    logger.error("Database error on %s: %s", request.path, exc)
    return render_error(
        500, "Erreur Serveur", "Une erreur est survenue. Veuillez réessayer plus tard."
    )


@main_bp.app_errorhandler(404)
def handle_not_found(exc):
    # Route inconnue sous /api : aucun blueprint ne correspond, on repond en JSON
    if request.path.startswith("/api/"):
        return jsonify(error_envelope("NOT_FOUND", "Cette route n'existe pas.")), 404
    return render_error(
        404, "Page non trouvée", "La page que vous cherchez n'existe pas."
    )


@main_bp.app_errorhandler(413)
def handle_too_large(exc):
    return render_error(
        413, "Fichier trop volumineux", "Le fichier est trop volumineux. Taille maximum: 2MB."
    )


@main_bp.app_errorhandler(429)
def handle_rate_limited(exc):
    logger.warning("Rate limit exceeded on %s (%s)", request.path, exc.description)
    if request.endpoint == "auth.login":
        message = "Trop de tentatives de connexion. Veuillez attendre 30 secondes."
    else:
        message = "Trop de requêtes depuis cette IP. Veuillez réessayer plus tard."
    return render_error(429, "Trop de tentatives", message)


@main_bp.app_errorhandler(500)
def handle_internal_error(exc):
    logger.error("Unhandled error on %s: %s", request.path, exc)
    return render_error(
        500, "Erreur Serveur", "Une erreur est survenue. Veuillez réessayer plus tard."
    )

"""Gestionnaires d'erreurs API -- retournent du JSON, n'exposent jamais les stack traces."""

import logging

from flask import jsonify
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.api import api_bp
from app.errors import RentACatError
from app.extensions import db
from app.schemas.common import error_envelope

logger = logging.getLogger(__name__)


@api_bp.errorhandler(RentACatError)
def handle_rentacat_error(exc):
    if exc.status_code >= 500:
        logger.error("API error: %s", exc)
    else:
        logger.info("API %s: %s", exc.code, exc)
    return jsonify(error_envelope(exc.code, exc.message)), exc.status_code


@api_bp.errorhandler(PydanticValidationError)
def handle_pydantic_error(exc):
    logger.warning("Validation error: %s", exc.errors(include_url=False))
    return jsonify(
        error_envelope(
            "VALIDATION_ERROR",
            "Données manquantes ou invalides: chatId, dateDebut et dateFin sont requis",
        )
    ), 400


@api_bp.errorhandler(SQLAlchemyError)
def handle_database_error(exc):
    db.session.rollback()
    logger.error("Database error: %s", exc)
    return jsonify(error_envelope("INTERNAL_ERROR", "Erreur serveur")), 500


@api_bp.errorhandler(404)
def handle_not_found(exc):
    return jsonify(error_envelope("NOT_FOUND", "Cette route n'existe pas.")), 404


@api_bp.errorhandler(429)
def handle_rate_limited(exc):
    return jsonify(
        error_envelope("RATE_LIMITED", "Trop de requêtes. Veuillez réessayer plus tard.")
    ), 429


@api_bp.errorhandler(500)
def handle_internal_error(exc):
    logger.error("Unhandled error: %s", exc)
    return jsonify(error_envelope("INTERNAL_ERROR", "Erreur serveur")), 500

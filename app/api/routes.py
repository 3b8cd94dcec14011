"""Definitions des routes API."""

import logging

from flask import current_app, jsonify, request
from flask_login import current_user, login_required

from app.api import api_bp
from app.errors import NotFoundError, ValidationError
from app.extensions import limiter
from app.schemas.common import envelope
from app.schemas.reservation import ReservationCreate, ReservationOut
from app.services import reservation_service
from app.services.csrf_tokens import csrf_required, issue_csrf_token

logger = logging.getLogger(__name__)

# Formulaires dont un jeton peut etre demande via l'API
API_FORMS = frozenset({"api-reservation", "api-reservation-cancel"})


@api_bp.route("/health", methods=["GET"])
def health():
    """Point de controle de sante de l'API."""
    return jsonify(
        envelope(
            {
                "status": "ok",
                "version": current_app.config.get("APP_VERSION", "0.0.0"),
            }
        )
    )


@api_bp.route("/csrf-token/<form_name>", methods=["GET"])
@login_required
def csrf_token(form_name):
    """Emet un jeton a usage unique pour un appel API mutant (en-tete X-CSRF-Token)."""
    if form_name not in API_FORMS:
        raise NotFoundError("Formulaire inconnu")
    return jsonify(envelope({"form": form_name, "token": issue_csrf_token(form_name)}))


@api_bp.route("/reservations", methods=["POST"])
@limiter.limit("30/minute")
@login_required
@csrf_required("api-reservation")
def create_reservation():
    """Cree une reservation.

    Corps JSON : ``chatId``, ``dateDebut``, ``dateFin`` et, optionnel, ``prixTotal``
    (indicatif, le prix est toujours recalcule).
    """
    json_data = request.get_json(silent=True)
    if not json_data:
        raise ValidationError("Le corps de la requete doit etre du JSON valide.")

    req = ReservationCreate.model_validate(json_data)
    reservation = reservation_service.create_reservation(
        user_id=current_user.id,
        cat_id=req.cat_id,
        date_debut=req.date_debut,
        date_fin=req.date_fin,
        prix_total=req.prix_total,
    )
    return jsonify(
        envelope(
            ReservationOut.from_model(reservation).model_dump(mode="json"),
            message="Réservation créée avec succès",
        )
    ), 201


@api_bp.route("/reservations", methods=["GET"])
@login_required
def list_reservations():
    reservations = reservation_service.list_user_reservations(current_user.id)
    return jsonify(
        envelope([ReservationOut.from_model(r).model_dump(mode="json") for r in reservations])
    )


@api_bp.route("/reservations/<int:reservation_id>", methods=["GET"])
@login_required
def get_reservation(reservation_id):
    reservation = reservation_service.get_user_reservation(reservation_id, current_user.id)
    return jsonify(envelope(ReservationOut.from_model(reservation).model_dump(mode="json")))


@api_bp.route("/reservations/<int:reservation_id>/cancel", methods=["PUT"])
@login_required
@csrf_required("api-reservation-cancel")
def cancel_reservation(reservation_id):
    reservation = reservation_service.cancel_reservation(reservation_id, current_user.id)
    return jsonify(
        envelope(
            ReservationOut.from_model(reservation).model_dump(mode="json"),
            message="Réservation annulée avec succès",
        )
    )

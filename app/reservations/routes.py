"""Routes HTML des reservations : liste, detail, creation, annulation.

Chaque formulaire a son propre nom de jeton CSRF (un par chat, un par
reservation) : plusieurs formulaires peuvent coexister sur une meme page.
"""

import logging

from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required
from pydantic import ValidationError as PydanticValidationError

from app.errors import RentACatError, SecurityTokenError, ValidationError
from app.reservations import reservations_bp
from app.schemas.reservation import ReservationCreate
from app.services import cat_service, reservation_service
from app.services.csrf_tokens import submitted_token, verify_csrf_token

logger = logging.getLogger(__name__)


@reservations_bp.app_template_global()
def booking_form_name(cat_id) -> str:
    return f"reservation-{cat_id}"


@reservations_bp.app_template_global()
def cancel_form_name(reservation_id) -> str:
    return f"reservation-cancel-{reservation_id}"


@reservations_bp.route("")
@login_required
def list_reservations():
    """Mes reservations, les plus recentes d'abord."""
    reservations = reservation_service.list_user_reservations(current_user.id)
    return render_template("reservations/list.html", reservations=reservations)


@reservations_bp.route("/<int:reservation_id>")
@login_required
def detail(reservation_id):
    reservation = reservation_service.get_user_reservation(reservation_id, current_user.id)
    return render_template("reservations/detail.html", reservation=reservation)


@reservations_bp.route("", methods=["POST"])
@login_required
def create():
    """Reservation depuis la fiche d'un chat."""
    cat_id = request.form.get("cat_id", "")
    if not verify_csrf_token(booking_form_name(cat_id), submitted_token()):
        return _render_cat_error(cat_id, SecurityTokenError())

    try:
        payload = ReservationCreate.model_validate(
            {
                "cat_id": cat_id,
                "date_debut": request.form.get("date_debut"),
                "date_fin": request.form.get("date_fin"),
                "prix_total": request.form.get("prix_total"),
            }
        )
    except PydanticValidationError as exc:
        logger.info("Invalid reservation form: %s", exc.errors(include_url=False))
        return _render_cat_error(
            cat_id,
            ValidationError("Données manquantes: chat, date de début et date de fin sont requis"),
        )

    try:
        reservation = reservation_service.create_reservation(
            user_id=current_user.id,
            cat_id=payload.cat_id,
            date_debut=payload.date_debut,
            date_fin=payload.date_fin,
            prix_total=payload.prix_total,
        )
    except RentACatError as exc:
        return _render_cat_error(payload.cat_id, exc)

    flash("Réservation créée avec succès", "success")
    return redirect(url_for("reservations.detail", reservation_id=reservation.id))


def _render_cat_error(cat_id, exc: RentACatError):
    """Re-affiche la fiche du chat avec le message d'erreur et le bon statut."""
    try:
        cat = cat_service.get_cat(int(cat_id))
    except (ValueError, TypeError, RentACatError):
        raise exc from None
    return render_template("main/cat.html", chat=cat, error=exc.message), exc.status_code


@reservations_bp.route("/<int:reservation_id>/cancel", methods=["POST"])
@login_required
def cancel(reservation_id):
    """Annulation par le proprietaire, avant le debut de la location."""
    if not verify_csrf_token(cancel_form_name(reservation_id), submitted_token()):
        raise SecurityTokenError()

    try:
        reservation_service.cancel_reservation(reservation_id, current_user.id)
    except RentACatError as exc:
        if exc.status_code in (403, 404):
            raise
        reservation = reservation_service.get_user_reservation(reservation_id, current_user.id)
        return render_template(
            "reservations/detail.html", reservation=reservation, error=exc.message
        ), exc.status_code

    flash("Réservation annulée avec succès", "success")
    return redirect(url_for("reservations.detail", reservation_id=reservation_id))

"""Reservations : detection de conflits, calcul du prix, creation et annulation.

Les plages de dates sont fermees : ``[debut, fin]`` inclut les deux jours. Deux
reservations qui partagent un jour de bord sont donc en conflit.
"""

import logging
import math
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from app.errors import (
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from app.extensions import db
from app.models.cat import Cat
from app.models.reservation import STATUT_ANNULE, STATUT_CONFIRME, Reservation

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)
CENTS = Decimal("0.01")


def has_conflict(
    cat_id: int,
    date_debut: date,
    date_fin: date,
    exclude_reservation_id: int | None = None,
) -> bool:
    """True si une reservation non annulee du chat chevauche ``[date_debut, date_fin]``.

    ``[a, b]`` et ``[c, d]`` se chevauchent ssi ``a <= d`` et ``c <= b``.
    """
    query = Reservation.query.filter(
        Reservation.cat_id == cat_id,
        Reservation.statut != STATUT_ANNULE,
        Reservation.date_debut <= date_fin,
        Reservation.date_fin >= date_debut,
    )
    if exclude_reservation_id is not None:
        query = query.filter(Reservation.id != exclude_reservation_id)
    return db.session.query(query.exists()).scalar()


def compute_price(
    date_debut: date,
    date_fin: date,
    daily_rate: Decimal | float | int,
    explicit_price: Decimal | float | None = None,
) -> Decimal:
    """Prix total = nombre de jours (arrondi superieur) x tarif journalier.

    ``explicit_price`` vient du client : indicatif seulement, jamais retenu.
    """
    days = math.ceil(abs(date_fin - date_debut) / ONE_DAY)
    if date_fin <= date_debut or days <= 0:
        raise ValidationError("La date de fin doit être après la date de début")

    amount = (Decimal(days) * Decimal(str(daily_rate))).quantize(CENTS, rounding=ROUND_HALF_UP)

    if explicit_price is not None and Decimal(str(explicit_price)) != amount:
        logger.warning(
            "Client price hint %s ignored, computed %s (%s -> %s)",
            explicit_price,
            amount,
            date_debut,
            date_fin,
        )
    return amount


def validate_dates(date_debut: date, date_fin: date, today: date | None = None) -> None:
    """Garde-fous de la transition Requested -> Confirmed sur les dates."""
    today = today or date.today()
    if date_debut < today:
        raise ValidationError("La date de début ne peut pas être dans le passé")
    if date_fin <= date_debut:
        raise ValidationError("La date de fin doit être après la date de début")


def create_reservation(
    user_id: int,
    cat_id: int,
    date_debut: date,
    date_fin: date,
    prix_total: Decimal | float | None = None,
    today: date | None = None,
) -> Reservation:
    """Cree une reservation confirmee.

    La ligne du chat est verrouillee (SELECT ... FOR UPDATE) avant le controle de
    conflit : le controle et l'insertion partagent la meme transaction.

    Raises:
        NotFoundError: chat inconnu.
        ValidationError: chat indisponible ou dates invalides.
        ConflictError: le chat est deja reserve sur la periode.
        InternalError: echec du stockage.
    """
    validate_dates(date_debut, date_fin, today)

    try:
        cat = db.session.query(Cat).filter(Cat.id == cat_id).with_for_update().one_or_none()
        if cat is None:
            raise NotFoundError("Chat non trouvé")
        if not cat.disponible:
            raise ValidationError("Ce chat n'est pas disponible à la réservation")

        if has_conflict(cat.id, date_debut, date_fin):
            raise ConflictError("Ce chat est déjà réservé pour cette période")

        reservation = Reservation(
            user_id=user_id,
            cat_id=cat.id,
            date_debut=date_debut,
            date_fin=date_fin,
            prix_total=compute_price(date_debut, date_fin, cat.prix, prix_total),
            statut=STATUT_CONFIRME,
        )
        db.session.add(reservation)
        db.session.commit()
    except (NotFoundError, ValidationError, ConflictError):
        db.session.rollback()
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Reservation insert failed for cat %s: %s", cat_id, exc)
        raise InternalError("Erreur serveur lors de la création de la réservation") from exc

    logger.info(
        "Reservation %s created: user=%s cat=%s %s -> %s total=%s",
        reservation.id,
        user_id,
        cat_id,
        date_debut,
        date_fin,
        reservation.prix_total,
    )
    return reservation


def list_user_reservations(user_id: int) -> list[Reservation]:
    """Reservations d'un utilisateur, les plus recentes d'abord."""
    return (
        Reservation.query.filter_by(user_id=user_id)
        .options(joinedload(Reservation.cat))
        .order_by(Reservation.created_at.desc(), Reservation.id.desc())
        .all()
    )


def get_user_reservation(reservation_id: int, user_id: int) -> Reservation:
    """Charge une reservation appartenant a ``user_id``.

    Raises:
        NotFoundError: reservation inconnue.
        AuthorizationError: la reservation appartient a un autre utilisateur.
    """
    reservation = db.session.get(Reservation, reservation_id)
    if reservation is None:
        raise NotFoundError("Réservation non trouvée")
    if reservation.user_id != user_id:
        raise AuthorizationError("Accès non autorisé à cette réservation")
    return reservation


def cancel_reservation(reservation_id: int, user_id: int, today: date | None = None) -> Reservation:
    """Passe une reservation confirmee a l'etat annule.

    Raises:
        NotFoundError, AuthorizationError: voir ``get_user_reservation``.
        ConflictError: reservation deja annulee (aucun changement).
        ValidationError: la location a deja commence.
    """
    reservation = get_user_reservation(reservation_id, user_id)
    if reservation.is_cancelled:
        raise ConflictError("Cette réservation est déjà annulée")

    today = today or date.today()
    if reservation.date_debut <= today:
        raise ValidationError("Impossible d'annuler une réservation déjà commencée")

    reservation.statut = STATUT_ANNULE
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Cancel failed for reservation %s: %s", reservation_id, exc)
        raise InternalError("Erreur serveur lors de l'annulation") from exc

    logger.info("Reservation %s cancelled by user %s", reservation_id, user_id)
    return reservation

"""Catalogue des chats : consultation publique et gestion par les administrateurs."""

import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from app.errors import InternalError, NotFoundError
from app.extensions import db
from app.models.cat import Cat

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "nom",
    "age",
    "race",
    "couleur",
    "caractere",
    "jouet_prefere",
    "prix",
    "description",
    "disponible",
)


def list_available_cats() -> list[Cat]:
    return Cat.query.filter_by(disponible=True).order_by(Cat.nom).all()


def list_all_cats() -> list[Cat]:
    return Cat.query.order_by(Cat.nom).all()


def get_cat(cat_id: int, include_unavailable: bool = False) -> Cat:
    """Charge un chat ; un chat indisponible est invisible sauf demande explicite."""
    cat = db.session.get(Cat, cat_id)
    if cat is None or (not cat.disponible and not include_unavailable):
        raise NotFoundError("Chat non trouvé")
    return cat


def _apply(cat: Cat, data: dict) -> None:
    for field in EDITABLE_FIELDS:
        if field in data:
            setattr(cat, field, data[field])
    if cat.prix is not None:
        cat.prix = Decimal(str(cat.prix))


def create_cat(data: dict) -> Cat:
    cat = Cat()
    _apply(cat, data)
    db.session.add(cat)
    _commit("create")
    logger.info("Cat %s added to catalogue (%s)", cat.id, cat.nom)
    return cat


def update_cat(cat: Cat, data: dict) -> Cat:
    _apply(cat, data)
    _commit("update")
    logger.info("Cat %s updated (disponible=%s)", cat.id, cat.disponible)
    return cat


def _commit(action: str) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Cat %s failed: %s", action, exc)
        raise InternalError("Erreur lors de l'enregistrement du chat.") from exc

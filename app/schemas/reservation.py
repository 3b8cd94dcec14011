"""Schemas Pydantic pour les reservations (API JSON et formulaire HTML)."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


class ReservationCreate(BaseModel):
    """Demande de reservation.

    Accepte les noms historiques (``chatId``, ``dateDebut``, ``dateFin``,
    ``prixTotal``) comme les noms de colonnes. ``prix_total`` n'est qu'indicatif.
    """

    model_config = ConfigDict(populate_by_name=True)

    cat_id: int = Field(..., alias="chatId", gt=0)
    date_debut: date = Field(..., alias="dateDebut")
    date_fin: date = Field(..., alias="dateFin")
    prix_total: Decimal | None = Field(None, alias="prixTotal")

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data):
        if isinstance(data, dict):
            return {k: (None if v == "" else v) for k, v in data.items()}
        return data

    @field_validator("prix_total", mode="before")
    @classmethod
    def _hint_or_none(cls, value):
        """Un prix indicatif illisible ou negatif est ignore, jamais bloquant."""
        if value is None or isinstance(value, bool):
            return None
        try:
            hint = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return None
        if not hint.is_finite() or hint < 0:
            return None
        return hint


class ReservationOut(BaseModel):
    """Reservation renvoyee par l'API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    cat_id: int
    chat_nom: str | None = None
    date_debut: date
    date_fin: date
    prix_total: Decimal
    statut: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("prix_total")
    def _prix_as_number(self, value: Decimal) -> float:
        return float(value)

    @classmethod
    def from_model(cls, reservation) -> "ReservationOut":
        out = cls.model_validate(reservation)
        out.chat_nom = reservation.cat.nom if reservation.cat is not None else None
        return out

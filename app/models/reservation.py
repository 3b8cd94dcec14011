"""Modele Reservation -- location d'un chat sur une plage de dates fermee."""

from datetime import datetime, timezone

from app.extensions import db

STATUT_CONFIRME = "confirme"
STATUT_ANNULE = "annule"


class Reservation(db.Model):
    """Reservation d'un chat par un utilisateur.

    ``date_debut`` et ``date_fin`` sont toutes deux incluses. Une reservation
    annulee reste en base pour l'historique.
    """

    __tablename__ = "reservations"
    __table_args__ = (db.Index("ix_reservations_cat_statut", "cat_id", "statut"),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    cat_id = db.Column(db.Integer, db.ForeignKey("chats.id"), nullable=False)
    date_debut = db.Column(db.Date, nullable=False)
    date_fin = db.Column(db.Date, nullable=False)
    prix_total = db.Column(db.Numeric(10, 2), nullable=False)
    statut = db.Column(db.String(20), nullable=False, default=STATUT_CONFIRME)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user = db.relationship("User", back_populates="reservations")
    cat = db.relationship("Cat", back_populates="reservations")

    @property
    def is_cancelled(self) -> bool:
        return self.statut == STATUT_ANNULE

    def __repr__(self):
        return f"<Reservation {self.id} chat={self.cat_id} [{self.statut}]>"

"""Modele Cat -- le catalogue des chats a louer."""

from datetime import datetime, timezone

from app.extensions import db


class Cat(db.Model):
    """Chat du catalogue. ``prix`` est le tarif journalier."""

    __tablename__ = "chats"

    id = db.Column(db.Integer, primary_key=True)
    nom = db.Column(db.String(100), nullable=False, index=True)
    age = db.Column(db.Integer)
    race = db.Column(db.String(100))
    couleur = db.Column(db.String(50))
    caractere = db.Column(db.String(255))
    jouet_prefere = db.Column(db.String(255))
    prix = db.Column(db.Numeric(10, 2), nullable=False)
    description = db.Column(db.Text)
    image = db.Column(db.String(255))
    disponible = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    reservations = db.relationship("Reservation", back_populates="cat", lazy="select")

    def __repr__(self):
        return f"<Cat {self.nom} prix={self.prix}>"

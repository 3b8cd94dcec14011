"""Modele User -- comptes clients et administrateurs, charges par Flask-Login."""

from datetime import datetime, timezone

from flask_login import UserMixin

from app.extensions import db


class User(UserMixin, db.Model):
    """Utilisateur inscrit. L'email est unique et compare tel que stocke."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    nom = db.Column(db.String(100), nullable=False)
    prenom = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    image = db.Column(db.String(255))
    description = db.Column(db.Text)
    administrateur = db.Column(db.Boolean, nullable=False, default=False)
    perso = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    reservations = db.relationship("Reservation", back_populates="user", lazy="select")

    @property
    def display_name(self) -> str:
        return f"{self.prenom} {self.nom}"

    @property
    def is_admin(self) -> bool:
        return bool(self.administrateur)

    def __repr__(self):
        return f"<User {self.email}>"

#!/usr/bin/env python3
"""Seed du catalogue -- quelques chats de demonstration.

Script idempotent : un chat deja present (meme nom) n'est pas recree.
Usage : python data/seeds/seed_cats.py
"""

import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from app import create_app  # noqa: E402
from app.extensions import db  # noqa: E402
from app.models.cat import Cat  # noqa: E402

CATS = [
    # (nom, age, race, couleur, caractere, jouet_prefere, prix/jour)
    ("Minou", 3, "Persan", "Blanc", "Calme et câlin", "Pelote de laine", "25.00"),
    ("Garfield", 5, "Maine Coon", "Roux", "Gourmand, paresseux", "Coussin", "30.00"),
    ("Tigrou", 2, "Européen", "Tigré", "Joueur", "Souris en peluche", "18.50"),
    ("Cléopâtre", 4, "Sphynx", "Rose", "Curieuse et bavarde", "Plume", "35.00"),
    ("Moustache", 7, "Chartreux", "Gris", "Indépendant", "Balle", "22.00"),
    ("Neige", 1, "Ragdoll", "Crème", "Doux, aime les genoux", "Laser", "28.00"),
]


def seed():
    """Insere les chats en base. Idempotent."""
    app = create_app()

    with app.app_context():
        db.create_all()
        created = 0

        for nom, age, race, couleur, caractere, jouet, prix in CATS:
            if Cat.query.filter_by(nom=nom).first():
                print(f"  [skip] {nom} existe deja")
                continue

            db.session.add(
                Cat(
                    nom=nom,
                    age=age,
                    race=race,
                    couleur=couleur,
                    caractere=caractere,
                    jouet_prefere=jouet,
                    prix=Decimal(prix),
                    disponible=True,
                )
            )
            created += 1
            print(f"  [+] {nom} ({race}, {prix} EUR/jour)")

        db.session.commit()
        print(f"\nResultat : {created} chats crees, {Cat.query.count()} au catalogue")


if __name__ == "__main__":
    seed()

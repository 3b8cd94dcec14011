"""Shared pytest fixtures for Rent a Cat tests."""

import re
from datetime import date, timedelta
from decimal import Decimal
from functools import lru_cache

import pytest

from app import create_app
from app.extensions import db as _db
from app.models.cat import Cat
from app.models.reservation import STATUT_CONFIRME, Reservation
from app.models.user import User
from app.services.auth_service import hash_password

DEFAULT_PASSWORD = "Abcd1234"

CSRF_RE = re.compile(r'name="csrf_token" value="([0-9a-f]{64})"')


@lru_cache(maxsize=None)
def _hashed(password):
    # scrypt est volontairement lent : un hash par mot de passe suffit
    return hash_password(password)


@pytest.fixture(scope="session")
def app():
    """Create application for testing.

    Aucun contexte n'est garde ouvert : chaque requete du client de test
    charge son propre utilisateur Flask-Login.
    """
    app = create_app("testing")
    yield app
    with app.app_context():
        _db.drop_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def db(app):
    """Database session for a test, inside an app context."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.rollback()


@pytest.fixture(autouse=True)
def _clean_tables(app):
    """Vide toutes les tables apres chaque test."""
    yield
    with app.app_context():
        _db.session.remove()
        _db.create_all()
        for table in reversed(_db.metadata.sorted_tables):
            _db.session.execute(table.delete())
        _db.session.commit()


@pytest.fixture()
def make_user(app):
    """Fabrique d'utilisateurs ; retourne l'id."""

    def _make(email="a@b.com", password=DEFAULT_PASSWORD, nom="Dupont", prenom="Jean", **kw):
        with app.app_context():
            user = User(
                nom=nom,
                prenom=prenom,
                email=email,
                password_hash=_hashed(password),
                **kw,
            )
            _db.session.add(user)
            _db.session.commit()
            return user.id

    return _make


@pytest.fixture()
def make_cat(app):
    """Fabrique de chats ; retourne l'id."""

    def _make(nom="Minou", prix="25.00", disponible=True, **kw):
        with app.app_context():
            cat = Cat(nom=nom, prix=Decimal(prix), disponible=disponible, **kw)
            _db.session.add(cat)
            _db.session.commit()
            return cat.id

    return _make


@pytest.fixture()
def make_reservation(app):
    """Insere une reservation sans passer par le service (dates libres)."""

    def _make(user_id, cat_id, date_debut, date_fin, prix_total="75.00", statut=STATUT_CONFIRME):
        with app.app_context():
            reservation = Reservation(
                user_id=user_id,
                cat_id=cat_id,
                date_debut=date_debut,
                date_fin=date_fin,
                prix_total=Decimal(prix_total),
                statut=statut,
            )
            _db.session.add(reservation)
            _db.session.commit()
            return reservation.id

    return _make


def extract_csrf(html):
    match = CSRF_RE.search(html)
    assert match is not None, "no csrf_token field in page"
    return match.group(1)


@pytest.fixture()
def csrf_for():
    """Charge une page et retourne le jeton CSRF de son formulaire."""

    def _get(client, url):
        resp = client.get(url)
        assert resp.status_code == 200
        return extract_csrf(resp.get_data(as_text=True))

    return _get


@pytest.fixture()
def login(csrf_for):
    """Connecte le client de test via le vrai formulaire."""

    def _login(client, email="a@b.com", password=DEFAULT_PASSWORD):
        token = csrf_for(client, "/login")
        return client.post(
            "/login",
            data={"csrf_token": token, "email": email, "password": password},
        )

    return _login


@pytest.fixture()
def future():
    """Dates relatives a aujourd'hui : future(10) = dans 10 jours."""

    def _future(days):
        return date.today() + timedelta(days=days)

    return _future

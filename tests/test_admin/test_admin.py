"""Tests du blueprint admin : acces, catalogue, journal."""

from decimal import Decimal

import pytest

from app.admin.routes import ensure_admin_user
from app.extensions import db
from app.models.cat import Cat
from app.models.log import AppLog
from app.models.user import User


@pytest.fixture()
def admin_client(client, make_user, login):
    """Client connecte en administrateur."""
    make_user(email="admin@example.com", administrateur=True)
    login(client, email="admin@example.com")
    return client


def _cat_data(token, **overrides):
    data = {
        "csrf_token": token,
        "nom": "Cléopâtre",
        "age": "4",
        "race": "Sphynx",
        "prix": "35.00",
        "disponible": "y",
    }
    data.update(overrides)
    return data


# ── Acces ───────────────────────────────────────────────────────


class TestAccess:
    def test_anonymous_redirected_to_login(self, client):
        resp = client.get("/admin/chats")
        assert resp.status_code == 302
        assert "/login" in resp.headers["Location"]

    def test_regular_user_forbidden(self, client, make_user, login):
        make_user()
        login(client)
        resp = client.get("/admin/chats")
        assert resp.status_code == 403
        assert "réservée aux administrateurs" in resp.get_data(as_text=True)

    def test_admin_sees_catalogue(self, admin_client, make_cat):
        make_cat(nom="Fantome", disponible=False)
        page = admin_client.get("/admin/").get_data(as_text=True)
        assert "Fantome" in page
        assert "Non" in page


# ── Catalogue ───────────────────────────────────────────────────


class TestCats:
    def test_add_cat(self, app, admin_client, csrf_for):
        token = csrf_for(admin_client, "/admin/chats/ajout")
        resp = admin_client.post("/admin/chats/ajout", data=_cat_data(token))
        assert resp.status_code == 302

        with app.app_context():
            cat = Cat.query.filter_by(nom="Cléopâtre").one()
            assert cat.prix == Decimal("35.00")
            assert cat.age == 4
            assert cat.disponible is True

    def test_add_cat_requires_price(self, admin_client, csrf_for):
        token = csrf_for(admin_client, "/admin/chats/ajout")
        resp = admin_client.post("/admin/chats/ajout", data=_cat_data(token, prix=""))
        assert resp.status_code == 400

    def test_add_free_cat(self, app, admin_client, csrf_for):
        token = csrf_for(admin_client, "/admin/chats/ajout")
        resp = admin_client.post("/admin/chats/ajout", data=_cat_data(token, prix="0"))
        assert resp.status_code == 302

        with app.app_context():
            assert Cat.query.filter_by(nom="Cléopâtre").one().prix == Decimal("0")

    def test_add_cat_without_token(self, app, admin_client):
        resp = admin_client.post("/admin/chats/ajout", data=_cat_data(""))
        assert resp.status_code == 403
        with app.app_context():
            assert Cat.query.count() == 0

    def test_edit_cat_availability(self, app, admin_client, make_cat, csrf_for):
        cid = make_cat(nom="Minou", prix="25.00")
        token = csrf_for(admin_client, f"/admin/chats/{cid}/edit")

        # Case decochee : le champ n'est pas envoye
        data = _cat_data(token, nom="Minou", prix="27.50")
        del data["disponible"]
        resp = admin_client.post(f"/admin/chats/{cid}/edit", data=data)
        assert resp.status_code == 302

        with app.app_context():
            cat = db.session.get(Cat, cid)
            assert cat.disponible is False
            assert cat.prix == Decimal("27.50")

        # Indisponible : absent du catalogue public, visible par l'admin
        assert admin_client.get(f"/chats/{cid}").status_code == 200
        assert "Minou" not in admin_client.get("/").get_data(as_text=True)

    def test_edit_unknown_cat(self, admin_client):
        assert admin_client.get("/admin/chats/4242/edit").status_code == 404


# ── Journal ─────────────────────────────────────────────────────


class TestLogs:
    def test_logs_filtered_by_level(self, app, admin_client):
        with app.app_context():
            db.session.add_all(
                [
                    AppLog(level="WARNING", module="test.admin", message="attention chat"),
                    AppLog(level="ERROR", module="test.admin", message="panne litiere"),
                ]
            )
            db.session.commit()

        page = admin_client.get("/admin/logs?level=error").get_data(as_text=True)
        assert "panne litiere" in page
        assert "attention chat" not in page

        page = admin_client.get("/admin/logs").get_data(as_text=True)
        assert "attention chat" in page


# ── Compte administrateur ───────────────────────────────────────


def test_ensure_admin_user_is_idempotent(app):
    with app.app_context():
        ensure_admin_user()
        ensure_admin_user()
        admins = User.query.filter_by(email=app.config["ADMIN_EMAIL"]).all()
        assert len(admins) == 1
        assert admins[0].is_admin is True

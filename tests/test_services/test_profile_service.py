"""Tests de l'edition de profil."""

import io
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.datastructures import FileStorage

from app.errors import ConflictError, InternalError
from app.models.user import User
from app.services import profile_service, upload_service

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 32


def _png(name="moi.png"):
    return FileStorage(stream=io.BytesIO(PNG_BYTES), filename=name, content_type="image/png")


def test_update_fields(db, make_user):
    user = db.session.get(User, make_user())
    profile_service.update_profile(user, "Durand", "Marie", "marie@example.com", "J'aime les chats")

    db.session.expire_all()
    saved = db.session.get(User, user.id)
    assert saved.nom == "Durand"
    assert saved.email == "marie@example.com"
    assert saved.description == "J'aime les chats"


def test_email_taken_by_other(db, make_user):
    make_user(email="pris@example.com")
    user = db.session.get(User, make_user(email="a@b.com"))
    with pytest.raises(ConflictError):
        profile_service.update_profile(user, "Dupont", "Jean", "pris@example.com", None)


def test_keeping_own_email_is_fine(db, make_user):
    user = db.session.get(User, make_user(email="a@b.com"))
    profile_service.update_profile(user, "Dupont", "Jean", "a@b.com", "")
    assert user.description is None


def test_new_image_replaces_old(db, make_user):
    user = db.session.get(User, make_user())
    profile_service.update_profile(user, "Dupont", "Jean", "a@b.com", None, image=_png())
    first = user.image
    first_path = upload_service.upload_root() / first
    assert first_path.exists()

    profile_service.update_profile(user, "Dupont", "Jean", "a@b.com", None, image=_png())
    assert user.image != first
    assert not first_path.exists()
    assert (upload_service.upload_root() / user.image).exists()


def test_new_image_removed_when_commit_fails(db, make_user):
    user = db.session.get(User, make_user())
    root = upload_service.upload_root() / upload_service.PROFILE_DIR
    before = set(root.glob("*")) if root.exists() else set()

    with patch.object(
        db.session, "commit", side_effect=OperationalError("UPDATE", {}, Exception("down"))
    ):
        with pytest.raises(InternalError):
            profile_service.update_profile(user, "Dupont", "Jean", "a@b.com", None, image=_png())

    after = set(root.glob("*"))
    assert after == before


def test_email_taken_at_commit_is_a_conflict(db, make_user):
    """Un autre compte prend l'email entre la verification et le commit."""
    user = db.session.get(User, make_user())
    root = upload_service.upload_root() / upload_service.PROFILE_DIR
    before = set(root.glob("*")) if root.exists() else set()

    with patch.object(
        db.session, "commit", side_effect=IntegrityError("UPDATE", {}, Exception("unique"))
    ):
        with pytest.raises(ConflictError) as exc_info:
            profile_service.update_profile(
                user, "Dupont", "Jean", "pris@b.com", None, image=_png()
            )

    assert exc_info.value.status_code == 409
    assert set(root.glob("*")) == before

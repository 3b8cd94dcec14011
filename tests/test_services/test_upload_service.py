"""Tests du stockage des images de profil."""

import io

import pytest
from werkzeug.datastructures import FileStorage

from app.errors import ValidationError
from app.services import upload_service

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 32


def _file(data, filename, content_type="image/png"):
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)


class TestValidateFile:
    def test_accepts_known_extensions(self):
        assert upload_service.validate_file(_file(PNG_BYTES, "moi.PNG")) == ".png"
        assert upload_service.validate_file(_file(JPEG_BYTES, "moi.jpeg")) == ".jpeg"

    def test_rejects_other_extensions(self):
        with pytest.raises(ValidationError):
            upload_service.validate_file(_file(PNG_BYTES, "script.php"))

    def test_rejects_missing_file(self):
        with pytest.raises(ValidationError):
            upload_service.validate_file(None)


class TestSniff:
    def test_png_and_jpeg(self, app):
        with app.app_context():
            assert upload_service.sniff_image(PNG_BYTES) == "image/png"
            assert upload_service.sniff_image(JPEG_BYTES) == "image/jpeg"

    def test_text_disguised_as_image(self, app):
        with app.app_context():
            with pytest.raises(ValidationError):
                upload_service.sniff_image(b"<?php echo 'hello'; ?>" * 4)

    def test_empty(self, app):
        with app.app_context():
            with pytest.raises(ValidationError):
                upload_service.sniff_image(b"")

    def test_too_large(self, app):
        with app.app_context():
            with pytest.raises(ValidationError):
                upload_service.sniff_image(PNG_BYTES + b"\x00" * (2 * 1024 * 1024))


class TestStorage:
    def test_save_writes_under_profiles(self, app):
        with app.app_context():
            rel = upload_service.save_profile_image(_file(PNG_BYTES, "moi.png"), user_id=7)
            path = upload_service.upload_root() / rel

            assert rel.startswith("profiles/profile-7-")
            assert rel.endswith(".png")
            assert path.read_bytes() == PNG_BYTES

            upload_service.cleanup_file(rel)
            assert not path.exists()

    def test_declared_type_is_not_trusted(self, app):
        fake = _file(b"GIF89a" + b"\x00" * 32, "moi.png", content_type="image/png")
        with app.app_context():
            with pytest.raises(ValidationError):
                upload_service.save_profile_image(fake, user_id=7)
            assert not list((upload_service.upload_root() / "profiles").glob("profile-7-*"))

    def test_cleanup_refuses_paths_outside_root(self, app, tmp_path):
        outside = tmp_path / "keep.txt"
        outside.write_text("x")
        with app.app_context():
            root = upload_service.upload_root().resolve()
            upload_service.cleanup_file("../" * len(root.parts) + str(outside).lstrip("/"))
        assert outside.exists()

    def test_cleanup_missing_file_is_silent(self, app):
        with app.app_context():
            upload_service.cleanup_file("profiles/does-not-exist.png")
            upload_service.cleanup_file(None)

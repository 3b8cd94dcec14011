"""Schema commun d'enveloppe de reponse API."""

from typing import Any

from pydantic import BaseModel


class APIResponse(BaseModel):
    """Enveloppe de reponse API uniforme.

    Succes : {"success": true, "error": null, "message": "...", "data": {...}}
    Erreur : {"success": false, "error": "CODE", "message": "...", "data": null}
    """

    success: bool
    error: str | None = None
    message: str | None = None
    data: Any = None


def envelope(data: Any = None, message: str | None = None) -> dict:
    return APIResponse(success=True, message=message, data=data).model_dump(mode="json")


def error_envelope(code: str, message: str) -> dict:
    return APIResponse(success=False, error=code, message=message).model_dump(mode="json")

"""Routes du blueprint profil."""

import logging

from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from app.errors import ConflictError, InternalError, SecurityTokenError, ValidationError
from app.forms import ProfileForm, first_error
from app.profile import profile_bp
from app.services import profile_service
from app.services.csrf_tokens import submitted_token, verify_csrf_token

logger = logging.getLogger(__name__)


@profile_bp.route("")
@login_required
def show():
    """Profil de l'utilisateur connecte."""
    return render_template("profile/show.html", user=current_user)


@profile_bp.route("/edit", methods=["GET", "POST"])
@login_required
def edit():
    """Formulaire d'edition du profil (multipart, une image max 2 Mo)."""
    if request.method == "GET":
        form = ProfileForm(obj=current_user)
        return render_template("profile/edit.html", form=form, error=None)

    form = ProfileForm()
    if not verify_csrf_token("profile-edit", submitted_token()):
        return _render_edit(form, SecurityTokenError().message, 403)

    if not form.validate():
        return _render_edit(form, first_error(form), 400)

    try:
        profile_service.update_profile(
            current_user._get_current_object(),
            nom=form.nom.data,
            prenom=form.prenom.data,
            email=form.email.data,
            description=form.description.data,
            image=form.profile_image.data,
        )
    except (ValidationError, ConflictError, InternalError) as exc:
        return _render_edit(form, exc.message, exc.status_code)

    flash("Profil mis à jour avec succès !", "success")
    return redirect(url_for("profile.show"))


def _render_edit(form, error, status):
    return render_template("profile/edit.html", form=form, error=error), status

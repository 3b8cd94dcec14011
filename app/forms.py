"""Formulaires HTML (Flask-WTF).

La protection CSRF de WTForms est desactivee : chaque formulaire porte un jeton
a usage unique emis par ``app.services.csrf_tokens``.
"""

from flask_wtf import FlaskForm
from flask_wtf.file import FileAllowed, FileField, FileSize
from wtforms import (
    BooleanField,
    DecimalField,
    EmailField,
    IntegerField,
    PasswordField,
    StringField,
    TextAreaField,
)
from wtforms.validators import (
    DataRequired,
    EqualTo,
    InputRequired,
    Length,
    NumberRange,
    Optional,
    Regexp,
    ValidationError,
)

NAME_PATTERN = r"^[a-zA-ZÀ-ÿ\s'-]+$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
NAME_MESSAGE = "doit contenir entre 2 et 100 caractères et uniquement des lettres."
IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "webp"]
MAX_IMAGE_BYTES = 2 * 1024 * 1024


class _NoCsrfForm(FlaskForm):
    class Meta:
        csrf = False


def _name_field(label: str):
    return StringField(
        label,
        filters=[lambda v: v.strip() if v else v],
        validators=[
            DataRequired(message=f"Le {label.lower()} est requis."),
            Length(min=2, max=100, message=f"Le {label.lower()} {NAME_MESSAGE}"),
            Regexp(NAME_PATTERN, message=f"Le {label.lower()} {NAME_MESSAGE}"),
        ],
    )


def _email_field():
    return EmailField(
        "Email",
        filters=[lambda v: v.strip() if v else v],
        validators=[
            DataRequired(message="L'email est requis."),
            Length(max=255, message="Format d'email invalide."),
            Regexp(EMAIL_PATTERN, message="Format d'email invalide."),
        ],
    )


def password_strength(form, field):
    """Au moins une majuscule, une minuscule et un chiffre."""
    value = field.data or ""
    if not (
        any(c.isupper() for c in value)
        and any(c.islower() for c in value)
        and any(c.isdigit() for c in value)
    ):
        raise ValidationError(
            "Le mot de passe doit contenir au moins une majuscule, une minuscule et un chiffre."
        )


class LoginForm(_NoCsrfForm):
    email = _email_field()
    password = PasswordField(
        "Mot de passe", validators=[DataRequired(message="Email et mot de passe requis.")]
    )


class RegisterForm(_NoCsrfForm):
    nom = _name_field("Nom")
    prenom = _name_field("Prénom")
    email = _email_field()
    password = PasswordField(
        "Mot de passe",
        validators=[
            DataRequired(message="Le mot de passe est requis."),
            Length(min=8, message="Le mot de passe doit contenir au moins 8 caractères."),
            Length(max=100, message="Le mot de passe ne peut pas dépasser 100 caractères."),
            password_strength,
        ],
    )
    confirm_password = PasswordField(
        "Confirmer le mot de passe",
        validators=[
            DataRequired(message="Tous les champs sont requis."),
            EqualTo("password", message="Les mots de passe ne correspondent pas."),
        ],
    )


class ProfileForm(_NoCsrfForm):
    nom = _name_field("Nom")
    prenom = _name_field("Prénom")
    email = _email_field()
    description = TextAreaField(
        "Description",
        validators=[
            Optional(),
            Length(max=1000, message="La description ne peut pas dépasser 1000 caractères."),
        ],
    )
    profile_image = FileField(
        "Photo de profil",
        validators=[
            FileAllowed(
                IMAGE_EXTENSIONS, "Format de fichier non autorisé. Utilisez JPG, PNG ou WebP."
            ),
            FileSize(
                max_size=MAX_IMAGE_BYTES,
                message="Le fichier est trop volumineux. Taille maximum: 2MB.",
            ),
        ],
    )


class CatForm(_NoCsrfForm):
    nom = StringField("Nom", validators=[DataRequired(), Length(max=100)])
    age = IntegerField("Âge", validators=[Optional(), NumberRange(min=0, max=40)])
    race = StringField("Race", validators=[Optional(), Length(max=100)])
    couleur = StringField("Couleur", validators=[Optional(), Length(max=50)])
    caractere = StringField("Caractère", validators=[Optional(), Length(max=255)])
    jouet_prefere = StringField("Jouet préféré", validators=[Optional(), Length(max=255)])
    prix = DecimalField(
        "Prix par jour",
        places=2,
        # 0 est un prix valide
        validators=[InputRequired(message="Le prix est requis."), NumberRange(min=0)],
    )
    description = TextAreaField("Description", validators=[Optional(), Length(max=2000)])
    disponible = BooleanField("Disponible", default=True)

    def to_dict(self) -> dict:
        return {
            "nom": self.nom.data.strip(),
            "age": self.age.data,
            "race": self.race.data or None,
            "couleur": self.couleur.data or None,
            "caractere": self.caractere.data or None,
            "jouet_prefere": self.jouet_prefere.data or None,
            "prix": self.prix.data,
            "description": self.description.data or None,
            "disponible": bool(self.disponible.data),
        }


def first_error(form: FlaskForm) -> str:
    """Premier message d'erreur du formulaire, dans l'ordre des champs."""
    for field in form:
        if field.errors:
            return field.errors[0]
    return "Données invalides."

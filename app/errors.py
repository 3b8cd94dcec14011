"""Hierarchie d'exceptions Rent a Cat.

Regles :
  - Chaque exception porte son statut HTTP et un code stable pour l'API JSON.
  - Le message d'une exception est destine au client : jamais de details internes.
  - Les vues attrapent les erreurs metier a la frontiere et re-affichent le formulaire ;
    les gestionnaires applicatifs ne voient que ce qui n'a pas ete traite.
"""


class RentACatError(Exception):
    """Exception de base pour toutes les erreurs Rent a Cat."""

    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Une erreur est survenue. Veuillez réessayer plus tard."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(RentACatError):
    """Les donnees d'entree sont absentes ou mal formees."""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Données invalides."


class AuthenticationError(RentACatError):
    """Identifiants invalides -- message volontairement generique."""

    status_code = 401
    code = "AUTHENTICATION_ERROR"
    default_message = "Email ou mot de passe incorrect."


class AuthorizationError(RentACatError):
    """L'utilisateur agit sur une ressource qui ne lui appartient pas."""

    status_code = 403
    code = "FORBIDDEN"
    default_message = "Accès non autorisé."


class SecurityTokenError(RentACatError):
    """Jeton CSRF absent, expire ou different."""

    status_code = 403
    code = "CSRF_ERROR"
    default_message = "Token de sécurité invalide. Veuillez réessayer."


class NotFoundError(RentACatError):
    """Chat, reservation ou utilisateur inconnu."""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "Ressource introuvable."


class ConflictError(RentACatError):
    """Email deja utilise, dates deja reservees, reservation deja annulee."""

    status_code = 409
    code = "CONFLICT"
    default_message = "Conflit avec l'état actuel de la ressource."


class InternalError(RentACatError):
    """Echec du stockage ou erreur inattendue."""

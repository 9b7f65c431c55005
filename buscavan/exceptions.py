"""
Erreurs métier levées par les services.

Elles héritent de ValueError, comme les erreurs des autres services :
les routers les traduisent en codes HTTP.
"""


class TripError(ValueError):
    """Base des erreurs du module voyages."""


class NotFoundError(TripError):
    """L'entité ciblée par l'opération n'existe pas."""


class ReferentialIntegrityError(TripError):
    """Une entité référencée (ville, véhicule, propriétaire, commentaire parent) n'existe pas."""


class UploadError(TripError):
    """Échec de l'envoi du fichier vers le stockage."""


class SignedUrlError(TripError):
    """Échec de la génération de l'URL signée."""


class LocationDirectoryError(TripError):
    """L'annuaire des états / villes n'a pas répondu correctement."""

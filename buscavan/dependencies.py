"""
Dépendances FastAPI partagées : identité de l'appelant et clients externes.
Les tests les remplacent via app.dependency_overrides.
"""

from typing import Optional

from fastapi import Header, HTTPException

from buscavan.config import settings
from buscavan.schemas.actor import ActorContext
from buscavan.services.location_directory import LocationDirectory
from buscavan.services.storage_client import StorageClient


def get_actor(x_user_id: Optional[str] = Header(default=None)) -> ActorContext:
    """
    Identité du motoriste, posée dans l'en-tête X-User-Id par la passerelle
    d'authentification en amont.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Utilisateur non authentifié.")
    return ActorContext(owner_id=x_user_id)


def get_storage():
    """Client Supabase Storage, fermé après la requête."""
    storage = StorageClient(
        settings.SUPABASE_URL,
        settings.SUPABASE_KEY,
        settings.STORAGE_BUCKET,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
    try:
        yield storage
    finally:
        storage.close()


def get_location_directory():
    """Client de l'annuaire des localités, fermé après la requête."""
    directory = LocationDirectory(settings.LOCATIONS_API_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)
    try:
        yield directory
    finally:
        directory.close()

"""
Rattachement de la photo de destination d'un voyage.
Envoie le fichier vers le stockage puis obtient une URL signée quasi permanente.
"""

import logging
import uuid

import httpx
from fastapi import UploadFile

from buscavan.config import settings
from buscavan.exceptions import SignedUrlError
from buscavan.services.storage_client import StorageClient

logger = logging.getLogger(__name__)


def attach_media(storage: StorageClient, key_hint: str, file: UploadFile) -> str:
    """
    Envoie le fichier sous une clé unique préfixée par key_hint (ex. "3-trip-<uuid>")
    et retourne son URL signée.

    Lève UploadError si l'envoi échoue, SignedUrlError si la signature échoue.
    Dans ce dernier cas l'objet envoyé est supprimé avant de relever l'erreur.
    """
    content = file.file.read()
    key = f"{key_hint}-{uuid.uuid4().hex}"  # Un objet par envoi : aucune photo existante n'est écrasée
    path = storage.upload(content, key, file.content_type or "application/octet-stream")

    try:
        return storage.create_signed_url(path, settings.SIGNED_URL_TTL_SECONDS)
    except SignedUrlError:
        _discard(storage, path)
        raise


def _discard(storage: StorageClient, path: str) -> None:
    """Action compensatoire : retire l'objet orphelin. Un échec est seulement journalisé."""
    try:
        storage.remove([path])
    except httpx.HTTPError as exc:
        logger.error("Impossible de supprimer l'objet orphelin %s : %s", path, exc)

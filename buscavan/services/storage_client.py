"""
Client minimal de l'API REST Supabase Storage.

Trois opérations : envoi d'un objet, création d'une URL signée, suppression.
Les erreurs du fournisseur sont remontées avec leur message d'origine.
"""

import logging
from typing import Optional

import httpx

from buscavan.exceptions import SignedUrlError, UploadError

logger = logging.getLogger(__name__)


class StorageClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        bucket: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.bucket = bucket
        self.storage_url = f"{base_url.rstrip('/')}/storage/v1"
        self._client = httpx.Client(
            base_url=self.storage_url,
            headers={"Authorization": f"Bearer {api_key}", "apikey": api_key},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "StorageClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def upload(self, content: bytes, path: str, content_type: str = "application/octet-stream") -> str:
        """Envoie un nouvel objet (refusé par le fournisseur s'il existe déjà) et retourne son chemin."""
        try:
            response = self._client.post(
                f"/object/{self.bucket}/{path}",
                content=content,
                headers={"Content-Type": content_type},
            )
        except httpx.HTTPError as exc:
            raise UploadError(f"Erreur lors de l'envoi du fichier : {exc}") from exc

        if response.is_error:
            raise UploadError(f"Erreur lors de l'envoi du fichier : {_error_message(response)}")

        logger.info("Objet envoyé : %s/%s (%d octets)", self.bucket, path, len(content))
        return path

    def create_signed_url(self, path: str, expires_in: int) -> str:
        """Retourne une URL absolue signée valable expires_in secondes."""
        try:
            response = self._client.post(
                f"/object/sign/{self.bucket}/{path}",
                json={"expiresIn": expires_in},
            )
        except httpx.HTTPError as exc:
            raise SignedUrlError(f"Erreur lors de la création de l'URL signée : {exc}") from exc

        if response.is_error:
            raise SignedUrlError(
                f"Erreur lors de la création de l'URL signée : {_error_message(response)}"
            )

        signed = response.json().get("signedURL")
        if not signed:
            raise SignedUrlError("Erreur lors de la création de l'URL signée : réponse sans signedURL")
        return f"{self.storage_url}{signed}"

    def remove(self, paths: list[str]) -> None:
        """Supprime des objets du bucket. Lève httpx.HTTPError en cas d'échec."""
        response = self._client.request(
            "DELETE",
            f"/object/{self.bucket}",
            json={"prefixes": paths},
        )
        response.raise_for_status()
        logger.info("Objets supprimés du bucket %s : %s", self.bucket, paths)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)

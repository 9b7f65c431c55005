"""
Annuaire des états et des villes, adossé à l'API de localités de l'IBGE.
La pagination des villes est faite localement : l'API renvoie la liste complète.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from buscavan.exceptions import LocationDirectoryError
from buscavan.schemas.location import CityPage, CityResponse, StateResponse

logger = logging.getLogger(__name__)


class LocationDirectory:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    def __enter__(self) -> "LocationDirectory":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_states(self) -> list[StateResponse]:
        """Retourne tous les états triés par nom."""
        data = self._get("/estados", params={"orderBy": "nome"})
        try:
            states = [StateResponse(id=s["id"], acronym=s["sigla"], name=s["nome"]) for s in data]
        except (KeyError, TypeError, ValidationError) as exc:
            raise _format_error("/estados", exc) from exc
        return sorted(states, key=lambda s: s.name)

    def get_cities_by_state(self, state_id: int, page: int = 1, limit: int = 20) -> CityPage:
        """Retourne une page de villes d'un état (page 1 = première page)."""
        if page < 1 or limit < 1:
            raise ValueError("page et limit doivent être supérieurs ou égaux à 1.")

        path = f"/estados/{state_id}/municipios"
        data = self._get(path, params={"orderBy": "nome"})
        start = (page - 1) * limit
        try:
            items = [
                CityResponse(id=c["id"], name=c["nome"], state_id=state_id)
                for c in data[start:start + limit]
            ]
        except (KeyError, TypeError, ValidationError) as exc:
            raise _format_error(path, exc) from exc
        return CityPage(items=items, page=page, limit=limit, total=len(data))

    def _get(self, path: str, params: Optional[dict] = None) -> list[dict[str, Any]]:
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            logger.error("Annuaire des localités indisponible (%s) : %s", path, exc)
            raise LocationDirectoryError(f"Annuaire des localités indisponible : {exc}") from exc
        except ValueError as exc:
            logger.error("Réponse illisible de l'annuaire (%s) : %s", path, exc)
            raise LocationDirectoryError(f"Réponse illisible de l'annuaire : {exc}") from exc
        if not isinstance(data, list):
            raise LocationDirectoryError(f"Réponse inattendue de l'annuaire pour {path}.")
        return data


def _format_error(path: str, exc: Exception) -> LocationDirectoryError:
    """Champ manquant ou invalide dans la réponse de l'IBGE."""
    logger.error("Format inattendu de l'annuaire (%s) : %s", path, exc)
    return LocationDirectoryError(f"Format inattendu de l'annuaire : {exc}")

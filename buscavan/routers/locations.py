"""
Router pour l'annuaire des états et des villes (sélection origine / destination).
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from buscavan.dependencies import get_location_directory
from buscavan.exceptions import LocationDirectoryError
from buscavan.routers.trips import to_http_error
from buscavan.schemas.location import CityPage, StateResponse
from buscavan.services import trip_service
from buscavan.services.location_directory import LocationDirectory

router = APIRouter(prefix="/api/v1/locations", tags=["Localités"])


@router.get("/states", response_model=List[StateResponse], summary="Lister les états")
def list_states(directory: LocationDirectory = Depends(get_location_directory)):
    try:
        return trip_service.list_states(directory)
    except LocationDirectoryError as e:
        raise to_http_error(e)


@router.get(
    "/states/{state_id}/cities",
    response_model=CityPage,
    summary="Lister les villes d'un état (paginé)",
)
def list_cities_by_state(
    state_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    directory: LocationDirectory = Depends(get_location_directory),
):
    """Retourne une page de villes triées par nom ; une page au-delà de la fin est vide."""
    try:
        return trip_service.list_cities_by_state(directory, state_id, page, limit)
    except LocationDirectoryError as e:
        raise to_http_error(e)

"""
Router pour les voyages, leurs commentaires et la recherche de véhicule.
CRUD complet : création (avec photo), lecture, modification, suppression.
"""

from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from buscavan.database import get_db
from buscavan.dependencies import get_actor, get_storage
from buscavan.exceptions import (
    LocationDirectoryError,
    NotFoundError,
    SignedUrlError,
    TripError,
    UploadError,
)
from buscavan.schemas.actor import ActorContext
from buscavan.schemas.comment import CommentCreate, CommentResponse, CommentThread
from buscavan.schemas.trip import TripCreate, TripResponse, TripUpdate
from buscavan.schemas.vehicle import VehicleResponse
from buscavan.services import trip_service
from buscavan.services.storage_client import StorageClient

router = APIRouter(prefix="/api/v1/trips", tags=["Voyages"])

# GET /api/v1/vehicles/plate/{plate}
vehicles_router = APIRouter(prefix="/api/v1/vehicles", tags=["Véhicules"])


def to_http_error(exc: TripError) -> HTTPException:
    """Traduit une erreur métier en réponse HTTP."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, (UploadError, SignedUrlError, LocationDirectoryError)):
        return HTTPException(status_code=502, detail=str(exc))
    # ReferentialIntegrityError et autres erreurs métier
    return HTTPException(status_code=400, detail=str(exc))


@router.post("", response_model=TripResponse, status_code=201, summary="Créer un voyage")
def create_trip(
    data: str = Form(..., description="Voyage au format JSON (TripCreate)"),
    file: UploadFile = File(..., description="Photo de la destination"),
    actor: ActorContext = Depends(get_actor),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
):
    """
    Crée un voyage pour le motoriste authentifié (requête multipart).
    La photo est envoyée au stockage et son URL signée est enregistrée.
    Si l'envoi de la photo échoue, aucun voyage n'est créé (502).
    """
    try:
        payload = TripCreate.model_validate_json(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    try:
        return trip_service.create_trip(db, payload, file, actor, storage)
    except TripError as e:
        raise to_http_error(e)


@router.get("/owner/{owner_id}", response_model=List[TripResponse], summary="Voyages d'un motoriste")
def list_trips_by_owner(owner_id: str, db: Session = Depends(get_db)):
    """Retourne les voyages d'un motoriste (liste vide s'il n'en a aucun)."""
    return trip_service.list_trips_by_owner(db, owner_id)


@router.get("/{trip_id}", response_model=TripResponse, summary="Détail d'un voyage")
def get_trip(trip_id: int, db: Session = Depends(get_db)):
    """Retourne un voyage avec ses commentaires et son véhicule."""
    trip = trip_service.get_trip(db, trip_id)
    if trip is None:
        raise HTTPException(status_code=404, detail="Voyage introuvable.")
    return trip


@router.put("/{trip_id}", response_model=TripResponse, summary="Modifier un voyage")
def update_trip(trip_id: int, data: TripUpdate, db: Session = Depends(get_db)):
    """
    Met à jour les informations d'un voyage.
    Seuls les champs fournis sont modifiés ; les commentaires fournis sont
    créés ou écrasés selon leur id.
    """
    try:
        return trip_service.update_trip(db, trip_id, data)
    except TripError as e:
        raise to_http_error(e)


@router.delete("/{trip_id}", response_model=TripResponse, summary="Supprimer un voyage")
def delete_trip(trip_id: int, db: Session = Depends(get_db)):
    """Supprime un voyage et ses commentaires. Retourne le voyage supprimé."""
    try:
        return trip_service.delete_trip(db, trip_id)
    except TripError as e:
        raise to_http_error(e)


@router.post(
    "/{trip_id}/comments",
    response_model=CommentResponse,
    status_code=201,
    summary="Commenter un voyage",
)
def add_comment(trip_id: int, data: CommentCreate, db: Session = Depends(get_db)):
    """
    Ajoute un commentaire, éventuellement en réponse à un autre (parent_comment_id).
    Retourne 404 si le voyage ou le commentaire parent est introuvable.
    """
    try:
        return trip_service.add_comment(db, trip_id, data)
    except TripError as e:
        raise to_http_error(e)


@router.get(
    "/{trip_id}/comments",
    response_model=List[CommentThread],
    summary="Fil de discussion d'un voyage",
)
def get_comment_threads(trip_id: int, db: Session = Depends(get_db)):
    """Retourne les commentaires d'un voyage imbriqués par réponse."""
    try:
        return trip_service.get_comment_threads(db, trip_id)
    except TripError as e:
        raise to_http_error(e)


@vehicles_router.get("/plate/{plate}", response_model=VehicleResponse, summary="Véhicule par plaque")
def get_vehicle_by_plate(plate: str, db: Session = Depends(get_db)):
    vehicle = trip_service.get_vehicle_by_plate(db, plate)
    if vehicle is None:
        raise HTTPException(status_code=404, detail="Véhicule introuvable.")
    return vehicle

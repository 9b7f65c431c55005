"""
Service métier pour les voyages.

Orchestre le rattachement de la photo (stockage), l'accès base de données
et l'annuaire des localités. Chaque échec est journalisé puis relevé tel quel.
"""

import logging
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from buscavan.schemas.actor import ActorContext
from buscavan.schemas.comment import CommentCreate, CommentResponse, CommentThread
from buscavan.schemas.location import CityPage, StateResponse
from buscavan.schemas.trip import TripCreate, TripResponse, TripUpdate
from buscavan.schemas.vehicle import VehicleResponse
from buscavan.services import media_service, trip_store
from buscavan.services.location_directory import LocationDirectory
from buscavan.services.storage_client import StorageClient

logger = logging.getLogger(__name__)


def create_trip(
    db: Session,
    data: TripCreate,
    file: UploadFile,
    actor: ActorContext,
    storage: StorageClient,
) -> TripResponse:
    """
    Crée un voyage pour le motoriste authentifié.

    Étapes :
    1. Envoyer la photo et obtenir son URL signée
    2. Enregistrer le voyage avec cette URL
    Si l'étape 1 échoue, rien n'est écrit en base.
    """
    try:
        photo_url = media_service.attach_media(storage, f"{data.vehicle_id}-trip", file)
        return trip_store.create_trip(db, data, actor.owner_id, photo_url)
    except Exception as exc:
        logger.error("Erreur lors de la création du voyage : %s", exc)
        raise


def update_trip(db: Session, trip_id: int, data: TripUpdate) -> TripResponse:
    """Met à jour un voyage. La photo n'est jamais renvoyée au stockage ici."""
    try:
        return trip_store.update_trip(db, trip_id, data)
    except Exception as exc:
        logger.error("Erreur lors de la mise à jour du voyage %s : %s", trip_id, exc)
        raise


def delete_trip(db: Session, trip_id: int) -> TripResponse:
    try:
        return trip_store.delete_trip(db, trip_id)
    except Exception as exc:
        logger.error("Erreur lors de la suppression du voyage %s : %s", trip_id, exc)
        raise


def get_trip(db: Session, trip_id: int) -> Optional[TripResponse]:
    try:
        return trip_store.get_trip(db, trip_id)
    except Exception as exc:
        logger.error("Erreur lors de la recherche du voyage %s : %s", trip_id, exc)
        raise


def list_trips_by_owner(db: Session, owner_id: str) -> list[TripResponse]:
    try:
        return trip_store.list_trips_by_owner(db, owner_id)
    except Exception as exc:
        logger.error("Erreur lors de la recherche des voyages du motoriste %s : %s", owner_id, exc)
        raise


def get_vehicle_by_plate(db: Session, plate: str) -> Optional[VehicleResponse]:
    try:
        return trip_store.get_vehicle_by_plate(db, plate)
    except Exception as exc:
        logger.error("Erreur lors de la recherche du véhicule %s : %s", plate, exc)
        raise


def add_comment(db: Session, trip_id: int, data: CommentCreate) -> CommentResponse:
    try:
        return trip_store.add_comment(db, trip_id, data)
    except Exception as exc:
        logger.error("Erreur lors de l'ajout du commentaire au voyage %s : %s", trip_id, exc)
        raise


def get_comment_threads(db: Session, trip_id: int) -> list[CommentThread]:
    try:
        return trip_store.get_comment_threads(db, trip_id)
    except Exception as exc:
        logger.error("Erreur lors de la lecture des commentaires du voyage %s : %s", trip_id, exc)
        raise


def list_states(directory: LocationDirectory) -> list[StateResponse]:
    try:
        return directory.get_states()
    except Exception as exc:
        logger.error("Erreur lors de la lecture des états : %s", exc)
        raise


def list_cities_by_state(
    directory: LocationDirectory, state_id: int, page: int, limit: int
) -> CityPage:
    try:
        return directory.get_cities_by_state(state_id, page, limit)
    except Exception as exc:
        logger.error("Erreur lors de la lecture des villes de l'état %s : %s", state_id, exc)
        raise

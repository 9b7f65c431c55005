"""
Accès base de données pour les voyages et leurs commentaires.

Toutes les fonctions reçoivent la session SQLAlchemy de la requête.
Les références (villes, véhicule, propriétaire, commentaire parent) sont
vérifiées avant écriture ; une IntegrityError résiduelle est annulée et
convertie en ReferentialIntegrityError.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from buscavan.exceptions import NotFoundError, ReferentialIntegrityError, TripError
from buscavan.models.city import City
from buscavan.models.comment import Comment
from buscavan.models.trip import Trip
from buscavan.models.user import User
from buscavan.models.vehicle import Vehicle
from buscavan.schemas.comment import CommentCreate, CommentResponse, CommentThread, CommentUpsert
from buscavan.schemas.trip import DATES_OUT_OF_ORDER, TripCreate, TripResponse, TripUpdate, dates_in_order
from buscavan.schemas.vehicle import VehicleResponse
from buscavan.services.comment_threads import build_threads, would_create_cycle

logger = logging.getLogger(__name__)

# Identifiant qui ne correspond jamais à une ligne : force la création
NO_COMMENT_ID = 0

# Champ → (modèle référencé, libellé)
_REFERENCES = {
    "origin_id": (City, "Ville d'origine"),
    "destination_id": (City, "Ville de destination"),
    "vehicle_id": (Vehicle, "Véhicule"),
    "owner_id": (User, "Propriétaire"),
}


def create_trip(db: Session, data: TripCreate, owner_id: str, photo_url: str) -> TripResponse:
    """
    Crée un voyage et, si fournis, ses commentaires initiaux.

    Lève ReferentialIntegrityError si une ville, le véhicule, le propriétaire
    ou un commentaire parent n'existe pas. Rien n'est écrit dans ce cas.
    """
    _check_references(db, {
        "origin_id": data.origin_id,
        "destination_id": data.destination_id,
        "vehicle_id": data.vehicle_id,
        "owner_id": owner_id,
    })
    for comment in data.comments or []:
        _check_parent(db, comment.parent_comment_id, ReferentialIntegrityError)

    trip = Trip(
        origin_id=data.origin_id,
        destination_id=data.destination_id,
        vehicle_id=data.vehicle_id,
        owner_id=owner_id,
        start_date=data.start_date,
        end_date=data.end_date,
        price=data.price,
        boarding_location_outbound=data.boarding_location_outbound,
        boarding_location_return=data.boarding_location_return,
        description=data.description,
        photo_url=photo_url,
    )
    db.add(trip)
    db.flush()  # Obtenir l'ID avant d'y rattacher les commentaires

    for comment in data.comments or []:
        db.add(_new_comment(trip.id, comment))

    _commit(db)
    db.refresh(trip)

    logger.info(
        "Voyage créé : %s (%s → %s) — %d commentaires",
        trip.id, trip.origin_id, trip.destination_id, len(data.comments or []),
    )
    return _to_response(trip, with_relations=True)


def update_trip(db: Session, trip_id: int, data: TripUpdate) -> TripResponse:
    """
    Met à jour les champs fournis d'un voyage.

    Les commentaires fournis sont réconciliés par identifiant : un id connu
    sur ce voyage est écrasé, tout autre (absent, 0, inconnu) est créé.
    Aucun commentaire n'est supprimé par une mise à jour.
    """
    trip = db.get(Trip, trip_id)
    if trip is None:
        raise NotFoundError(f"Voyage {trip_id} introuvable.")

    update_data = data.model_dump(exclude_unset=True, exclude={"comments"})
    _check_references(db, {k: v for k, v in update_data.items() if k in _REFERENCES})
    # Une seule des deux dates peut être fournie : comparer avec la valeur enregistrée
    start = update_data.get("start_date", trip.start_date)
    end = update_data.get("end_date", trip.end_date)
    if not dates_in_order(start, end):
        raise TripError(DATES_OUT_OF_ORDER)

    for field, value in update_data.items():
        setattr(trip, field, value)

    if data.comments is not None:
        for comment in data.comments:
            _upsert_comment(db, trip, comment)

    _commit(db)
    db.refresh(trip)
    return _to_response(trip, with_relations=True)


def delete_trip(db: Session, trip_id: int) -> TripResponse:
    """
    Supprime un voyage et tous ses commentaires.
    Retourne le voyage tel qu'il était avant suppression.
    """
    trip = db.get(Trip, trip_id)
    if trip is None:
        raise NotFoundError(f"Voyage {trip_id} introuvable.")

    deleted = _to_response(trip, with_relations=True)
    db.delete(trip)
    db.commit()

    logger.info("Voyage supprimé : %s (%d commentaires)", trip_id, len(deleted.comments))
    return deleted


def get_trip(db: Session, trip_id: int) -> Optional[TripResponse]:
    """Retourne un voyage avec ses commentaires et son véhicule, ou None."""
    trip = db.execute(
        select(Trip)
        .options(selectinload(Trip.comments), joinedload(Trip.vehicle))
        .where(Trip.id == trip_id)
    ).scalar()
    if trip is None:
        return None
    return _to_response(trip, with_relations=True)


def list_trips_by_owner(db: Session, owner_id: str) -> list[TripResponse]:
    """Retourne les voyages d'un motoriste, du départ le plus proche au plus lointain."""
    trips = db.execute(
        select(Trip)
        .where(Trip.owner_id == owner_id)
        .order_by(Trip.start_date, Trip.id)
    ).scalars().all()
    return [_to_response(t) for t in trips]


def get_vehicle_by_plate(db: Session, plate: str) -> Optional[VehicleResponse]:
    """Recherche un véhicule par sa plaque (insensible aux espaces et à la casse)."""
    vehicle = db.execute(
        select(Vehicle).where(Vehicle.plate == plate.strip().upper())
    ).scalar()
    if vehicle is None:
        return None
    return VehicleResponse.model_validate(vehicle)


def add_comment(db: Session, trip_id: int, data: CommentCreate) -> CommentResponse:
    """
    Ajoute un commentaire à un voyage, horodaté au moment de l'appel.
    Lève NotFoundError si le voyage ou le commentaire parent n'existe pas.
    """
    if db.get(Trip, trip_id) is None:
        raise NotFoundError(f"Voyage {trip_id} introuvable.")
    _check_parent(db, data.parent_comment_id, NotFoundError)

    comment = Comment(
        trip_id=trip_id,
        content=data.content,
        author=data.author,
        parent_comment_id=data.parent_comment_id,
        created_at=datetime.now(timezone.utc),
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return CommentResponse.model_validate(comment)


def get_comment_threads(db: Session, trip_id: int) -> list[CommentThread]:
    """Retourne les commentaires d'un voyage sous forme d'arbre de réponses."""
    trip = db.get(Trip, trip_id)
    if trip is None:
        raise NotFoundError(f"Voyage {trip_id} introuvable.")
    return build_threads(CommentResponse.model_validate(c) for c in trip.comments)


# --- Helpers ---

def _check_references(db: Session, refs: dict) -> None:
    for field, value in refs.items():
        model, label = _REFERENCES[field]
        if db.get(model, value) is None:
            raise ReferentialIntegrityError(f"{label} {value} inexistant(e).")


def _check_parent(db: Session, parent_id: Optional[int], error: type) -> None:
    if parent_id is not None and db.get(Comment, parent_id) is None:
        raise error(f"Commentaire parent {parent_id} introuvable.")


def _upsert_comment(db: Session, trip: Trip, data: CommentUpsert) -> None:
    existing = db.get(Comment, data.id or NO_COMMENT_ID)
    if existing is None or existing.trip_id != trip.id:
        _check_parent(db, data.parent_comment_id, ReferentialIntegrityError)
        db.add(_new_comment(trip.id, data))
        return

    existing.content = data.content
    existing.author = data.author
    if data.created_at is not None:
        existing.created_at = _as_utc(data.created_at)
    if data.parent_comment_id is not None:
        _check_parent(db, data.parent_comment_id, ReferentialIntegrityError)
        if would_create_cycle(db, existing.id, data.parent_comment_id):
            raise ReferentialIntegrityError(
                f"Le commentaire {data.parent_comment_id} ne peut pas devenir "
                f"le parent du commentaire {existing.id} (boucle)."
            )
        existing.parent_comment_id = data.parent_comment_id


def _new_comment(trip_id: int, data: CommentUpsert) -> Comment:
    return Comment(
        trip_id=trip_id,
        content=data.content,
        author=data.author,
        parent_comment_id=data.parent_comment_id,
        created_at=_as_utc(data.created_at) if data.created_at else datetime.now(timezone.utc),
    )


def _as_utc(value: datetime) -> datetime:
    """Horodatage fourni par le client : sans fuseau, il est lu comme UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ReferentialIntegrityError(
            f"Violation d'intégrité référentielle : {exc.orig}"
        ) from exc


def _to_response(trip: Trip, with_relations: bool = False) -> TripResponse:
    """Construit le schéma de réponse ; les relations ne sont lues que si demandées."""
    response = TripResponse(
        id=trip.id,
        origin_id=trip.origin_id,
        destination_id=trip.destination_id,
        vehicle_id=trip.vehicle_id,
        owner_id=trip.owner_id,
        start_date=trip.start_date,
        end_date=trip.end_date,
        price=trip.price,
        boarding_location_outbound=trip.boarding_location_outbound,
        boarding_location_return=trip.boarding_location_return,
        description=trip.description,
        photo_url=trip.photo_url,
        created_at=trip.created_at,
    )
    if with_relations:
        response.comments = [CommentResponse.model_validate(c) for c in trip.comments]
        if trip.vehicle is not None:
            response.vehicle = VehicleResponse.model_validate(trip.vehicle)
    return response

"""
Schémas Pydantic pour les voyages.

La photo de destination n'apparaît pas dans TripCreate : son URL signée est
calculée par le serveur après l'envoi du fichier.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, field_validator, model_validator

from buscavan.schemas.comment import CommentResponse, CommentUpsert
from buscavan.schemas.vehicle import VehicleResponse

DATES_OUT_OF_ORDER = "La date de retour doit être postérieure à la date de départ."


def dates_in_order(start: datetime, end: datetime) -> bool:
    """Compare deux dates, naïves (UTC) ou avec fuseau."""
    return _naive_utc(end) >= _naive_utc(start)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TripCreate(BaseModel):
    origin_id: int
    destination_id: int
    vehicle_id: int
    start_date: datetime
    end_date: datetime
    price: Decimal
    boarding_location_outbound: Optional[str] = None
    boarding_location_return: Optional[str] = None
    description: Optional[str] = None
    comments: Optional[List[CommentUpsert]] = None

    @field_validator("price")
    @classmethod
    def price_not_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Le prix du voyage ne peut pas être négatif.")
        return v

    @model_validator(mode="after")
    def end_after_start(self) -> "TripCreate":
        if not dates_in_order(self.start_date, self.end_date):
            raise ValueError(DATES_OUT_OF_ORDER)
        return self


class TripUpdate(BaseModel):
    """
    Mise à jour partielle : un champ absent n'est pas modifié,
    un champ facultatif envoyé à null est effacé.
    """
    origin_id: Optional[int] = None
    destination_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    price: Optional[Decimal] = None
    boarding_location_outbound: Optional[str] = None
    boarding_location_return: Optional[str] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None
    comments: Optional[List[CommentUpsert]] = None  # upsert par id, jamais de suppression

    @field_validator("origin_id", "destination_id", "vehicle_id", "start_date", "end_date", "price")
    @classmethod
    def required_not_null(cls, v):
        # Les validateurs ne s'exécutent pas sur les valeurs par défaut :
        # on n'arrive ici avec None que si le client a envoyé null explicitement.
        if v is None:
            raise ValueError("Ce champ est obligatoire et ne peut pas être mis à null.")
        return v

    @field_validator("price")
    @classmethod
    def price_not_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Le prix du voyage ne peut pas être négatif.")
        return v

    @model_validator(mode="after")
    def end_after_start(self) -> "TripUpdate":
        if self.start_date and self.end_date and not dates_in_order(self.start_date, self.end_date):
            raise ValueError(DATES_OUT_OF_ORDER)
        return self


class TripResponse(BaseModel):
    id: int
    origin_id: int
    destination_id: int
    vehicle_id: int
    owner_id: str
    start_date: datetime
    end_date: datetime
    price: Decimal
    boarding_location_outbound: Optional[str]
    boarding_location_return: Optional[str]
    description: Optional[str]
    photo_url: Optional[str]
    created_at: Optional[datetime]
    comments: List[CommentResponse] = []
    vehicle: Optional[VehicleResponse] = None

    model_config = {"from_attributes": True}

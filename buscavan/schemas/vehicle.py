"""
Schémas Pydantic pour les véhicules.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class VehicleResponse(BaseModel):
    id: int
    plate: str
    model: Optional[str]
    capacity: Optional[int]
    owner_id: Optional[str]
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}

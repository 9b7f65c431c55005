"""
Schémas Pydantic pour l'annuaire des états et des villes.
"""

from typing import List

from pydantic import BaseModel


class StateResponse(BaseModel):
    id: int
    acronym: str
    name: str


class CityResponse(BaseModel):
    id: int
    name: str
    state_id: int


class CityPage(BaseModel):
    """Page de villes d'un état (page commence à 1)."""
    items: List[CityResponse]
    page: int
    limit: int
    total: int

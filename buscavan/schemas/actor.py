"""
Identité de l'appelant, résolue par le service d'authentification externe.
"""

from pydantic import BaseModel, field_validator


class ActorContext(BaseModel):
    owner_id: str  # CPF du motoriste authentifié

    @field_validator("owner_id")
    @classmethod
    def owner_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("L'identifiant du propriétaire ne peut pas être vide.")
        return v.strip()

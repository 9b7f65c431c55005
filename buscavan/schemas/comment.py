"""
Schémas Pydantic pour les commentaires d'un voyage.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator


class CommentCreate(BaseModel):
    """Commentaire ajouté à un voyage (horodaté par le serveur)."""
    content: str
    author: str
    parent_comment_id: Optional[int] = None

    @field_validator("content", "author")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le contenu et l'auteur du commentaire ne peuvent pas être vides.")
        return v.strip()


class CommentUpsert(CommentCreate):
    """
    Commentaire envoyé dans la création ou la mise à jour d'un voyage.
    Sans id (ou id = 0) → création ; id existant sur ce voyage → écrasement.
    """
    id: Optional[int] = None
    created_at: Optional[datetime] = None


class CommentResponse(BaseModel):
    id: int
    trip_id: int
    content: str
    author: str
    parent_comment_id: Optional[int]
    created_at: datetime

    model_config = {"from_attributes": True}


class CommentThread(CommentResponse):
    """Commentaire avec ses réponses imbriquées."""
    replies: List["CommentThread"] = []

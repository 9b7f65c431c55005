"""
Modèle SQLAlchemy pour les commentaires d'un voyage.
Les réponses pointent vers leur parent par identifiant (arbre de discussion).
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from buscavan.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)  # Toujours > 0 : 0 sert de sentinelle "pas d'ID"
    content = Column(Text, nullable=False)
    author = Column(String(150), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    # SET NULL : une réponse sur un autre voyage survit à la suppression de son parent
    parent_comment_id = Column(Integer, ForeignKey("comments.id", ondelete="SET NULL"), nullable=True)

    trip = relationship("Trip", back_populates="comments")

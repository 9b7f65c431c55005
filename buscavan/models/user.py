"""
Modèle SQLAlchemy pour les utilisateurs (motoristes).
Version minimale — l'authentification est gérée par un service externe.
"""

from sqlalchemy import Column, DateTime, String, func

from buscavan.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(14), primary_key=True)  # CPF du motoriste
    name = Column(String(150), nullable=True)
    email = Column(String(255), unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

"""
Modèle SQLAlchemy pour les véhicules (vans) des motoristes.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from buscavan.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True)
    plate = Column(String(10), unique=True, nullable=False)  # Toujours en majuscules
    model = Column(String(100), nullable=True)
    capacity = Column(Integer, nullable=True)
    owner_id = Column(String(14), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

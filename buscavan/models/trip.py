"""
Modèle SQLAlchemy pour les voyages proposés par les motoristes.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from buscavan.database import Base


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True)
    origin_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
    destination_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    owner_id = Column(String(14), ForeignKey("users.id"), nullable=False, index=True)

    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    boarding_location_outbound = Column(String(255), nullable=True)
    boarding_location_return = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    photo_url = Column(Text, nullable=True)  # URL signée, jamais fournie par le client à la création

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    vehicle = relationship("Vehicle")
    # Suppression d'un voyage → suppression de ses commentaires (ON DELETE CASCADE)
    comments = relationship(
        "Comment",
        back_populates="trip",
        order_by="Comment.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

"""
Modèle SQLAlchemy pour les villes.
Les identifiants sont ceux de l'annuaire IBGE ; les états ne sont pas stockés.
"""

from sqlalchemy import Column, Integer, String

from buscavan.database import Base


class City(Base):
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True, autoincrement=False)  # code IBGE
    name = Column(String(150), nullable=False)
    state_id = Column(Integer, nullable=False, index=True)

"""
Configuration de la connexion à la base de données PostgreSQL.
Le moteur est créé explicitement et libéré à l'arrêt de l'API (voir main.lifespan).
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from buscavan.config import settings

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dépendance FastAPI — fournit une session BDD et la ferme après usage."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def dispose_engine() -> None:
    """Ferme toutes les connexions du pool (appelé à l'arrêt de l'API)."""
    engine.dispose()

"""
Configuration partagée pour tous les tests.
- client : API avec la BDD et les clients externes mockés (aucune connexion réelle).
- sqlite_db : session sur une base SQLite en mémoire, pour les tests du stockage des voyages.
"""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import buscavan.models  # noqa: F401
from buscavan.database import Base, get_db
from buscavan.dependencies import get_location_directory, get_storage
from buscavan.main import app
from buscavan.models.city import City
from buscavan.models.user import User
from buscavan.models.vehicle import Vehicle
from buscavan.schemas.trip import TripCreate


@pytest.fixture
def mock_storage():
    return MagicMock()


@pytest.fixture
def mock_directory():
    return MagicMock()


@pytest.fixture
def client(mock_storage, mock_directory):
    """Client HTTP de test avec la BDD, le stockage et l'annuaire mockés."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_storage] = lambda: mock_storage
    app.dependency_overrides[get_location_directory] = lambda: mock_directory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def sqlite_db():
    """
    Session SQLite en mémoire, clés étrangères activées (ON DELETE CASCADE / SET NULL).
    Données de base : motoriste u1, villes 1 et 2, véhicule 3.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    db.add_all([
        User(id="u1", name="Motoriste"),
        City(id=1, name="São Paulo", state_id=35),
        City(id=2, name="Santos", state_id=35),
    ])
    db.flush()
    db.add(Vehicle(id=3, plate="ABC1D23", model="Sprinter", capacity=15, owner_id="u1"))
    db.commit()

    yield db

    db.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def trip_factory():
    """Fabrique de TripCreate valides (São Paulo → Santos, véhicule 3)."""
    return make_trip_create


def make_trip_create(**kwargs) -> TripCreate:
    data = {
        "origin_id": 1,
        "destination_id": 2,
        "vehicle_id": 3,
        "start_date": datetime(2026, 12, 20, 7, 0),
        "end_date": datetime(2026, 12, 22, 18, 0),
        "price": Decimal("150.00"),
        "boarding_location_outbound": "Rodoviária Tietê",
        "boarding_location_return": "Praia do Gonzaga",
        "description": "Fim de semana na praia",
    }
    data.update(kwargs)
    return TripCreate(**data)

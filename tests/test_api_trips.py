"""
Tests d'intégration API pour les voyages, les commentaires et les véhicules.
Testent les URLs, les codes HTTP, la validation et le format des réponses.
"""

import json
from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

from buscavan.exceptions import (
    NotFoundError,
    ReferentialIntegrityError,
    SignedUrlError,
    TripError,
    UploadError,
)
from buscavan.schemas.comment import CommentResponse, CommentThread
from buscavan.schemas.trip import TripResponse
from buscavan.schemas.vehicle import VehicleResponse


# --- Helpers ---

def make_trip_response(**kwargs) -> TripResponse:
    return TripResponse(
        id=kwargs.get("id", 1),
        origin_id=1,
        destination_id=2,
        vehicle_id=3,
        owner_id=kwargs.get("owner_id", "u1"),
        start_date=datetime(2026, 12, 20, 7, 0),
        end_date=datetime(2026, 12, 22, 18, 0),
        price=Decimal("150.00"),
        boarding_location_outbound="Rodoviária Tietê",
        boarding_location_return=None,
        description=kwargs.get("description", None),
        photo_url=kwargs.get("photo_url", "https://x/signed"),
        created_at=datetime.now(),
        comments=kwargs.get("comments", []),
    )


def make_comment_response(**kwargs) -> CommentResponse:
    return CommentResponse(
        id=kwargs.get("id", 1),
        trip_id=kwargs.get("trip_id", 10),
        content=kwargs.get("content", "hi"),
        author=kwargs.get("author", "a"),
        parent_comment_id=kwargs.get("parent_comment_id", None),
        created_at=datetime.now(),
    )


def trip_form(**overrides) -> dict:
    payload = {
        "origin_id": 1,
        "destination_id": 2,
        "vehicle_id": 3,
        "start_date": "2026-12-20T07:00:00",
        "end_date": "2026-12-22T18:00:00",
        "price": "150.00",
        "boarding_location_outbound": "Rodoviária Tietê",
    }
    payload.update(overrides)
    return {"data": json.dumps(payload)}


PHOTO = {"file": ("praia.jpg", b"\xff\xd8jpeg", "image/jpeg")}
AUTH = {"X-User-Id": "u1"}


# ============================================================
# POST /api/v1/trips
# ============================================================

def test_create_trip_succes(client):
    """Création d'un voyage valide → 201 avec l'URL signée de la photo."""
    with patch("buscavan.routers.trips.trip_service.create_trip") as mock:
        mock.return_value = make_trip_response()

        response = client.post("/api/v1/trips", data=trip_form(), files=PHOTO, headers=AUTH)

    assert response.status_code == 201
    assert response.json()["photo_url"] == "https://x/signed"
    assert response.json()["owner_id"] == "u1"


def test_create_trip_proprietaire_issu_de_l_en_tete(client):
    with patch("buscavan.routers.trips.trip_service.create_trip") as mock:
        mock.return_value = make_trip_response(owner_id="98765432100")

        client.post("/api/v1/trips", data=trip_form(), files=PHOTO, headers={"X-User-Id": "98765432100"})

    actor = mock.call_args[0][3]
    assert actor.owner_id == "98765432100"
    assert mock.call_args[0][1].vehicle_id == 3


def test_create_trip_sans_authentification(client):
    """Aucun motoriste identifié → 401."""
    response = client.post("/api/v1/trips", data=trip_form(), files=PHOTO)
    assert response.status_code == 401


def test_create_trip_sans_photo(client):
    response = client.post("/api/v1/trips", data=trip_form(), headers=AUTH)
    assert response.status_code == 422


def test_create_trip_dates_inversees(client):
    """Retour avant le départ → 422."""
    response = client.post(
        "/api/v1/trips",
        data=trip_form(end_date="2026-12-19T07:00:00"),
        files=PHOTO,
        headers=AUTH,
    )
    assert response.status_code == 422
    assert "postérieure" in response.text


def test_create_trip_json_invalide(client):
    response = client.post("/api/v1/trips", data={"data": "{pas du json"}, files=PHOTO, headers=AUTH)
    assert response.status_code == 422


def test_create_trip_echec_envoi_photo(client):
    """Échec du stockage → 502 avec le message du fournisseur."""
    with patch("buscavan.routers.trips.trip_service.create_trip") as mock:
        mock.side_effect = UploadError("Erreur lors de l'envoi du fichier : quota")
        response = client.post("/api/v1/trips", data=trip_form(), files=PHOTO, headers=AUTH)

    assert response.status_code == 502
    assert "quota" in response.json()["detail"]


def test_create_trip_echec_signature(client):
    with patch("buscavan.routers.trips.trip_service.create_trip") as mock:
        mock.side_effect = SignedUrlError("Erreur lors de la création de l'URL signée : Invalid JWT")
        response = client.post("/api/v1/trips", data=trip_form(), files=PHOTO, headers=AUTH)

    assert response.status_code == 502


def test_create_trip_reference_inexistante(client):
    with patch("buscavan.routers.trips.trip_service.create_trip") as mock:
        mock.side_effect = ReferentialIntegrityError("Véhicule 3 inexistant(e).")
        response = client.post("/api/v1/trips", data=trip_form(), files=PHOTO, headers=AUTH)

    assert response.status_code == 400
    assert "Véhicule" in response.json()["detail"]


# ============================================================
# GET /api/v1/trips/{trip_id} et /owner/{owner_id}
# ============================================================

def test_get_trip_succes(client):
    with patch("buscavan.routers.trips.trip_service.get_trip") as mock:
        mock.return_value = make_trip_response(id=7, comments=[make_comment_response(trip_id=7)])
        response = client.get("/api/v1/trips/7")

    assert response.status_code == 200
    assert response.json()["id"] == 7
    assert len(response.json()["comments"]) == 1


def test_get_trip_introuvable(client):
    with patch("buscavan.routers.trips.trip_service.get_trip") as mock:
        mock.return_value = None
        response = client.get("/api/v1/trips/999")

    assert response.status_code == 404


def test_get_trip_id_invalide(client):
    response = client.get("/api/v1/trips/pas-un-id")
    assert response.status_code == 422


def test_list_trips_by_owner(client):
    with patch("buscavan.routers.trips.trip_service.list_trips_by_owner") as mock:
        mock.return_value = [make_trip_response(id=1), make_trip_response(id=2)]
        response = client.get("/api/v1/trips/owner/u1")

    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [1, 2]
    mock.assert_called_once()
    assert mock.call_args[0][1] == "u1"


def test_list_trips_by_owner_vide(client):
    with patch("buscavan.routers.trips.trip_service.list_trips_by_owner") as mock:
        mock.return_value = []
        response = client.get("/api/v1/trips/owner/personne")

    assert response.status_code == 200
    assert response.json() == []


# ============================================================
# PUT /api/v1/trips/{trip_id}
# ============================================================

def test_update_trip_succes(client):
    with patch("buscavan.routers.trips.trip_service.update_trip") as mock:
        mock.return_value = make_trip_response(id=7, description="nova")
        response = client.put("/api/v1/trips/7", json={"description": "nova"})

    assert response.status_code == 200
    assert response.json()["description"] == "nova"
    data = mock.call_args[0][2]
    assert data.model_dump(exclude_unset=True) == {"description": "nova"}


def test_update_trip_commentaires_transmis(client):
    with patch("buscavan.routers.trips.trip_service.update_trip") as mock:
        mock.return_value = make_trip_response(id=7)
        client.put("/api/v1/trips/7", json={"comments": [{"id": 5, "content": "x", "author": "a"}]})

    data = mock.call_args[0][2]
    assert data.comments[0].id == 5
    assert data.comments[0].content == "x"


def test_update_trip_introuvable(client):
    with patch("buscavan.routers.trips.trip_service.update_trip") as mock:
        mock.side_effect = NotFoundError("Voyage 999 introuvable.")
        response = client.put("/api/v1/trips/999", json={"description": "x"})

    assert response.status_code == 404


def test_update_trip_champ_obligatoire_null(client):
    response = client.put("/api/v1/trips/7", json={"price": None})
    assert response.status_code == 422


def test_update_trip_dates_incoherentes(client):
    with patch("buscavan.routers.trips.trip_service.update_trip") as mock:
        mock.side_effect = TripError("La date de retour doit être postérieure à la date de départ.")
        response = client.put("/api/v1/trips/7", json={"end_date": "2020-01-01T00:00:00"})

    assert response.status_code == 400
    assert "postérieure" in response.json()["detail"]


# ============================================================
# DELETE /api/v1/trips/{trip_id}
# ============================================================

def test_delete_trip_succes(client):
    """Suppression → 200 avec le voyage supprimé."""
    with patch("buscavan.routers.trips.trip_service.delete_trip") as mock:
        mock.return_value = make_trip_response(id=7)
        response = client.delete("/api/v1/trips/7")

    assert response.status_code == 200
    assert response.json()["id"] == 7


def test_delete_trip_introuvable(client):
    with patch("buscavan.routers.trips.trip_service.delete_trip") as mock:
        mock.side_effect = NotFoundError("Voyage 999 introuvable.")
        response = client.delete("/api/v1/trips/999")

    assert response.status_code == 404


# ============================================================
# Commentaires
# ============================================================

def test_add_comment_succes(client):
    with patch("buscavan.routers.trips.trip_service.add_comment") as mock:
        mock.return_value = make_comment_response(trip_id=10)
        response = client.post("/api/v1/trips/10/comments", json={"content": "hi", "author": "a"})

    assert response.status_code == 201
    assert response.json()["trip_id"] == 10
    assert response.json()["parent_comment_id"] is None


def test_add_comment_parent_introuvable(client):
    with patch("buscavan.routers.trips.trip_service.add_comment") as mock:
        mock.side_effect = NotFoundError("Commentaire parent 999 introuvable.")
        response = client.post(
            "/api/v1/trips/10/comments",
            json={"content": "hi", "author": "a", "parent_comment_id": 999},
        )

    assert response.status_code == 404


def test_add_comment_contenu_vide(client):
    response = client.post("/api/v1/trips/10/comments", json={"content": "  ", "author": "a"})
    assert response.status_code == 422


def test_get_comment_threads(client):
    root = CommentThread(**make_comment_response(id=1).model_dump())
    root.replies = [CommentThread(**make_comment_response(id=2, parent_comment_id=1).model_dump())]
    with patch("buscavan.routers.trips.trip_service.get_comment_threads") as mock:
        mock.return_value = [root]
        response = client.get("/api/v1/trips/10/comments")

    assert response.status_code == 200
    assert response.json()[0]["replies"][0]["id"] == 2


# ============================================================
# GET /api/v1/vehicles/plate/{plate}
# ============================================================

def test_get_vehicle_by_plate_succes(client):
    with patch("buscavan.routers.trips.trip_service.get_vehicle_by_plate") as mock:
        mock.return_value = VehicleResponse(
            id=3, plate="ABC1D23", model="Sprinter", capacity=15, owner_id="u1", created_at=None,
        )
        response = client.get("/api/v1/vehicles/plate/ABC1D23")

    assert response.status_code == 200
    assert response.json()["id"] == 3


def test_get_vehicle_by_plate_introuvable(client):
    with patch("buscavan.routers.trips.trip_service.get_vehicle_by_plate") as mock:
        mock.return_value = None
        response = client.get("/api/v1/vehicles/plate/ZZZ9Z99")

    assert response.status_code == 404

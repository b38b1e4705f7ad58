# tests/test_api.py
import pytest
from httpx import AsyncClient, ASGITransport

from pet_catalog.app.main import app
from pet_catalog.app.core.contract import PetEntry
from pet_catalog.app.services.pet_provider import pet_provider


@pytest.mark.asyncio
async def test_create_and_list_pets(toto):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.post("/api/v1/pets/", json=toto)
        assert resp.status_code == 201
        assert resp.json() == {"id": 1, "name": "Toto", "breed": "Terrier", "gender": 1, "weight": 7}

        resp = await ac.post("/api/v1/pets/", json={"name": "Anna", "weight": 3})
        assert resp.status_code == 201

        resp = await ac.get("/api/v1/pets/")
        assert resp.status_code == 200
        assert [p["name"] for p in resp.json()] == ["Toto", "Anna"]

        resp = await ac.get("/api/v1/pets/", params={"sort_by": "weight", "order": "asc"})
        assert [p["name"] for p in resp.json()] == ["Anna", "Toto"]


@pytest.mark.asyncio
async def test_create_rejects_invalid_gender_and_weight(toto):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.post("/api/v1/pets/", json={**toto, "gender": 3})
        assert resp.status_code == 422
        resp = await ac.post("/api/v1/pets/", json={**toto, "weight": -1})
        assert resp.status_code == 422
        resp = await ac.post("/api/v1/pets/", json={**toto, "weight": 2**63})
        assert resp.status_code == 422
        resp = await ac.post("/api/v1/pets/", json={**toto, "gender": True})
        assert resp.status_code == 422
        resp = await ac.get("/api/v1/pets/")
        assert resp.json() == []


@pytest.mark.asyncio
async def test_get_update_delete_pet(toto):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        pet_id = (await ac.post("/api/v1/pets/", json=toto)).json()["id"]

        resp = await ac.get(f"/api/v1/pets/{pet_id}")
        assert resp.status_code == 200 and resp.json()["name"] == "Toto"

        resp = await ac.put(f"/api/v1/pets/{pet_id}", json={"weight": 9})
        assert resp.status_code == 200 and resp.json()["weight"] == 9

        resp = await ac.put(f"/api/v1/pets/{pet_id}", json={"gender": 4})
        assert resp.status_code == 422

        resp = await ac.put(f"/api/v1/pets/{pet_id}", json={"weight": 2**63})
        assert resp.status_code == 422

        resp = await ac.put(f"/api/v1/pets/{pet_id}", json={"name": None})
        assert resp.status_code == 422

        resp = await ac.delete(f"/api/v1/pets/{pet_id}")
        assert resp.status_code == 204

        resp = await ac.get(f"/api/v1/pets/{pet_id}")
        assert resp.status_code == 404


@pytest.mark.asyncio
async def test_missing_pet_returns_404():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        assert (await ac.get("/api/v1/pets/999")).status_code == 404
        assert (await ac.put("/api/v1/pets/999", json={"weight": 9})).status_code == 404
        assert (await ac.delete("/api/v1/pets/999")).status_code == 404


@pytest.mark.asyncio
async def test_http_writes_notify_observers(toto):
    changes = []
    handle = pet_provider.register_content_observer(PetEntry.CONTENT_URI, changes.append)
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            await ac.post("/api/v1/pets/", json=toto)
    finally:
        pet_provider.unregister_content_observer(handle)
    assert [str(a) for a in changes] == [PetEntry.CONTENT_URI]

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_verify_valid_token(client: AsyncClient, registered):
    payload, register_body = registered

    response = await client.post("/verify", json={"token": register_body["accessToken"]})

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True
    assert data["user"]["id"] == register_body["user"]["id"]
    assert data["user"]["email"] == payload["email"]
    assert data["user"]["username"] == payload["username"]


@pytest.mark.asyncio
async def test_verify_invalid_token(client: AsyncClient):
    response = await client.post("/verify", json={"token": "invalid"})

    assert response.status_code == 401
    assert response.json() == {"valid": False, "error": "Invalid token"}


@pytest.mark.asyncio
async def test_verify_missing_token(client: AsyncClient):
    response = await client.post("/verify", json={})

    assert response.status_code == 401
    assert response.json() == {"valid": False, "error": "Token required"}

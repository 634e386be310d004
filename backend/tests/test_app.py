"""
Works API - Application Tests
==============================

What:  Tests for the pieces around the works router: root greeting, docs,
       health check, request id header (also on error responses), configuration
       and the Database handle.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError as PydanticValidationError

from worksapi.config import Settings
from worksapi.database import Database
from worksapi.services.work_service import work_service


class TestServerRoutes:

    @pytest.mark.asyncio
    async def test_root_greeting(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == "Hello World!"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_docs_served(self, test_client):
        response = await test_client.get("/docs")

        assert response.status_code == 200
        assert "swagger" in response.text.lower()

    @pytest.mark.asyncio
    async def test_openapi_lists_work_routes(self, test_client):
        schema = (await test_client.get("/openapi.json")).json()

        assert "/api/works" in schema["paths"]
        assert "/api/works/{work_id}" in schema["paths"]
        assert set(schema["paths"]["/api/works/{work_id}"]) == {"get", "put", "delete"}
        assert "WorkResponse" in schema["components"]["schemas"]

    @pytest.mark.asyncio
    async def test_health_connected(self, test_client):
        body = (await test_client.get("/health")).json()

        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/api/works")

        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/works", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.backend_port == 8080
        assert settings.database_url.endswith("/todo")
        assert settings.log_level == "INFO"

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestDatabaseHandle:

    @pytest.mark.asyncio
    async def test_ping_before_connect(self):
        database = Database("sqlite+aiosqlite:///:memory:")

        assert database.is_connected is False
        assert await database.ping() is False

    @pytest.mark.asyncio
    async def test_session_requires_connect(self):
        database = Database("sqlite+aiosqlite:///:memory:")

        with pytest.raises(RuntimeError):
            async with database.session():
                pass

    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self, test_settings):
        database = Database.from_settings(test_settings)

        await database.connect()
        assert await database.ping() is True

        await database.disconnect()
        assert database.is_connected is False


class TestErrorResponses:
    """Error bodies keep the request id header on every path."""

    @pytest.mark.asyncio
    async def test_not_found_carries_request_id(self, test_client):
        response = await test_client.delete(
            f"/api/works/{uuid4()}", headers={"X-Request-ID": "gone-1"}
        )

        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "gone-1"

    @pytest.mark.asyncio
    async def test_failed_create_carries_request_id(self, test_client):
        response = await test_client.post("/api/works", json=[])

        assert response.status_code == 500
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_unexpected_error_carries_request_id(self, test_client, monkeypatch):
        monkeypatch.setattr(
            work_service, "find_all", AsyncMock(side_effect=RuntimeError("boom"))
        )

        response = await test_client.get("/api/works", headers={"X-Request-ID": "boom-1"})

        assert response.status_code == 500
        assert response.json() == {"message": "An unexpected error occurred"}
        assert response.headers["X-Request-ID"] == "boom-1"

    @pytest.mark.asyncio
    async def test_unconnected_database_answers_500(self, test_settings):
        from worksapi.main import create_app

        app = create_app(settings=test_settings, database=Database(test_settings.database_url))
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/works")

        assert response.status_code == 500
        assert response.json() == {"message": "An unexpected error occurred"}
        assert response.headers["X-Request-ID"]

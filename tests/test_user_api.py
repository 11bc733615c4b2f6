import asyncio
import logging

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from user_service.app import app
from user_service.domain.ports.repositories.user_repository import UserRepository
from user_service.infrastructure.config.dependencies import get_user_repository

from .conftest import BaseIntegrationTest
from .factories import user_factory

USERS_URL = "/api/v1/users"


class TestUserAPI(BaseIntegrationTest):
    """Integration tests for User API endpoints"""

    async def _create(self, client, **overrides) -> dict:
        response = await client.post(f"{USERS_URL}/", json=user_factory.create_user_data(**overrides))
        assert response.status_code == status.HTTP_201_CREATED
        return response.json()

    @pytest.mark.asyncio
    async def test_create_user_success(self, client):
        user_data = {
            "name": "Test User",
            "email": "test@example.com",
            "age": 25,
            "department": "Testing",
            "salary": 50000.129,
        }

        response = await client.post(f"{USERS_URL}/", json=user_data)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Test User"
        assert data["email"] == "test@example.com"
        assert data["salary"] == 50000.13
        assert data["is_active"] is True
        assert "id" in data
        assert data["created_at"] is not None

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email(self, client):
        await self._create(client, email="duplicate@example.com")

        response = await client.post(f"{USERS_URL}/", json=user_factory.create_user_data(email="duplicate@example.com"))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "Email already exists"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Test User", "email": "invalid-email"},
            {"name": "T", "email": "short@example.com"},
            {"name": "Too Young", "email": "young@example.com", "age": 15},
            {"name": "Negative", "email": "neg@example.com", "salary": -1},
            {"email": "noname@example.com"},
        ],
    )
    async def test_create_user_validation(self, client, payload):
        response = await client.post(f"{USERS_URL}/", json=payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_get_user(self, client):
        created = await self._create(client, name="Lookup")

        response = await client.get(f"{USERS_URL}/{created['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Lookup"

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, client):
        response = await client.get(f"{USERS_URL}/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User not found"

    @pytest.mark.asyncio
    async def test_get_user_rejects_non_positive_id(self, client):
        response = await client.get(f"{USERS_URL}/0")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_list_users(self, client):
        await self._create(client, name="User One")
        await self._create(client, name="User Two")

        response = await client.get(f"{USERS_URL}/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert {user["name"] for user in data["data"]} == {"User One", "User Two"}
        assert data["pagination"] == {
            "current_page": 1,
            "total_pages": 1,
            "total_items": 2,
            "items_per_page": 10,
            "has_next": False,
            "has_prev": False,
        }

    @pytest.mark.asyncio
    async def test_list_users_with_pagination(self, client):
        for i in range(12):
            await self._create(client, name=f"User {i:02d}")

        response = await client.get(f"{USERS_URL}/?page=2&limit=10&sort_by=name&sort_order=ASC")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [user["name"] for user in data["data"]] == ["User 10", "User 11"]
        assert data["pagination"]["total_pages"] == 2
        assert data["pagination"]["has_next"] is False
        assert data["pagination"]["has_prev"] is True

    @pytest.mark.asyncio
    async def test_list_users_with_filters(self, client):
        await self._create(client, name="Young Engineer", age=25, department="Engineering")
        await self._create(client, name="Senior Engineer", age=35, department="Engineering")
        inactive = await self._create(client, name="Former Engineer", age=45, department="Engineering")
        await client.delete(f"{USERS_URL}/{inactive['id']}")

        by_age = await client.get(f"{USERS_URL}/?min_age=30")
        inactive_only = await client.get(f"{USERS_URL}/?is_active=false")

        assert {user["name"] for user in by_age.json()["data"]} == {"Senior Engineer", "Former Engineer"}
        assert [user["name"] for user in inactive_only.json()["data"]] == ["Former Engineer"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "query",
        ["page=0", "limit=0", "limit=101", "sort_by=password", "sort_order=UP", "min_age=30&max_age=20"],
    )
    async def test_list_users_rejects_invalid_query(self, client, query):
        response = await client.get(f"{USERS_URL}/?{query}")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_update_user(self, client):
        created = await self._create(client, name="Before", age=30)

        response = await client.put(f"{USERS_URL}/{created['id']}", json={"name": "After"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "After"
        assert data["age"] == 30
        assert data["email"] == created["email"]

    @pytest.mark.asyncio
    async def test_update_with_same_values_moves_updated_at(self, client):
        created = await self._create(client, name="Same Name")
        await asyncio.sleep(1.1)

        response = await client.put(f"{USERS_URL}/{created['id']}", json={"name": "Same Name"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["updated_at"] != created["updated_at"]
        assert response.json()["created_at"] == created["created_at"]

    @pytest.mark.asyncio
    async def test_update_user_email_conflict(self, client):
        await self._create(client, email="first@example.com")
        second = await self._create(client, email="second@example.com")

        response = await client.put(f"{USERS_URL}/{second['id']}", json={"email": "first@example.com"})

        assert response.status_code == status.HTTP_409_CONFLICT

    @pytest.mark.asyncio
    async def test_update_user_keeps_own_email(self, client):
        created = await self._create(client, email="mine@example.com")

        response = await client.put(f"{USERS_URL}/{created['id']}", json={"email": "mine@example.com", "age": 50})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["age"] == 50

    @pytest.mark.asyncio
    async def test_update_user_not_found(self, client):
        response = await client.put(f"{USERS_URL}/99999", json={"name": "Nobody"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_soft_delete_user(self, client):
        created = await self._create(client)

        response = await client.delete(f"{USERS_URL}/{created['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "User deactivated successfully"}
        fetched = await client.get(f"{USERS_URL}/{created['id']}")
        assert fetched.json()["is_active"] is False

    @pytest.mark.asyncio
    async def test_hard_delete_user(self, client):
        created = await self._create(client)

        response = await client.delete(f"{USERS_URL}/{created['id']}/hard")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "User permanently deleted"}
        fetched = await client.get(f"{USERS_URL}/{created['id']}")
        assert fetched.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_user_not_found(self, client):
        soft = await client.delete(f"{USERS_URL}/99999")
        hard = await client.delete(f"{USERS_URL}/99999/hard")

        assert soft.status_code == status.HTTP_404_NOT_FOUND
        assert hard.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_activate_and_deactivate(self, client):
        created = await self._create(client)

        deactivated = await client.patch(f"{USERS_URL}/{created['id']}/deactivate")
        activated = await client.patch(f"{USERS_URL}/{created['id']}/activate")
        missing = await client.patch(f"{USERS_URL}/99999/activate")

        assert deactivated.status_code == status.HTTP_200_OK
        assert deactivated.json()["is_active"] is False
        assert activated.status_code == status.HTTP_200_OK
        assert activated.json()["is_active"] is True
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_statistics_empty(self, client):
        response = await client.get(f"{USERS_URL}/stats")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["overview"]["total_users"] == 0
        assert data["overview"]["average_age"] is None
        assert data["overview"]["average_salary"] is None
        assert data["by_department"] == []

    @pytest.mark.asyncio
    async def test_statistics(self, client):
        await self._create(client, department="Engineering", salary=80000, age=30)
        await self._create(client, department="Engineering", salary=100000, age=40)
        await self._create(client, department="Sales", salary=60000, age=20)

        response = await client.get(f"{USERS_URL}/stats")

        data = response.json()
        assert data["overview"]["total_users"] == 3
        assert data["overview"]["active_users"] == 3
        assert data["overview"]["average_age"] == 30.0
        assert data["by_department"][0] == {"department": "Engineering", "user_count": 2, "avg_salary": 90000.0}

    @pytest.mark.asyncio
    async def test_health_and_index(self, client):
        health = await client.get("/health")
        index = await client.get("/api/v1")

        assert health.status_code == status.HTTP_200_OK
        assert health.json()["status"] == "success"
        assert index.status_code == status.HTTP_200_OK
        assert "users" in index.json()["endpoints"]


class TestStoreFailure(BaseIntegrationTest):
    @pytest.mark.asyncio
    async def test_store_failure_is_a_server_error(self, client, mock_user_repository):
        mock_user_repository.list_users.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))

        def override_get_user_repository() -> UserRepository:
            return mock_user_repository

        app.dependency_overrides[get_user_repository] = override_get_user_repository

        response = await client.get(f"{USERS_URL}/")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "Database error"}

    @pytest.mark.asyncio
    async def test_store_failure_is_logged_with_request_details(self, client, mock_user_repository, caplog):
        mock_user_repository.get_statistics.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))

        def override_get_user_repository() -> UserRepository:
            return mock_user_repository

        app.dependency_overrides[get_user_repository] = override_get_user_repository

        with caplog.at_level(logging.ERROR, logger="user_service.app"):
            await client.get(f"{USERS_URL}/stats")

        record = next(r for r in caplog.records if r.name == "user_service.app")
        assert record.msg == "Database error on %s %s: %s"
        assert record.args[:2] == ("GET", f"{USERS_URL}/stats")
        assert "database is locked" in record.getMessage()
        assert record.exc_info is not None

"""Fixtures compartidas de la batería de pruebas."""

from __future__ import annotations

import asyncio
import os

import pytest

from perfil_app.infrastructure.repositories import (
    InMemoryUserRepository,
    RepositorySettings,
    UserRepository,
)
from perfil_app.models.user import User

MICHAEL = User(id=1, name="Michael Mekonnen", age=29, gender="Male")


class FailingRepository(UserRepository):
    """Repositorio que falla en todas las operaciones."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or RuntimeError("backend caído")

    async def insert_user(self, user):
        raise self.error

    async def update_user(self, user):
        raise self.error

    async def delete_user(self, user):
        raise self.error

    async def get_user_by_id(self, user_id):
        raise self.error


class GatedRepository(UserRepository):
    """Repositorio cuyas búsquedas esperan a que la prueba las libere."""

    def __init__(self, users) -> None:
        self._users = {user.id: user for user in users}
        self.gates: dict[int, asyncio.Event] = {}
        self.updated: list[User] = []

    def gate(self, user_id: int) -> asyncio.Event:
        return self.gates.setdefault(user_id, asyncio.Event())

    async def insert_user(self, user):
        self._users[user.id] = user

    async def update_user(self, user):
        self.updated.append(user)
        self._users[user.id] = user

    async def delete_user(self, user):
        self._users.pop(user.id, None)

    async def get_user_by_id(self, user_id):
        await self.gate(user_id).wait()
        return self._users.get(user_id)


@pytest.fixture(autouse=True)
def clean_app_env(monkeypatch):
    """Evita que variables PERFIL_APP_* del entorno alteren las pruebas."""
    for name in list(os.environ):
        if name.startswith("PERFIL_APP_"):
            monkeypatch.delenv(name)


@pytest.fixture
def no_latency():
    return RepositorySettings(insert_delay=0, update_delay=0, delete_delay=0, lookup_delay=0)


@pytest.fixture
def repository(no_latency):
    return InMemoryUserRepository(no_latency)


@pytest.fixture
def failing_repository():
    return FailingRepository()


@pytest.fixture
def gated_repository():
    """Fábrica de repositorios con búsquedas controladas por la prueba."""

    def _make(users) -> GatedRepository:
        return GatedRepository(users)

    return _make


@pytest.fixture
def michael():
    return MICHAEL

"""Implementaciones de repositorios para acceso a datos.

El repositorio en memoria simula la latencia de un backend remoto con
``asyncio.sleep``, de modo que la interfaz pueda mostrar su estado de carga.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from perfil_app.models.user import User

logger = logging.getLogger(__name__)


@dataclass
class RepositorySettings:
    """Latencias simuladas, en segundos, de cada operación."""

    insert_delay: float = 0.5
    update_delay: float = 0.5
    delete_delay: float = 0.5
    lookup_delay: float = 1.0

    def scaled(self, factor: float) -> RepositorySettings:
        """Devuelve una copia con todas las latencias multiplicadas."""

        if factor < 0:
            raise ValueError(f"El factor de latencia no puede ser negativo: {factor}")
        return RepositorySettings(
            insert_delay=self.insert_delay * factor,
            update_delay=self.update_delay * factor,
            delete_delay=self.delete_delay * factor,
            lookup_delay=self.lookup_delay * factor,
        )


DEFAULT_USERS = (User(id=1, name="Michael Mekonnen", age=29, gender="Male"),)


class UserRepository(ABC):
    """Contrato asíncrono de persistencia de usuarios."""

    @abstractmethod
    async def insert_user(self, user: User) -> None:
        """Crea el registro o sobrescribe uno existente con el mismo id."""

    @abstractmethod
    async def update_user(self, user: User) -> None:
        """Sobrescribe el registro solo si el id ya existe."""

    @abstractmethod
    async def delete_user(self, user: User) -> None:
        """Elimina el registro si está presente."""

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> User | None:
        """Devuelve el usuario o ``None`` si no existe."""


class InMemoryUserRepository(UserRepository):
    """Repositorio de usuarios basado en un diccionario en memoria."""

    def __init__(
        self,
        settings: RepositorySettings | None = None,
        users: Iterable[User] | None = None,
    ) -> None:
        self.settings = settings or RepositorySettings()
        seed = DEFAULT_USERS if users is None else users
        self._users: dict[int, User] = {user.id: user for user in seed}

    async def insert_user(self, user: User) -> None:
        await asyncio.sleep(self.settings.insert_delay)
        logger.info("Insertando usuario: %s", user)
        self._users[user.id] = user

    async def update_user(self, user: User) -> None:
        await asyncio.sleep(self.settings.update_delay)
        logger.info("Actualizando usuario: %s", user)
        if user.id in self._users:
            self._users[user.id] = user
        else:
            logger.debug("Usuario %s inexistente, no se actualiza", user.id)

    async def delete_user(self, user: User) -> None:
        await asyncio.sleep(self.settings.delete_delay)
        logger.info("Eliminando usuario: %s", user)
        self._users.pop(user.id, None)

    async def get_user_by_id(self, user_id: int) -> User | None:
        await asyncio.sleep(self.settings.lookup_delay)
        logger.info("Buscando usuario por id: %s", user_id)
        return self._users.get(user_id)


__all__ = [
    "DEFAULT_USERS",
    "InMemoryUserRepository",
    "RepositorySettings",
    "UserRepository",
]

"""Servicios de aplicación que coordinan el acceso a datos."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from perfil_app.core.state import (
    Effect,
    FetchUser,
    LoadUser,
    Outcome,
    PersistUser,
    ProfileEvent,
    ProfileUiState,
    UserFetched,
    UserFetchFailed,
    UserSaved,
    UserSaveFailed,
    complete,
    reduce,
)
from perfil_app.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)

StateListener = Callable[[ProfileUiState], None]


class ProfileViewModel:
    """Media entre el repositorio de usuarios y la pantalla de perfil.

    Es el único dueño del :class:`ProfileUiState`. Todos los cambios pasan por
    el reductor y se notifican a los observadores registrados con
    :meth:`subscribe`. Debe usarse desde un único bucle ``asyncio``.
    """

    def __init__(self, repository: UserRepository, initial_user_id: int | None = None) -> None:
        self._repository = repository
        self._initial_user_id = initial_user_id
        self._state = ProfileUiState()
        self._listeners: list[StateListener] = []
        self._pending_tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> ProfileUiState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Registra un observador y devuelve la función para darlo de baja."""

        if listener not in self._listeners:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def start(self) -> asyncio.Task | None:
        """Carga el usuario inicial, si se configuró uno."""

        if self._initial_user_id is None:
            return None
        return self.dispatch(LoadUser(self._initial_user_id))

    def dispatch(self, event: ProfileEvent) -> asyncio.Task | None:
        """Punto de entrada único para las acciones de la interfaz.

        Aplica el evento de inmediato y, si corresponde, programa el efecto en
        el bucle en ejecución. Devuelve la tarea del efecto o ``None``.
        """

        logger.debug("Evento recibido: %r", event)
        new_state, effect = reduce(self._state, event)
        loop = asyncio.get_running_loop() if effect is not None else None
        self._set_state(new_state)
        if effect is None:
            return None

        task = loop.create_task(self._run_effect(effect))
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)
        return task

    async def wait_until_idle(self) -> None:
        """Espera a que terminen todos los efectos en curso."""

        while self._pending_tasks:
            await asyncio.gather(*list(self._pending_tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Efectos
    # ------------------------------------------------------------------
    async def _run_effect(self, effect: Effect) -> None:
        outcome = await self._execute(effect)
        # Se aplica sobre el estado vigente, no sobre el del momento del envío.
        self._set_state(complete(self._state, outcome))

    async def _execute(self, effect: Effect) -> Outcome:
        if isinstance(effect, FetchUser):
            try:
                user = await self._repository.get_user_by_id(effect.user_id)
            except Exception as exc:
                logger.exception("No se pudo cargar el usuario %s", effect.user_id)
                return UserFetchFailed(str(exc))
            return UserFetched(user)

        if isinstance(effect, PersistUser):
            try:
                await self._repository.update_user(effect.user)
            except Exception as exc:
                logger.exception("No se pudo guardar el usuario %s", effect.user.id)
                return UserSaveFailed(str(exc))
            return UserSaved(effect.user)

        raise TypeError(f"Efecto no soportado: {effect!r}")

    def _set_state(self, state: ProfileUiState) -> None:
        if state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Fallo en el observador de estado %r", listener)


__all__ = ["ProfileViewModel", "StateListener"]

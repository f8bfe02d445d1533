"""Estado de la pantalla de perfil y reductor de eventos.

El reductor es puro: recibe el estado actual y un evento, y devuelve el nuevo
estado junto con la descripción del efecto asíncrono a ejecutar (o ``None``).
Cuando el efecto termina, su resultado vuelve a pasar por :func:`complete`
contra el estado vigente en ese momento.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from perfil_app.models.user import User

LOAD_ERROR_MESSAGE = "Failed to load user"
SAVE_ERROR_MESSAGE = "Failed to save user"


@dataclass(frozen=True, slots=True)
class ProfileUiState:
    """Estado completo de la pantalla en un instante dado."""

    is_loading: bool = False
    user: User | None = None
    error: str | None = None
    is_saved: bool = False


# ----------------------------------------------------------------------
# Eventos de la interfaz
# ----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class LoadUser:
    user_id: int


@dataclass(frozen=True, slots=True)
class UpdateUserName:
    name: str


@dataclass(frozen=True, slots=True)
class SaveUser:
    pass


ProfileEvent = Union[LoadUser, UpdateUserName, SaveUser]


# ----------------------------------------------------------------------
# Efectos solicitados al repositorio
# ----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class FetchUser:
    user_id: int


@dataclass(frozen=True, slots=True)
class PersistUser:
    user: User


Effect = Union[FetchUser, PersistUser]


# ----------------------------------------------------------------------
# Resultados de los efectos
# ----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class UserFetched:
    user: User | None


@dataclass(frozen=True, slots=True)
class UserFetchFailed:
    reason: str = ""


@dataclass(frozen=True, slots=True)
class UserSaved:
    user: User


@dataclass(frozen=True, slots=True)
class UserSaveFailed:
    reason: str = ""


Outcome = Union[UserFetched, UserFetchFailed, UserSaved, UserSaveFailed]


def reduce(state: ProfileUiState, event: ProfileEvent) -> tuple[ProfileUiState, Effect | None]:
    """Aplica un evento de la interfaz al estado actual."""

    if isinstance(event, LoadUser):
        return replace(state, is_loading=True, error=None), FetchUser(event.user_id)

    if isinstance(event, UpdateUserName):
        if state.user is None:
            return state, None
        return replace(state, user=state.user.with_name(event.name), is_saved=False), None

    if isinstance(event, SaveUser):
        if state.user is None:
            return state, None
        return replace(state, is_loading=True, error=None), PersistUser(state.user)

    raise TypeError(f"Evento no soportado: {event!r}")


def complete(state: ProfileUiState, outcome: Outcome) -> ProfileUiState:
    """Incorpora el resultado de un efecto al estado vigente."""

    if isinstance(outcome, UserFetched):
        # Un usuario inexistente no se considera error.
        return replace(state, is_loading=False, user=outcome.user)

    if isinstance(outcome, UserFetchFailed):
        return replace(state, is_loading=False, error=LOAD_ERROR_MESSAGE)

    if isinstance(outcome, UserSaved):
        return replace(state, is_loading=False, is_saved=True)

    if isinstance(outcome, UserSaveFailed):
        return replace(state, is_loading=False, error=SAVE_ERROR_MESSAGE)

    raise TypeError(f"Resultado no soportado: {outcome!r}")


__all__ = [
    "LOAD_ERROR_MESSAGE",
    "SAVE_ERROR_MESSAGE",
    "Effect",
    "FetchUser",
    "LoadUser",
    "Outcome",
    "PersistUser",
    "ProfileEvent",
    "ProfileUiState",
    "SaveUser",
    "UpdateUserName",
    "UserFetchFailed",
    "UserFetched",
    "UserSaveFailed",
    "UserSaved",
    "complete",
    "reduce",
]

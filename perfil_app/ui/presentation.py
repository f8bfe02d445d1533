"""Reglas de presentación independientes de Qt."""

from __future__ import annotations

from enum import Enum

from perfil_app.core.state import ProfileUiState

NOT_AVAILABLE = "N/A"
SAVED_MESSAGE = "User profile saved!"


class Screen(Enum):
    LOADING = "loading"
    ERROR = "error"
    CONTENT = "content"
    EMPTY = "empty"


def screen_for(state: ProfileUiState) -> Screen:
    """Decide qué vista mostrar; la carga tiene prioridad sobre el error."""

    if state.is_loading:
        return Screen.LOADING
    if state.error is not None:
        return Screen.ERROR
    if state.user is not None:
        return Screen.CONTENT
    return Screen.EMPTY


def format_optional(value: object) -> str:
    return NOT_AVAILABLE if value is None else str(value)


def should_announce_save(previous: ProfileUiState | None, current: ProfileUiState) -> bool:
    """Indica si hay que avisar del guardado (solo en la transición a guardado)."""

    was_saved = previous.is_saved if previous is not None else False
    return current.is_saved and not was_saved


__all__ = [
    "NOT_AVAILABLE",
    "SAVED_MESSAGE",
    "Screen",
    "format_optional",
    "screen_for",
    "should_announce_save",
]

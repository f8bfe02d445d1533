"""Definiciones de modelos de dominio."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario editable desde la pantalla de perfil.

    Solo ``id`` es obligatorio; el resto de campos puede faltar y la interfaz
    los muestra como "N/A".
    """

    id: int
    name: str | None = None
    age: int | None = None
    gender: str | None = None

    def with_name(self, name: str) -> User:
        """Devuelve una copia del usuario con el nombre reemplazado."""

        return replace(self, name=name)


__all__ = ["User"]

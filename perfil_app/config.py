"""Configuración de la aplicación leída del entorno."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from perfil_app.infrastructure.repositories import RepositorySettings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppConfig(BaseSettings):
    """Parámetros de arranque de la pantalla de perfil.

    Cada campo se lee de la variable ``PERFIL_APP_<CAMPO>``. Un
    ``PERFIL_APP_INITIAL_USER_ID`` vacío desactiva la carga inicial.
    """

    model_config = SettingsConfigDict(env_prefix="PERFIL_APP_", extra="ignore")

    initial_user_id: Optional[int] = Field(default=1, description="Usuario cargado al abrir la pantalla")
    log_level: LogLevel = Field(default="INFO", description="Nivel de logging")
    latency_scale: float = Field(default=1.0, ge=0, description="Multiplica las latencias simuladas")

    @field_validator("initial_user_id", mode="before")
    @classmethod
    def blank_means_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def repository(self) -> RepositorySettings:
        return RepositorySettings().scaled(self.latency_scale)


__all__ = ["AppConfig", "LogLevel"]

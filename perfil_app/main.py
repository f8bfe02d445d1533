"""Punto de entrada de la aplicación.

Crea el repositorio, el view-model y la ventana principal de forma explícita y
arranca la interfaz gráfica.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from perfil_app.config import AppConfig
from perfil_app.core.services import ProfileViewModel
from perfil_app.infrastructure.repositories import InMemoryUserRepository
from perfil_app.ui.main_window import ProfileWindow


def build_view_model(config: AppConfig) -> ProfileViewModel:
    """Arma el view-model con un repositorio en memoria."""

    repository = InMemoryUserRepository(config.repository)
    return ProfileViewModel(repository, initial_user_id=config.initial_user_id)


def main() -> None:
    """Arranca la aplicación PyQt6 con las dependencias configuradas."""

    config = AppConfig()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    window = ProfileWindow(view_model=build_view_model(config))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover - punto de entrada interactivo
    main()

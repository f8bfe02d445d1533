"""Ventana principal de la aplicación."""

from __future__ import annotations

import asyncio
import logging

from PyQt6.QtCore import QObject, Qt, QThread, pyqtSignal
from PyQt6.QtWidgets import (
    QFormLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from perfil_app.core.services import ProfileViewModel
from perfil_app.core.state import ProfileEvent, ProfileUiState, SaveUser, UpdateUserName
from perfil_app.ui.presentation import (
    SAVED_MESSAGE,
    Screen,
    format_optional,
    screen_for,
    should_announce_save,
)

logger = logging.getLogger(__name__)


class AsyncBridge(QObject):
    """Ejecuta el view-model en un bucle ``asyncio`` dentro de un ``QThread``.

    Los cambios de estado llegan al hilo de la interfaz mediante la señal
    ``state_changed``; los eventos viajan al bucle con ``call_soon_threadsafe``.
    """

    state_changed = pyqtSignal(object)
    finished = pyqtSignal()

    def __init__(self, view_model: ProfileViewModel) -> None:
        super().__init__()
        self.view_model = view_model
        self._loop = asyncio.new_event_loop()

    def run(self) -> None:
        asyncio.set_event_loop(self._loop)
        unsubscribe = self.view_model.subscribe(self.state_changed.emit)
        self._loop.call_soon(self.view_model.start)
        try:
            self._loop.run_forever()
        finally:
            unsubscribe()
            pending = asyncio.all_tasks(self._loop)
            for task in pending:
                task.cancel()
            if pending:
                self._loop.run_until_complete(
                    asyncio.gather(*pending, return_exceptions=True)
                )
            self._loop.close()
            self.finished.emit()

    def post(self, event: ProfileEvent) -> None:
        if self._loop.is_closed():
            logger.warning("Evento descartado tras cerrar el bucle: %r", event)
            return
        try:
            self._loop.call_soon_threadsafe(self.view_model.dispatch, event)
        except RuntimeError:
            # El hilo del bucle pudo cerrarlo entre la comprobación y el envío.
            logger.warning("Evento descartado tras cerrar el bucle: %r", event)

    def stop(self) -> None:
        if not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._loop.stop)


class ProfileWindow(QMainWindow):
    """Pantalla de edición de perfil con vistas de carga, error y contenido."""

    WINDOW_TITLE = "Profile"
    WINDOW_SIZE = (420, 280)
    STATUS_TIMEOUT_MS = 4000

    def __init__(self, *, view_model: ProfileViewModel) -> None:
        super().__init__()
        self._last_state: ProfileUiState | None = None

        self.setWindowTitle(self.WINDOW_TITLE)
        self.resize(*self.WINDOW_SIZE)

        self._build_ui()

        self._bridge_thread = QThread(self)
        self._bridge = AsyncBridge(view_model)
        self._bridge.moveToThread(self._bridge_thread)
        self._bridge_thread.started.connect(self._bridge.run)
        self._bridge.finished.connect(self._bridge_thread.quit)
        self._bridge.state_changed.connect(self.render)

        self.render(view_model.state)
        self._bridge_thread.start()

    # ------------------------------------------------------------------
    # Construcción
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self.progress = QProgressBar()
        self.progress.setRange(0, 0)
        self.progress.setTextVisible(False)
        loading_page = QWidget()
        loading_layout = QVBoxLayout(loading_page)
        loading_layout.addStretch(1)
        loading_layout.addWidget(self.progress)
        loading_layout.addStretch(1)

        self.error_label = QLabel()
        self.error_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.error_label.setStyleSheet("color: #b91c1c; font-weight: 600;")

        self.name_input = QLineEdit()
        self.name_input.textEdited.connect(self._on_name_edited)
        self.age_label = QLabel()
        self.gender_label = QLabel()
        self.save_button = QPushButton("Save Changes")
        self.save_button.clicked.connect(self._on_save_clicked)

        form = QFormLayout()
        form.addRow("Name", self.name_input)
        content_page = QWidget()
        content_layout = QVBoxLayout(content_page)
        content_layout.setSpacing(16)
        content_layout.setContentsMargins(16, 16, 16, 16)
        content_layout.addLayout(form)
        content_layout.addWidget(self.age_label)
        content_layout.addWidget(self.gender_label)
        content_layout.addWidget(self.save_button, alignment=Qt.AlignmentFlag.AlignCenter)
        content_layout.addStretch(1)

        self.stack = QStackedWidget()
        self._pages = {
            Screen.LOADING: loading_page,
            Screen.ERROR: self.error_label,
            Screen.CONTENT: content_page,
            Screen.EMPTY: QWidget(),
        }
        for page in self._pages.values():
            self.stack.addWidget(page)

        self.setCentralWidget(self.stack)

    # ------------------------------------------------------------------
    # Renderizado
    # ------------------------------------------------------------------
    def render(self, state: ProfileUiState) -> None:
        screen = screen_for(state)
        self.stack.setCurrentWidget(self._pages[screen])

        if screen is Screen.ERROR:
            self.error_label.setText(state.error or "")
        elif screen is Screen.CONTENT and state.user is not None:
            name = state.user.name or ""
            # Evita mover el cursor mientras el usuario escribe.
            if self.name_input.text() != name:
                self.name_input.setText(name)
            self.age_label.setText(f"Age: {format_optional(state.user.age)}")
            self.gender_label.setText(f"Gender: {format_optional(state.user.gender)}")

        if should_announce_save(self._last_state, state):
            self.statusBar().showMessage(SAVED_MESSAGE, self.STATUS_TIMEOUT_MS)
        self._last_state = state

    # ------------------------------------------------------------------
    # Eventos y acciones
    # ------------------------------------------------------------------
    def _on_name_edited(self, text: str) -> None:
        self._bridge.post(UpdateUserName(text))

    def _on_save_clicked(self) -> None:
        self._bridge.post(SaveUser())

    def closeEvent(self, event) -> None:  # pragma: no cover - interacción UI
        self._bridge.stop()
        self._bridge_thread.quit()
        self._bridge_thread.wait()
        super().closeEvent(event)


__all__ = ["AsyncBridge", "ProfileWindow"]

"""Pruebas de AsyncBridge: view-model en un QThread y estados por señal."""

import logging
import os
import time

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QCoreApplication, QThread  # noqa: E402

from perfil_app.core.services import ProfileViewModel  # noqa: E402
from perfil_app.core.state import SaveUser  # noqa: E402
from perfil_app.ui.main_window import AsyncBridge  # noqa: E402

BRIDGE_LOGGER = "perfil_app.ui.main_window"


@pytest.fixture(scope="session")
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        QCoreApplication.processEvents()
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def running_bridge(qt_app, repository):
    """Arranca el bridge en su hilo y lo detiene al terminar la prueba."""

    view_model = ProfileViewModel(repository, initial_user_id=1)
    bridge = AsyncBridge(view_model)
    thread = QThread()
    bridge.moveToThread(thread)
    states = []
    bridge.state_changed.connect(states.append)
    thread.started.connect(bridge.run)
    bridge.finished.connect(thread.quit)
    thread.start()

    yield bridge, thread, states

    bridge.stop()
    thread.quit()
    thread.wait(5000)


class TestAsyncBridge:
    def test_initial_load_arrives_by_signal(self, running_bridge, michael):
        _, _, states = running_bridge

        assert _wait_for(lambda: states and states[-1].user == michael and not states[-1].is_loading)
        assert states[0].is_loading is True

    def test_posted_save_completes(self, running_bridge, michael):
        bridge, _, states = running_bridge
        assert _wait_for(lambda: states and states[-1].user == michael and not states[-1].is_loading)

        bridge.post(SaveUser())

        assert _wait_for(lambda: states[-1].is_saved)
        assert states[-1].is_loading is False
        assert any(s.is_loading and s.user == michael for s in states[1:])

    def test_post_after_stop_only_warns(self, running_bridge, michael, caplog):
        bridge, thread, states = running_bridge
        assert _wait_for(lambda: states and states[-1].user == michael)

        bridge.stop()
        assert _wait_for(thread.isFinished)
        seen = len(states)

        with caplog.at_level(logging.WARNING, logger=BRIDGE_LOGGER):
            bridge.post(SaveUser())
        assert "Evento descartado" in caplog.text
        QCoreApplication.processEvents()
        assert len(states) == seen


class _ClosingLoop:
    """Bucle que se cierra justo después de la comprobación de ``post``."""

    def is_closed(self):
        return False

    def call_soon_threadsafe(self, callback, *args):
        raise RuntimeError("Event loop is closed")


class TestPostRace:
    def test_loop_closed_between_check_and_send(self, qt_app, repository, caplog):
        bridge = AsyncBridge(ProfileViewModel(repository))
        bridge._loop.close()
        bridge._loop = _ClosingLoop()

        with caplog.at_level(logging.WARNING, logger=BRIDGE_LOGGER):
            bridge.post(SaveUser())
        assert "Evento descartado" in caplog.text

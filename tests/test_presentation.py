"""Pruebas de perfil_app/ui/presentation.py: selección de vista."""

from perfil_app.core.state import LOAD_ERROR_MESSAGE, ProfileUiState
from perfil_app.ui.presentation import (
    Screen,
    format_optional,
    screen_for,
    should_announce_save,
)


class TestScreenFor:
    def test_loading_takes_precedence(self, michael):
        state = ProfileUiState(is_loading=True, user=michael, error=LOAD_ERROR_MESSAGE)
        assert screen_for(state) is Screen.LOADING

    def test_error_over_content(self, michael):
        state = ProfileUiState(user=michael, error=LOAD_ERROR_MESSAGE)
        assert screen_for(state) is Screen.ERROR

    def test_content(self, michael):
        assert screen_for(ProfileUiState(user=michael)) is Screen.CONTENT

    def test_empty(self):
        assert screen_for(ProfileUiState()) is Screen.EMPTY


class TestFormatting:
    def test_missing_values(self):
        assert format_optional(None) == "N/A"

    def test_present_values(self):
        assert format_optional(29) == "29"
        assert format_optional("Male") == "Male"


class TestSaveAnnouncement:
    def test_only_on_transition(self, michael):
        saved = ProfileUiState(user=michael, is_saved=True)
        assert should_announce_save(ProfileUiState(user=michael), saved) is True
        assert should_announce_save(saved, saved) is False

    def test_first_render(self):
        assert should_announce_save(None, ProfileUiState(is_saved=True)) is True
        assert should_announce_save(None, ProfileUiState()) is False

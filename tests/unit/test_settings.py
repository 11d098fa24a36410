import pytest
from pydantic import ValidationError

from docsign.config.settings import Settings


class TestSettingsDefaults:
    def test_default_preview_size(self) -> None:
        s = Settings()
        assert (s.preview_width, s.preview_height) == (600, 800)

    def test_default_summary_page_is_letter(self) -> None:
        s = Settings()
        assert (s.summary_page_width, s.summary_page_height) == (612.0, 792.0)

    def test_default_output_suffix(self) -> None:
        assert Settings().output_suffix == "_signed"


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert Settings().log_level == "DEBUG"

    def test_loads_preview_width(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREVIEW_WIDTH", "900")
        assert Settings().preview_width == 900


class TestSettingsValidation:
    def test_non_numeric_preview_width(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREVIEW_WIDTH", "wide")
        with pytest.raises(ValidationError):
            Settings()

    def test_zero_preview_height(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREVIEW_HEIGHT", "0")
        with pytest.raises(ValidationError):
            Settings()

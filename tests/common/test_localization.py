# tests/common/test_localization.py
"""
Тесты для модуля локализации.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from reboque360.common.exceptions import (
    AddressNotFoundError,
    FeatureNotAvailableError,
    GeoProviderError,
    InvalidQuoteInputError,
    InvalidStatusTransitionError,
    PersistenceError,
    QuotaExceededError,
    QuoteNotFoundError,
    RouteNotFoundError,
    ServiceAlreadyExistsError,
    ServiceNotFoundError,
    VehicleNotFoundError,
)
from reboque360.common.localization import (
    get_lang_dict_path,
    get_text,
    load_lang_dict,
)


class TestGetLangDictPath:
    """Тесты для функции get_lang_dict_path."""

    def test_path_in_config_directory(self) -> None:
        path = get_lang_dict_path()
        assert isinstance(path, Path)
        assert path.name == "lang_dict.json"
        assert path.parent.name == "config"


class TestLoadLangDict:
    """Тесты для функции load_lang_dict."""

    def test_loads_dict(self) -> None:
        load_lang_dict.cache_clear()

        lang_dict = load_lang_dict()

        assert isinstance(lang_dict, dict)
        assert "ERROR_QUOTA_EXCEEDED" in lang_dict

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        load_lang_dict.cache_clear()
        try:
            with patch(
                "reboque360.common.localization.get_lang_dict_path",
                return_value=tmp_path / "missing.json",
            ):
                with pytest.raises(FileNotFoundError):
                    load_lang_dict()
        finally:
            load_lang_dict.cache_clear()

    @pytest.mark.parametrize(
        "code",
        [
            AddressNotFoundError.code,
            RouteNotFoundError.code,
            GeoProviderError.code,
            QuotaExceededError.code,
            ServiceAlreadyExistsError.code,
            InvalidQuoteInputError.code,
            InvalidStatusTransitionError.code,
            FeatureNotAvailableError.code,
            QuoteNotFoundError.code,
            ServiceNotFoundError.code,
            VehicleNotFoundError.code,
            PersistenceError.code,
        ],
    )
    def test_every_error_code_translated(self, code: str) -> None:
        """Проверяет, что у каждого кода ошибки есть текст на всех языках."""
        translations = load_lang_dict()[code]
        assert set(translations) >= {"pt", "en", "ru"}


class TestGetText:
    """Тесты для функции get_text."""

    def test_formats_params(self) -> None:
        text = get_text("ERROR_QUOTA_EXCEEDED", "pt", limit=10)
        assert "10" in text
        assert "{limit}" not in text

    def test_address_in_message(self) -> None:
        text = get_text("ERROR_ADDRESS_NOT_FOUND", "en", address="Rua X, 1")
        assert "Rua X, 1" in text

    def test_unknown_language_falls_back_to_pt(self) -> None:
        assert get_text("QUOTE_SHARE_NO_NOTES", "de") == get_text("QUOTE_SHARE_NO_NOTES", "pt")

    def test_unknown_key(self) -> None:
        assert get_text("NO_SUCH_KEY") == "[NO_SUCH_KEY]"
        assert get_text("NO_SUCH_KEY", default="x") == "x"

    def test_missing_placeholder_keeps_text(self, tmp_path: Path) -> None:
        """Проверяет, что незаполненный плейсхолдер не роняет get_text."""
        lang_file = tmp_path / "lang_dict.json"
        lang_file.write_text(json.dumps({"GREETING": {"pt": "Olá, {name}!"}}))

        load_lang_dict.cache_clear()
        try:
            with patch(
                "reboque360.common.localization.get_lang_dict_path",
                return_value=lang_file,
            ):
                assert get_text("GREETING", "pt", other="x") == "Olá, {name}!"
        finally:
            load_lang_dict.cache_clear()


class TestLangDictFile:
    def test_every_key_has_three_languages(self) -> None:
        """Каждое сообщение переведено на pt, en и ru."""
        for key, translations in load_lang_dict().items():
            assert set(translations) == {"pt", "en", "ru"}, key

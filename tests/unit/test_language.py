"""
Tests unitaires pour la détection de langue.
"""
import json

import pytest

from sdd_chat_proxy.core.language import Language, detect_language, detect_language_from_body


class TestDetectLanguage:
    """Tests de detect_language."""

    @pytest.mark.parametrize("text", [
        "你好",
        "What is 规格?",
        "一",
        "龥",
        "SDD 和 Vibe Coding 的区别",
    ])
    def test_cjk_ideograph_means_zh(self, text):
        assert detect_language(text) == Language.ZH

    @pytest.mark.parametrize("text", [
        "Hello",
        "",
        "こんにちは",   # kana seulement
        "龦",        # juste après la plage
        "㐀",        # extension A, hors plage
        "안녕하세요",
        "123 !?",
    ])
    def test_everything_else_means_en(self, text):
        assert detect_language(text) == Language.EN

    def test_non_string_is_en(self):
        assert detect_language(None) == Language.EN
        assert detect_language(42) == Language.EN

    def test_language_values(self):
        assert Language.ZH.value == "zh"
        assert Language.EN.value == "en"


class TestLanguageParse:
    """Tests de Language.parse (valeurs de config)."""

    def test_parse_known_values(self):
        assert Language.parse("en") == Language.EN
        assert Language.parse(" ZH ") == Language.ZH

    def test_parse_unknown_uses_default(self):
        assert Language.parse("fr") == Language.ZH
        assert Language.parse(None, Language.EN) == Language.EN


class TestDetectLanguageFromBody:
    """Re-dérivation de la langue sur le chemin d'erreur."""

    def test_parseable_body(self):
        assert detect_language_from_body(json.dumps({"message": "你好"})) == Language.ZH
        assert detect_language_from_body(b'{"message": "Hello"}') == Language.EN

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "{not json",
        "[1, 2]",
        '{"text": "你好"}',
        '{"message": 12}',
    ])
    def test_unusable_body_returns_none(self, raw):
        assert detect_language_from_body(raw) is None

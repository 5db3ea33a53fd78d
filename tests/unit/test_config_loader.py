from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pytest

import sdd_chat_proxy.config.loader as loader
from sdd_chat_proxy.config.loader import get_chat_settings, load_config, reload_config
from sdd_chat_proxy.config.settings import ChatProxySettings
from sdd_chat_proxy.core.exceptions import ConfigurationError
from sdd_chat_proxy.core.language import Language


@pytest.fixture(autouse=True)
def clean_cache(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("SDD_CHAT_PROXY_CONFIG", raising=False)
    loader._clear_config_cache()
    yield
    loader._clear_config_cache()


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_get_chat_settings_defaults_when_absent() -> None:
    settings = get_chat_settings({})
    assert settings == ChatProxySettings()
    assert settings.api_url == "https://api.deepseek.com/v1/chat/completions"
    assert settings.model == "deepseek-chat"
    assert settings.max_tokens == 1000
    assert settings.temperature == 0.7
    assert settings.bilingual is True
    assert settings.default_language == Language.ZH
    assert settings.timeout is None


def test_get_chat_settings_parses_and_clamps() -> None:
    config: Dict[str, Any] = {
        "deepseek": {"model": "deepseek-reasoner", "timeout": 30},
        "chat": {
            "max_tokens": 999999,
            "temperature": -1,
            "bilingual": False,
            "default_language": "EN",
            "error_body_limit": -3,
        },
        "logging": {"level": "debug"},
    }
    settings = get_chat_settings(config)
    assert settings.model == "deepseek-reasoner"
    assert settings.timeout == 30.0
    assert settings.max_tokens == 8192
    assert settings.temperature == 0.0
    assert settings.bilingual is False
    assert settings.default_language == Language.EN
    assert settings.error_body_limit == 0
    assert settings.log_level == "DEBUG"


def test_get_chat_settings_invalid_types_fall_back() -> None:
    config: Dict[str, Any] = {
        "deepseek": "not-a-table",
        "chat": {"max_tokens": "lots", "temperature": True, "default_language": "fr"},
    }
    settings = get_chat_settings(config)
    assert settings.max_tokens == 1000
    assert settings.temperature == 0.7
    assert settings.default_language == Language.ZH


def test_unresolved_api_key_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-env")
    settings = get_chat_settings({"deepseek": {"api_key": "${MISSING_VAR}"}})
    assert settings.api_key is None
    assert settings.resolve_api_key() == "sk-env"


def test_load_config_expands_env_vars(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDD_TEST_MODEL", "deepseek-coder")
    path = _write(tmp_path, '[deepseek]\nmodel = "${SDD_TEST_MODEL}"\n\n[chat]\nmax_tokens = 2000\n')

    config = load_config(str(path))
    assert config["deepseek"]["model"] == "deepseek-coder"

    settings = get_chat_settings(config)
    assert settings.model == "deepseek-coder"
    assert settings.max_tokens == 2000


def test_load_config_is_cached_until_reload(tmp_path: Path) -> None:
    path = _write(tmp_path, "[chat]\nmax_tokens = 100\n")
    assert load_config(str(path))["chat"]["max_tokens"] == 100

    path.write_text("[chat]\nmax_tokens = 200\n", encoding="utf-8")
    assert load_config(str(path))["chat"]["max_tokens"] == 100
    assert reload_config(str(path))["chat"]["max_tokens"] == 200


def test_load_config_env_var_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path, "[chat]\nbilingual = false\n")
    monkeypatch.setenv("SDD_CHAT_PROXY_CONFIG", str(path))
    assert loader.get_config() == {"chat": {"bilingual": False}}


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(str(tmp_path / "absent.toml"))
    assert exc_info.value.code == "config_error"


def test_missing_default_file_gives_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(loader, "_default_config_path", lambda: tmp_path / "config.toml")
    assert load_config() == {}


def test_invalid_toml_raises(tmp_path: Path) -> None:
    path = _write(tmp_path, "[chat\nmax_tokens = ")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


@pytest.mark.parametrize("value", ["false", 0, "yes", 1])
def test_bilingual_requires_a_boolean(value: object) -> None:
    settings = get_chat_settings({"chat": {"bilingual": value}})
    assert settings.bilingual is True


def test_bilingual_false_from_toml(tmp_path: Path) -> None:
    path = _write(tmp_path, "[chat]\nbilingual = false\n")
    assert get_chat_settings(load_config(str(path))).bilingual is False

"""src.sdd_chat_proxy.config.loader

Chargement de la configuration TOML.

Note d'architecture:
- Le package `config/` est consommé par `proxy/` et `api/`.
- Il ne dépend que de `core/` afin d'éviter les imports circulaires.
"""
import logging
import os
import re
from pathlib import Path
from typing import Dict, Any, Optional

from ..core.constants import (
    CONFIG_ENV_VAR,
    MAX_TOKENS_LIMIT,
    TEMPERATURE_MIN,
    TEMPERATURE_MAX,
)
from ..core.exceptions import ConfigurationError
from ..core.language import Language
from .settings import ChatProxySettings

logger = logging.getLogger(__name__)

# Cache global de configuration
_config_cache: Optional[Dict[str, Any]] = None

_ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


def _expand_env_vars(obj: Any) -> Any:
    """
    Récursivement étend les variables d'environnement ${VAR} dans la config.

    Une variable absente de l'environnement est laissée telle quelle.
    """
    if isinstance(obj, str):
        def replace_env_var(match):
            var_name = match.group(1)
            return os.environ.get(var_name, match.group(0))
        return _ENV_VAR_PATTERN.sub(replace_env_var, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


def _clear_config_cache():
    """Vide le cache de configuration."""
    global _config_cache
    _config_cache = None


def _default_config_path() -> Path:
    # Structure: project/src/sdd_chat_proxy/config/loader.py
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    current_file = os.path.abspath(__file__)
    project_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(current_file))))
    return Path(project_dir) / "config.toml"


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        import tomllib
    except ImportError:
        # Python 3.10
        import tomli as tomllib

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            message=f"Fichier de configuration invalide: {path} ({e})",
            config_key="config_path"
        )


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Charge la configuration depuis config.toml.

    Args:
        config_path: Chemin vers le fichier config (optionnel)

    Returns:
        Dictionnaire de configuration (vide si le fichier par défaut
        n'existe pas)

    Raises:
        ConfigurationError: Si un fichier explicite n'existe pas ou si
            le TOML est invalide
    """
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    explicit = config_path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    path = Path(config_path) if config_path is not None else _default_config_path()

    if not path.exists():
        if explicit:
            raise ConfigurationError(
                message=f"Fichier de configuration non trouvé: {path}",
                config_key="config_path"
            )
        logger.info(f"Pas de {path.name} trouvé, configuration par défaut utilisée")
        _config_cache = {}
        return _config_cache

    _config_cache = _expand_env_vars(_read_toml(path))
    logger.info(f"Configuration chargée depuis {path}")
    return _config_cache


def reload_config(config_path: str = None) -> Dict[str, Any]:
    """
    Recharge la configuration depuis le fichier.

    Returns:
        Nouvelle configuration chargée
    """
    _clear_config_cache()
    return load_config(config_path)


def get_config() -> Dict[str, Any]:
    """
    Retourne la configuration en cache.

    Returns:
        Configuration actuelle
    """
    if _config_cache is None:
        return load_config()
    return _config_cache


def _clamp_int(value: object, *, default: int, min_value: int, max_value: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        v = value
    elif isinstance(value, float):
        v = int(value)
    else:
        return default
    return max(min_value, min(max_value, v))


def _clamp_float(value: object, *, default: float, min_value: float, max_value: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        v = float(value)
    else:
        return default
    return max(min_value, min(max_value, v))


def _str_or_default(value: object, default: Optional[str]) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def get_chat_settings(config: Dict[str, Any]) -> ChatProxySettings:
    """Construit les settings depuis les sections `[deepseek]`, `[chat]` et `[logging]`.

    Propriétés:
    - Fallback robuste si section absente/incomplète
    - Validation/clamp des types pour éviter crash runtime
    - Une clé `${VAR}` non résolue est ignorée (la variable
      d'environnement `api_key_env` est alors lue à chaque appel)
    """
    defaults = ChatProxySettings()

    deepseek_obj = config.get("deepseek")
    deepseek = deepseek_obj if isinstance(deepseek_obj, dict) else {}
    chat_obj = config.get("chat")
    chat = chat_obj if isinstance(chat_obj, dict) else {}
    logging_obj = config.get("logging")
    logging_cfg = logging_obj if isinstance(logging_obj, dict) else {}

    api_key = _str_or_default(deepseek.get("api_key"), None)
    if api_key and _ENV_VAR_PATTERN.search(api_key):
        logger.warning("api_key contient une variable non résolue, ignorée")
        api_key = None

    bilingual_obj = chat.get("bilingual", defaults.bilingual)
    bilingual = bilingual_obj if isinstance(bilingual_obj, bool) else defaults.bilingual

    timeout_obj = deepseek.get("timeout", defaults.timeout)
    if isinstance(timeout_obj, (int, float)) and not isinstance(timeout_obj, bool) and timeout_obj > 0:
        timeout = float(timeout_obj)
    else:
        timeout = defaults.timeout

    return ChatProxySettings(
        api_url=_str_or_default(deepseek.get("api_url"), defaults.api_url),
        model=_str_or_default(deepseek.get("model"), defaults.model),
        api_key=api_key,
        api_key_env=_str_or_default(deepseek.get("api_key_env"), defaults.api_key_env),
        max_tokens=_clamp_int(
            chat.get("max_tokens", defaults.max_tokens),
            default=defaults.max_tokens,
            min_value=1,
            max_value=MAX_TOKENS_LIMIT,
        ),
        temperature=_clamp_float(
            chat.get("temperature", defaults.temperature),
            default=defaults.temperature,
            min_value=TEMPERATURE_MIN,
            max_value=TEMPERATURE_MAX,
        ),
        bilingual=bilingual,
        default_language=Language.parse(chat.get("default_language"), defaults.default_language),
        timeout=timeout,
        error_body_limit=_clamp_int(
            chat.get("error_body_limit", defaults.error_body_limit),
            default=defaults.error_body_limit,
            min_value=0,
            max_value=10_000,
        ),
        log_level=_str_or_default(logging_cfg.get("level"), defaults.log_level).upper(),
    )

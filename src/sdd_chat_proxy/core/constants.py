"""
Constantes globales pour SDD Chat Proxy.
"""

# ============================================================================
# UPSTREAM DEEPSEEK
# ============================================================================
DEEPSEEK_API_URL = "https://api.deepseek.com/v1/chat/completions"
DEEPSEEK_MODEL = "deepseek-chat"
DEEPSEEK_API_KEY_ENV = "DEEPSEEK_API_KEY"

# ============================================================================
# PARAMÈTRES DE GÉNÉRATION PAR DÉFAUT
# ============================================================================
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_BILINGUAL = True

MAX_TOKENS_LIMIT = 8192
TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 2.0

# Langue utilisée quand le body ne permet pas de la déduire
DEFAULT_LANGUAGE = "zh"

# Taille max du body d'erreur upstream recopié dans le champ `error`
DEFAULT_ERROR_BODY_LIMIT = 200

# ============================================================================
# DÉTECTION DE LANGUE
# ============================================================================
# Idéogrammes CJK unifiés couverts par la détection
CJK_RANGE_START = "\u4e00"
CJK_RANGE_END = "\u9fa5"

# ============================================================================
# HTTP / CORS
# ============================================================================
CORS_PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}

# Statuts upstream qui signalent une clé API absente ou invalide
CREDENTIAL_ERROR_STATUSES = (401, 403)

CONFIG_ENV_VAR = "SDD_CHAT_PROXY_CONFIG"

"""
Point d'entrée pour `python -m sdd_chat_proxy`.
"""
import argparse
import logging
import os

import uvicorn

from .core.constants import CONFIG_ENV_VAR


def setup_logging(log_level: str) -> None:
    """Configure le logging racine."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    """Fonction principale."""
    parser = argparse.ArgumentParser(description="SDD Chat Proxy")
    parser.add_argument("--host", default="0.0.0.0", help="Host (défaut: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8888, help="Port (défaut: 8888)")
    parser.add_argument("--reload", action="store_true", help="Activer le reload auto")
    parser.add_argument("--config", default=None, help="Chemin vers config.toml")

    args = parser.parse_args()

    # Propagé par variable d'environnement pour que les workers uvicorn le voient
    if args.config:
        os.environ[CONFIG_ENV_VAR] = args.config

    from .config.loader import load_config, get_chat_settings
    settings = get_chat_settings(load_config())
    setup_logging(settings.log_level)

    logging.getLogger(__name__).info(f"🚀 Démarrage de SDD Chat Proxy sur {args.host}:{args.port}")

    uvicorn.run(
        "sdd_chat_proxy.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()

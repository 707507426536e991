import logging
import os
from dotenv import load_dotenv

# charge immédiatement le .env
load_dotenv()

PACKAGE_LOGGER = "graph_connectors"


def _configure_package_logger() -> logging.Logger:
    """Un seul handler, posé sur le logger du package ; les modules lui délèguent."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root.addHandler(handler)
        root.setLevel(log_level)
        root.debug(f"Logger '{PACKAGE_LOGGER}' initialized with level={log_level}")
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Logger d'un module du client Graph.
    Les noms hors du package sont rattachés sous 'graph_connectors.' pour partager le handler.
    """
    _configure_package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def mask_token(url: str) -> str:
    """Masque la valeur du paramètre access_token avant de logger une URL."""
    marker = "access_token="
    idx = url.find(marker)
    if idx == -1:
        return url
    start = idx + len(marker)
    end = url.find("&", start)
    return url[:start] + "***" + ("" if end == -1 else url[end:])

# graph_connectors/core/config.py

from dotenv import load_dotenv
from typing import Optional
import os

load_dotenv()

DEFAULT_GRAPH_URL = "https://graph.facebook.com"

OAUTH_DIALOG_URL = "http://www.facebook.com/dialog/oauth?"
OAUTH_DIALOG_URL_MOBILE = "http://m.facebook.com/dialog/oauth?"

# Hôte de base partagé par tous les clients qui n'en injectent pas un
_graph_url = os.getenv("GRAPH_API_URL", DEFAULT_GRAPH_URL)


def set_graph_url(url: str) -> str:
    """Remplace l'hôte de base utilisé par toutes les constructions d'URL suivantes."""
    global _graph_url
    _graph_url = url
    return _graph_url


def get_graph_url() -> str:
    return _graph_url


def reset_graph_url() -> str:
    """Rétablit l'hôte d'origine (variable d'environnement ou valeur par défaut)."""
    return set_graph_url(os.getenv("GRAPH_API_URL", DEFAULT_GRAPH_URL))


def get_graph_access_token() -> Optional[str]:
    # Optionnel : un client peut très bien être créé sans token
    return os.getenv("GRAPH_ACCESS_TOKEN") or None


def get_http_timeout() -> float:
    value = os.getenv("GRAPH_HTTP_TIMEOUT", "10")
    try:
        return float(value)
    except ValueError:
        raise RuntimeError(f"GRAPH_HTTP_TIMEOUT invalide : {value!r} (nombre de secondes attendu).")

from typing import Optional

from graph_connectors.core.config import get_graph_url


class GraphUrlBuilder:
    """
    Construit les URLs absolues de l'API.

    Sans `base_url` explicite, l'hôte est relu à chaque appel depuis la configuration
    globale (set_graph_url / get_graph_url).
    """

    def __init__(self, base_url: Optional[str] = None):
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url if self._base_url is not None else get_graph_url()

    def build(self, path: str, token: Optional[str] = None) -> str:
        # slash initial
        if not path.startswith("/"):
            path = "/" + path

        if token:
            path += "&" if "?" in path else "?"
            path += "access_token=" + token

        return self.base_url + path


def build_url(path: str, token: Optional[str] = None, base_url: Optional[str] = None) -> str:
    return GraphUrlBuilder(base_url).build(path, token)

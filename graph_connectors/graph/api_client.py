# graph_connectors/graph/api_client.py

from typing import Any, Callable, Mapping, Optional, Union

from graph_connectors.core.config import get_graph_access_token
from graph_connectors.core.exceptions import NetworkOrServerError
from graph_connectors.core.httpx_client import HTTPClient
from graph_connectors.core.logger import get_logger
from graph_connectors.core.utils import QueryInput, append_query, encode_query
from graph_connectors.graph.normalizer import normalize
from graph_connectors.graph.schema import ErrorKind, GraphError, GraphResult
from graph_connectors.graph.url_builder import GraphUrlBuilder

logger = get_logger(__name__)

__version__ = "0.2.1"

ARGUMENT_ERROR_MESSAGE = "Graph api url must be a string"
TRANSPORT_ERROR_MESSAGE = "Error processing request"

Callback = Callable[[Optional[GraphError], Any], None]


class GraphClient:
    """
    Client pour la Graph API.

    Stocke un access token optionnel (modifiable après construction) et fournit :
     - get(path, params)         GET, redirections désactivées (photos de profil)
     - post(path, data)          POST avec un corps form-urlencoded
     - delete(path)              suppression, modélisée par un POST
     - search(query)             wrapper de /search
     - multi_query(query)        requête simple ou multi-requêtes nommées

    Chaque méthode renvoie un GraphResult (erreur XOR données). Un callback
    optionnel reçoit aussi (error, data).

    Ex:
        graph = GraphClient(token)
        result = await graph.get("zuck", {"fields": "picture"})

        # redirection vers l'image :
        result = await graph.get("/zuck/picture")
        result.data  ->  {"image": True, "location": "http://profile.ak.fbcdn.net/..."}
    """

    def __init__(self, token: Optional[str] = None, base_url: Optional[str] = None,
                 http_client: Optional[HTTPClient] = None, legacy_delete_url: bool = False):
        self.token = token
        self.urls = GraphUrlBuilder(base_url)
        # HTTPClient wrapper (testable / injectable)
        self.http = http_client if http_client is not None else HTTPClient()
        self.legacy_delete_url = legacy_delete_url

    @classmethod
    def from_env(cls, **kwargs) -> "GraphClient":
        """Client initialisé avec GRAPH_ACCESS_TOKEN (peut être absent)."""
        return cls(token=get_graph_access_token(), **kwargs)

    # ---------------- Plomberie ----------------
    @staticmethod
    def _end(result: GraphResult, callback: Optional[Callback]) -> GraphResult:
        if callback is not None:
            callback(result.error, result.data)
        return result

    async def _request(self, method: str, url: str, body: Optional[str] = None,
                       callback: Optional[Callback] = None) -> GraphResult:
        try:
            response = await self.http.request(method, url, body=body, follow_redirects=False, encoding="utf-8")
        except NetworkOrServerError as e:
            cause = e.__cause__ if e.__cause__ is not None else e
            result = GraphResult.failure(TRANSPORT_ERROR_MESSAGE, ErrorKind.TRANSPORT, exception=cause)
            return self._end(result, callback)

        result = normalize(response.body, response.content_type, response.location)
        return self._end(result, callback)

    def _invalid_path(self, path: Any, callback: Optional[Callback]) -> Optional[GraphResult]:
        if isinstance(path, str):
            return None
        logger.debug("Chemin invalide: %r", path)
        return self._end(GraphResult.failure(ARGUMENT_ERROR_MESSAGE, ErrorKind.ARGUMENT), callback)

    # ---------------- Verbes ----------------
    async def get(self, path: str, params: QueryInput = None,
                  callback: Optional[Callback] = None) -> GraphResult:
        """
        Les paramètres peuvent être passés dans l'URL ("zuck?fields=picture")
        ou séparément (path="zuck", params={"fields": "picture"}).
        """
        invalid = self._invalid_path(path, callback)
        if invalid is not None:
            return invalid

        if params:
            path = append_query(path, params)

        return await self._request("GET", self.urls.build(path, self.token), callback=callback)

    async def post(self, path: str, data: QueryInput = None,
                   callback: Optional[Callback] = None) -> GraphResult:
        """
        Publication (un access token est nécessaire).

        Ex:
            await graph.post(friend_id + "/feed", {"message": "heyooo budday"})
        """
        invalid = self._invalid_path(path, callback)
        if invalid is not None:
            return invalid

        return await self._request("POST", self.urls.build(path, self.token),
                                   body=encode_query(data), callback=callback)

    async def delete(self, path: str, callback: Optional[Callback] = None) -> GraphResult:
        """Suppression d'un objet : l'API la modélise par un POST."""
        invalid = self._invalid_path(path, callback)
        if invalid is not None:
            return invalid

        if self.legacy_delete_url:
            # Ancien comportement : l'hôte est préfixé deux fois
            path = self.urls.base_url + path

        return await self._request("POST", self.urls.build(path, self.token), callback=callback)

    del_ = delete

    # ---------------- Helpers ----------------
    @staticmethod
    def _query_params(query: Union[str, Mapping[str, Any]]) -> Mapping[str, Any]:
        if isinstance(query, str):
            return {"q": query}
        return query

    async def search(self, query: Union[str, Mapping[str, Any]],
                     callback: Optional[Callback] = None) -> GraphResult:
        """Ex: await graph.search({"q": "watermelon", "type": "page"})"""
        return await self.get("/search", self._query_params(query), callback=callback)

    async def multi_query(self, query: Union[str, Mapping[str, Any]],
                          callback: Optional[Callback] = None) -> GraphResult:
        """
        Requête simple ou multi-requêtes, passées sous forme de dictionnaire :

            query = {
                "name":        "SELECT name FROM user WHERE uid = me()",
                "permissions": "SELECT email FROM permissions WHERE uid = me()",
            }
        """
        return await self.get("/search", self._query_params(query), callback=callback)

    fql = multi_query

    # ---------------- Context manager ----------------
    async def aclose(self):
        await self.http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

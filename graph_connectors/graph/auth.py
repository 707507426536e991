from typing import Any, Callable, Mapping, Optional, Tuple

from graph_connectors.core.config import OAUTH_DIALOG_URL, OAUTH_DIALOG_URL_MOBILE
from graph_connectors.core.httpx_client import HTTPClient
from graph_connectors.core.logger import get_logger
from graph_connectors.core.utils import encode_query
from graph_connectors.graph.api_client import GraphClient
from graph_connectors.graph.schema import GraphResult

logger = get_logger(__name__)

ACCESS_TOKEN_PATH = "/oauth/access_token"


def get_authorization_url(params: Mapping[str, Any], mobile: bool = False) -> str:
    """
    :param params: client_id, redirect_uri, ...
    :param mobile: True pour la boîte de dialogue mobile
    :return: l'URL de la boîte de dialogue OAuth
    """
    url = OAUTH_DIALOG_URL_MOBILE if mobile else OAUTH_DIALOG_URL
    return url + encode_query(params)


async def authorize(params: Mapping[str, Any],
                    callback: Optional[Callable[..., None]] = None,
                    http_client: Optional[HTTPClient] = None,
                    base_url: Optional[str] = None) -> Tuple[GraphResult, Optional[GraphClient]]:
    """
    Échange un code d'autorisation contre un access token.

    :param params: client_id, redirect_uri, client_secret, code
    :param callback: callback(None, client, data) en cas de succès, callback(error) sinon
    :return: (résultat de l'échange, client authentifié ou None)
    """
    owns_transport = http_client is None
    graph = GraphClient(base_url=base_url, http_client=http_client)
    result = await graph.get(ACCESS_TOKEN_PATH, params)

    if not result.ok:
        logger.warning(f"Échec de l'autorisation: {result.error.message}")
        if owns_transport:
            await graph.aclose()
        if callback is not None:
            callback(result.error)
        return result, None

    graph.token = result.data.get("access_token") if isinstance(result.data, Mapping) else None
    logger.info("Autorisation réussie, token %s", "reçu" if graph.token else "absent")
    if callback is not None:
        callback(None, graph, result.data)
    return result, graph

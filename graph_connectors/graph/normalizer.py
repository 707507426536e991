import json
from typing import Any, Mapping, Optional

from graph_connectors.core.logger import get_logger
from graph_connectors.core.utils import decode_body, decode_query
from graph_connectors.graph.schema import ErrorKind, GraphError, GraphResult

logger = get_logger(__name__)

PARSE_ERROR_MESSAGE = "Error parsing json"


def image_descriptor(location: Optional[str]) -> dict:
    return {"image": True, "location": location}


def parse_body(body: str) -> Any:
    """
    Interprète un corps texte :
      - un vrai JSON s'il contient '{' et '}'
      - sinon une query string ("access_token=...&expires=...")
    L'API renvoie parfois un simple "true" : on le transforme en {"data": "true"}.
    """
    if "{" in body and "}" in body:
        return json.loads(body)

    if "=" not in body:
        body = "data=" + body
    if not body.startswith("?"):
        body = "?" + body
    return decode_query(body)


def normalize(body: Any, content_type: str = "",
              location: Optional[str] = None) -> GraphResult:
    """
    Convertit une réponse brute en GraphResult.

    Les redirections vers une image (photo de profil) donnent
    {"image": True, "location": <header Location>} quel que soit le corps.
    """
    if content_type and "image" in content_type:
        return GraphResult.success(image_descriptor(location))

    if body is not None and not isinstance(body, (str, bytes)):
        # déjà structuré (dictionnaire, liste...)
        data = body
    else:
        try:
            data = parse_body(decode_body(body))
        except ValueError as e:
            logger.warning(f"Réponse JSON illisible: {e}")
            return GraphResult.failure(PARSE_ERROR_MESSAGE, ErrorKind.PARSE, exception=e)

    # Erreur applicative dans un corps par ailleurs valide : l'enveloppe est abandonnée
    if isinstance(data, Mapping) and data.get("error"):
        error = GraphError.from_domain(data["error"])
        logger.warning(f"Erreur renvoyée par l'API: {error.message}")
        return GraphResult(error=error)

    return GraphResult.success(data)

import httpx
from dataclasses import dataclass
from typing import Optional

from .config import get_http_timeout
from .exceptions import NetworkOrServerError
from .logger import get_logger, mask_token

logger = get_logger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass
class HTTPResponse:
    """Réponse brute du transport, avant normalisation."""
    status: int
    body: str
    content_type: str = ""
    location: Optional[str] = None
    url: str = ""


class HTTPClient:
    """
    Client HTTP asynchrone basé sur httpx.
    Les URLs reçues sont absolues : le client n'a pas de base_url,
    c'est le GraphUrlBuilder qui résout l'hôte.
    Les redirections ne sont jamais suivies afin de pouvoir capturer le header Location.
    """

    def __init__(self, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout if timeout is not None else get_http_timeout()
        self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=False, transport=transport)

    async def request(self, method: str, url: str, body: Optional[str] = None,
                      follow_redirects: bool = False, encoding: str = "utf-8") -> HTTPResponse:
        headers = {"Content-Type": FORM_CONTENT_TYPE} if body is not None else None
        logger.debug(f"➡️ {method} {mask_token(url)}")

        try:
            response = await self._client.request(
                method, url, content=body, headers=headers, follow_redirects=follow_redirects
            )
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, httpx.CookieConflict) as e:
            # Erreurs de connexion / DNS / timeout, ou URL invalide
            logger.error(f"HTTPX Error on {method} {mask_token(url)}: {e}")
            raise NetworkOrServerError(f"Erreur HTTPX: {e}") from e

        text = response.content.decode(encoding, errors="replace")
        logger.debug(f"⬅️ Response {response.status_code}: {text[:300]}")

        # Pas de raise sur 4xx/5xx : l'API renvoie ses erreurs dans le corps JSON
        return HTTPResponse(
            status=response.status_code,
            body=text,
            content_type=response.headers.get("content-type", ""),
            location=response.headers.get("location"),
            url=url,
        )

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        """Ouverture du client pour le context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Fermeture propre de la connexion."""
        await self.aclose()

# graph_connectors/core/exceptions.py
class APIError(Exception):
    """Erreur lors de l'appel d'une API externe"""
    pass


class NetworkOrServerError(APIError):
    """Erreur de connexion, DNS ou timeout remontée par le transport HTTP."""
    pass


class GraphArgumentError(APIError, ValueError):
    """Argument invalide (ex: chemin non textuel), détecté avant tout appel réseau."""
    pass


class ResponseParseError(APIError):
    """Corps de réponse qui ressemble à du JSON mais ne se décode pas."""
    pass


class GraphDomainError(APIError):
    """Erreur applicative renvoyée par l'API dans un corps de réponse bien formé."""

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.details = details

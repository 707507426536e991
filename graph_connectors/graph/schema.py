from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from graph_connectors.core.exceptions import (
    APIError,
    GraphArgumentError,
    GraphDomainError,
    NetworkOrServerError,
    ResponseParseError,
)


class ErrorKind(str, Enum):
    ARGUMENT = "argument"
    TRANSPORT = "transport"
    PARSE = "parse"
    DOMAIN = "domain"


_EXCEPTIONS = {
    ErrorKind.ARGUMENT: GraphArgumentError,
    ErrorKind.TRANSPORT: NetworkOrServerError,
    ErrorKind.PARSE: ResponseParseError,
}


class GraphError(BaseModel):
    """Erreur normalisée, quelle que soit son origine (argument, transport, parsing, API)."""
    message: str                = Field(..., description="Message lisible")
    kind: ErrorKind             = Field(..., description="Catégorie de l'erreur")
    exception: Optional[Any]    = Field(None, description="Exception d'origine (transport ou parsing)")
    details: Optional[Any]      = Field(None, description="Objet d'erreur brut renvoyé par l'API")

    @classmethod
    def from_domain(cls, value: Any) -> "GraphError":
        """Construit l'erreur à partir de la clé `error` d'une réponse de l'API."""
        if isinstance(value, dict):
            message = value.get("message") or str(value)
        else:
            message = str(value)
        return cls(message=message, kind=ErrorKind.DOMAIN, details=value)

    def to_exception(self) -> APIError:
        if self.kind == ErrorKind.DOMAIN:
            return GraphDomainError(self.message, details=self.details)
        return _EXCEPTIONS[self.kind](self.message)


class GraphResult(BaseModel):
    """
    Résultat d'un appel : soit une erreur, soit des données, jamais les deux.
    `data` est le dictionnaire normalisé (JSON, query string décodée ou descripteur d'image).
    """
    error: Optional[GraphError] = None
    data: Optional[Any]         = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "GraphResult":
        if (self.error is None) == (self.data is None):
            raise ValueError("GraphResult doit contenir soit `error`, soit `data`, mais pas les deux.")
        return self

    @classmethod
    def failure(cls, message: str, kind: ErrorKind, exception: Any = None) -> "GraphResult":
        return cls(error=GraphError(message=message, kind=kind, exception=exception))

    @classmethod
    def success(cls, data: Any) -> "GraphResult":
        return cls(data=data)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Retourne les données ou lève l'exception correspondant à l'erreur."""
        if self.error is not None:
            exc = self.error.to_exception()
            if isinstance(self.error.exception, BaseException):
                raise exc from self.error.exception
            raise exc
        return self.data

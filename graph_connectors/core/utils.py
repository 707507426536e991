import json
from typing import Any, Dict, Mapping, Optional, Union

import httpx

QueryInput = Union[str, Mapping[str, Any], None]


def encode_query(params: QueryInput) -> str:
    """
    Sérialise des paramètres en query string (sans '?' initial).
    - une chaîne est considérée comme déjà encodée
    - les listes/tuples produisent des clés répétées
    - les dictionnaires imbriqués sont encodés en JSON (multi-requêtes)
    """
    if not params:
        return ""
    if isinstance(params, str):
        return params.lstrip("?")

    flat: Dict[str, Any] = {}
    for key, value in params.items():
        if isinstance(value, Mapping):
            value = json.dumps(value)
        flat[key] = value
    return str(httpx.QueryParams(flat))


def decode_query(query: str) -> Dict[str, Any]:
    """
    Décode une query string en dictionnaire.
    Les valeurs restent des chaînes ; une clé répétée donne une liste.
    """
    params = httpx.QueryParams(query.lstrip("?"))
    out: Dict[str, Any] = {}
    for key in params.keys():
        values = params.get_list(key)
        out[key] = values[0] if len(values) == 1 else values
    return out


def append_query(path: str, params: QueryInput) -> str:
    query = encode_query(params)
    if not query:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{query}"


def decode_body(body: Union[str, bytes, None], encoding: Optional[str] = "utf-8") -> str:
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode(encoding or "utf-8", errors="replace")
    return body

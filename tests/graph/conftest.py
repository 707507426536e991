import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from graph_connectors.core.config import get_graph_url, set_graph_url
from graph_connectors.core.httpx_client import HTTPResponse

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_text(filename: str) -> str:
    """Charge le contenu brut d'un fichier de tests/graph/test_data/"""
    return (TEST_DATA_DIR / filename).read_text(encoding="utf-8")


def load_json(filename: str):
    return json.loads(load_text(filename))


def make_response(body: str = "", content_type: str = "application/json; charset=UTF-8",
                  location=None, status: int = 200) -> HTTPResponse:
    return HTTPResponse(status=status, body=body, content_type=content_type, location=location)


@pytest.fixture(autouse=True)
def restore_graph_url():
    """Chaque test repart de l'hôte de base courant."""
    previous = get_graph_url()
    yield
    set_graph_url(previous)


@pytest.fixture
def fake_http():
    """Transport simulé : request() est un AsyncMock."""
    http = AsyncMock()
    http.request = AsyncMock(return_value=make_response(load_text("me.json")))
    return http

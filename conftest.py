import pytest
from fastapi.testclient import TestClient

from book_registry.api import create_app
from book_registry.registry import BookRegistry


@pytest.fixture
def registry():
    # Her test için başlangıç kitaplarıyla yeni bir kayıt defteri
    return BookRegistry()


@pytest.fixture
def empty_registry():
    return BookRegistry(books=[])


@pytest.fixture
def client(registry):
    app = create_app(registry=registry)
    yield TestClient(app)

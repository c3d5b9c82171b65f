import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from content_api import get_content_service, router
from content_tree import ContentTreeService, InMemoryNodeRepository, StoreError


class BrokenListRepository(InMemoryNodeRepository):
    """Repository whose listings always fail, as if the database were down."""

    async def list(self, collection_path, order_by=None):
        raise StoreError(f"connection refused listing {'/'.join(collection_path)}")


@pytest.fixture()
def repo():
    return InMemoryNodeRepository()


@pytest.fixture()
def app(repo):
    app = FastAPI()
    app.include_router(router)
    service = ContentTreeService(repo)
    app.dependency_overrides[get_content_service] = lambda: service
    return app


@pytest.fixture()
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def broken_client(app):
    service = ContentTreeService(BrokenListRepository())
    app.dependency_overrides[get_content_service] = lambda: service
    with TestClient(app) as client:
        yield client

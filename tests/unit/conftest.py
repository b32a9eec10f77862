import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from posts_api.deps import post_repository as post_repository_dependency
from posts_api.http_handler import create_app
from posts_api.repositories.post_repository import PostRepository
from posts_api.settings import Settings


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def post_repository(mocker) -> PostRepository:
    return mocker.AsyncMock(spec=PostRepository)


@pytest.fixture
def test_client(app: FastAPI, post_repository: PostRepository) -> TestClient:
    app.dependency_overrides[post_repository_dependency] = lambda: post_repository
    return TestClient(app, raise_server_exceptions=False)

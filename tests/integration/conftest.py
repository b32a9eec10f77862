import asyncpg
import pytest
import pytest_asyncio
from docker.errors import DockerException
from fastapi.testclient import TestClient
from testcontainers.postgres import PostgresContainer

from posts_api.http_handler import create_app
from posts_api.repositories.post_repository import PostRepository
from posts_api.settings import Settings


@pytest.fixture(scope="session")
def postgres_container():
    """Start a PostgreSQL test container for the session."""
    try:
        container = PostgresContainer("postgres:17")
        container.start()
    except DockerException as error:
        pytest.skip(f"Docker is not available: {error}")
    yield container
    container.stop()


@pytest.fixture(scope="session")
def database_url(postgres_container) -> str:
    host = postgres_container.get_container_host_ip()
    port = postgres_container.get_exposed_port(5432)
    return (
        f"postgresql://{postgres_container.username}:{postgres_container.password}"
        f"@{host}:{port}/{postgres_container.dbname}"
    )


@pytest.fixture
def database_settings(database_url: str) -> Settings:
    return Settings(_env_file=None, database_url=database_url)


@pytest.fixture
def test_client(database_settings: Settings) -> TestClient:
    with TestClient(create_app(database_settings)) as test_client:
        test_client.portal.call(
            test_client.app.state.pool.execute, "TRUNCATE TABLE posts"
        )
        yield test_client


@pytest_asyncio.fixture
async def pool(database_url: str):
    pool = await asyncpg.create_pool(database_url, min_size=1, max_size=5)
    await pool.execute("DROP TABLE IF EXISTS posts")
    yield pool
    await pool.close()


@pytest_asyncio.fixture
async def post_repository(pool) -> PostRepository:
    post_repository = PostRepository(pool)
    await post_repository.bootstrap()
    return post_repository

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from exam_compressor.api.app import create_app
from exam_compressor.config.settings import Settings


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """Test client with the application lifespan running."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client

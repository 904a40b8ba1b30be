"""
Shared pytest fixtures for toolgate tests.

Stores and S3 clients are faked in memory so no test touches real
storage or the network.
"""

from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from adapters.services import clear_client_cache
from models import S3Credentials
from tests.helpers import InMemoryStore


@pytest.fixture(autouse=True)
def _no_s3_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests never pick up real credentials from the developer's shell."""
    monkeypatch.delenv("S3_API_KEY", raising=False)


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory DocumentStore."""
    return InMemoryStore()


@pytest.fixture
def credentials() -> S3Credentials:
    return S3Credentials(
        access_key_id="AKIATEST",
        secret_access_key="secret",
        endpoint="https://minio.example.com",
        bucket="notes",
    )


@pytest.fixture
def mock_s3_client() -> MagicMock:
    """
    Stand-in for a boto3 S3 client.

        def test_something(mock_s3_client):
            mock_s3_client.get_object.return_value = s3_body(b"hello")
    """
    return MagicMock()


@pytest.fixture
def patch_s3_client(mock_s3_client: MagicMock) -> Generator[MagicMock, None, None]:
    """Patch get_s3_client so stores built from credentials use the mock."""
    clear_client_cache()
    with patch("adapters.s3.get_s3_client", return_value=mock_s3_client):
        yield mock_s3_client
    clear_client_cache()

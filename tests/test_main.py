"""API tests for URL Shortener Service."""

import sqlite3
from unittest.mock import MagicMock

import pytest

from url_shortener.main import app
from url_shortener.api.dependencies import get_url_service
from url_shortener.models.url import UrlMapping
from url_shortener.services.results import ErrorKind, ServiceError, ServiceResult
from url_shortener.services.url_service import UrlService
from url_shortener.utils.shortener import CodeGenerator


@pytest.fixture
def failing_client(client, mock_db):
    """Test client whose store raises on every query."""
    mock_db.find_all.side_effect = sqlite3.OperationalError("database is locked")
    mock_db.find_one.side_effect = sqlite3.OperationalError("database is locked")
    app.dependency_overrides[get_url_service] = lambda: UrlService(mock_db)
    return client


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        """Test health check returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_health_check_store_down(self, client, mock_db):
        """Test health check reports an unreachable store."""
        mock_db.execute.side_effect = sqlite3.OperationalError("unable to open database")
        app.dependency_overrides[get_url_service] = lambda: UrlService(mock_db)
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy"}


class TestCreateShortURL:
    """Tests for POST / endpoint."""

    def test_create_short_url_success(self, client):
        """Test creating a short URL from a JSON string body."""
        response = client.post("/", json="https://www.bbc.co.uk/news")
        assert response.status_code == 200
        data = response.json()
        assert data["longUrl"] == "https://www.bbc.co.uk/news"
        assert len(data["shortUrl"]) == 7

    def test_create_short_url_plain_text(self, client):
        """Test creating a short URL from a text/plain body."""
        response = client.post(
            "/",
            content="https://example.com/plain\n",
            headers={"content-type": "text/plain"},
        )
        assert response.status_code == 200
        assert response.json()["longUrl"] == "https://example.com/plain"

    def test_create_is_idempotent(self, client):
        """Test posting the same long URL twice returns the same short URL."""
        first = client.post("/", json="https://example.com/same")
        second = client.post("/", json="https://example.com/same")
        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()
        assert len(client.get("/").json()) == 1

    def test_create_short_url_invalid_url(self, client):
        """Test creating with invalid URL format."""
        response = client.post("/", json="hdshjdshjdfhsfg")
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid url entered.", "status": 400}

    def test_create_short_url_non_string_body(self, client):
        """Test a JSON body that is not a string is rejected as an invalid url."""
        response = client.post("/", json={"longUrl": "https://example.com"})
        assert response.status_code == 400
        assert response.json()["status"] == 400

    def test_create_short_url_malformed_json(self, client):
        """Test a body that is not valid JSON is rejected as an invalid url."""
        response = client.post(
            "/",
            content='"https://example.com',
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400

    def test_create_short_url_non_utf8_body(self, client, test_db):
        """Test a text body that is not UTF-8 is rejected, not mangled."""
        response = client.post(
            "/",
            content=b"https://example.com/caf\xe9",
            headers={"content-type": "text/plain"},
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid url entered.", "status": 400}
        assert test_db.find_all() == []

    def test_create_short_url_hostless_url(self, client):
        """Test a url without a host is rejected."""
        response = client.post("/", json="http://:80")
        assert response.status_code == 400

    def test_create_short_url_alias_unavailable(self, client, test_db):
        """Test exhausted alias generation answers with retry-later semantics."""
        generator = MagicMock(spec=CodeGenerator)
        generator.generate.return_value = ServiceResult.failure(
            ServiceError(
                ErrorKind.ATTEMPTS_EXHAUSTED,
                "No free short url after 3 attempts.",
                details=("a already exists.", "b already exists.", "c already exists."),
            )
        )
        app.dependency_overrides[get_url_service] = lambda: UrlService(
            test_db, generator=generator
        )

        response = client.post("/", json="https://example.com")
        assert response.status_code == 503
        assert response.headers["retry-after"] == "1"
        assert response.json() == {
            "message": "Alias not available. Please try again later.",
            "status": 503,
        }
        assert test_db.find_all() == []

    def test_create_short_url_store_error(self, failing_client):
        """Test an unexpected store error becomes a 500 with its message."""
        response = failing_client.post("/", json="https://example.com")
        assert response.status_code == 500
        assert response.json() == {
            "message": "Internal Server Error! database is locked",
            "status": 500,
        }


class TestRedirectEndpoint:
    """Tests for GET /{short_url} endpoint."""

    def test_redirect_success(self, client):
        """Test successful redirect."""
        create_response = client.post("/", json="https://www.bbc.co.uk/news")
        short_url = create_response.json()["shortUrl"]

        response = client.get(f"/{short_url}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://www.bbc.co.uk/news"

    def test_redirect_not_found(self, client):
        """Test redirect for non-existent short url."""
        response = client.get("/nonexist", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"message": "Short url not found.", "status": 404}

    def test_redirect_store_error(self, failing_client):
        """Test an unexpected store error becomes a 500."""
        response = failing_client.get("/aZ1hjdg", follow_redirects=False)
        assert response.status_code == 500
        assert response.json()["status"] == 500
        assert "database is locked" in response.json()["message"]


class TestListURLsEndpoint:
    """Tests for GET / endpoint."""

    def test_list_urls_empty(self, client):
        """Test listing with no stored URLs."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_urls_with_data(self, client, test_db):
        """Test listing pre-seeded URLs."""
        test_db.insert(UrlMapping(long_url="https://example1.com", short_url="aZ1hjdg"))
        test_db.insert(UrlMapping(long_url="https://example2.com", short_url="gJ1hjdg"))

        response = client.get("/")
        assert response.status_code == 200
        pairs = {(item["longUrl"], item["shortUrl"]) for item in response.json()}
        assert pairs == {
            ("https://example1.com", "aZ1hjdg"),
            ("https://example2.com", "gJ1hjdg"),
        }

    def test_list_urls_store_error(self, failing_client):
        """Test an unexpected store error becomes a 500."""
        response = failing_client.get("/")
        assert response.status_code == 500
        assert response.json() == {
            "message": "Internal Server Error! database is locked",
            "status": 500,
        }

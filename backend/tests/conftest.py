"""
Shared test fixtures for the campaign analytics service.

Fixtures include an isolated upload directory, a fresh campaign store per
test, a FastAPI TestClient wired to that store, and small factories for
CSV text and Post records.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Any, Dict, List, Optional

from campaign_analytics.config import settings
from campaign_analytics.main import app
from campaign_analytics.models.post import Post
from campaign_analytics.store import CampaignStore, get_campaign_store


REQUIRED_HEADER = ["engagement_rate", "media_type", "followers_gained", "shares", "saves"]


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """
    Point UPLOAD_DIR at a per-test temporary directory.

    Tests can list this directory to check that no upload outlives its
    request.
    """
    directory = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(directory))
    return directory


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def campaign_store():
    """An empty store, independent of the one owned by the app."""
    return CampaignStore()


@pytest.fixture
def client(campaign_store, upload_dir):
    """
    TestClient whose requests see ``campaign_store`` instead of the app's
    own store.
    """
    app.dependency_overrides[get_campaign_store] = lambda: campaign_store
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Data Factories
# =============================================================================

@pytest.fixture
def make_csv():
    """
    Build CSV text from a header and rows.

    Usage:
        def test_upload(make_csv):
            text = make_csv(["engagement_rate", "shares"], [[1.5, 3]])
    """
    def _make_csv(header: List[str], rows: List[List[Any]]) -> str:
        lines = [",".join(header)]
        lines.extend(",".join(str(value) for value in row) for row in rows)
        return "\n".join(lines) + "\n"

    return _make_csv


@pytest.fixture
def scenario_csv(make_csv):
    """Six posts: engagement_rate 1..6 and shares 6..1, alternating media types."""
    media = ["Reel", "Image", "Reel", "Carousel", "Image", "Reel"]
    rows = []
    for i in range(6):
        rows.append([i + 1, media[i], 10 * (i + 1), 6 - i, i])
    return make_csv(REQUIRED_HEADER, rows)


@pytest.fixture
def make_post():
    """
    Create Post records with sensible defaults.

    Usage:
        post = make_post(1, engagement_rate=2.5, media_type="Reel")
    """
    def _make_post(post_id: Any, **overrides: Any) -> Post:
        values: Dict[str, Any] = {"id": post_id, "post_id": post_id}
        values.update(overrides)
        return Post(**values)

    return _make_post


@pytest.fixture
def upload_csv(client):
    """
    POST CSV content to the upload endpoint as the ``file`` field.

    Usage:
        response = upload_csv(text, filename="posts.csv")
    """
    def _upload(content, filename: str = "posts.csv", content_type: Optional[str] = "text/csv"):
        data = content.encode("utf-8") if isinstance(content, str) else content
        return client.post("/campaigns/", files={"file": (filename, data, content_type)})

    return _upload

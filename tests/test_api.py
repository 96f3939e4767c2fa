"""
HTTP tests for the Outfit Service API.

Run with: pytest tests/test_api.py -v
"""
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from outfit_service.app.main import app
from outfit_service.core.auth import User
from outfit_service.core.errors import (
    EmbeddingError,
    GenerationError,
    IncompleteOutfitError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from outfit_service.core.models import Outfit, OutfitFeedback

client = TestClient(app)

AUTH_PATH = "outfit_service.core.auth.get_user_by_api_key"
HEADERS = {"X-API-Key": "test_key"}


@pytest.fixture
def mock_user():
    return User(
        user_id="test_user",
        name="Test User",
        api_key="test_key",
        created_at="2024-01-01T00:00:00+00:00"
    )


@pytest.fixture
def authed(mock_user):
    with patch(AUTH_PATH, return_value=mock_user):
        yield mock_user


@pytest.fixture
def outfit(wardrobe):
    by_id = {item.item_id: item for item in wardrobe}
    return Outfit(
        outfit_id="abc123",
        owner_user_id="test_user",
        name="Beach Day",
        description="Light layers for the coast.",
        top_id="top_best",
        bottom_id="bottom_best",
        shoes_id="shoes_best",
        misc_ids=["misc_1"],
        prompt="beach day",
        created_at="2024-05-01T10:00:00+00:00",
        top=by_id["top_best"],
        bottom=by_id["bottom_best"],
        shoes=by_id["shoes_best"],
        misc=[by_id["misc_1"]],
    )


# ==================== PUBLIC ====================

class TestHealthEndpoint:
    """Tests for /health and /metrics."""

    def test_health_returns_ok(self):
        with patch("outfit_service.db.mongo.health_check", return_value={"status": "connected"}):
            response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["mongo"]["status"] == "connected"
        assert "tagger" in data["llm_config"]
        assert "openai_api_key" not in data["settings"]

    def test_metrics(self):
        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.json()["total_generations"] == 0


# ==================== AUTH ====================

class TestAuthentication:
    """Tests for API key handling."""

    def test_missing_api_key(self):
        response = client.post("/api/outfits", json={"prompt": "beach day"})

        assert response.status_code == 401
        assert response.json()["error"] == "authentication_error"
        assert "X-API-Key" in response.json()["detail"]
        assert response.headers["WWW-Authenticate"] == "ApiKey"

    def test_invalid_api_key(self):
        with patch(AUTH_PATH, return_value=None):
            response = client.get("/api/outfits", headers={"X-API-Key": "bogus"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid API key"

    def test_bypass_auth(self, monkeypatch, outfit):
        monkeypatch.setenv("OUTFIT_BYPASS_AUTH", "true")
        from outfit_service.config import reload_settings
        reload_settings()

        with patch("outfit_service.app.routes.generate_outfit", new=AsyncMock(return_value=outfit)) as mock_gen:
            response = client.post("/api/outfits", json={"prompt": "beach day"})

        assert response.status_code == 201
        mock_gen.assert_awaited_once_with("beach day", "dev_user")

    def test_create_user(self):
        created = {"user_id": "u1", "name": "Ada", "api_key": "outfit_x", "message": "saved"}
        with patch("outfit_service.app.routes.create_user", return_value=created):
            response = client.post("/api/users", json={"name": "Ada"})

        assert response.status_code == 201
        assert response.json()["api_key"] == "outfit_x"


# ==================== OUTFITS ====================

class TestOutfitEndpoints:
    """Tests for outfit generation and history routes."""

    def test_generate_outfit(self, authed, outfit):
        with patch("outfit_service.app.routes.generate_outfit", new=AsyncMock(return_value=outfit)) as mock_gen:
            response = client.post("/api/outfits", json={"prompt": "beach day"}, headers=HEADERS)

        assert response.status_code == 201
        data = response.json()
        assert data["outfit_id"] == "abc123"
        assert data["top"]["classification"] == "top"
        assert data["shoes"]["item_id"] == "shoes_best"
        assert [item["item_id"] for item in data["misc"]] == ["misc_1"]
        assert "owner_user_id" not in data
        mock_gen.assert_awaited_once_with("beach day", "test_user")

    def test_incomplete_wardrobe(self, authed):
        error = IncompleteOutfitError(["shoes"])
        with patch("outfit_service.app.routes.generate_outfit", new=AsyncMock(side_effect=error)):
            response = client.post("/api/outfits", json={"prompt": "beach day"}, headers=HEADERS)

        assert response.status_code == 422
        assert response.json() == {
            "detail": "Your wardrobe has no items for: shoes",
            "error": "incomplete_outfit",
        }

    @pytest.mark.parametrize("error,status", [
        (GenerationError("Unparseable JSON from text generation: Expecting value"), 502),
        (EmbeddingError("No embedding returned for tags"), 502),
        (StorageError("Failed to save outfit"), 503),
    ])
    def test_upstream_failures_hide_details(self, authed, error, status):
        with patch("outfit_service.app.routes.generate_outfit", new=AsyncMock(side_effect=error)):
            response = client.post("/api/outfits", json={"prompt": "beach day"}, headers=HEADERS)

        assert response.status_code == status
        assert response.json()["detail"] == error.public_message
        assert error.message not in response.text

    def test_blank_prompt(self, authed):
        error = ValidationError("prompt is required")
        with patch("outfit_service.app.routes.generate_outfit", new=AsyncMock(side_effect=error)):
            response = client.post("/api/outfits", json={"prompt": ""}, headers=HEADERS)

        assert response.status_code == 400
        assert response.json()["detail"] == "prompt is required"

    def test_regenerate_from_prompt(self, authed, outfit):
        with patch("outfit_service.app.routes.regenerate_outfit", new=AsyncMock(return_value=outfit)) as mock_regen:
            response = client.post(
                "/api/outfits/regenerate",
                json={"prompt": "beach day", "feedback": "more color"},
                headers=HEADERS
            )

        assert response.status_code == 201
        mock_regen.assert_awaited_once_with("beach day", "more color", "test_user")

    def test_regenerate_stored_outfit(self, authed, outfit):
        with patch("outfit_service.app.routes.regenerate_from_outfit", new=AsyncMock(return_value=outfit)) as mock_regen:
            response = client.post(
                "/api/outfits/old_id/regenerate",
                json={"feedback": "less formal"},
                headers=HEADERS
            )

        assert response.status_code == 201
        mock_regen.assert_awaited_once_with("old_id", "less formal", "test_user")

    def test_list_outfits(self, authed, outfit):
        with patch("outfit_service.app.routes.list_outfits", return_value=([outfit], 3)) as mock_list:
            response = client.get("/api/outfits?limit=1&offset=1", headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["has_more"] is True
        assert data["outfits"][0]["name"] == "Beach Day"
        mock_list.assert_called_once_with("test_user", limit=1, offset=1)

    def test_get_outfit_not_found(self, authed):
        error = NotFoundError("Outfit nope not found")
        with patch("outfit_service.app.routes.get_outfit_details", side_effect=error):
            response = client.get("/api/outfits/nope", headers=HEADERS)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


# ==================== FEEDBACK ====================

class TestFeedbackEndpoints:
    """Tests for outfit ratings."""

    def test_add_feedback(self, authed):
        entry = OutfitFeedback(
            feedback_id="f1",
            outfit_id="abc123",
            user_id="test_user",
            rating=5,
            comment="great",
            created_at="2024-05-01T10:00:00+00:00"
        )
        with patch("outfit_service.app.routes.add_feedback", return_value=entry) as mock_add:
            response = client.post(
                "/api/outfits/abc123/feedback",
                json={"rating": 5, "comment": "great"},
                headers=HEADERS
            )

        assert response.status_code == 201
        assert response.json()["rating"] == 5
        mock_add.assert_called_once_with("abc123", "test_user", 5, "great")

    def test_rating_out_of_range(self, authed, outfit):
        with patch("outfit_service.db.outfits.get_outfit", return_value=outfit), \
             patch("outfit_service.db.feedback.insert_feedback") as mock_insert:
            response = client.post(
                "/api/outfits/abc123/feedback",
                json={"rating": 6},
                headers=HEADERS
            )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
        mock_insert.assert_not_called()

    @pytest.mark.parametrize("rating", ["great", True, "5", 5.0])
    def test_non_integer_rating(self, authed, rating):
        with patch("outfit_service.app.routes.add_feedback") as mock_add:
            response = client.post(
                "/api/outfits/abc123/feedback",
                json={"rating": rating},
                headers=HEADERS
            )

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "validation_error"
        assert "rating" in data["detail"]
        mock_add.assert_not_called()

    def test_missing_body_field(self, authed):
        response = client.post("/api/outfits", json={}, headers=HEADERS)

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
        assert isinstance(response.json()["detail"], str)

    def test_get_feedback(self, authed):
        entries = [
            OutfitFeedback(feedback_id="f2", outfit_id="abc123", user_id="test_user", rating=5),
            OutfitFeedback(feedback_id="f1", outfit_id="abc123", user_id="test_user", rating=2),
        ]
        with patch("outfit_service.app.routes.get_feedback", return_value=entries):
            response = client.get("/api/outfits/abc123/feedback", headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [entry["feedback_id"] for entry in data["feedback"]] == ["f2", "f1"]


# ==================== WARDROBE ====================

class TestWardrobeEndpoints:
    """Tests for wardrobe listing."""

    def test_list_items(self, authed, wardrobe):
        with patch("outfit_service.app.routes.get_clothing_items", return_value=wardrobe) as mock_items, \
             patch("outfit_service.app.routes.get_wardrobe_count", return_value=len(wardrobe)):
            response = client.get("/api/wardrobe/items?classification=TOP", headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 5
        assert data["has_more"] is False
        assert "tags_vector" not in data["items"][0]
        assert mock_items.call_args.kwargs["classification"].value == "top"

    def test_unknown_classification(self, authed):
        response = client.get("/api/wardrobe/items?classification=hats", headers=HEADERS)

        assert response.status_code == 400
        assert "top, bottom, shoes, misc" in response.json()["detail"]

    def test_storage_down(self, authed):
        with patch("outfit_service.app.routes.get_clothing_items", side_effect=StorageError("Failed to read wardrobe")):
            response = client.get("/api/wardrobe/items", headers=HEADERS)

        assert response.status_code == 503
        assert response.json()["error"] == "storage_error"

    def test_get_item(self, authed, wardrobe):
        with patch("outfit_service.app.routes.get_clothing_item", return_value=wardrobe[1]) as mock_get:
            response = client.get("/api/wardrobe/items/top_best", headers=HEADERS)

        assert response.status_code == 200
        assert response.json()["item_id"] == "top_best"
        mock_get.assert_called_once_with("test_user", "top_best")

    def test_get_unknown_item(self, authed):
        with patch("outfit_service.app.routes.get_clothing_item", return_value=None):
            response = client.get("/api/wardrobe/items/nope", headers=HEADERS)

        assert response.status_code == 404

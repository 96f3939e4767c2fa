"""
Shared fixtures for Outfit Service tests.
"""
import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from outfit_service.config import reload_settings, reset_llm_config
from outfit_service.core.models import Classification, ClothingItem
from outfit_service.llm.llm_adapter import LLMClient, reset_llm_client
from outfit_service.observability import reset_metrics


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Fresh settings, metrics and clients for every test; no request log file."""
    monkeypatch.setenv("OUTFIT_LOGGING_ENABLED", "false")
    monkeypatch.setenv("OUTFIT_LOGS_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("OUTFIT_BYPASS_AUTH", raising=False)
    reload_settings()
    reset_llm_config()
    reset_llm_client()
    reset_metrics()
    yield
    reset_llm_client()
    reset_metrics()


@pytest.fixture
def make_item():
    """Factory for clothing items owned by test_user."""
    counter = {"n": 0}

    def _make(classification, vector, description="a piece", item_id=None, owner="test_user"):
        counter["n"] += 1
        return ClothingItem(
            item_id=item_id or f"item_{counter['n']}",
            owner_user_id=owner,
            name=f"{classification} {counter['n']}",
            classification=Classification(classification),
            image_url=f"https://images.example.com/{counter['n']}.png",
            description=description,
            tags_vector=list(vector),
        )

    return _make


@pytest.fixture
def wardrobe(make_item):
    """A complete wardrobe: query vector [1, 0, 0] favours the first of each category."""
    return [
        make_item("top", [0.2, 1.0, 0.0], "grey hoodie", item_id="top_far"),
        make_item("top", [1.0, 0.1, 0.0], "white linen shirt", item_id="top_best"),
        make_item("bottom", [1.0, 0.0, 0.2], "beige chinos", item_id="bottom_best"),
        make_item("shoes", [0.9, 0.0, 0.1], "canvas sneakers", item_id="shoes_best"),
        make_item("misc", [0.5, 0.5, 0.0], "straw hat", item_id="misc_1"),
    ]


def chat_response(payload, tokens=50):
    """Build a chat completion response object carrying JSON content."""
    content = payload if isinstance(payload, str) or payload is None else json.dumps(payload)
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    response.usage = MagicMock(total_tokens=tokens)
    return response


def embedding_response(vector, tokens=5):
    """Build an embeddings response object."""
    response = MagicMock()
    response.data = [MagicMock(embedding=vector)] if vector is not None else []
    response.usage = MagicMock(total_tokens=tokens)
    return response


@pytest.fixture
def fake_openai():
    """AsyncOpenAI stand-in with tagger, describer and embedding responses queued."""
    openai = MagicMock()
    openai.chat.completions.create = AsyncMock(side_effect=[
        chat_response({"tags": ["relaxed", "summer", "linen"]}),
        chat_response({"name": "Beach Day", "description": "Light layers for the coast."}),
    ])
    openai.embeddings.create = AsyncMock(return_value=embedding_response([1.0, 0.0, 0.0]))
    return openai


@pytest.fixture
def llm_client(fake_openai):
    return LLMClient(openai_client=fake_openai)

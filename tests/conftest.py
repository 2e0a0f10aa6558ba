"""
Shared fixtures for the CS Genius test suite.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from cs_genius.models.knowledge import KnowledgeItem
from cs_genius.services.knowledge_store import KnowledgeStore

TODAY = date(2024, 5, 10)


def make_item(item_id: str, **overrides) -> KnowledgeItem:
    """Build a stored knowledge item with sensible defaults."""
    data = {
        "id": item_id,
        "app": "通用",
        "category": "使用问题",
        "question": f"Question {item_id}",
        "alternativeQuestions": [],
        "answer": f"Answer {item_id}",
        "optimizedAnswer": None,
        "frequency": "中",
        "lastUpdated": "2024-05-01",
    }
    data.update(overrides)
    return KnowledgeItem.model_validate(data)


def fake_structured_llm(response=None, error: Exception = None) -> MagicMock:
    """
    Chat model double for structured-output contracts.

    `llm.with_structured_output(schema).ainvoke(messages)` returns
    `response`, or raises `error` when given.
    """
    structured = MagicMock()
    structured.ainvoke = AsyncMock(return_value=response, side_effect=error)
    llm = MagicMock()
    llm.with_structured_output.return_value = structured
    return llm


def fake_text_llm(content: str = "", error: Exception = None) -> MagicMock:
    """Chat model double for plain-text contracts (`llm.ainvoke(...).content`)."""
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=MagicMock(content=content), side_effect=error)
    return llm


@pytest.fixture
def store():
    """Empty store with a fixed clock."""
    return KnowledgeStore(today=lambda: TODAY)


@pytest.fixture
def three_item_store():
    items = [make_item("a"), make_item("b"), make_item("c")]
    return KnowledgeStore(items, today=lambda: TODAY)

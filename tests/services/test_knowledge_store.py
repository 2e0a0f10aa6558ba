"""
Unit Tests for the Knowledge Store

Tests batch insertion, partial updates, deletion and backup restore.
"""

import pytest
from pydantic import ValidationError

from conftest import TODAY, make_item
from cs_genius.models.api_responses import ImportMode
from cs_genius.models.knowledge import KnowledgeItemDraft, KnowledgeItemUpdate
from cs_genius.services.knowledge_queries import compute_stats
from cs_genius.services.knowledge_store import KnowledgeStore


def draft(question: str, **overrides) -> KnowledgeItemDraft:
    data = {"question": question, "answer": f"{question} answer"}
    data.update(overrides)
    return KnowledgeItemDraft(**data)


def test_add_single_item_to_empty_store(store):
    """Adding one item to an empty store yields a one-item collection."""
    created = store.add(
        [draft("Q1", answer="A1", app="通用", category="c", frequency="中")]
    )

    assert len(store) == 1
    assert created[0].question == "Q1"
    stats = compute_stats(store.items, today=TODAY)
    assert stats.total == 1
    assert stats.apps == 1


def test_add_assigns_unique_ids_and_today(store):
    created = store.add([draft(f"Q{i}") for i in range(20)])

    ids = [item.id for item in created]
    assert len(set(ids)) == 20
    assert all(item.last_updated == "2024-05-10" for item in created)


def test_add_prepends_batch_in_order(three_item_store):
    created = three_item_store.add([draft("first"), draft("second")])

    questions = [item.question for item in three_item_store.items]
    assert questions[:2] == ["first", "second"]
    assert [item.id for item in three_item_store.items[2:]] == ["a", "b", "c"]
    assert len(created) == 2


def test_add_empty_batch_is_noop(three_item_store):
    """An empty extraction result leaves the store unchanged."""
    before = three_item_store.items

    assert three_item_store.add([]) == []
    assert three_item_store.items == before


def test_add_never_reuses_existing_ids(three_item_store):
    created = three_item_store.add([draft("new")])

    assert created[0].id not in {"a", "b", "c"}


def test_items_returns_snapshot(three_item_store):
    snapshot = three_item_store.items
    snapshot.clear()

    assert len(three_item_store) == 3


def test_update_optimized_answer_only(three_item_store):
    found = three_item_store.update("b", {"optimizedAnswer": "better reply"})

    assert found is True
    item = three_item_store.get("b")
    assert item.optimized_answer == "better reply"
    assert item.question == "Question b"
    assert item.answer == "Answer b"
    # Other items untouched
    assert three_item_store.get("a").optimized_answer is None


def test_update_refreshes_last_updated(three_item_store):
    three_item_store.update("a", KnowledgeItemUpdate(optimized_answer="x"))
    assert three_item_store.get("a").last_updated == "2024-05-10"


def test_update_can_keep_timestamp(three_item_store):
    three_item_store.update("a", {"optimizedAnswer": "x"}, refresh_timestamp=False)
    assert three_item_store.get("a").last_updated == "2024-05-01"


def test_update_coerces_app(three_item_store):
    three_item_store.update("a", {"app": "Unknown Product"})
    assert three_item_store.get("a").app == "通用"


def test_update_unknown_id_is_noop(three_item_store):
    before = three_item_store.items

    assert three_item_store.update("missing", {"optimizedAnswer": "x"}) is False
    assert three_item_store.items == before


def test_remove_item(three_item_store):
    assert three_item_store.remove("b") is True
    assert [item.id for item in three_item_store.items] == ["a", "c"]


def test_remove_unknown_id_keeps_store(three_item_store):
    """Deleting an id that is not present changes nothing and does not raise."""
    assert three_item_store.remove("zzz") is False
    assert len(three_item_store) == 3


def test_replace_all_appends_by_default(three_item_store):
    restored = three_item_store.replace_all([make_item("x"), make_item("y")])

    assert [item.id for item in three_item_store.items] == ["a", "b", "c", "x", "y"]
    assert len(restored) == 2


def test_replace_all_replace_mode(three_item_store):
    three_item_store.replace_all([make_item("x")], mode=ImportMode.REPLACE)

    assert [item.id for item in three_item_store.items] == ["x"]


def test_replace_all_rekeys_colliding_ids(three_item_store):
    restored = three_item_store.replace_all([make_item("a", question="restored")])

    ids = [item.id for item in three_item_store.items]
    assert len(ids) == len(set(ids)) == 4
    assert restored[0].id != "a"
    assert restored[0].question == "restored"
    assert three_item_store.get("a").question == "Question a"


def test_replace_all_rekeys_duplicates_within_backup(store):
    store.replace_all([make_item("dup"), make_item("dup")])

    ids = [item.id for item in store.items]
    assert len(set(ids)) == 2
    assert ids[0] == "dup"


def test_replace_all_coerces_app(store):
    item = make_item("x").model_copy(update={"app": "Legacy"})
    store.replace_all([item])

    assert store.get("x").app == "通用"


@pytest.mark.parametrize("item_id", [1, "1"])
def test_get_accepts_numeric_ids(item_id):
    store = KnowledgeStore([make_item("1")])
    assert store.get(item_id) is not None


@pytest.mark.parametrize(
    "changes",
    [{"question": None}, {"alternativeQuestions": None}, {"answer": "  "}],
)
def test_update_rejects_clearing_required_fields(three_item_store, changes):
    before = three_item_store.items

    with pytest.raises(ValidationError):
        three_item_store.update("a", changes)

    assert three_item_store.items == before


def test_update_can_clear_optimized_answer(three_item_store):
    three_item_store.update("a", {"optimizedAnswer": "x"})
    three_item_store.update("a", {"optimizedAnswer": None})

    assert three_item_store.get("a").optimized_answer is None

"""
API Route Tests

Runs the FastAPI app in-process with TestClient. The AI contract clients
are replaced through dependency overrides; the knowledge store is a fresh
AppState per test.
"""

import io
import json

import docx
import pytest
from fastapi.testclient import TestClient

from conftest import fake_structured_llm, fake_text_llm, make_item
from cs_genius.ai_core.audit import ChatAuditor
from cs_genius.ai_core.drafting import ReplyDrafter
from cs_genius.ai_core.extraction import KnowledgeExtractor
from cs_genius.api.dependencies import get_auditor, get_drafter, get_extractor
from cs_genius.main import create_app
from cs_genius.models.api_responses import ContractType, RequestState
from cs_genius.services.app_state import AppState, create_app_state
from cs_genius.services.knowledge_store import KnowledgeStore


@pytest.fixture
def state():
    items = [
        make_item("1", app="辞书", category="会员问题", alternativeQuestions=["申请退款没通过"]),
        make_item("2", app="Test", category="使用问题"),
        make_item("3", app="Test", category="使用问题"),
    ]
    return AppState(store=KnowledgeStore(items))


@pytest.fixture
def app(state):
    return create_app(state=state)


@pytest.fixture
def client(app):
    return TestClient(app)


def override(app, dependency, instance):
    app.dependency_overrides[dependency] = lambda: instance


def docx_bytes() -> bytes:
    document = docx.Document()
    document.add_paragraph("客服: 请重新安装。")
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_seeded_state():
    state = create_app_state()
    ids = [item.id for item in state.store.items]
    assert ids == ["1", "2"]


def test_list_items_with_filters(client):
    response = client.get("/api/knowledge", params={"app": "Test"})

    data = response.json()
    assert response.status_code == 200
    assert data["total"] == 2
    assert data["collectionSize"] == 3
    assert "alternativeQuestions" in data["items"][0]


def test_list_items_search_alternative_question(client):
    data = client.get("/api/knowledge", params={"search": "没通过"}).json()
    assert [item["id"] for item in data["items"]] == ["1"]


def test_categories(client):
    data = client.get("/api/knowledge/categories").json()
    assert data["categories"] == ["All", "会员问题", "使用问题"]


def test_add_items(client, state):
    payload = {
        "items": [
            {"app": "通用", "category": "c", "question": "Q1", "answer": "A1", "frequency": "中"}
        ]
    }

    response = client.post("/api/knowledge", json=payload)

    assert response.status_code == 201
    assert response.json()["collectionSize"] == 4
    assert state.store.items[0].question == "Q1"


def test_add_items_rejects_blank_question(client, state):
    payload = {"items": [{"question": "  ", "answer": "A"}]}

    response = client.post("/api/knowledge", json=payload)

    assert response.status_code == 422
    assert len(state.store) == 3


def test_update_optimized_answer(client, state):
    response = client.patch("/api/knowledge/2", json={"optimizedAnswer": "更好的回复"})

    assert response.status_code == 200
    assert response.json()["item"]["optimizedAnswer"] == "更好的回复"
    assert state.store.get("2").optimized_answer == "更好的回复"


def test_update_rejects_null_required_fields(client, state):
    response = client.patch(
        "/api/knowledge/1", json={"question": None, "alternativeQuestions": None}
    )

    assert response.status_code == 422
    assert state.store.get("1").question == "Question 1"
    assert client.get("/api/knowledge", params={"search": "x"}).status_code == 200


def test_update_rejects_blank_question(client, state):
    response = client.patch("/api/knowledge/2", json={"question": "   "})

    assert response.status_code == 422
    assert state.store.get("2").question == "Question 2"


def test_update_unknown_item(client):
    response = client.patch("/api/knowledge/missing", json={"optimizedAnswer": "x"})
    assert response.status_code == 404


def test_delete_item(client, state):
    assert client.delete("/api/knowledge/1").status_code == 200
    assert client.delete("/api/knowledge/1").status_code == 404
    assert len(state.store) == 2


def test_dashboard(client):
    data = client.get("/api/dashboard").json()

    assert data["stats"]["total"] == 3
    assert data["stats"]["apps"] == 2
    assert data["appDistribution"] == [
        {"name": "Test", "count": 2},
        {"name": "辞书", "count": 1},
    ]
    assert len(data["recentItems"]) == 3


def test_export_backup(client):
    response = client.get("/api/knowledge/export")

    assert response.status_code == 200
    assert "cs_genius_backup_" in response.headers["content-disposition"]
    assert [record["id"] for record in response.json()] == ["1", "2", "3"]


def test_import_backup_appends(client, state):
    backup = json.dumps([{"id": "1", "question": "restored", "answer": "A"}, {"question": "new", "answer": "B"}])

    response = client.post(
        "/api/knowledge/import",
        files={"file": ("backup.json", backup.encode("utf-8"), "application/json")},
    )

    data = response.json()
    assert response.status_code == 200
    assert data == {"imported": 2, "skipped": 0, "total": 5}
    assert state.store.get("1").question == "Question 1"


def test_import_backup_replace(client, state):
    backup = json.dumps([{"question": "only", "answer": "A"}])

    client.post(
        "/api/knowledge/import",
        params={"mode": "replace"},
        files={"file": ("backup.json", backup.encode("utf-8"), "application/json")},
    )

    assert [item.question for item in state.store.items] == ["only"]


def test_import_rejects_non_array(client, state):
    response = client.post(
        "/api/knowledge/import",
        files={"file": ("backup.json", b'{"question": "Q"}', "application/json")},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "JSON 格式不正确，必须是知识条目数组。"
    assert len(state.store) == 3


def test_extraction_saves_items(app, client, state):
    response_items = {"items": [{"app": "辞书", "question": "Q", "answer": "A"}]}
    override(app, get_extractor, KnowledgeExtractor(llm=fake_structured_llm(response_items)))

    response = client.post("/api/extraction", json={"contextText": "用户: Q", "save": True})

    data = response.json()
    assert response.status_code == 200
    assert data["saved"] is True
    assert data["total"] == 4
    assert data["storedItems"][0]["id"]
    assert state.store.items[0].question == "Q"
    assert state.requests.state(ContractType.EXTRACTION) == RequestState.SUCCEEDED


def test_extraction_empty_result_leaves_store(app, client, state):
    override(app, get_extractor, KnowledgeExtractor(llm=fake_structured_llm({"items": []})))

    response = client.post("/api/extraction", json={"contextText": "hello", "save": True})

    assert response.status_code == 200
    assert response.json()["items"] == []
    assert len(state.store) == 3


def test_extraction_requires_input(app, client):
    override(app, get_extractor, KnowledgeExtractor(llm=fake_structured_llm({"items": []})))

    response = client.post("/api/extraction", json={"contextText": "  "})

    assert response.status_code == 422


def test_extraction_failure(app, client, state):
    llm = fake_structured_llm(error=RuntimeError("bad key"))
    override(app, get_extractor, KnowledgeExtractor(llm=llm))

    response = client.post("/api/extraction", json={"contextText": "text", "save": True})

    assert response.status_code == 500
    assert response.json()["detail"] == "分析失败，请检查您的 API Key 或文件内容。"
    assert len(state.store) == 3
    assert state.requests.state(ContractType.EXTRACTION) == RequestState.FAILED


def test_extraction_busy_returns_conflict(app, client, state):
    override(app, get_extractor, KnowledgeExtractor(llm=fake_structured_llm({"items": []})))
    state.requests.try_begin(ContractType.EXTRACTION)

    response = client.post("/api/extraction", json={"contextText": "text"})

    assert response.status_code == 409


def test_document_backup_is_restored(client, state):
    backup = json.dumps([{"question": "from backup", "answer": "A"}]).encode("utf-8")

    response = client.post(
        "/api/extraction/document", files={"file": ("kb.json", backup, "application/json")}
    )

    data = response.json()
    assert data["kind"] == "backup"
    assert data["imported"]["imported"] == 1
    assert len(state.store) == 4


def test_document_text_appends_to_context(client):
    response = client.post(
        "/api/extraction/document",
        files={"file": ("notes.docx", docx_bytes(), "application/octet-stream")},
        data={"context_text": "用户: 之前的聊天"},
    )

    data = response.json()
    assert response.status_code == 200
    assert data["kind"] == "text"
    assert data["contextText"] == f"用户: 之前的聊天\n\n{data['text']}"
    assert data["text"].startswith("[已导入 Word 文档 - notes.docx]:")


def test_document_image(client):
    response = client.post(
        "/api/extraction/document", files={"file": ("shot.png", b"png-bytes", "image/png")}
    )

    data = response.json()
    assert data["kind"] == "image"
    assert data["mimeType"] == "image/png"


def test_document_unsupported(client):
    response = client.post(
        "/api/extraction/document", files={"file": ("notes.txt", b"data", "text/plain")}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "文件解析失败，请确保文件未损坏。"


def test_audit(app, client):
    assessment = {
        "userIssue": "退款被拒",
        "agentResponseOriginal": "不能退",
        "score": 3,
        "critique": "生硬",
        "improvedResponse": "理解您的心情……",
        "sentiment": "愤怒",
    }
    override(app, get_auditor, ChatAuditor(llm=fake_structured_llm(assessment)))

    response = client.post("/api/audit", json={"imageBase64": "aGVsbG8="})

    data = response.json()
    assert response.status_code == 200
    assert data["score"] == 3
    assert data["improvedResponse"] == "理解您的心情……"
    assert data["scoreBand"] == "poor"
    assert data["isNegative"] is True
    assert data["id"] and data["timestamp"]


def test_audit_failure(app, client, state):
    override(app, get_auditor, ChatAuditor(llm=fake_structured_llm(error=RuntimeError("x"))))

    response = client.post("/api/audit", json={"imageBase64": "aGVsbG8="})

    assert response.status_code == 500
    assert response.json()["detail"] == "分析失败，请检查图片或 API Key。"
    assert state.requests.state(ContractType.AUDIT) == RequestState.FAILED


def test_audit_requires_image(app, client):
    override(app, get_auditor, ChatAuditor(llm=fake_structured_llm(None)))
    assert client.post("/api/audit", json={"imageBase64": ""}).status_code == 422


def test_draft(app, client, state):
    override(app, get_drafter, ReplyDrafter(llm=fake_text_llm("船友您好")))

    response = client.post(
        "/api/draft",
        json={"keywords": "退款", "tone": "诚恳致歉 (Apologetic)", "businessRules": ["称呼用户为“船友”"]},
    )

    assert response.json() == {"draft": "船友您好", "available": True}
    assert state.requests.state(ContractType.DRAFT) == RequestState.SUCCEEDED


def test_draft_options(client):
    data = client.get("/api/draft/options").json()

    assert data["tones"][0] == "专业且共情 (Empathetic & Professional)"
    assert "诚恳致歉 (Apologetic)" in data["tones"]
    assert data["businessRules"] == [
        "称呼用户为“船友”",
        "分段回复用户，采用微信对话形式沟通（短句、亲切）",
    ]


def test_draft_unavailable(app, client, state):
    override(app, get_drafter, ReplyDrafter(llm=fake_text_llm(error=RuntimeError("x"))))

    response = client.post("/api/draft", json={"keywords": "退款"})

    assert response.status_code == 200
    assert response.json()["available"] is False
    assert state.requests.state(ContractType.DRAFT) == RequestState.FAILED


def test_request_states_and_reset(client, state):
    state.requests.finish(ContractType.AUDIT, succeeded=False)

    states = client.get("/api/requests").json()["states"]
    assert states["audit"] == "failed"

    reset = client.post("/api/requests/audit/reset").json()["states"]
    assert reset["audit"] == "idle"

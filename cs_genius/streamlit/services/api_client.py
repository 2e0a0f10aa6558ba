"""
API client for the CS Genius backend.
Makes real HTTP calls to the FastAPI backend at cs_genius/api/routes.

Every function returns a dict with keys: success (bool), message (str) and,
on success, data.
"""

from typing import Any
import base64
import logging
import requests
from config.settings import API_BASE_URL, API_TIMEOUT

logger = logging.getLogger(__name__)

_BACKEND_DOWN = "Cannot connect to backend API. Is it running?"


def _extract_error_detail(e: requests.HTTPError) -> str:
    """Pull a human-readable detail string from an HTTPError response."""
    try:
        return e.response.json().get("detail", str(e))
    except Exception:
        return str(e)


def _request(method: str, endpoint: str, **kwargs) -> dict[str, Any]:
    """Call the backend and wrap the outcome in the standard result dict."""
    url = f"{API_BASE_URL}{endpoint}"
    try:
        resp = requests.request(method, url, timeout=API_TIMEOUT, **kwargs)
        resp.raise_for_status()
        content_type = resp.headers.get("content-type", "")
        data = resp.json() if "json" in content_type else resp.content
        return {"success": True, "message": "", "data": data}
    except requests.ConnectionError:
        return {"success": False, "message": _BACKEND_DOWN, "data": None}
    except requests.HTTPError as e:
        detail = _extract_error_detail(e)
        logger.warning(f"{method} {endpoint} failed: {detail}")
        return {"success": False, "message": detail, "data": None}
    except Exception as e:
        logger.error(f"Unexpected error calling {endpoint}: {e}")
        return {"success": False, "message": f"Unexpected error: {e}", "data": None}


def fetch_dashboard() -> dict[str, Any]:
    """Calls: GET /api/dashboard"""
    return _request("GET", "/api/dashboard")


def list_items(search: str = "", app: str = "All", category: str = "All") -> dict[str, Any]:
    """Calls: GET /api/knowledge"""
    params = {"search": search, "app": app, "category": category}
    return _request("GET", "/api/knowledge", params=params)


def fetch_categories() -> dict[str, Any]:
    """Calls: GET /api/knowledge/categories"""
    return _request("GET", "/api/knowledge/categories")


def add_items(items: list[dict]) -> dict[str, Any]:
    """Calls: POST /api/knowledge"""
    return _request("POST", "/api/knowledge", json={"items": items})


def update_optimized_answer(item_id: str, optimized_answer: str) -> dict[str, Any]:
    """Calls: PATCH /api/knowledge/{id}"""
    return _request(
        "PATCH", f"/api/knowledge/{item_id}", json={"optimizedAnswer": optimized_answer}
    )


def delete_item(item_id: str) -> dict[str, Any]:
    """Calls: DELETE /api/knowledge/{id}"""
    return _request("DELETE", f"/api/knowledge/{item_id}")


def export_backup() -> dict[str, Any]:
    """
    Calls: GET /api/knowledge/export

    On success data is a tuple of (file name, JSON bytes).
    """
    url = f"{API_BASE_URL}/api/knowledge/export"
    try:
        resp = requests.get(url, timeout=API_TIMEOUT)
        resp.raise_for_status()
        disposition = resp.headers.get("content-disposition", "")
        filename = disposition.split("filename=")[-1].strip('"') or "backup.json"
        return {"success": True, "message": "", "data": (filename, resp.content)}
    except requests.ConnectionError:
        return {"success": False, "message": _BACKEND_DOWN, "data": None}
    except Exception as e:
        return {"success": False, "message": f"Export failed: {e}", "data": None}


def prepare_document(file_name: str, content: bytes, context_text: str = "") -> dict[str, Any]:
    """
    Calls: POST /api/extraction/document

    JSON backups are restored on the backend; other files come back ready
    for extraction, documents already appended to `context_text`.
    """
    files = {"file": (file_name, content)}
    data = {"context_text": context_text}
    return _request("POST", "/api/extraction/document", files=files, data=data)


def extract_knowledge(context_text: str, image_base64: str | None = None, save: bool = True) -> dict[str, Any]:
    """Calls: POST /api/extraction"""
    payload = {"contextText": context_text, "imageBase64": image_base64, "save": save}
    return _request("POST", "/api/extraction", json=payload)


def audit_chat(image_bytes: bytes, context_text: str | None = None) -> dict[str, Any]:
    """Calls: POST /api/audit"""
    payload = {
        "imageBase64": base64.b64encode(image_bytes).decode("ascii"),
        "contextText": context_text,
    }
    return _request("POST", "/api/audit", json=payload)


def fetch_draft_options() -> dict[str, Any]:
    """Calls: GET /api/draft/options"""
    return _request("GET", "/api/draft/options")


def generate_draft(keywords: str, tone: str, business_rules: list[str]) -> dict[str, Any]:
    """Calls: POST /api/draft"""
    payload = {"keywords": keywords, "tone": tone, "businessRules": business_rules}
    return _request("POST", "/api/draft", json=payload)

"""
FastAPI dependencies.

The application state lives on `app.state` and is created by the app
factory. AI contract clients are created lazily on first use so the API can
start (and be tested) without model credentials; tests replace them through
`app.dependency_overrides`.
"""

from functools import lru_cache

from fastapi import Request

from cs_genius.ai_core.audit import ChatAuditor
from cs_genius.ai_core.drafting import ReplyDrafter
from cs_genius.ai_core.extraction import KnowledgeExtractor
from cs_genius.services.app_state import AppState


def get_app_state(request: Request) -> AppState:
    return request.app.state.cs_genius


@lru_cache
def get_extractor() -> KnowledgeExtractor:
    return KnowledgeExtractor()


@lru_cache
def get_auditor() -> ChatAuditor:
    return ChatAuditor()


@lru_cache
def get_drafter() -> ReplyDrafter:
    return ReplyDrafter()

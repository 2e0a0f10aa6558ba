"""
Chat Audit API Route
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from cs_genius.ai_core.audit import ChatAuditError, ChatAuditor
from cs_genius.api.dependencies import get_app_state, get_auditor
from cs_genius.models.api_responses import AuditRequest, ContractType
from cs_genius.models.audit import ChatAuditResult
from cs_genius.services.app_state import AppState
from cs_genius.services.request_tracker import RequestInProgressError

logger = logging.getLogger(__name__)
router = APIRouter()

AUDIT_FAILED_NOTICE = "分析失败，请检查图片或 API Key。"


@router.post("", response_model=ChatAuditResult)
async def audit_chat(
    request: AuditRequest,
    state: AppState = Depends(get_app_state),
    auditor: ChatAuditor = Depends(get_auditor),
):
    """
    Score a chat screenshot and propose an improved reply.

    The result is not stored; promote it with POST /api/knowledge.
    """
    logger.info(f"Audit request: context={'yes' if request.context_text else 'no'}")

    try:
        async with state.requests.track(ContractType.AUDIT):
            return await auditor.audit_chat(request.image_base64, request.context_text)
    except RequestInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ChatAuditError as e:
        logger.error(f"Error in audit endpoint: {str(e)}")
        raise HTTPException(status_code=500, detail=AUDIT_FAILED_NOTICE)

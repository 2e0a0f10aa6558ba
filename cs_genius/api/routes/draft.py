"""
Smart Drafter API Route
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from cs_genius.ai_core.drafting import ReplyDrafter
from cs_genius.api.dependencies import get_app_state, get_drafter
from cs_genius.models.api_responses import (
    ContractType,
    DraftOptionsResponse,
    DraftResponse,
)
from cs_genius.models.drafting import DEFAULT_BUSINESS_RULES, DraftRequest, ReplyTone
from cs_genius.services.app_state import AppState
from cs_genius.services.request_tracker import RequestInProgressError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/options", response_model=DraftOptionsResponse)
async def get_draft_options():
    """Tone choices and the default business rules for a new drafting session."""
    return DraftOptionsResponse(
        tones=[tone.value for tone in ReplyTone],
        business_rules=list(DEFAULT_BUSINESS_RULES),
    )


@router.post("", response_model=DraftResponse)
async def generate_draft(
    request: DraftRequest,
    state: AppState = Depends(get_app_state),
    drafter: ReplyDrafter = Depends(get_drafter),
):
    """
    Generate a reply draft.

    A failed generation is not an HTTP error: the response carries
    `available: false` and the client may retry.

    Example request body:
    ```json
    {
        "keywords": "用户要求退款，但已超过14天",
        "tone": "诚恳致歉 (Apologetic)",
        "businessRules": ["称呼用户为“船友”"]
    }
    ```
    """
    logger.info(
        f"Draft request: tone={request.tone.value}, rules={len(request.business_rules)}"
    )

    try:
        async with state.requests.track(ContractType.DRAFT) as outcome:
            draft = await drafter.generate_draft(
                request.keywords, request.tone, request.business_rules
            )
            if draft is None:
                outcome.mark_failed()
    except RequestInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return DraftResponse(draft=draft, available=draft is not None)

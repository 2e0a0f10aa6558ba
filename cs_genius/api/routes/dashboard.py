"""
Dashboard API Route
"""

from fastapi import APIRouter, Depends

from cs_genius.api.dependencies import get_app_state
from cs_genius.models.api_responses import DashboardResponse
from cs_genius.services.app_state import AppState
from cs_genius.services.knowledge_queries import (
    app_distribution,
    category_distribution,
    compute_stats,
    recent_items,
)

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def dashboard(state: AppState = Depends(get_app_state)):
    """Headline stats, app/category distributions and the latest items."""
    items = state.store.items
    return DashboardResponse(
        stats=compute_stats(items),
        app_distribution=app_distribution(items),
        category_distribution=category_distribution(items),
        recent_items=recent_items(items),
    )

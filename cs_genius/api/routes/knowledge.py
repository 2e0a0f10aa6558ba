"""
Knowledge Base API Routes

Table view, manual entry, inline edit, delete and backup import/export.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile

from cs_genius.api.dependencies import get_app_state
from cs_genius.models.api_responses import (
    AddItemsRequest,
    ImportMode,
    ImportResponse,
    KnowledgeListResponse,
    MutationResponse,
)
from cs_genius.models.knowledge import KnowledgeItem, KnowledgeItemUpdate
from cs_genius.services.app_state import AppState
from cs_genius.services.backup import (
    BackupFormatError,
    backup_filename,
    export_backup,
    parse_backup,
)
from cs_genius.services.knowledge_queries import ALL, category_options, filter_items

logger = logging.getLogger(__name__)
router = APIRouter()


def restore_backup(state: AppState, content, mode: ImportMode) -> ImportResponse:
    """
    Parse a backup and restore it into the store.

    Raises:
        HTTPException: 400 if the content is not a JSON array
    """
    try:
        items, skipped = parse_backup(content)
    except BackupFormatError as e:
        logger.warning(f"Rejected backup import: {str(e)}")
        raise HTTPException(
            status_code=400,
            detail="JSON 格式不正确，必须是知识条目数组。",
        )

    restored = state.store.replace_all(items, mode=mode)
    return ImportResponse(
        imported=len(restored), skipped=skipped, total=len(state.store)
    )


@router.get("", response_model=KnowledgeListResponse)
async def list_items(
    search: str = Query("", description="Case-insensitive search term"),
    app: str = Query(ALL, description="App filter, 'All' disables it"),
    category: str = Query(ALL, description="Category filter, 'All' disables it"),
    state: AppState = Depends(get_app_state),
):
    """
    Filtered knowledge table.

    Examples:
    - GET /api/knowledge?search=退款
    - GET /api/knowledge?app=辞书&category=会员问题
    """
    items = state.store.items
    filtered = filter_items(items, search=search, app=app, category=category)
    return KnowledgeListResponse(
        items=filtered, total=len(filtered), collection_size=len(items)
    )


@router.post("", response_model=KnowledgeListResponse, status_code=201)
async def add_items(
    request: AddItemsRequest, state: AppState = Depends(get_app_state)
):
    """
    Add a batch of manually entered items (e.g. the save-to-knowledge form).

    Example request body:
    ```json
    {
        "items": [
            {"app": "通用", "category": "c", "question": "Q1", "answer": "A1", "frequency": "中"}
        ]
    }
    ```
    """
    logger.info(f"Add items request: count={len(request.items)}")
    created = state.store.add(request.items)
    return KnowledgeListResponse(
        items=created, total=len(created), collection_size=len(state.store)
    )


@router.get("/categories")
async def list_categories(state: AppState = Depends(get_app_state)):
    """Values for the category filter picker."""
    return {"categories": category_options(state.store.items)}


@router.get("/export")
async def export_items(state: AppState = Depends(get_app_state)):
    """Download the full collection as a JSON backup."""
    items = state.store.items
    filename = backup_filename()
    logger.info(f"Exporting {len(items)} items to {filename}")
    return Response(
        content=export_backup(items),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResponse)
async def import_items(
    file: UploadFile = File(..., description="JSON backup file"),
    mode: ImportMode = Query(ImportMode.APPEND, description="append or replace"),
    state: AppState = Depends(get_app_state),
):
    """
    Restore a JSON backup. Appends by default; existing entries are kept.
    """
    content = await file.read()
    logger.info(f"Import request: file={file.filename}, mode={mode.value}")
    return restore_backup(state, content, mode)


@router.patch("/{item_id}", response_model=MutationResponse)
async def update_item(
    item_id: str,
    changes: KnowledgeItemUpdate,
    state: AppState = Depends(get_app_state),
):
    """
    Partially update one item, typically the inline optimized-answer edit.
    """
    if not state.store.update(item_id, changes):
        raise HTTPException(status_code=404, detail=f"Knowledge item {item_id} not found")

    item: Optional[KnowledgeItem] = state.store.get(item_id)
    return MutationResponse(id=item_id, found=True, item=item)


@router.delete("/{item_id}", response_model=MutationResponse)
async def delete_item(item_id: str, state: AppState = Depends(get_app_state)):
    """Delete one item. Confirmation happens in the front end."""
    if not state.store.remove(item_id):
        raise HTTPException(status_code=404, detail=f"Knowledge item {item_id} not found")
    return MutationResponse(id=item_id, found=True)

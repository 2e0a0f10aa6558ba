"""
Knowledge Extraction API Routes

1. POST /api/extraction - Extract knowledge items from text and/or a screenshot
2. POST /api/extraction/document - Pre-process an uploaded file for extraction
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from cs_genius.ai_core.extraction import KnowledgeExtractionError, KnowledgeExtractor
from cs_genius.api.dependencies import get_app_state, get_extractor
from cs_genius.api.routes.knowledge import restore_backup
from cs_genius.models.api_responses import (
    ContractType,
    DocumentImportResponse,
    ExtractionRequest,
    ExtractionResponse,
    ImportMode,
)
from cs_genius.services.app_state import AppState
from cs_genius.services.document_import import (
    DocumentParseError,
    append_to_context,
    prepare_upload,
)
from cs_genius.services.request_tracker import RequestInProgressError

logger = logging.getLogger(__name__)
router = APIRouter()

EXTRACTION_FAILED_NOTICE = "分析失败，请检查您的 API Key 或文件内容。"
DOCUMENT_FAILED_NOTICE = "文件解析失败，请确保文件未损坏。"


@router.post("", response_model=ExtractionResponse)
async def extract_knowledge(
    request: ExtractionRequest,
    state: AppState = Depends(get_app_state),
    extractor: KnowledgeExtractor = Depends(get_extractor),
):
    """
    Run the extraction model over free text and/or one screenshot.

    With `save: true` the extracted items are added to the knowledge base in
    one batch. An empty result is a valid outcome and leaves the store as is.

    Example request body:
    ```json
    {
        "contextText": "用户: 为什么退款失败？ 客服: 超过14天无法退款。",
        "save": true
    }
    ```
    """
    if not request.context_text.strip() and not request.image_base64:
        raise HTTPException(status_code=422, detail="Provide context text or an image")

    logger.info(
        f"Extraction request: text_length={len(request.context_text)}, "
        f"image={'yes' if request.image_base64 else 'no'}, save={request.save}"
    )

    try:
        async with state.requests.track(ContractType.EXTRACTION):
            drafts = await extractor.extract_knowledge(
                request.context_text, request.image_base64
            )
    except RequestInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except KnowledgeExtractionError as e:
        logger.error(f"Error in extraction endpoint: {str(e)}")
        raise HTTPException(status_code=500, detail=EXTRACTION_FAILED_NOTICE)

    stored = state.store.add(drafts) if request.save else []
    return ExtractionResponse(
        items=drafts,
        saved=request.save,
        stored_items=stored,
        total=len(state.store),
    )


@router.post("/document", response_model=DocumentImportResponse)
async def prepare_document(
    file: UploadFile = File(..., description="Image, .docx, .xlsx, .xls or .json backup"),
    context_text: str = Form("", description="Current extraction input to append to"),
    mode: ImportMode = Query(ImportMode.APPEND, description="Restore mode for backups"),
    state: AppState = Depends(get_app_state),
):
    """
    Pre-process an upload for extraction.

    Images come back as base64. Documents come back as a labelled text block,
    and as `contextText`: the submitted extraction input with that block
    appended. JSON backups are restored directly without going through the
    model.
    """
    content = await file.read()
    file_name = file.filename or "upload"
    logger.info(f"Document upload: file={file_name}, size={len(content)}")

    try:
        prepared = prepare_upload(file_name, content)
    except DocumentParseError as e:
        logger.warning(f"Rejected upload {file_name}: {str(e)}")
        raise HTTPException(status_code=400, detail=DOCUMENT_FAILED_NOTICE)

    imported = None
    combined = None
    if prepared.kind == "backup":
        imported = restore_backup(state, prepared.raw, mode)
    elif prepared.kind == "text":
        combined = append_to_context(context_text, prepared.text)

    return DocumentImportResponse(
        kind=prepared.kind,
        file_name=prepared.file_name,
        text=prepared.text,
        context_text=combined,
        image_base64=prepared.image_base64,
        mime_type=prepared.mime_type,
        imported=imported,
    )

"""
API Request and Response Models

Pydantic models for consistent API request/response structures.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import Field

from cs_genius.models.knowledge import (
    CamelModel,
    DistributionEntry,
    KnowledgeItem,
    KnowledgeItemCreate,
    KnowledgeItemDraft,
    KnowledgeStats,
)


class ContractType(str, Enum):
    """External LLM contracts, each with its own busy flag."""

    EXTRACTION = "extraction"
    AUDIT = "audit"
    DRAFT = "draft"


class RequestState(str, Enum):
    """Lifecycle of one contract call."""

    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ImportMode(str, Enum):
    """Backup restore behaviour."""

    APPEND = "append"  # default, existing entries are preserved
    REPLACE = "replace"


# Requests


class AddItemsRequest(CamelModel):
    """Batch of manually entered items."""

    items: List[KnowledgeItemCreate] = Field(default_factory=list)


class ExtractionRequest(CamelModel):
    """Extraction input: free text and/or one base64 PNG image."""

    context_text: str = Field("", description="Free-text context, may be empty")
    image_base64: Optional[str] = Field(None, description="Base64 image data")
    save: bool = Field(False, description="Store extracted items immediately")


class AuditRequest(CamelModel):
    """Audit input: one base64 JPEG screenshot plus optional context."""

    image_base64: str = Field(..., min_length=1, description="Base64 image data")
    context_text: Optional[str] = Field(None, description="Additional context")


# Responses


class KnowledgeListResponse(CamelModel):
    """Filtered knowledge table."""

    items: List[KnowledgeItem] = Field(default_factory=list)
    total: int = Field(0, description="Number of items after filtering")
    collection_size: int = Field(0, description="Number of items in the store")


class MutationResponse(CamelModel):
    """Result of a single-item update or delete."""

    id: str
    found: bool
    item: Optional[KnowledgeItem] = None


class ImportResponse(CamelModel):
    """Result of a backup restore."""

    imported: int = Field(0, description="Records added to the store")
    skipped: int = Field(0, description="Records rejected as malformed")
    total: int = Field(0, description="Store size after the restore")


class DashboardResponse(CamelModel):
    """Everything the dashboard renders."""

    stats: KnowledgeStats
    app_distribution: List[DistributionEntry] = Field(default_factory=list)
    category_distribution: List[DistributionEntry] = Field(default_factory=list)
    recent_items: List[KnowledgeItem] = Field(default_factory=list)


class ExtractionResponse(CamelModel):
    """Extraction result; items are stored only when requested."""

    items: List[KnowledgeItemDraft] = Field(default_factory=list)
    saved: bool = False
    stored_items: List[KnowledgeItem] = Field(default_factory=list)
    total: int = Field(0, description="Store size after the call")


class DraftResponse(CamelModel):
    """Draft result; an absent draft means no draft is available."""

    draft: Optional[str] = None
    available: bool = False


class DraftOptionsResponse(CamelModel):
    """Choices offered by the drafter form."""

    tones: List[str] = Field(default_factory=list, description="Tone display strings")
    business_rules: List[str] = Field(
        default_factory=list, description="Starting rule set for a new session"
    )


class DocumentImportResponse(CamelModel):
    """Pre-processed upload ready to feed into extraction."""

    kind: str = Field(..., description="image, text or backup")
    file_name: str
    text: Optional[str] = Field(None, description="Labelled text block")
    context_text: Optional[str] = Field(
        None, description="Submitted extraction input with the text block appended"
    )
    image_base64: Optional[str] = None
    mime_type: Optional[str] = None
    imported: Optional[ImportResponse] = None


class RequestStatesResponse(CamelModel):
    """Current state per contract type."""

    states: Dict[ContractType, RequestState] = Field(default_factory=dict)

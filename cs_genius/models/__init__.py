# Shared data models
from cs_genius.models.knowledge import (
    Frequency,
    KnowledgeItem,
    KnowledgeItemDraft,
    KnowledgeItemCreate,
    KnowledgeItemUpdate,
    KnowledgeStats,
    DistributionEntry,
    ExtractedKnowledgeItem,
    ExtractedKnowledgeResponse,
)
from cs_genius.models.audit import ChatAuditAssessment, ChatAuditResult, ScoreBand
from cs_genius.models.drafting import ReplyTone, DraftRequest

__all__ = [
    "Frequency",
    "KnowledgeItem",
    "KnowledgeItemDraft",
    "KnowledgeItemCreate",
    "KnowledgeItemUpdate",
    "KnowledgeStats",
    "DistributionEntry",
    "ExtractedKnowledgeItem",
    "ExtractedKnowledgeResponse",
    "ChatAuditAssessment",
    "ChatAuditResult",
    "ScoreBand",
    "ReplyTone",
    "DraftRequest",
]

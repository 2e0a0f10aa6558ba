"""
Knowledge Base Models

This module defines the data models for knowledge items and the derived
views computed over the knowledge base.
"""

from enum import Enum
from typing import List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cs_genius.utils.helpers import clean_string_list, coerce_app


class Frequency(str, Enum):
    """Coarse occurrence tags, stored on items as display text."""

    HIGH = "高"
    MEDIUM = "中"
    LOW = "低"


class CamelModel(BaseModel):
    """Base model serializing to the camelCase wire format."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class KnowledgeItemDraft(CamelModel):
    """
    A knowledge item before it is stored (no id, no lastUpdated).

    The store assigns both on insertion.
    """

    app: str = Field("通用", description="App name from the fixed product list")
    category: str = Field("", description="Free-text problem category")
    question: str = Field(..., description="Canonical question text")
    alternative_questions: List[str] = Field(
        default_factory=list, description="Paraphrases of the question"
    )
    answer: str = Field(..., description="Original support reply")
    optimized_answer: Optional[str] = Field(None, description="Improved reply")
    frequency: str = Field(Frequency.MEDIUM.value, description="高, 中 or 低")

    @field_validator("alternative_questions", mode="before")
    @classmethod
    def _normalize_alternatives(cls, value: Any) -> List[str]:
        return clean_string_list(value)

    @field_validator("app", mode="before")
    @classmethod
    def _constrain_app(cls, value: Any) -> str:
        return coerce_app(value)

    @field_validator("category", "frequency", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any, info) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class KnowledgeItem(KnowledgeItemDraft):
    """A stored knowledge item."""

    id: str = Field(..., description="Opaque unique identifier")
    last_updated: str = Field(..., description="Date stamp (YYYY-MM-DD)")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        # Backups written by other tools may carry numeric ids
        if isinstance(value, (int, float)):
            return str(value)
        return value


class KnowledgeItemCreate(KnowledgeItemDraft):
    """Manual form submission; question and answer must be non-empty."""

    question: str = Field(..., min_length=1, description="Canonical question text")
    answer: str = Field(..., min_length=1, description="Original support reply")

    @field_validator("question", "answer")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class KnowledgeItemUpdate(CamelModel):
    """Partial change applied to one stored item. Unset fields are untouched."""

    app: Optional[str] = None
    category: Optional[str] = None
    question: Optional[str] = None
    alternative_questions: Optional[List[str]] = None
    answer: Optional[str] = None
    optimized_answer: Optional[str] = None
    frequency: Optional[str] = None

    @field_validator(
        "app", "category", "question", "alternative_questions", "answer", "frequency"
    )
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        # Omit a field to leave it untouched; only optimizedAnswer may be cleared
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("question", "answer")
    @classmethod
    def _not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value


class KnowledgeStats(CamelModel):
    """
    Statistics about the knowledge base.
    """

    total: int = Field(0, description="Total number of items")
    apps: int = Field(0, description="Number of distinct apps")
    categories: int = Field(0, description="Number of distinct categories")
    recent: int = Field(0, description="Items updated in the last 7 days")


class DistributionEntry(BaseModel):
    """One bar of a grouping chart."""

    name: str
    count: int


# Extraction output models (structured LLM output)


class ExtractedKnowledgeItem(KnowledgeItemDraft):
    """One candidate knowledge item proposed by the extraction model."""

    app: str = Field(
        "通用", description="App 名称，必须是指定列表中的一个"
    )
    category: str = Field("", description="问题分类，例如：会员问题、使用问题")
    question: str = Field(..., description="标准问题描述")
    alternative_questions: List[str] = Field(
        default_factory=list,
        description="用户可能询问该问题的其他不同说法 (3-5个)",
    )
    answer: str = Field(..., description="从原文中提取的原始回答")
    optimized_answer: Optional[str] = Field(
        None, description="基于原始回答优化后的专业、共情客服话术 (中文)"
    )
    frequency: str = Field(Frequency.MEDIUM.value, description="出现频率: 高, 中, 低")

    def to_draft(self) -> KnowledgeItemDraft:
        return KnowledgeItemDraft(**self.model_dump())


class ExtractedKnowledgeResponse(CamelModel):
    """Extraction output wrapper: an ordered list of candidates."""

    items: List[ExtractedKnowledgeItem] = Field(
        default_factory=list, description="提取出的知识条目"
    )

"""
Smart Drafter Models
"""

from enum import Enum
from typing import List
from pydantic import Field, field_validator

from cs_genius.models.knowledge import CamelModel
from cs_genius.utils.helpers import clean_string_list


class ReplyTone(str, Enum):
    """Tone options offered by the drafter, stored as their display strings."""

    EMPATHETIC = "专业且共情 (Empathetic & Professional)"
    FORMAL = "正式且直接 (Formal & Direct)"
    CASUAL = "轻松友好 (Casual & Friendly)"
    APOLOGETIC = "诚恳致歉 (Apologetic)"


DEFAULT_BUSINESS_RULES = [
    "称呼用户为“船友”",
    "分段回复用户，采用微信对话形式沟通（短句、亲切）",
]


class DraftRequest(CamelModel):
    """Input for a reply draft."""

    keywords: str = Field(..., min_length=1, description="Key points / problem description")
    tone: ReplyTone = Field(ReplyTone.EMPATHETIC, description="Reply tone")
    business_rules: List[str] = Field(
        default_factory=list, description="Business rules, highest priority first"
    )

    @field_validator("keywords")
    @classmethod
    def _keywords_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("keywords must not be blank")
        return value

    @field_validator("business_rules", mode="before")
    @classmethod
    def _normalize_rules(cls, value):
        return clean_string_list(value)

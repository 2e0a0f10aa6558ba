"""
Chat Audit Models

Structured quality assessment of a support conversation screenshot.
Audit results are ephemeral: they live for the current audit session only
and can be promoted into a knowledge item via an explicit save.
"""

from datetime import datetime
from enum import Enum
from pydantic import Field, computed_field

from cs_genius.models.knowledge import CamelModel
from cs_genius.utils.helpers import generate_item_id

NEGATIVE_SENTIMENTS = ("不满", "愤怒", "Negative", "Frustrated")


class ScoreBand(str, Enum):
    """Display band for an audit score."""

    GOOD = "good"  # >= 8
    FAIR = "fair"  # >= 5
    POOR = "poor"


class ChatAuditAssessment(CamelModel):
    """Structured output returned by the audit model."""

    user_issue: str = Field(..., description="用户的问题 (中文)")
    agent_response_original: str = Field(..., description="从图片转录的客服原始回复")
    score: float = Field(..., description="质量评分 1-10")
    critique: str = Field(..., description="评分理由及改进点 (中文)")
    improved_response: str = Field(..., description="更具同理心且准确的优化话术 (中文)")
    sentiment: str = Field(..., description="用户情绪: 满意, 平静, 不满, 愤怒")


class ChatAuditResult(ChatAuditAssessment):
    """
    An assessment plus display-only identity.

    The score is passed through exactly as returned. Its display band and
    the negative-sentiment flag are derived and serialized alongside it so
    clients render them without re-deriving.
    """

    id: str = Field(default_factory=generate_item_id)
    timestamp: str = Field(
        default_factory=lambda: datetime.now().strftime("%H:%M:%S")
    )

    @computed_field(alias="scoreBand")
    @property
    def score_band(self) -> ScoreBand:
        return score_band(self.score)

    @computed_field(alias="isNegative")
    @property
    def is_negative(self) -> bool:
        return self.sentiment in NEGATIVE_SENTIMENTS


def score_band(score: float) -> ScoreBand:
    if score >= 8:
        return ScoreBand.GOOD
    if score >= 5:
        return ScoreBand.FAIR
    return ScoreBand.POOR

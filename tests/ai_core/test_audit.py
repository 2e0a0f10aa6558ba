"""
Tests for Chat Audit
"""

import pytest

from conftest import fake_structured_llm
from cs_genius.ai_core.audit import ChatAuditError, ChatAuditor
from cs_genius.ai_core.prompts.audit import build_audit_prompt
from cs_genius.models.audit import (
    ChatAuditAssessment,
    ChatAuditResult,
    ScoreBand,
    score_band,
)


@pytest.fixture
def assessment():
    return ChatAuditAssessment(
        user_issue="用户询问为什么退款被拒绝",
        agent_response_original="超过14天不能退。",
        score=4,
        critique="回复过于生硬，缺乏同理心。",
        improved_response="非常理解您的心情，根据退款政策……",
        sentiment="不满",
    )


def test_audit_prompt_context():
    assert "额外上下文: VIP 用户" in build_audit_prompt("VIP 用户")
    assert "额外上下文" not in build_audit_prompt(None)


@pytest.mark.asyncio
async def test_audit_returns_result_with_identity(assessment):
    llm = fake_structured_llm(assessment)
    auditor = ChatAuditor(llm=llm)

    result = await auditor.audit_chat("aGVsbG8=", "VIP 用户")

    assert isinstance(result, ChatAuditResult)
    assert result.user_issue == assessment.user_issue
    assert result.id
    assert len(result.timestamp) == 8
    assert result.is_negative
    assert result.score_band == ScoreBand.POOR
    llm.with_structured_output.assert_called_once_with(ChatAuditAssessment)


@pytest.mark.asyncio
async def test_audit_sends_jpeg_data_url(assessment):
    llm = fake_structured_llm(assessment)

    await ChatAuditor(llm=llm).audit_chat("aGVsbG8=")

    message = llm.with_structured_output.return_value.ainvoke.call_args.args[0][0]
    assert message.content[0]["image_url"]["url"] == "data:image/jpeg;base64,aGVsbG8="


@pytest.mark.asyncio
async def test_audit_passes_out_of_range_score_through():
    response = {
        "userIssue": "Q",
        "agentResponseOriginal": "A",
        "score": 12,
        "critique": "c",
        "improvedResponse": "better",
        "sentiment": "满意",
    }
    auditor = ChatAuditor(llm=fake_structured_llm(response))

    result = await auditor.audit_chat("aGVsbG8=")

    assert result.score == 12
    assert result.score_band == ScoreBand.GOOD
    assert not result.is_negative


@pytest.mark.asyncio
async def test_audit_requires_image():
    with pytest.raises(ValueError):
        await ChatAuditor(llm=fake_structured_llm(None)).audit_chat("")


@pytest.mark.asyncio
async def test_audit_empty_response_fails():
    with pytest.raises(ChatAuditError):
        await ChatAuditor(llm=fake_structured_llm(None)).audit_chat("aGVsbG8=")


@pytest.mark.asyncio
async def test_audit_wraps_service_errors():
    auditor = ChatAuditor(llm=fake_structured_llm(error=ConnectionError("down")))

    with pytest.raises(ChatAuditError):
        await auditor.audit_chat("aGVsbG8=")


@pytest.mark.parametrize(
    "score, band",
    [(10, ScoreBand.GOOD), (8, ScoreBand.GOOD), (7.5, ScoreBand.FAIR), (5, ScoreBand.FAIR), (4.9, ScoreBand.POOR), (-1, ScoreBand.POOR)],
)
def test_score_band_thresholds(score, band):
    assert score_band(score) == band


def test_result_serializes_band_and_sentiment_flag(assessment):
    result = ChatAuditResult(**assessment.model_dump())

    data = result.model_dump(mode="json", by_alias=True)

    assert data["scoreBand"] == "poor"
    assert data["isNegative"] is True
    assert data["userIssue"] == assessment.user_issue

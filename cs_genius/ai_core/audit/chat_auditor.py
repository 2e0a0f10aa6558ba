"""
Chat Audit Module

Scores a support conversation screenshot for empathy, clarity and accuracy,
and proposes a better reply.
"""

import logging
from typing import Optional

from cs_genius.ai_core.llm import build_chat_llm, build_human_message
from cs_genius.ai_core.prompts.audit import build_audit_prompt
from cs_genius.models.audit import ChatAuditAssessment, ChatAuditResult

logger = logging.getLogger(__name__)


class ChatAuditError(Exception):
    """
    Raised when a chat audit fails.
    This is a system error (500) - transport, service or parse failure.
    """

    pass


class ChatAuditor:
    """
    Audits chat screenshots with the chat model's structured output.
    """

    IMAGE_MIME_TYPE = "image/jpeg"

    def __init__(self, llm=None):
        self.llm = llm or build_chat_llm()

    async def audit_chat(
        self, image_base64: str, context_text: Optional[str] = None
    ) -> ChatAuditResult:
        """
        Audit one chat screenshot.

        The score is passed through exactly as returned, even outside 1-10.

        Args:
            image_base64: Base64 JPEG screenshot (required)
            context_text: Optional additional context

        Returns:
            ChatAuditResult with a generated id and timestamp

        Raises:
            ValueError: If no image is provided
            ChatAuditError: If the model call or response parsing fails
        """
        if not image_base64:
            raise ValueError("Chat audit needs a screenshot")

        logger.info("Starting chat audit")

        prompt = build_audit_prompt(context_text)
        messages = [build_human_message(prompt, image_base64, self.IMAGE_MIME_TYPE)]

        try:
            structured_llm = self.llm.with_structured_output(ChatAuditAssessment)
            assessment = await structured_llm.ainvoke(messages)

            if assessment is None:
                raise ChatAuditError("Audit model returned an empty assessment")

            if isinstance(assessment, dict):
                assessment = ChatAuditAssessment.model_validate(assessment)

        except ChatAuditError:
            raise
        except Exception as e:
            logger.error(f"Error auditing chat: {str(e)}", exc_info=True)
            raise ChatAuditError(f"Failed to audit chat: {str(e)}") from e

        result = ChatAuditResult(**assessment.model_dump())
        logger.info(
            f"Chat audit complete: score={result.score}, sentiment={result.sentiment}"
        )
        return result

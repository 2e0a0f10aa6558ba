"""
Smart Drafter Module

Generates a single suggested reply from keywords, a tone and a list of
business rules.
"""

import logging
from typing import List, Optional, Union

from cs_genius.ai_core.llm import build_chat_llm, build_human_message
from cs_genius.ai_core.prompts.drafting import build_draft_prompt
from cs_genius.models.drafting import ReplyTone

logger = logging.getLogger(__name__)


class ReplyDrafter:
    """
    Drafts customer-service replies. The response is plain text, no schema.
    """

    def __init__(self, llm=None):
        self.llm = llm or build_chat_llm()

    async def generate_draft(
        self,
        keywords: str,
        tone: Union[ReplyTone, str] = ReplyTone.EMPATHETIC,
        business_rules: Optional[List[str]] = None,
    ) -> Optional[str]:
        """
        Generate one reply draft.

        Failures do not raise: the caller gets None, meaning "no draft
        available", and may simply call again.

        Args:
            keywords: Key points of the customer's problem (required)
            tone: Tone display string
            business_rules: Rules to follow, in priority order

        Returns:
            The draft text, or None if no draft could be produced

        Raises:
            ValueError: If keywords are empty
        """
        if not keywords or not keywords.strip():
            raise ValueError("Draft needs keywords")

        tone_label = tone.value if isinstance(tone, ReplyTone) else str(tone)
        rules = list(business_rules or [])
        prompt = build_draft_prompt(keywords.strip(), tone_label, rules)

        logger.info(f"Generating draft: tone={tone_label}, rules={len(rules)}")

        try:
            response = await self.llm.ainvoke([build_human_message(prompt)])
        except Exception as e:
            logger.error(f"Error generating draft: {str(e)}", exc_info=True)
            return None

        content = response.content if isinstance(response.content, str) else ""
        draft = content.strip()
        if not draft:
            logger.warning("Draft model returned empty content")
            return None

        logger.info(f"Generated draft ({len(draft)} chars)")
        return draft

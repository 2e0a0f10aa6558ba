"""
Knowledge Extraction Module

Turns raw support material (free text and/or one screenshot) into candidate
knowledge items using the chat model's structured output.

The model is instructed, not forced, to produce the item shape, so the
response is treated as untrusted: optional fields fall back to defaults and
app tags are constrained to the product list. A response that cannot be
parsed as a whole is a failure; partial results are never accepted.
"""

import logging
from typing import List, Optional

from cs_genius.ai_core.llm import build_chat_llm, build_human_message
from cs_genius.ai_core.prompts.extraction import build_extraction_prompt
from cs_genius.config import get_settings
from cs_genius.models.knowledge import (
    ExtractedKnowledgeResponse,
    KnowledgeItemDraft,
)

logger = logging.getLogger(__name__)


class KnowledgeExtractionError(Exception):
    """
    Raised when knowledge extraction fails.
    This is a system error (500) - transport, service or parse failure.
    """

    pass


class KnowledgeExtractor:
    """
    Extracts Q&A knowledge items from text and screenshots.
    """

    IMAGE_MIME_TYPE = "image/png"

    def __init__(self, llm=None):
        """
        Initialize the extractor.

        Args:
            llm: Chat model to use. Defaults to a gen_ai_hub proxied model
                with the extraction temperature.
        """
        config = get_settings()
        self.llm = llm or build_chat_llm(temperature=config.extraction_temperature)
        self.app_options = config.app_options
        self.default_app = config.default_app

    async def extract_knowledge(
        self,
        context_text: str = "",
        image_base64: Optional[str] = None,
    ) -> List[KnowledgeItemDraft]:
        """
        Extract candidate knowledge items.

        Args:
            context_text: Free-text context, may be empty
            image_base64: Base64 PNG screenshot, optional

        Returns:
            Candidate items in the order the model produced them (possibly empty)

        Raises:
            ValueError: If neither text nor image is provided
            KnowledgeExtractionError: If the model call or response parsing fails
        """
        context_text = (context_text or "").strip()
        if not context_text and not image_base64:
            raise ValueError("Extraction needs context text or an image")

        logger.info(
            f"Starting knowledge extraction: text_length={len(context_text)}, "
            f"image={'yes' if image_base64 else 'no'}"
        )

        prompt = build_extraction_prompt(context_text, self.app_options, self.default_app)
        messages = [build_human_message(prompt, image_base64, self.IMAGE_MIME_TYPE)]

        try:
            structured_llm = self.llm.with_structured_output(ExtractedKnowledgeResponse)
            response = await structured_llm.ainvoke(messages)

            if response is None:
                logger.info("Extraction model returned no content, treating as empty")
                return []

            if isinstance(response, dict):
                response = ExtractedKnowledgeResponse.model_validate(response)

        except Exception as e:
            logger.error(f"Error extracting knowledge: {str(e)}", exc_info=True)
            raise KnowledgeExtractionError(
                f"Failed to extract knowledge items: {str(e)}"
            ) from e

        drafts = [item.to_draft() for item in response.items]
        logger.info(f"Extracted {len(drafts)} knowledge items")
        return drafts

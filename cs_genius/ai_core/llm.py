"""
Chat model construction and message helpers shared by the AI contracts.
"""

import logging
from typing import Optional

from gen_ai_hub.proxy.langchain.openai import ChatOpenAI
from gen_ai_hub.proxy.core.proxy_clients import get_proxy_client
from langchain_core.messages import HumanMessage

from cs_genius.config import get_settings

logger = logging.getLogger(__name__)


def build_chat_llm(temperature: Optional[float] = None) -> ChatOpenAI:
    """
    Create a chat model behind the gen_ai_hub proxy.

    Args:
        temperature: Sampling temperature, defaults to the configured value

    Returns:
        ChatOpenAI instance
    """
    config = get_settings()
    proxy_client = get_proxy_client("gen-ai-hub")
    logger.debug(f"Initializing chat model {config.openai_model}")
    return ChatOpenAI(
        proxy_model_name=config.openai_model,
        proxy_client=proxy_client,
        temperature=config.temperature if temperature is None else temperature,
    )


def image_part(image_base64: str, mime_type: str) -> dict:
    """Inline image content block (base64 data URL)."""
    return {
        "type": "image_url",
        "image_url": {"url": f"data:{mime_type};base64,{image_base64}"},
    }


def build_human_message(
    prompt: str,
    image_base64: Optional[str] = None,
    mime_type: str = "image/png",
) -> HumanMessage:
    """
    Build a user message, multimodal when an image is attached.

    The image block comes first so the instructions read as referring to it.
    """
    if not image_base64:
        return HumanMessage(content=prompt)

    return HumanMessage(
        content=[
            image_part(strip_data_url(image_base64), mime_type),
            {"type": "text", "text": prompt},
        ]
    )


def strip_data_url(data: str) -> str:
    """Accept either raw base64 or a full data URL and return the base64 part."""
    if data.startswith("data:") and "," in data:
        return data.split(",", 1)[1]
    return data

"""Prompts package."""

from cs_genius.ai_core.prompts.extraction import build_extraction_prompt
from cs_genius.ai_core.prompts.audit import build_audit_prompt
from cs_genius.ai_core.prompts.drafting import build_draft_prompt, SIGN_OFF

__all__ = [
    "build_extraction_prompt",
    "build_audit_prompt",
    "build_draft_prompt",
    "SIGN_OFF",
]

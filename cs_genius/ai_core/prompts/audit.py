"""
Prompts for Chat Audit
"""

from textwrap import dedent
from typing import Optional

AUDIT_PROMPT_TEMPLATE = dedent(
    """
    分析这张聊天记录截图。
    1. 识别用户的具体问题。
    2. 转录客服的回复。
    3. 基于同理心、清晰度和解决方案准确性对回复进行打分 (1-10)。
    4. 用中文提供点评，指出不足之处。
    5. 提供一个更好的回复话术 (中文)。
    6. 判断用户情绪。
    {context_section}
    """
).strip()


def build_audit_prompt(context_text: Optional[str] = None) -> str:
    context_section = f"额外上下文: {context_text}" if context_text else ""
    return AUDIT_PROMPT_TEMPLATE.format(context_section=context_section).strip()

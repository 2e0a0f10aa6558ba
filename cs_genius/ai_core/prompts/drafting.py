"""
Prompts for the Smart Drafter

The drafter produces one plain-text customer-service reply. Business rules
supplied by staff take priority over the general style rules.
"""

from textwrap import dedent
from typing import List

SIGN_OFF = "客服团队"

DRAFT_PROMPT_TEMPLATE = dedent(
    """
    请编写一条客户服务回复（邮件或消息）。
    关键词/问题: {keywords}
    语气要求: {tone}
    {rules_section}

    通用生成规则:
    - 语言必须是中文。
    - 充满同理心。
    - 清晰简洁。
    - 如果是拒绝请求，请礼貌但坚定。
    - 如果提供了业务规则，请优先依据规则生成。
    - 落款为 '{sign_off}'，不要使用 [你的名字] 等占位符。
    """
).strip()


def format_business_rules(rules: List[str]) -> str:
    """Render business rules as a bullet list section, empty when there are none."""
    if not rules:
        return ""
    bullets = "\n".join(f"- {rule}" for rule in rules)
    return f"必须遵守以下参考语料/业务规则:\n{bullets}"


def build_draft_prompt(keywords: str, tone: str, rules: List[str]) -> str:
    return DRAFT_PROMPT_TEMPLATE.format(
        keywords=keywords,
        tone=tone,
        rules_section=format_business_rules(rules),
        sign_off=SIGN_OFF,
    )

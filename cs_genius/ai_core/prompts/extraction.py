"""
Prompts for Knowledge Extraction

Turns free text (pasted chats, imported documents) and/or a screenshot into
customer-service Q&A knowledge items.
"""

from textwrap import dedent
from typing import List

EXTRACTION_PROMPT_TEMPLATE = dedent(
    """
    分析提供的内容（文本或图片）。
    提取客户服务问答知识条目。
    **重要：如果这是一张包含多个问题的表格或列表图片，请务必提取所有可见的行/问题，不要遗漏。**

    对于每一条提取的内容：
    1. **识别 App 名称**：必须严格归类为以下列表之一：[{app_list}]。如果不确定或不属于前述产品，请归类为 '{default_app}'。
    2. **识别问题分类**：例如：会员问题、使用问题、功能建议、账号异常、支付问题等。
    3. **识别标准问题 (question)**。
    4. **生成相似问法 (alternativeQuestions)**：列出 3-5 个用户可能询问同一问题的不同说法（使用不同的关键词、口语化表达或从不同角度提问）。
    5. 提取原始的官方回复 (answer)。
    6. **生成优化话术 (optimizedAnswer)**：基于原始回复，编写一段更具同理心、专业且清晰的客服回复。
    7. 如果内容中提到了频率，请提取；如果没有，请根据问题严重性估算为：高、中、低。

    请直接输出中文内容。
    返回严格的 JSON 格式。
    {context_section}
    """
).strip()


def build_extraction_prompt(
    context_text: str, app_options: List[str], default_app: str
) -> str:
    """
    Fill the extraction prompt.

    Args:
        context_text: Free-text context, may be empty
        app_options: Closed list of product tags
        default_app: Catch-all tag

    Returns:
        Prompt text
    """
    app_list = ", ".join(f"'{app}'" for app in app_options)
    context_section = f"上下文文本: {context_text}" if context_text else ""
    return EXTRACTION_PROMPT_TEMPLATE.format(
        app_list=app_list,
        default_app=default_app,
        context_section=context_section,
    ).strip()

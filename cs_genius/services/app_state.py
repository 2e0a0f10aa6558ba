"""
Application state container.

Owned by the composition root (the FastAPI app) for the lifetime of the
session and handed to routes through dependencies; there is no module-level
singleton.
"""

import logging
from dataclasses import dataclass, field

from cs_genius.config import Settings, get_settings
from cs_genius.models.knowledge import KnowledgeItem
from cs_genius.services.knowledge_store import KnowledgeStore
from cs_genius.services.request_tracker import RequestTracker

logger = logging.getLogger(__name__)


SAMPLE_ITEMS = [
    {
        "id": "1",
        "app": "辞书",
        "category": "会员问题",
        "question": "为什么我的退款被拒绝？",
        "alternativeQuestions": ["退款失败是什么原因？", "申请退款没通过", "怎么才能符合退款条件？"],
        "answer": "只有在购买后 14 天内且未使用的商品才能申请退款。",
        "optimizedAnswer": "我们完全理解您的困扰。根据我们的退款政策，退款通常适用于购买后 14 天内未使用的商品。虽然这次无法为您办理，但我们很乐意为您提供下一次订阅的折扣优惠。",
        "frequency": "高",
        "lastUpdated": "2023-10-27",
    },
    {
        "id": "2",
        "app": "Test",
        "category": "使用问题",
        "question": "应用启动崩溃 (iOS)",
        "alternativeQuestions": ["打开App就闪退", "iOS版本无法进入应用", "Test应用总是崩溃"],
        "answer": "请确保版本为 2.4.5。尝试彻底卸载并重新安装。",
        "optimizedAnswer": "很抱歉给您带来不便。请尝试将应用更新至最新的 2.4.5 版本。如果问题依旧，建议您卸载后重新安装，这通常能解决大多数启动问题。如有需要，请随时联系我们。",
        "frequency": "中",
        "lastUpdated": "2023-11-02",
    },
]


@dataclass
class AppState:
    """Knowledge store plus the busy flags of the external contracts."""

    store: KnowledgeStore = field(default_factory=KnowledgeStore)
    requests: RequestTracker = field(default_factory=RequestTracker)


def create_app_state(settings: Settings = None) -> AppState:
    """Build the session state, optionally seeded with the sample entries."""
    settings = settings or get_settings()
    items = []
    if settings.seed_sample_data:
        items = [KnowledgeItem.model_validate(record) for record in SAMPLE_ITEMS]
        logger.info(f"Seeded knowledge base with {len(items)} sample items")
    return AppState(store=KnowledgeStore(items))

"""
Knowledge base query and derivation functions.

Pure functions over a sequence of knowledge items. Views are recomputed on
every call; at the scale of a support knowledge base no incremental
indexing is needed.
"""

from collections import Counter
from datetime import date, timedelta
from typing import List, Optional, Sequence

from cs_genius.models.knowledge import DistributionEntry, KnowledgeItem, KnowledgeStats
from cs_genius.utils.helpers import parse_item_date

ALL = "All"
UNCATEGORIZED = "未分类"
RECENT_WINDOW_DAYS = 7
TOP_CATEGORIES = 8
RECENT_ITEMS = 5


def compute_stats(
    items: Sequence[KnowledgeItem], today: Optional[date] = None
) -> KnowledgeStats:
    """
    Compute the dashboard headline numbers.

    An item is recent when its lastUpdated date lies within the trailing
    seven days, today included: today-6 counts, today-7 does not.
    Missing or unparseable dates never count as recent.
    """
    today = today or date.today()
    window_start = today - timedelta(days=RECENT_WINDOW_DAYS)

    recent = 0
    for item in items:
        updated = parse_item_date(item.last_updated)
        if updated is not None and updated > window_start:
            recent += 1

    return KnowledgeStats(
        total=len(items),
        apps=len({item.app for item in items}),
        categories=len({item.category for item in items}),
        recent=recent,
    )


def _distribution(labels: List[str], limit: Optional[int] = None) -> List[DistributionEntry]:
    # Counter keeps first-seen order and sorted() is stable, so ties keep it too
    counts = Counter(label or UNCATEGORIZED for label in labels)
    ranked = sorted(counts.items(), key=lambda entry: entry[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [DistributionEntry(name=name, count=count) for name, count in ranked]


def app_distribution(items: Sequence[KnowledgeItem]) -> List[DistributionEntry]:
    """Item count per app, largest first, ties in first-encountered order."""
    return _distribution([item.app for item in items])


def category_distribution(
    items: Sequence[KnowledgeItem], limit: int = TOP_CATEGORIES
) -> List[DistributionEntry]:
    """Item count per category, truncated to the largest `limit` groups."""
    return _distribution([item.category for item in items], limit=limit)


def recent_items(
    items: Sequence[KnowledgeItem], limit: int = RECENT_ITEMS
) -> List[KnowledgeItem]:
    """
    Most recently updated items.

    Sorted by lastUpdated descending; items with missing or invalid dates
    sort as the oldest. Equal dates keep their storage order.
    """
    oldest = date.min

    def sort_key(item: KnowledgeItem) -> date:
        return parse_item_date(item.last_updated) or oldest

    return sorted(items, key=sort_key, reverse=True)[:limit]


def _matches_search(item: KnowledgeItem, needle: str) -> bool:
    if needle in item.question.lower() or needle in item.answer.lower():
        return True
    return any(needle in alt.lower() for alt in item.alternative_questions)


def filter_items(
    items: Sequence[KnowledgeItem],
    search: str = "",
    app: Optional[str] = ALL,
    category: Optional[str] = ALL,
) -> List[KnowledgeItem]:
    """
    Filtered knowledge table.

    The search term matches case-insensitively against the question, the
    answer and every alternative question. `app` and `category` are equality
    filters; "All" (or None) disables a filter. No pagination.
    """
    needle = (search or "").lower()
    results = []
    for item in items:
        if needle and not _matches_search(item, needle):
            continue
        if app not in (None, ALL) and item.app != app:
            continue
        if category not in (None, ALL) and item.category != category:
            continue
        results.append(item)
    return results


def category_options(items: Sequence[KnowledgeItem]) -> List[str]:
    """Values for the category filter: "All" then categories in first-seen order."""
    return [ALL] + list(dict.fromkeys(item.category for item in items))

"""
In-memory knowledge item store.

The store is the single source of truth for knowledge entries. Every
mutation swaps in a new list under a lock, so readers always see either the
state before or after a mutation and never a half-applied one. Nothing is
cached; the query layer recomputes its views from `items` on every read.
"""

import logging
import threading
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from cs_genius.models.api_responses import ImportMode
from cs_genius.models.knowledge import (
    KnowledgeItem,
    KnowledgeItemDraft,
    KnowledgeItemUpdate,
)
from cs_genius.utils.helpers import coerce_app, generate_item_id, today_iso

logger = logging.getLogger(__name__)


class KnowledgeStore:
    """
    Ordered collection of knowledge items.

    Storage order is newest batch first. Display order is always derived by
    the query layer and never written back.
    """

    def __init__(
        self,
        items: Optional[Iterable[KnowledgeItem]] = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Args:
            items: Initial entries, kept in the given order
            today: Clock used for lastUpdated stamps
        """
        self._lock = threading.Lock()
        self._items: List[KnowledgeItem] = list(items or [])
        self._today = today

    @property
    def items(self) -> List[KnowledgeItem]:
        """Snapshot of the collection in storage order."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, item_id: str) -> Optional[KnowledgeItem]:
        with self._lock:
            return self._find(item_id)

    def add(self, drafts: Sequence[KnowledgeItemDraft]) -> List[KnowledgeItem]:
        """
        Store a batch of new items.

        Each item receives a fresh unique id and today's date. The batch is
        prepended in its own order. No validation is performed; callers are
        responsible for well-formed input.

        Args:
            drafts: Items without id or lastUpdated

        Returns:
            The stored items
        """
        if not drafts:
            return []

        stamp = today_iso(self._today())
        with self._lock:
            taken = {item.id for item in self._items}
            created = []
            for draft in drafts:
                item_id = self._fresh_id(taken)
                taken.add(item_id)
                created.append(
                    KnowledgeItem(
                        **draft.model_dump(exclude={"id", "last_updated"}),
                        id=item_id,
                        last_updated=stamp,
                    )
                )
            self._items = created + self._items

        logger.info(f"Added {len(created)} knowledge items (total: {len(self._items)})")
        return created

    def update(
        self,
        item_id: str,
        changes: Union[KnowledgeItemUpdate, Dict[str, Any]],
        refresh_timestamp: bool = True,
    ) -> bool:
        """
        Apply a partial change to exactly one item.

        Args:
            item_id: Id of the item to change
            changes: Fields to overwrite; unset fields are left untouched
            refresh_timestamp: Restamp lastUpdated with today's date

        Returns:
            True if an item matched, False if the id is unknown (no-op)

        Raises:
            ValidationError: If the changes would clear a required field
        """
        if isinstance(changes, KnowledgeItemUpdate):
            changes = changes.model_dump(exclude_unset=True)
        else:
            changes = KnowledgeItemUpdate(**changes).model_dump(exclude_unset=True)

        if refresh_timestamp:
            changes["last_updated"] = today_iso(self._today())

        with self._lock:
            target = self._find(item_id)
            if target is None:
                logger.debug(f"Update skipped, no item with id {item_id}")
                return False

            # Re-validate the merged record so a partial change cannot break it
            updated = KnowledgeItem.model_validate({**target.model_dump(), **changes})
            self._items = [
                updated if item.id == target.id else item for item in self._items
            ]

        logger.info(f"Updated knowledge item {item_id}: {sorted(changes)}")
        return True

    def remove(self, item_id: str) -> bool:
        """
        Delete at most one item.

        Returns:
            True if an item was removed, False if the id is unknown (no-op)
        """
        with self._lock:
            target = self._find(item_id)
            if target is None:
                logger.debug(f"Delete skipped, no item with id {item_id}")
                return False
            self._items = [item for item in self._items if item is not target]

        logger.info(f"Removed knowledge item {item_id}")
        return True

    def replace_all(
        self,
        items: Sequence[KnowledgeItem],
        mode: ImportMode = ImportMode.APPEND,
    ) -> List[KnowledgeItem]:
        """
        Bulk restore from a backup.

        In APPEND mode (the default) restored items are added after the
        existing ones and nothing is lost. REPLACE discards the current
        collection first. Restored ids that collide with ids already in the
        collection are re-keyed so ids stay unique.

        Args:
            items: Complete items (id and lastUpdated present)
            mode: APPEND or REPLACE

        Returns:
            The restored items as stored
        """
        with self._lock:
            existing = [] if mode == ImportMode.REPLACE else self._items
            taken = {item.id for item in existing}
            restored = []
            for item in items:
                if item.id in taken:
                    new_id = self._fresh_id(taken)
                    logger.debug(f"Re-keying restored item {item.id} -> {new_id}")
                    item = item.model_copy(update={"id": new_id})
                taken.add(item.id)
                restored.append(item.model_copy(update={"app": coerce_app(item.app)}))
            self._items = existing + restored

        logger.info(
            f"Restored {len(restored)} knowledge items in {mode.value} mode "
            f"(total: {len(self._items)})"
        )
        return restored

    def _find(self, item_id: str) -> Optional[KnowledgeItem]:
        item_id = str(item_id)
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    @staticmethod
    def _fresh_id(taken: set) -> str:
        item_id = generate_item_id()
        while item_id in taken:
            item_id = generate_item_id()
        return item_id

"""
Knowledge base backup import/export.

A backup is a JSON array of knowledge item records in the camelCase wire
format. Export writes the full collection pretty-printed; import accepts any
array and fills in missing ids and dates.
"""

import json
import logging
from datetime import date
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from cs_genius.config import get_settings
from cs_genius.models.knowledge import KnowledgeItem
from cs_genius.utils.helpers import generate_item_id, today_iso

logger = logging.getLogger(__name__)


class BackupFormatError(Exception):
    """
    Raised when a backup file is not a JSON array.
    This is a client error (400) - the uploaded file is unusable as a whole.
    """

    pass


def backup_filename(today: Optional[date] = None) -> str:
    """
    Build the download name for a backup, e.g. cs_genius_backup_2024-05-01.json.
    """
    settings = get_settings()
    return f"{settings.product_slug}_backup_{today_iso(today)}.json"


def export_backup(items: Sequence[KnowledgeItem]) -> str:
    """
    Serialize the collection as a pretty-printed JSON array.

    Args:
        items: The full current collection

    Returns:
        JSON text (indent 2, non-ASCII kept as-is)
    """
    records = [item.model_dump(by_alias=True) for item in items]
    return json.dumps(records, ensure_ascii=False, indent=2)


def parse_backup(
    content: Any, today: Optional[date] = None
) -> Tuple[List[KnowledgeItem], int]:
    """
    Parse backup content into complete knowledge items.

    Records missing an id get a fresh random one and records missing
    lastUpdated get today's date. Records that cannot form an item (not an
    object, or without question/answer) are skipped.

    Args:
        content: Raw JSON text/bytes, or an already decoded value
        today: Date used for records without lastUpdated

    Returns:
        Tuple of (parsed items, number of skipped records)

    Raises:
        BackupFormatError: If the content is not valid JSON or not an array
    """
    if isinstance(content, (str, bytes, bytearray)):
        try:
            content = json.loads(content)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BackupFormatError(f"Backup is not valid JSON: {e}") from e

    if not isinstance(content, list):
        raise BackupFormatError(
            f"Backup must be a JSON array of knowledge items, got {type(content).__name__}"
        )

    stamp = today_iso(today)
    items = []
    skipped = 0
    for index, record in enumerate(content):
        if not isinstance(record, dict):
            logger.warning(f"Skipping backup record {index}: not an object")
            skipped += 1
            continue

        record = dict(record)
        if not record.get("id"):
            record["id"] = generate_item_id()
        if not record.get("lastUpdated") and not record.get("last_updated"):
            record["lastUpdated"] = stamp

        try:
            items.append(KnowledgeItem.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping backup record {index}: {e.error_count()} invalid fields")
            skipped += 1

    logger.info(f"Parsed backup: {len(items)} items, {skipped} skipped")
    return items, skipped

"""
Upload pre-processing for knowledge extraction.

Uploaded files are routed by extension:
- images are passed through as base64 for the extraction model
- Word documents (.docx) are reduced to their raw text
- spreadsheets (.xlsx, and legacy .xls) become a JSON block of the first sheet's rows
- JSON files are knowledge base backups and bypass the model entirely

Text results carry a labelled header so several documents can be appended
to the same extraction input.
"""

import base64
import io
import json
import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Dict, Iterable, List, Optional, Sequence

import docx
import openpyxl
import xlrd

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
}
SPREADSHEET_SUFFIXES = (".xlsx", ".xls")
BLANK_HEADER = "__EMPTY"


class DocumentParseError(Exception):
    """
    Raised when an uploaded document cannot be read.
    This is a client error (400) - the file is corrupt or unsupported.
    """

    pass


@dataclass
class PreparedUpload:
    """An upload ready to feed into extraction or backup restore."""

    kind: str  # "image", "text" or "backup"
    file_name: str
    text: Optional[str] = None
    image_base64: Optional[str] = None
    mime_type: Optional[str] = None
    raw: Optional[bytes] = None


def extract_docx_text(content: bytes) -> str:
    """Return the raw paragraph text of a .docx document."""
    document = docx.Document(io.BytesIO(content))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def header_keys(header: Sequence[Any]) -> List[str]:
    """
    Row object keys for a header row.

    Blank header cells become `__EMPTY`, `__EMPTY_1`, ... and repeated names
    get a numeric suffix (`name`, `name_1`, ...), so every column keeps a
    distinct key.
    """
    keys: List[str] = []
    taken = set()
    for value in header:
        base = BLANK_HEADER if value is None or str(value) == "" else str(value)
        key, counter = base, 0
        while key in taken:
            counter += 1
            key = f"{base}_{counter}"
        taken.add(key)
        keys.append(key)
    return keys


def rows_to_records(rows: Iterable[Sequence[Any]]) -> List[Dict[str, Any]]:
    """
    Turn sheet rows into row objects keyed by the first row.

    Empty cells are left out of a row and fully empty rows are dropped.
    """
    rows = [list(row) for row in rows]
    if not rows:
        return []

    width = max(len(row) for row in rows)
    header = rows[0] + [None] * (width - len(rows[0]))
    keys = header_keys(header)

    records = []
    for row in rows[1:]:
        record = {
            keys[index]: value
            for index, value in enumerate(row)
            if value is not None and value != ""
        }
        if record:
            records.append(record)
    return records


def _xlsx_rows(content: bytes) -> List[tuple]:
    workbook = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        sheet = workbook[workbook.sheetnames[0]]
        return list(sheet.iter_rows(values_only=True))
    finally:
        workbook.close()


def _xls_cell_value(cell, datemode: int) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_NUMBER and float(cell.value).is_integer():
        # BIFF stores every number as a float
        return int(cell.value)
    return cell.value


def _xls_rows(content: bytes) -> List[tuple]:
    book = xlrd.open_workbook(file_contents=content)
    try:
        sheet = book.sheet_by_index(0)
        return [
            tuple(_xls_cell_value(cell, book.datemode) for cell in sheet.row(index))
            for index in range(sheet.nrows)
        ]
    finally:
        book.release_resources()


def spreadsheet_rows(content: bytes, suffix: str = ".xlsx") -> List[Dict[str, Any]]:
    """
    Read the first sheet of a workbook as a list of row objects.

    Args:
        content: Workbook bytes
        suffix: ".xlsx" (Office Open XML) or ".xls" (legacy BIFF)
    """
    rows = _xls_rows(content) if suffix == ".xls" else _xlsx_rows(content)
    return rows_to_records(rows)


def prepare_upload(file_name: str, content: bytes) -> PreparedUpload:
    """
    Route an uploaded file to the matching pre-processing step.

    Args:
        file_name: Original file name (the extension decides the route)
        content: File bytes

    Returns:
        PreparedUpload describing how the file feeds into the knowledge base

    Raises:
        DocumentParseError: If the file type is unsupported or unreadable
    """
    suffix = PurePath(file_name).suffix.lower()

    if suffix == ".json":
        return PreparedUpload(kind="backup", file_name=file_name, raw=content)

    if suffix in IMAGE_MIME_TYPES:
        return PreparedUpload(
            kind="image",
            file_name=file_name,
            image_base64=base64.b64encode(content).decode("ascii"),
            mime_type=IMAGE_MIME_TYPES[suffix],
        )

    try:
        if suffix == ".docx":
            body = extract_docx_text(content)
            text = f"[已导入 Word 文档 - {file_name}]:\n{body}"
        elif suffix in SPREADSHEET_SUFFIXES:
            rows = spreadsheet_rows(content, suffix)
            body = json.dumps(rows, ensure_ascii=False, indent=2, default=str)
            text = f"[已导入 Excel 文档 - {file_name}]:\n{body}"
        else:
            raise DocumentParseError(f"Unsupported file type: {suffix or file_name}")
    except DocumentParseError:
        raise
    except Exception as e:
        logger.error(f"Error parsing uploaded document {file_name}: {str(e)}", exc_info=True)
        raise DocumentParseError(
            f"Failed to parse {file_name}, make sure the file is not damaged"
        ) from e

    logger.info(f"Prepared {suffix} upload {file_name} ({len(text)} chars)")
    return PreparedUpload(kind="text", file_name=file_name, text=text)


def append_to_context(existing: str, addition: str) -> str:
    """Append a labelled document block to the free-text extraction input."""
    return f"{existing}\n\n{addition}" if existing else addition

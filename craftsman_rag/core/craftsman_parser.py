"""
Craftsman card extraction from model answers.

The assistant is instructed to reproduce retrieved document blocks verbatim.
This module finds those blocks in free text and reads their labelled
fields back into ``Craftsman`` cards. Extraction is best effort: a block
that cannot be read is logged and left out, and ``extract_craftsmen`` never
raises.

Dependencies: craftsman_rag.models
System role: Presentation-layer entity extraction
"""

import logging
import re
import time

from craftsman_rag.core.context_builder import DOCUMENT_START
from craftsman_rag.models.craftsman import Craftsman

logger = logging.getLogger(__name__)

DOCUMENT_BLOCK_RE = re.compile(r"--- المستند \d+.*?([\s\S]*?)--- نهاية المستند \d+ ---")

# Labels in the order the record formatter writes them.
FIELD_LABELS: list[tuple[str, str]] = [
    ("name", "اسم الحرفي:"),
    ("craft", "المهنة:"),
    ("address", "العنوان:"),
    ("cities", "المدن:"),
    ("rating", "التقييم:"),
    ("completed_jobs", "الوظائف المنجزة:"),
    ("active_jobs", "الوظائف النشطة:"),
    ("description", "الوصف:"),
    ("status", "الحالة:"),
    ("source_id", "sourceId:"),
]

RATING_UNAVAILABLE = "غير متوفر"
BUSY_MARKER = "مشغول"

_RATING_VALUE_RE = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)")
_REVIEW_COUNT_RES = [
    re.compile(r"عدد التقييمات: (\d+)"),
    re.compile(r"\((\d+)\)"),
    re.compile(r"\((\d+)\s*تقييمات?\)"),
]
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def contains_craftsman_data(text: str) -> bool:
    """True when ``text`` carries a document start marker and a sourceId label."""
    if not isinstance(text, str):
        return False
    return DOCUMENT_START in text and "sourceId:" in text


def extract_fields(content: str) -> dict[str, str]:
    """
    Read labelled values from one block.

    Labels are searched in order from the previous label onwards. A value
    runs until the earliest later label, or to the end of the block.
    Empty values are dropped.
    """
    first = content.find(FIELD_LABELS[0][1])
    if first == -1:
        return {}

    values: dict[str, str] = {}
    position = first
    for index, (key, label) in enumerate(FIELD_LABELS):
        label_pos = content.find(label, position)
        if label_pos == -1:
            continue

        value_start = label_pos + len(label)
        value_end = len(content)
        for _, later_label in FIELD_LABELS[index + 1:]:
            later_pos = content.find(later_label, value_start)
            if later_pos != -1 and later_pos < value_end:
                value_end = later_pos

        value = content[value_start:value_end].strip()
        if value:
            values[key] = value
        position = value_start

    return values


def parse_rating(text: str | None) -> tuple[float | None, int | None]:
    """
    Parse a rating line value into ``(rating, review_count)``.

    ``غير متوفر`` means no rating and zero reviews.
    """
    if not text:
        return None, None
    if RATING_UNAVAILABLE in text:
        return None, 0

    rating = None
    match = _RATING_VALUE_RE.match(text)
    if match:
        rating = float(match.group(1))

    review_count = None
    for pattern in _REVIEW_COUNT_RES:
        count_match = pattern.search(text)
        if count_match:
            review_count = int(count_match.group(1))
            break

    return rating, review_count


def parse_leading_int(text: str | None) -> int | None:
    if not text:
        return None
    match = _LEADING_INT_RE.match(text)
    return int(match.group(1)) if match else None


def parse_craftsman_block(content: str, fallback_index: int = 0) -> Craftsman | None:
    """
    Build a card from the content between block markers.

    Returns:
        Craftsman, or None when the block has no name or craft
    """
    fields = extract_fields(content)
    name = fields.get("name")
    craft = fields.get("craft")
    if not name or not craft:
        logger.warning(
            f"{__name__}:parse_craftsman_block - Skipping block without name or craft",
            extra={"found_fields": sorted(fields)},
        )
        return None

    rating, review_count = parse_rating(fields.get("rating"))
    status = "busy" if BUSY_MARKER in fields.get("status", "") else "free"
    address = ", ".join(v for v in (fields.get("address"), fields.get("cities")) if v)

    return Craftsman(
        id=fields.get("source_id") or f"fallback-{int(time.time() * 1000)}-{fallback_index}",
        name=name,
        craft=craft,
        rating=rating,
        review_count=review_count,
        address=address or None,
        description=fields.get("description"),
        status=status,
        cities=fields.get("cities"),
        completed_jobs=parse_leading_int(fields.get("completed_jobs")),
        active_jobs=parse_leading_int(fields.get("active_jobs")),
    )


def extract_craftsmen(text: str) -> list[Craftsman]:
    """
    Extract every readable craftsman card from ``text``.

    Never raises; unreadable blocks are logged and skipped.
    """
    if not isinstance(text, str) or not text:
        return []

    craftsmen: list[Craftsman] = []
    try:
        for match in DOCUMENT_BLOCK_RE.finditer(text):
            content = match.group(1)
            if not content or not content.strip():
                logger.warning(f"{__name__}:extract_craftsmen - Skipping empty document block")
                continue
            try:
                craftsman = parse_craftsman_block(content, fallback_index=len(craftsmen))
            except Exception as e:
                logger.error(
                    f"{__name__}:extract_craftsmen - Failed to parse block: {type(e).__name__}: {e}",
                    extra={"block_preview": content[:100]},
                )
                continue
            if craftsman is not None:
                craftsmen.append(craftsman)
    except Exception as e:
        logger.error(f"{__name__}:extract_craftsmen - Extraction aborted: {type(e).__name__}: {e}")

    if not craftsmen and DOCUMENT_START in text:
        logger.warning(f"{__name__}:extract_craftsmen - Document markers present but no craftsman extracted")

    return craftsmen

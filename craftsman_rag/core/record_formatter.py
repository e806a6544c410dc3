"""
Craftsman record formatting.

Renders directory records into the labelled Arabic text blocks that are
embedded, stored and later shown to the model as context.

Dependencies: craftsman_rag.models
System role: Source record to searchable document conversion
"""

from datetime import datetime, timezone
from typing import Any

from craftsman_rag.models.craftsman import CraftsmanRecord

UNSPECIFIED = "غير محدد"
GENERIC_CRAFT = "حرفي"
STATUS_FREE = "متاح"
STATUS_BUSY = "مشغول"


def format_craftsman(record: CraftsmanRecord) -> str:
    """Render one record as a newline-terminated labelled block."""
    lines = [
        f"اسم الحرفي: {record.name}",
        f"المهنة: {record.craft_name or UNSPECIFIED}",
        f"العنوان: {record.address or UNSPECIFIED}",
    ]

    if record.city_names:
        lines.append(f"المدن: {', '.join(record.city_names)}")

    if record.average_rating:
        lines.append(f"التقييم: {record.average_rating} (عدد التقييمات: {record.number_of_ratings or 0})")
    else:
        lines.append("التقييم: غير متوفر")

    lines.append(f"الوظائف المنجزة: {record.done_jobs_num or 0}")
    lines.append(f"الوظائف النشطة: {record.active_jobs_num or 0}")

    if record.description:
        lines.append(f"الوصف: {record.description}")

    lines.append(f"الحالة: {STATUS_FREE if record.status == 'free' else STATUS_BUSY}")
    return "\n".join(lines) + "\n"


def document_title(record: CraftsmanRecord) -> str:
    return f"{record.name} - {record.craft_name or GENERIC_CRAFT}"


def document_metadata(record: CraftsmanRecord) -> dict[str, Any]:
    """Metadata stored next to the vector: craft, cities, keywords and the raw record."""
    craft = record.craft_name or ""
    cities = record.city_names
    return {
        "craft": craft,
        "cities": cities,
        "keywords": [GENERIC_CRAFT, craft, *cities],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "rawData": record.raw(),
    }

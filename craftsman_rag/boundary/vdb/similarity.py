"""
Similarity helpers.

Linear cosine similarity used when the store does not report a score,
and inclusive threshold filtering.

Dependencies: math (stdlib)
System role: Scoring fallback for vector search results
"""

import logging
import math
from collections.abc import Sequence

from craftsman_rag.boundary.vdb.vector_schemas import VectorSearchResult

logger = logging.getLogger(__name__)


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors.

    Returns 0.0 when either vector is empty or zero, or the lengths differ.
    """
    if not vec_a or not vec_b or len(vec_a) != len(vec_b):
        logger.warning(
            f"{__name__}:cosine_similarity - Invalid vectors (len_a={len(vec_a) if vec_a else 0}, "
            f"len_b={len(vec_b) if vec_b else 0})"
        )
        return 0.0

    dot = 0.0
    mag_a = 0.0
    mag_b = 0.0
    for a, b in zip(vec_a, vec_b):
        dot += a * b
        mag_a += a * a
        mag_b += b * b

    magnitude = math.sqrt(mag_a) * math.sqrt(mag_b)
    if magnitude == 0:
        return 0.0
    return dot / magnitude


def filter_by_similarity(
    results: list[VectorSearchResult],
    threshold: float,
) -> list[VectorSearchResult]:
    """
    Keep results scoring at or above ``threshold``.

    A result without a score counts as 0.0. Order is preserved.
    """
    return [r for r in results if (r.similarity or 0.0) >= threshold]

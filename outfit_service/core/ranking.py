"""
Similarity Ranking (v1.0.0)
Scores wardrobe items against a prompt embedding.
"""
import logging
from typing import List, Sequence

import numpy as np

from outfit_service.core.models import ClothingItem, ScoredItem

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity dot(a, b) / (||a|| * ||b||).

    Returns 0.0 when either vector has zero magnitude.

    Raises:
        ValueError: If the vectors differ in length
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    if va.shape != vb.shape:
        raise ValueError(f"Vector length mismatch: {va.shape[0]} != {vb.shape[0]}")

    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0:
        return 0.0

    # Clip float drift so identical vectors never exceed 1.0
    return float(np.clip(np.dot(va, vb) / denom, -1.0, 1.0))


def rank_items(items: Sequence[ClothingItem], query_vector: Sequence[float]) -> List[ScoredItem]:
    """
    Score every item against the query vector and sort descending.

    Items with exactly equal scores keep their inventory order. Items whose
    stored vector is empty or of a different dimensionality are skipped.
    """
    scored = []
    for item in items:
        if not item.tags_vector:
            logger.warning(f"Skipping item {item.item_id}: no tag vector")
            continue
        try:
            score = cosine_similarity(item.tags_vector, query_vector)
        except ValueError as e:
            logger.warning(f"Skipping item {item.item_id}: {e}")
            continue
        scored.append(ScoredItem(item=item, score=score))

    # Stable sort: equal scores keep insertion order
    return sorted(scored, key=lambda s: s.score, reverse=True)

"""
Category Selection (v1.0.0)
Picks the best-scoring piece per category from a ranked wardrobe.
"""
import logging
from typing import Dict, List, Optional, Sequence

from outfit_service.core.errors import IncompleteOutfitError
from outfit_service.core.models import (
    Classification,
    ClothingItem,
    OutfitSelection,
    ScoredItem,
    MAX_MISC_ITEMS,
    REQUIRED_CLASSIFICATIONS,
)

logger = logging.getLogger(__name__)


def select_outfit_items(ranked: Sequence[ScoredItem], max_misc: int = MAX_MISC_ITEMS) -> OutfitSelection:
    """
    Select one top, bottom and shoes plus up to `max_misc` misc items.

    Args:
        ranked: Items sorted by descending score
        max_misc: Cap on accessories (zero is a valid outcome)

    Returns:
        OutfitSelection

    Raises:
        IncompleteOutfitError: If a required category has no candidate
    """
    best: Dict[Classification, Optional[ClothingItem]] = {c: None for c in REQUIRED_CLASSIFICATIONS}
    misc: List[ClothingItem] = []

    for scored in ranked:
        classification = scored.item.classification
        if classification == Classification.MISC:
            if len(misc) < max_misc:
                misc.append(scored.item)
        elif best.get(classification) is None:
            best[classification] = scored.item

    missing = [c.value for c, item in best.items() if item is None]
    if missing:
        logger.info(f"Outfit incomplete, missing: {missing}")
        raise IncompleteOutfitError(missing)

    return OutfitSelection(
        top=best[Classification.TOP],
        bottom=best[Classification.BOTTOM],
        shoes=best[Classification.SHOES],
        misc=misc,
    )

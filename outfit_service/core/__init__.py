# Core module
from outfit_service.core.errors import (
    OutfitServiceError,
    AuthenticationError,
    ValidationError,
    NotFoundError,
    GenerationError,
    EmbeddingError,
    IncompleteOutfitError,
    StorageError,
)
from outfit_service.core.models import (
    Classification,
    ClothingItem,
    Outfit,
    OutfitFeedback,
    OutfitSelection,
    ScoredItem,
    TagResult,
    OutfitDescription,
    MAX_MISC_ITEMS,
)
from outfit_service.core.ranking import cosine_similarity, rank_items
from outfit_service.core.selection import select_outfit_items

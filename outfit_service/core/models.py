"""
Domain Models (v1.0.0)
Clothing items, outfits, feedback and the typed results of LLM calls.
"""
import secrets
from enum import Enum
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


class Classification(Enum):
    """Fixed category label on a clothing item."""
    TOP = "top"
    BOTTOM = "bottom"
    SHOES = "shoes"
    MISC = "misc"


REQUIRED_CLASSIFICATIONS = (Classification.TOP, Classification.BOTTOM, Classification.SHOES)
MAX_MISC_ITEMS = 3


def new_id() -> str:
    """Generate a record identifier."""
    return secrets.token_hex(8)


def utc_now() -> str:
    """ISO-8601 UTC timestamp used for created_at fields."""
    return datetime.now(timezone.utc).isoformat()


# ==================== WARDROBE ====================

@dataclass
class ClothingItem:
    """A cataloged clothing item with its stored tag vector."""
    item_id: str
    owner_user_id: str
    name: str
    classification: Classification
    image_url: str = ""
    description: Optional[str] = None
    tags_vector: List[float] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "ClothingItem":
        return cls(
            item_id=doc["item_id"],
            owner_user_id=doc["owner_user_id"],
            name=doc.get("name", ""),
            classification=Classification(doc["classification"]),
            image_url=doc.get("image_url", ""),
            description=doc.get("description"),
            tags_vector=[float(v) for v in doc.get("tags_vector") or []],
        )

    def to_dict(self) -> dict:
        """Public representation (tag vectors are internal)."""
        return {
            "item_id": self.item_id,
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url,
            "classification": self.classification.value,
        }


# ==================== OUTFITS ====================

@dataclass
class Outfit:
    """A generated outfit. Immutable once persisted."""
    outfit_id: str
    owner_user_id: str
    name: str
    description: str
    top_id: str
    bottom_id: str
    shoes_id: str
    prompt: str
    misc_ids: List[str] = field(default_factory=list)
    # User prompt before any feedback was appended
    base_prompt: Optional[str] = None
    created_at: str = field(default_factory=utc_now)

    # Resolved items, populated when the outfit is built by the pipeline
    top: Optional[ClothingItem] = None
    bottom: Optional[ClothingItem] = None
    shoes: Optional[ClothingItem] = None
    misc: List[ClothingItem] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Outfit":
        return cls(
            outfit_id=doc["outfit_id"],
            owner_user_id=doc["owner_user_id"],
            name=doc["name"],
            description=doc["description"],
            top_id=doc["top_id"],
            bottom_id=doc["bottom_id"],
            shoes_id=doc["shoes_id"],
            prompt=doc["prompt"],
            misc_ids=list(doc.get("misc_ids") or []),
            base_prompt=doc.get("base_prompt") or doc["prompt"],
            created_at=doc["created_at"],
        )

    def to_document(self) -> dict:
        return {
            "outfit_id": self.outfit_id,
            "owner_user_id": self.owner_user_id,
            "name": self.name,
            "description": self.description,
            "top_id": self.top_id,
            "bottom_id": self.bottom_id,
            "shoes_id": self.shoes_id,
            "misc_ids": list(self.misc_ids),
            "prompt": self.prompt,
            "base_prompt": self.base_prompt or self.prompt,
            "created_at": self.created_at,
        }

    def to_dict(self) -> dict:
        data = self.to_document()
        data.pop("owner_user_id")
        for slot in ("top", "bottom", "shoes"):
            item = getattr(self, slot)
            data[slot] = item.to_dict() if item else None
        data["misc"] = [item.to_dict() for item in self.misc]
        return data


@dataclass
class OutfitFeedback:
    """A rating left on an outfit. Append-only."""
    feedback_id: str
    outfit_id: str
    user_id: str
    rating: int
    comment: Optional[str] = None
    created_at: str = field(default_factory=utc_now)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "OutfitFeedback":
        return cls(
            feedback_id=doc["feedback_id"],
            outfit_id=doc["outfit_id"],
            user_id=doc["user_id"],
            rating=int(doc["rating"]),
            comment=doc.get("comment"),
            created_at=doc["created_at"],
        )

    def to_document(self) -> dict:
        return {
            "feedback_id": self.feedback_id,
            "outfit_id": self.outfit_id,
            "user_id": self.user_id,
            "rating": self.rating,
            "comment": self.comment,
            "created_at": self.created_at,
        }

    def to_dict(self) -> dict:
        return self.to_document()


# ==================== PIPELINE RESULTS ====================

@dataclass
class TagResult:
    """Stylistic tags parsed from the tagger response."""
    tags: List[str]

    def joined(self) -> str:
        return ", ".join(self.tags)


@dataclass
class OutfitDescription:
    """Name and description parsed from the describer response."""
    name: str
    description: str


@dataclass
class ScoredItem:
    """A clothing item with its similarity to the prompt vector."""
    item: ClothingItem
    score: float


@dataclass
class OutfitSelection:
    """One item per required category plus up to MAX_MISC_ITEMS accessories."""
    top: ClothingItem
    bottom: ClothingItem
    shoes: ClothingItem
    misc: List[ClothingItem] = field(default_factory=list)

    def items(self) -> List[ClothingItem]:
        return [self.top, self.bottom, self.shoes] + list(self.misc)

    def piece_descriptions(self) -> List[str]:
        """Descriptions of every selected piece, skipping missing ones."""
        return [
            item.description.strip()
            for item in self.items()
            if item.description and item.description.strip()
        ]

"""
Error Kinds (v1.0.0)
Terminal failures surfaced by the outfit pipeline and its handlers.
"""
from typing import Iterable


class OutfitServiceError(Exception):
    """Base error carrying a user-visible message and an HTTP status."""

    kind = "internal_error"
    default_status = 500
    # Shown to callers instead of the detailed message when set
    public_message = None

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code or self.default_status
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.public_message or self.message, "error": self.kind}


class AuthenticationError(OutfitServiceError):
    """No authenticated user on the request."""
    kind = "authentication_error"
    default_status = 401


class ValidationError(OutfitServiceError):
    """Malformed input (blank prompt, rating out of range, ...)."""
    kind = "validation_error"
    default_status = 400


class NotFoundError(OutfitServiceError):
    """Requested record does not exist or belongs to another user."""
    kind = "not_found"
    default_status = 404


class GenerationError(OutfitServiceError):
    """Text-generation call failed or returned unusable JSON."""
    kind = "generation_error"
    default_status = 502
    public_message = "Failed to generate outfit. Please try again."


class EmbeddingError(OutfitServiceError):
    """Embedding call failed or returned an empty vector."""
    kind = "embedding_error"
    default_status = 502
    public_message = "Failed to generate outfit. Please try again."


class IncompleteOutfitError(OutfitServiceError):
    """Inventory lacks a required category."""
    kind = "incomplete_outfit"
    default_status = 422

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            f"Your wardrobe has no items for: {', '.join(self.missing)}"
        )


class StorageError(OutfitServiceError):
    """Persistent store unavailable or a write failed."""
    kind = "storage_error"
    default_status = 503
    public_message = "Service temporarily unavailable. Please try again."

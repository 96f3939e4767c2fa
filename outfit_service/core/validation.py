"""
Input Validation Module (v1.0.0)
Validates prompts and feedback before any external call is made.
"""
import logging
from typing import Any, Optional

from outfit_service.core.errors import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)

# Configuration
MAX_PROMPT_LENGTH = 1000
MAX_COMMENT_LENGTH = 1000
MIN_RATING = 1
MAX_RATING = 5


def validate_prompt(prompt: Optional[str]) -> str:
    """
    Check an outfit prompt.

    Returns:
        The stripped prompt

    Raises:
        ValidationError: If blank or too long
    """
    if prompt is None or not str(prompt).strip():
        raise ValidationError("prompt is required")

    prompt = str(prompt).strip()
    if len(prompt) > MAX_PROMPT_LENGTH:
        raise ValidationError(f"prompt too long: {len(prompt)} characters (max {MAX_PROMPT_LENGTH})")

    return prompt


def validate_feedback_text(feedback: Optional[str]) -> str:
    """Check free-text feedback used to modify an outfit."""
    if feedback is None or not str(feedback).strip():
        raise ValidationError("feedback is required")

    feedback = str(feedback).strip()
    if len(feedback) > MAX_COMMENT_LENGTH:
        raise ValidationError(f"feedback too long: {len(feedback)} characters (max {MAX_COMMENT_LENGTH})")

    return feedback


def validate_rating(rating: Any) -> int:
    """
    Check a feedback rating.

    Raises:
        ValidationError: If not an integer in MIN_RATING..MAX_RATING (status 422)
    """
    # bool is an int subclass; True must not pass as a rating of 1
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("rating must be an integer", status_code=422)

    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationError(
            f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}",
            status_code=422
        )

    return rating


def validate_comment(comment: Optional[str]) -> Optional[str]:
    """Normalize an optional comment; blank comments become None."""
    if comment is None:
        return None

    comment = str(comment).strip()
    if not comment:
        return None

    if len(comment) > MAX_COMMENT_LENGTH:
        raise ValidationError(f"comment too long: {len(comment)} characters (max {MAX_COMMENT_LENGTH})")

    return comment


def validate_feedback_input(rating: Any, comment: Optional[str]) -> dict:
    """
    Validate input for an outfit rating.

    Returns:
        Dict with validated/normalized values
    """
    return {
        "rating": validate_rating(rating),
        "comment": validate_comment(comment),
    }


def require_user_id(user_id: Optional[str]) -> str:
    """
    Ensure a caller identity is present.

    Raises:
        AuthenticationError: If user_id is missing
    """
    if not user_id:
        raise AuthenticationError("Not authenticated")
    return user_id

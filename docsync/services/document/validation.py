"""Document argument validation."""

from typing import Any

from docsync.exceptions import ValidationError
from docsync.models.document import DocCategory


class DocumentValidator:
    """Validates document fields according to business rules."""

    # Validation constants
    TITLE_MIN_LENGTH = 1
    TITLE_MAX_LENGTH = 500
    EMOJI_MAX_LENGTH = 16
    EDITOR_MAX_LENGTH = 100

    @staticmethod
    def validate_title(title: Any) -> None:
        """
        Validate document title.

        Raises:
            ValidationError: If title is missing, blank or too long
        """
        if not isinstance(title, str):
            raise ValidationError("Title must be a string", "title")
        if not title or not title.strip():
            raise ValidationError("Title is required and cannot be empty", "title")
        if len(title) > DocumentValidator.TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Title must be at most {DocumentValidator.TITLE_MAX_LENGTH} characters", "title"
            )

    @staticmethod
    def validate_category(category: Any) -> None:
        if not DocCategory.is_valid(category):
            raise ValidationError(
                f"Category must be one of: {', '.join(DocCategory.values())}", "category"
            )

    @staticmethod
    def validate_emoji(emoji: Any) -> None:
        if not isinstance(emoji, str) or not emoji.strip():
            raise ValidationError("Emoji must be a non-empty string", "emoji")
        if len(emoji) > DocumentValidator.EMOJI_MAX_LENGTH:
            raise ValidationError(
                f"Emoji must be at most {DocumentValidator.EMOJI_MAX_LENGTH} characters", "emoji"
            )

    @staticmethod
    def validate_body(body: Any) -> None:
        if not isinstance(body, str):
            raise ValidationError("Content must be a string", "content")

    @staticmethod
    def validate_editor(edited_by: Any) -> None:
        if not isinstance(edited_by, str) or not edited_by.strip():
            raise ValidationError("Editor name must be a non-empty string", "edited_by")
        if len(edited_by) > DocumentValidator.EDITOR_MAX_LENGTH:
            raise ValidationError(
                f"Editor name must be at most {DocumentValidator.EDITOR_MAX_LENGTH} characters",
                "edited_by",
            )

"""Input validation utilities for administrative requests."""

import re


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error message.
            field: Optional field name that failed validation.
        """
        self.message = message
        self.field = field
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return error message with field name if available."""
        if self.field:
            return f"Validation error in field '{self.field}': {self.message}"
        return self.message


MAX_ID_LENGTH = 255
MAX_REASON_LENGTH = 1000

# Patterns that never appear in a legitimate identifier
ID_INJECTION_PATTERNS = [
    # NoSQL operator injection
    re.compile(r"\$(where|ne|gt|lt|regex|exists)", re.IGNORECASE),
    # Shell / markup metacharacters
    re.compile(r"[;&|`$(){}[\]<>]"),
    # Path traversal
    re.compile(r"(\.\./|\.\.\\|%2e%2e%2f)", re.IGNORECASE),
]


def detect_injection_attempt(value: str) -> bool:
    """Detect potential injection patterns in an identifier.

    Args:
        value: String value to check.

    Returns:
        True if an injection pattern is detected, False otherwise.
    """
    if not isinstance(value, str):
        return False

    return any(pattern.search(value) for pattern in ID_INJECTION_PATTERNS)


def _has_control_characters(value: str, allow_whitespace: bool = False) -> bool:
    allowed = "\t\n\r" if allow_whitespace else ""
    return any(ord(c) < 32 and c not in allowed for c in value)


def validate_entity_id(entity_id: str, field: str = "entity_id") -> str:
    """Validate an entity identifier and return it stripped.

    Args:
        entity_id: Identifier to validate.
        field: Field name reported in the error.

    Raises:
        ValidationError: If validation fails.
    """
    if not isinstance(entity_id, str) or not entity_id.strip():
        raise ValidationError("ID cannot be empty", field=field)

    entity_id = entity_id.strip()

    if len(entity_id) > MAX_ID_LENGTH:
        raise ValidationError(
            f"ID must be {MAX_ID_LENGTH} characters or less",
            field=field,
        )

    if _has_control_characters(entity_id):
        raise ValidationError("ID contains invalid control characters", field=field)

    if detect_injection_attempt(entity_id):
        raise ValidationError(
            "ID contains potentially malicious content",
            field=field,
        )

    return entity_id


def validate_admin_id(admin_id: str) -> str:
    """Validate the acting administrator id."""
    return validate_entity_id(admin_id, field="admin_id")


def validate_reason(reason: str | None) -> str | None:
    """Validate a free-text reason.

    Line breaks and tabs are allowed; other control characters are not.
    Blank reasons are normalized to None.

    Raises:
        ValidationError: If validation fails.
    """
    if reason is None:
        return None

    if not isinstance(reason, str):
        raise ValidationError("Reason must be a string", field="reason")

    reason = reason.strip()
    if not reason:
        return None

    if len(reason) > MAX_REASON_LENGTH:
        raise ValidationError(
            f"Reason must be {MAX_REASON_LENGTH} characters or less",
            field="reason",
        )

    if _has_control_characters(reason, allow_whitespace=True):
        raise ValidationError(
            "Reason contains invalid control characters",
            field="reason",
        )

    return reason

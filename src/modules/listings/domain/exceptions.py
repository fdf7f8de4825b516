"""Listing domain exceptions."""

from src.core.domain.exceptions import ValidationError


class MalformedDateError(ValidationError):
    """Raised when a raw date value cannot be parsed."""

    error_code = "MALFORMED_DATE"

    def __init__(self, value: str):
        super().__init__(f"Cannot parse date value '{value}'", value=value)


class InvalidLinkTargetError(ValidationError):
    """Raised when a link target is neither an internal path nor an absolute URL."""

    error_code = "INVALID_LINK_TARGET"

    def __init__(self, value: str):
        super().__init__(
            f"The path '{value}' is invalid; internal paths must start with /, ? or #",
            value=value,
        )

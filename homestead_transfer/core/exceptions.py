"""Custom exceptions for Homestead Transfer with actionable solutions."""


class HomesteadError(Exception):
    """Base exception for all Homestead Transfer errors with actionable solutions."""

    error_code = "E000"  # Default error code, overridden by subclasses

    def __init__(self, message: str, solution: str = None):
        """
        Initialize error with actionable guidance.

        Args:
            message: Error description
            solution: Suggested solution or next steps
        """
        self.message = message
        self.solution = solution

        full_message = f"[{self.error_code}] {message}"
        if solution:
            full_message += f"\n\nSolution: {solution}"

        super().__init__(full_message)


class StorageError(HomesteadError):
    """Raised when storage backend operations fail."""

    error_code = "E001"


class ValidationError(HomesteadError):
    """Raised when input validation fails."""

    error_code = "E002"


class ParseError(ValidationError):
    """Raised when a transfer artifact cannot be decoded or is not a valid bundle."""

    error_code = "E003"


class UnsupportedFormatError(ValidationError):
    """Raised when an artifact format cannot be restored (CSV is export-only)."""

    error_code = "E004"

    def __init__(self, format_label: str):
        self.format_label = format_label
        super().__init__(
            f"{format_label} import not supported for full restore yet.",
            solution="Restore from a JSON export instead.",
        )


class ConfigurationError(HomesteadError):
    """Raised when configuration is invalid."""

    error_code = "E005"

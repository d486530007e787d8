"""Exceptions raised at the prompt quality boundary."""


class PromptQualityError(Exception):
    """Base class for prompt quality errors."""


class InvalidArgumentError(PromptQualityError, ValueError):
    """A prompt text or media type was missing or not recognized."""

    def __init__(self, argument: str, message: str):
        self.argument = argument
        super().__init__(f"{argument}: {message}")


def require_text(value, argument: str) -> str:
    """Return value if it is a string, else raise InvalidArgumentError."""
    if value is None:
        raise InvalidArgumentError(argument, "text is required")
    if not isinstance(value, str):
        raise InvalidArgumentError(argument, f"expected a string, got {type(value).__name__}")
    return value

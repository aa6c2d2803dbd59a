"""Custom exception hierarchy for markovtalk errors."""

from .types import State, Token


class MarkovTalkError(Exception):
    """Base exception for all markovtalk errors."""


class ModelNotReadyError(MarkovTalkError):
    """Raised when generating from a model that was never built or loaded."""


class StateNotFoundError(MarkovTalkError):
    """Raised when a walk reaches a state without any transitions."""

    def __init__(self, message: str, *, state: State | None = None) -> None:
        """Initialize with the offending state appended to the message."""
        if state is not None:
            message = f"{message} (state: {' '.join(state)!r})"
        super().__init__(message)
        self.state = state


class WalkLimitError(MarkovTalkError):
    """Raised when a walk grows past the caller-imposed word cap."""

    def __init__(self, message: str, *, max_words: int) -> None:
        super().__init__(f"{message} (max words: {max_words})")
        self.max_words = max_words


class ModelLoadError(MarkovTalkError):
    """Raised when loading a model file fails."""

    def __init__(
        self,
        message: str,
        *,
        model_path: str | None = None,
        reason: str | None = None,
    ) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        if reason:
            extra += f"(reason: {reason}) "
        super().__init__(message + extra)
        self.model_path = model_path
        self.reason = reason


class ModelSaveError(MarkovTalkError):
    """Raised when writing a model file fails."""

    def __init__(self, message: str, *, model_path: str | None = None) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        super().__init__(message + extra)
        self.model_path = model_path


class InvalidTokenError(MarkovTalkError, ValueError):
    """Raised when a token argument is empty, contains whitespace or is a sentinel."""

    def __init__(self, message: str, *, token: Token | None = None) -> None:
        if token is not None:
            message = f"{message} (token: {token!r})"
        super().__init__(message)
        self.token = token


class ConfigError(MarkovTalkError):
    """Raised when configuration values are invalid."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available}) (got {invalid_name}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available = available

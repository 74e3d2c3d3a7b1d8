"""
MockView - Custom Exceptions.

Defines a hierarchy of domain-specific exceptions for clean error handling.
"""


class InterviewAIError(Exception):
    """Base exception for all MockView errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


# -----------------------------------------------------------------------------
# Configuration Errors
# -----------------------------------------------------------------------------

class ConfigurationError(InterviewAIError):
    """Raised when configuration is invalid or missing."""
    pass


class MissingAPIKeyError(ConfigurationError):
    """Raised when a required API key is missing."""

    def __init__(self, key_name: str):
        super().__init__(
            message=f"Missing required API key: {key_name}",
            details="Please set this in your .env file or environment variables",
        )


# -----------------------------------------------------------------------------
# Question Bank Errors
# -----------------------------------------------------------------------------

class QuestionBankError(InterviewAIError):
    """Base exception for question catalog errors."""
    pass


class UnknownRoleError(QuestionBankError):
    """Raised when a role has no question templates."""

    def __init__(self, role: str):
        self.role = role
        super().__init__(
            message=f"No questions available for role: {role}",
        )


# -----------------------------------------------------------------------------
# LLM Errors
# -----------------------------------------------------------------------------

class LLMError(InterviewAIError):
    """Base exception for LLM-related errors."""
    pass


class LLMConnectionError(LLMError):
    """Raised when unable to connect to the LLM service."""

    def __init__(self, service: str, reason: str):
        super().__init__(
            message=f"Failed to connect to {service}",
            details=reason,
        )


class LLMRateLimitError(LLMError):
    """Raised when rate limited by the LLM service."""

    def __init__(self, service: str, retry_after: int | None = None):
        self.retry_after = retry_after
        super().__init__(
            message=f"Rate limited by {service}",
            details=f"Retry after {retry_after}s" if retry_after else None,
        )


class LLMResponseError(LLMError):
    """Raised when the LLM returns an invalid or blocked response."""
    pass


# -----------------------------------------------------------------------------
# Storage Errors
# -----------------------------------------------------------------------------

class StorageError(InterviewAIError):
    """Raised when answer records cannot be read back for an append, or written."""

    def __init__(self, session_id: str, reason: str):
        super().__init__(
            message=f"Failed to store answers for session {session_id}",
            details=reason,
        )


# -----------------------------------------------------------------------------
# Interview Session Errors
# -----------------------------------------------------------------------------

class SessionError(InterviewAIError):
    """Base exception for interview session errors."""
    pass


class SessionNotFoundError(SessionError):
    """Raised when a session ID is not found."""

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Session not found: {session_id}",
        )


class InvalidSessionStateError(SessionError):
    """Raised when an operation is invalid for the current session state."""

    def __init__(self, current_state: str, required_state: str):
        super().__init__(
            message="Invalid session state",
            details=f"Current: {current_state}, Required: {required_state}",
        )


class EmptyAnswerError(SessionError):
    """Raised when an answer with no content is submitted."""

    def __init__(self):
        super().__init__(message="Answer must not be empty")

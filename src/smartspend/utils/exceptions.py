"""Custom exception classes for SmartSpend."""


DEFAULT_FAILURE_MESSAGE = "Failed to analyze statement. Please ensure the input is clear."


class SmartSpendError(Exception):
    """Base exception for SmartSpend."""
    pass


class ConfigError(SmartSpendError):
    """Configuration-related errors."""
    pass


class NetworkError(SmartSpendError):
    """Network and API-related errors."""
    pass


class LLMError(SmartSpendError):
    """LLM processing errors."""
    pass


class ValidationError(SmartSpendError):
    """Data validation errors."""
    pass


class InputError(ValidationError):
    """Statement input that cannot be sent for analysis."""
    pass


class AnalysisFailure(SmartSpendError):
    """Analysis of a statement failed; carries a message fit for the user."""

    def __init__(self, user_message: str = DEFAULT_FAILURE_MESSAGE):
        super().__init__(user_message)
        self.user_message = user_message


class InvalidTransitionError(SmartSpendError):
    """Session state transition not allowed from the current status."""
    pass


class RequestInFlightError(InvalidTransitionError):
    """An analysis request is already running for this session."""
    pass


# Retryable errors
class RetryableError(SmartSpendError):
    """Base class for errors that should trigger retry."""
    pass


class RetryableNetworkError(RetryableError, NetworkError):
    """Network errors that can be retried."""
    pass


class RetryableLLMError(RetryableError, LLMError):
    """LLM errors that can be retried."""
    pass

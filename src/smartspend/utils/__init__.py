"""Utility modules."""
from .logger import get_logger, set_session_context, configure_logging
from .exceptions import (
    SmartSpendError,
    ConfigError,
    NetworkError,
    LLMError,
    ValidationError,
    InputError,
    AnalysisFailure,
    InvalidTransitionError,
    RequestInFlightError,
    RetryableError,
    RetryableNetworkError,
    RetryableLLMError
)
from .retry import retry_with_backoff
from .currency import format_currency

__all__ = [
    "get_logger",
    "set_session_context",
    "configure_logging",
    "SmartSpendError",
    "ConfigError",
    "NetworkError",
    "LLMError",
    "ValidationError",
    "InputError",
    "AnalysisFailure",
    "InvalidTransitionError",
    "RequestInFlightError",
    "RetryableError",
    "RetryableNetworkError",
    "RetryableLLMError",
    "retry_with_backoff",
    "format_currency"
]

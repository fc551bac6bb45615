"""
Error types for the conversion pipeline.

Provider errors are soft: the orchestrator absorbs them and returns the
deterministic result. Everything else is hard and reaches the caller.
"""

from typing import Any, Optional


class RosettaError(Exception):
    """Base error carrying structured context for logging."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class PrimaryConverterError(RosettaError):
    """The deterministic converter failed. Always propagated."""


class ProviderError(RosettaError):
    """
    Base error for fallback provider failures.

    Absorbed at the orchestrator boundary.
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.provider = provider
        self.model = model

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["provider"] = self.provider
        d["model"] = self.model
        return d


class ProviderUnavailableError(ProviderError):
    """The backend could not be reached."""


class ProviderInvalidResponseError(ProviderError):
    """
    The backend answered but the response has the wrong shape.

    Keeps a truncated copy of the raw response for diagnostics.
    """

    def __init__(
        self,
        message: str,
        raw_response: Optional[str] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ):
        super().__init__(message, provider, model)
        self.raw_response = raw_response

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["raw_response"] = self.raw_response[:200] if self.raw_response else None
        return d


class ProviderTimeoutError(ProviderError):
    """The provider call exceeded its bounded wait."""

    def __init__(
        self,
        message: str,
        timeout: Optional[float] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ):
        super().__init__(message, provider, model)
        self.timeout = timeout

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["timeout"] = self.timeout
        return d


class MergeInvariantViolation(RosettaError):
    """
    Merged result broke its invariants (confidence outside [0, 1] or empty output).

    Indicates a logic error; never returned silently.
    """


class ReverseConverterError(RosettaError):
    """The reverse converter failed during round-trip verification."""

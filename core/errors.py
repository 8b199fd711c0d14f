from typing import Optional


class ProviderError(Exception):
    """Raised by a news provider when it cannot produce usable items."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(ProviderError):
    """Provider credential is missing. Participates in the fallback chain like any failure."""


class EmptyResultError(ProviderError):
    """Provider answered successfully but with zero items."""

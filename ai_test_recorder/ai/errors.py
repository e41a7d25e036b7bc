"""Errors raised inside the AI client.

They never escape the public client methods; each one is converted into a
result object carrying ``reason``.
"""

from typing import Optional


class AiClientError(Exception):
    """Base exception for AI endpoint errors."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AiConfigurationError(AiClientError):
    """The client is missing required settings (e.g. the endpoint)."""
    pass


class AiTransportError(AiClientError):
    """Network failure or non-2xx response."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(reason)
        self.status_code = status_code


class AiTimeoutError(AiTransportError):
    """The request did not finish within the configured timeout."""
    pass

"""AI endpoint access: request building and the async HTTP client."""

from .client import (
    AiClient,
    PageEvaluator,
    SelectorSuggestionResult,
    extract_error_message,
    review_code,
    suggest_selectors,
)
from .errors import AiClientError, AiConfigurationError, AiTimeoutError, AiTransportError
from .requests import (
    CODE_REVIEW_GUIDANCE,
    CODE_REVIEW_INSTRUCTIONS,
    SELECTOR_GUIDANCE,
    AiRequest,
    SelectorContext,
    build_code_review_request,
    build_selector_request,
    generate_request_id,
    resolve_model,
    sanitize_for_transport,
)

__all__ = [
    # Client
    "AiClient",
    "PageEvaluator",
    "SelectorSuggestionResult",
    "extract_error_message",
    "suggest_selectors",
    "review_code",
    # Errors
    "AiClientError",
    "AiConfigurationError",
    "AiTimeoutError",
    "AiTransportError",
    # Requests
    "AiRequest",
    "SelectorContext",
    "SELECTOR_GUIDANCE",
    "CODE_REVIEW_GUIDANCE",
    "CODE_REVIEW_INSTRUCTIONS",
    "build_selector_request",
    "build_code_review_request",
    "generate_request_id",
    "resolve_model",
    "sanitize_for_transport",
]

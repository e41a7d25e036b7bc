"""AI-assisted selector resolution and test script export for recorded browser events."""

from ._version import __version__
from .ai import AiClient, SelectorContext, SelectorSuggestionResult, review_code, suggest_selectors
from .candidates import (
    dedupe_candidates,
    extract_candidates,
    merge_evaluations,
    normalize_code_review_response,
    normalize_selector_response,
    parse_json_from_text,
)
from .config import AiSettings, Settings, get_settings
from .export import ExportEngine, generate_code
from .recording import EvaluationResult, RecordedEvent, SelectorCandidate

__all__ = [
    "__version__",
    "AiClient",
    "AiSettings",
    "EvaluationResult",
    "ExportEngine",
    "RecordedEvent",
    "SelectorCandidate",
    "SelectorContext",
    "SelectorSuggestionResult",
    "Settings",
    "dedupe_candidates",
    "extract_candidates",
    "generate_code",
    "get_settings",
    "merge_evaluations",
    "normalize_code_review_response",
    "normalize_selector_response",
    "parse_json_from_text",
    "review_code",
    "suggest_selectors",
]

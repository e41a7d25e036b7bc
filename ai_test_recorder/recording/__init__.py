"""Recorded event model.

Events are produced by the browser-side recorder; this package only holds
their Python representation and the selector metadata attached to them.
"""

from .models import (
    SOURCE_AI,
    SOURCE_DOM,
    ActionType,
    EvaluationResult,
    RecordedEvent,
    SelectorCandidate,
    SelectorType,
    identity_key,
    infer_selector_type,
)

__all__ = [
    "SOURCE_AI",
    "SOURCE_DOM",
    "ActionType",
    "SelectorType",
    "SelectorCandidate",
    "EvaluationResult",
    "RecordedEvent",
    "identity_key",
    "infer_selector_type",
]

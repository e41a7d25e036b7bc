"""Selector candidate resolution pipeline.

Raw AI output goes through:
1. extract_candidates - walk the payload, coercing fragments on the way
2. dedupe_candidates - one entry per selector::type key
3. merge_evaluations - fold live page match counts into score and reason

normalize_selector_response runs steps 1-2 and bounds the result.
"""

from .coercer import coerce_candidate
from .dedupe import candidate_key, dedupe_candidates
from .evaluation import (
    apply_evaluation,
    build_evaluation_payload,
    derive_score,
    merge_evaluations,
    parse_evaluation_response,
)
from .extractor import CONTAINER_KEYS, extract_candidates
from .normalizer import (
    DEFAULT_REASON,
    MAX_CANDIDATES,
    CodeReviewResult,
    NormalizedSelectorResponse,
    normalize_code_review_response,
    normalize_selector_response,
    parse_json_from_text,
)

__all__ = [
    # Extraction
    "coerce_candidate",
    "extract_candidates",
    "CONTAINER_KEYS",
    # De-duplication
    "candidate_key",
    "dedupe_candidates",
    # Evaluation
    "apply_evaluation",
    "build_evaluation_payload",
    "derive_score",
    "merge_evaluations",
    "parse_evaluation_response",
    # Normalization
    "DEFAULT_REASON",
    "MAX_CANDIDATES",
    "CodeReviewResult",
    "NormalizedSelectorResponse",
    "normalize_code_review_response",
    "normalize_selector_response",
    "parse_json_from_text",
]

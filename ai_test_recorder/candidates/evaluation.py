"""Merge live page-evaluation results into selector candidates.

The page evaluator is an external collaborator (a content script, a
Playwright page, ...). It receives ``{selector, type, matchMode}`` triples and
answers ``{"ok": bool, "results": [...]}``. This module builds that payload,
validates the answer and folds the match counts back into the candidates.
"""

from typing import Any, Iterable, Optional

import structlog

from ..recording.models import EvaluationResult, SelectorCandidate, is_number

logger = structlog.get_logger()

RATIONALE_SEPARATOR = " • "
DEFAULT_EVALUATION_ERROR = "validation failed"
UNIQUE_MATCH_LABEL = "unique match on page"
MULTI_MATCH_LABEL = "{count} matches on page"

UNIQUE_MATCH_SCORE = 92
BASE_AMBIGUOUS_SCORE = 75
AMBIGUITY_PENALTY = 8
MIN_AMBIGUOUS_SCORE = 35


def build_evaluation_payload(candidates: Iterable[SelectorCandidate]) -> list[dict]:
    """Selector triples sent to the page evaluator."""
    return [
        {
            "selector": candidate.selector,
            "type": candidate.type,
            "matchMode": candidate.match_mode,
        }
        for candidate in candidates
    ]


def parse_evaluation_response(response: Any) -> Optional[list[EvaluationResult]]:
    """Validate the evaluator's answer.

    Returns:
        Parsed results, or None when the evaluator failed or answered
        with something that is not ``{"ok": true, "results": [...]}``
    """
    if not isinstance(response, dict) or not response.get("ok"):
        return None
    results = response.get("results")
    if not isinstance(results, list):
        return None
    return [r for r in (EvaluationResult.from_dict(item) for item in results) if r is not None]


def derive_score(match_count: float) -> int:
    """Confidence for a candidate that has no score of its own."""
    if match_count == 1:
        return UNIQUE_MATCH_SCORE
    return int(max(MIN_AMBIGUOUS_SCORE, BASE_AMBIGUOUS_SCORE - match_count * AMBIGUITY_PENALTY))


def _append_reason(reason: Optional[str], note: str) -> str:
    return f"{reason}{RATIONALE_SEPARATOR}{note}" if reason else note


def _format_count(match_count: float) -> str:
    if isinstance(match_count, float) and match_count.is_integer():
        match_count = int(match_count)
    return MULTI_MATCH_LABEL.format(count=match_count)


def _build_lookup(evaluations: Iterable[EvaluationResult]) -> dict[str, EvaluationResult]:
    lookup: dict[str, EvaluationResult] = {}
    for evaluation in evaluations:
        if evaluation is None or not isinstance(evaluation.selector, str):
            continue
        lookup[evaluation.key] = evaluation
        lookup.setdefault(evaluation.fallback_key, evaluation)
    return lookup


def apply_evaluation(candidate: SelectorCandidate, evaluation: EvaluationResult) -> SelectorCandidate:
    """Return a copy of the candidate updated with one evaluation."""
    updated = candidate.copy()
    has_count = is_number(evaluation.match_count)

    if has_count:
        updated.match_count = evaluation.match_count
        updated.unique = evaluation.match_count == 1
    elif evaluation.unique is True:
        updated.unique = True

    if evaluation.error:
        message = evaluation.error if isinstance(evaluation.error, str) else DEFAULT_EVALUATION_ERROR
        updated.reason = _append_reason(updated.reason, message)
    elif has_count:
        label = UNIQUE_MATCH_LABEL if evaluation.match_count == 1 else _format_count(evaluation.match_count)
        updated.reason = _append_reason(updated.reason, label)

    if updated.score is None and has_count:
        updated.score = derive_score(evaluation.match_count)

    return updated


def merge_evaluations(
    candidates: Iterable[SelectorCandidate],
    evaluations: Optional[Iterable[EvaluationResult]],
) -> list[SelectorCandidate]:
    """Fold evaluation results into candidates.

    Evaluations are matched by ``selector::type``, falling back to the first
    evaluation reported for the same selector. Candidates without a match
    are returned unchanged. Inputs are never modified.

    Args:
        candidates: Normalised candidates
        evaluations: Results from the page evaluator (None when unavailable)

    Returns:
        New list of candidates in the original order
    """
    candidates = list(candidates)
    if not evaluations:
        return [c.copy() for c in candidates]

    lookup = _build_lookup(evaluations)
    merged = []
    matched = 0
    for candidate in candidates:
        evaluation = lookup.get(candidate.key) or lookup.get(f"{candidate.selector}::")
        if evaluation is None:
            merged.append(candidate.copy())
            continue
        matched += 1
        merged.append(apply_evaluation(candidate, evaluation))

    logger.debug("Merged page evaluations", candidates=len(candidates), matched=matched)
    return merged

"""Normalize raw AI responses for the selector and code review flows."""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog

from ..recording.models import SelectorCandidate
from .dedupe import dedupe_candidates
from .extractor import extract_candidates

logger = structlog.get_logger()

MAX_CANDIDATES = 12
DEFAULT_REASON = "AI suggestion"

_FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


@dataclass
class NormalizedSelectorResponse:
    """Candidates extracted from one selector response."""

    candidates: list[SelectorCandidate] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"candidates": [c.to_dict() for c in self.candidates]}


@dataclass
class CodeReviewResult:
    """Outcome of a code review request."""

    ok: bool
    updated_code: str = ""
    summary: str = ""
    suggestions: list = field(default_factory=list)
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        if not self.ok:
            return {"ok": False, "reason": self.reason}
        return {
            "ok": True,
            "updatedCode": self.updated_code,
            "summary": self.summary,
            "suggestions": self.suggestions,
        }


def _reject_constant(name: str) -> None:
    raise ValueError(f"Invalid JSON constant: {name}")


def _is_truthy(value: Any) -> bool:
    # Empty containers count as a successful parse; falsy scalars do not
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return False
    return True


def _try_parse(candidate: str) -> Any:
    if not candidate:
        return None
    try:
        parsed = json.loads(candidate, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None
    return parsed if _is_truthy(parsed) else None


def parse_json_from_text(text: Any) -> Any:
    """Recover JSON from model output.

    Tries, in order: the whole text, the first fenced code block (with an
    optional ``json`` tag), and the span from the first ``{`` to the last ``}``.

    Returns:
        The first successful parse, or None
    """
    if not isinstance(text, str):
        return None
    trimmed = text.strip()
    if not trimmed:
        return None

    direct = _try_parse(trimmed)
    if direct is not None:
        return direct

    fenced = _FENCED_BLOCK_RE.search(trimmed)
    if fenced and fenced.group(1):
        parsed = _try_parse(fenced.group(1).strip())
        if parsed is not None:
            return parsed

    json_like = _JSON_OBJECT_RE.search(trimmed)
    if json_like:
        parsed = _try_parse(json_like.group(0))
        if parsed is not None:
            return parsed

    logger.debug("No JSON found in text", preview=trimmed[:80])
    return None


def normalize_selector_response(raw: Any, max_candidates: int = MAX_CANDIDATES) -> NormalizedSelectorResponse:
    """Turn a raw selector response into a bounded candidate list.

    Extracts every candidate, fills in a default reason, removes duplicates
    and keeps the first ``max_candidates`` in discovery order. Ranking by
    score is left to the caller.

    Args:
        raw: Parsed JSON value, or response text
        max_candidates: Upper bound on returned candidates

    Returns:
        NormalizedSelectorResponse (empty when nothing usable was found)
    """
    source = raw
    if isinstance(raw, str):
        parsed = parse_json_from_text(raw)
        if isinstance(parsed, (dict, list)):
            source = parsed

    collected = extract_candidates(source)
    for candidate in collected:
        if not candidate.reason:
            candidate.reason = DEFAULT_REASON

    candidates = dedupe_candidates(collected)[:max_candidates]
    logger.debug(
        "Normalized selector response",
        collected=len(collected),
        returned=len(candidates),
    )
    return NormalizedSelectorResponse(candidates=candidates)


def _first_str(container: dict, keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        if isinstance(container.get(key), str):
            return container[key]
    return None


def _first_list(container: dict, keys: tuple[str, ...]) -> list:
    for key in keys:
        if isinstance(container.get(key), list):
            return container[key]
    return []


def normalize_code_review_response(raw: Any, fallback_code: str) -> CodeReviewResult:
    """Map a code review response onto CodeReviewResult.

    The payload may come directly or wrapped under ``result``. Missing code
    falls back to ``fallback_code`` (normally the code that was sent).
    """
    base = raw if isinstance(raw, dict) else {}
    result = base.get("result")
    if isinstance(result, dict):
        container = result
    elif isinstance(result, list):
        container = {}
    else:
        container = base

    updated_code = _first_str(container, ("updatedCode", "code"))
    return CodeReviewResult(
        ok=True,
        updated_code=updated_code if updated_code is not None else fallback_code,
        summary=_first_str(container, ("summary", "overview")) or "",
        suggestions=_first_list(container, ("suggestions", "changes", "recommendations")),
    )

"""Coerce one raw AI fragment into a SelectorCandidate.

AI backends answer in many shapes. A fragment is either a selector literal
(string) or an object carrying one of the recognised selector fields:

    {"selector": ...}   generic selector, type taken from "type" if given
    {"css": ...}        CSS selector
    {"xpath": ...}      XPath, normalised to an "xpath=" expression
    {"value": ...}      generic selector under a different name
    {"text": ...}       visible text, normalised to a text="..." expression

The first field present (in that order) provides the selector. Everything
else is optional metadata and is dropped silently when malformed.
"""

import re
from typing import Any, Optional

from ..recording.models import SOURCE_AI, SelectorCandidate, SelectorType, clamp_score, is_number

_TEXT_PREFIX_RE = re.compile(r"^text=[\"']?")
_TRAILING_QUOTE_RE = re.compile(r"[\"']$")


def _clean_str(entry: dict, key: str) -> Optional[str]:
    value = entry.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _text_value(text: str) -> str:
    """Strip the text= prefix and surrounding quotes."""
    return _TRAILING_QUOTE_RE.sub("", _TEXT_PREFIX_RE.sub("", text))


def _match_mode(entry: dict) -> Optional[str]:
    for key in ("matchMode", "mode"):
        if isinstance(entry.get(key), str):
            return entry[key]
    return None


def _primary_selector(entry: dict) -> Optional[SelectorCandidate]:
    """Pick the selector field by precedence and build the bare candidate."""
    selector = _clean_str(entry, "selector")
    if selector:
        return SelectorCandidate(selector=selector, source=SOURCE_AI)

    css = _clean_str(entry, "css")
    if css:
        explicit_type = _clean_str(entry, "type")
        return SelectorCandidate(
            selector=css,
            type=explicit_type or SelectorType.CSS.value,
            source=SOURCE_AI,
        )

    xpath = _clean_str(entry, "xpath")
    if xpath:
        return SelectorCandidate(
            selector=xpath if xpath.startswith("xpath=") else f"xpath={xpath}",
            type=SelectorType.XPATH.value,
            source=SOURCE_AI,
        )

    value = _clean_str(entry, "value")
    if value:
        return SelectorCandidate(selector=value, source=SOURCE_AI)

    text = _clean_str(entry, "text")
    if text:
        return SelectorCandidate(
            selector=text if text.startswith("text=") else f'text="{text}"',
            type=SelectorType.TEXT.value,
            match_mode=_match_mode(entry),
            text_value=_text_value(text),
            source=SOURCE_AI,
        )

    return None


def coerce_candidate(fragment: Any) -> Optional[SelectorCandidate]:
    """Convert a raw fragment into a normalised candidate.

    Args:
        fragment: A selector string or a dict in one of the recognised shapes

    Returns:
        SelectorCandidate, or None when no selector text can be derived
    """
    if not fragment:
        return None

    if isinstance(fragment, str):
        selector = fragment.strip()
        return SelectorCandidate(selector=selector, source=SOURCE_AI) if selector else None

    if not isinstance(fragment, dict):
        return None

    candidate = _primary_selector(fragment)
    if candidate is None:
        return None

    explicit_type = fragment.get("type")
    if not candidate.type and isinstance(explicit_type, str) and explicit_type:
        candidate.type = explicit_type
    if candidate.type == SelectorType.TEXT.value and not candidate.match_mode:
        candidate.match_mode = _match_mode(fragment)

    if isinstance(fragment.get("reason"), str):
        candidate.reason = fragment["reason"]
    elif isinstance(fragment.get("explanation"), str):
        candidate.reason = fragment["explanation"]

    score = fragment.get("score")
    confidence = fragment.get("confidence")
    if is_number(score):
        candidate.score = clamp_score(score)
    elif is_number(confidence):
        candidate.score = clamp_score(confidence * 100 if confidence <= 1 else confidence)

    if isinstance(fragment.get("unique"), bool):
        candidate.unique = fragment["unique"]

    match_count = fragment.get("matchCount")
    if is_number(match_count) and match_count >= 0:
        candidate.match_count = match_count

    if isinstance(fragment.get("textValue"), str) and not candidate.text_value:
        candidate.text_value = fragment["textValue"]

    return candidate

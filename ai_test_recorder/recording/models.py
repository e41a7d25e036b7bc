"""Data models for recorded browser events and selector candidates."""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

# Provenance tags for SelectorCandidate.source
SOURCE_AI = "ai"
SOURCE_DOM = "dom"


class ActionType(str, Enum):
    """Action types captured by the recorder."""

    CLICK = "click"
    DOUBLE_CLICK = "doubleClick"
    RIGHT_CLICK = "rightClick"
    INPUT = "input"
    CLEAR = "clear"
    SELECT = "select"
    HOVER = "hover"
    NAVIGATE = "navigate"


class SelectorType(str, Enum):
    """Selector flavours understood by the replay and codegen layers."""

    CSS = "css"
    XPATH = "xpath"
    TEXT = "text"


def infer_selector_type(selector: Optional[str]) -> Optional[str]:
    """Guess the selector type from its prefix.

    Args:
        selector: Selector text as recorded or suggested

    Returns:
        "xpath", "text" or "css", or None for empty input
    """
    if not selector or not isinstance(selector, str):
        return None
    trimmed = selector.strip()
    if trimmed.startswith("xpath=") or trimmed.startswith("//") or trimmed.startswith("("):
        return SelectorType.XPATH.value
    if trimmed.startswith("text="):
        return SelectorType.TEXT.value
    return SelectorType.CSS.value


def is_number(value: Any) -> bool:
    """True for finite ints and floats, never for booleans."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def clamp_score(value: float) -> int:
    """Round half-up (the way the browser side rounds) and clamp to 0-100."""
    return max(0, min(100, int(math.floor(value + 0.5))))


def identity_key(selector: str, selector_type: Optional[str]) -> str:
    """Identity key shared by de-duplication and evaluation matching."""
    return f"{selector}::{selector_type or ''}"


@dataclass
class SelectorCandidate:
    """A single proposed element locator."""

    selector: str
    type: Optional[str] = None
    match_mode: Optional[str] = None  # Only meaningful for text selectors
    text_value: Optional[str] = None
    reason: Optional[str] = None
    score: Optional[int] = None  # 0-100 confidence
    unique: Optional[bool] = None
    match_count: Optional[int] = None  # Live DOM matches
    source: str = SOURCE_AI

    @property
    def key(self) -> str:
        """Identity key: selector::type."""
        return identity_key(self.selector, self.type)

    def copy(self, **changes) -> "SelectorCandidate":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict) -> Optional["SelectorCandidate"]:
        """Create a candidate from a stored (camelCase) dictionary.

        Returns None when the dictionary has no usable selector.
        """
        if not isinstance(data, dict):
            return None
        selector = data.get("selector")
        if not isinstance(selector, str) or not selector.strip():
            return None

        score = data.get("score")
        match_count = data.get("matchCount")
        return cls(
            selector=selector.strip(),
            type=data.get("type") if isinstance(data.get("type"), str) else None,
            match_mode=data.get("matchMode") if isinstance(data.get("matchMode"), str) else None,
            text_value=data.get("textValue") if isinstance(data.get("textValue"), str) else None,
            reason=data.get("reason") if isinstance(data.get("reason"), str) else None,
            score=clamp_score(score) if is_number(score) else None,
            unique=data.get("unique") if isinstance(data.get("unique"), bool) else None,
            match_count=match_count if is_number(match_count) and match_count >= 0 else None,
            source=data.get("source") if isinstance(data.get("source"), str) else SOURCE_DOM,
        )

    def to_dict(self) -> dict:
        """Convert to the camelCase wire format, omitting unset fields."""
        data = {"selector": self.selector}
        optional = {
            "type": self.type,
            "matchMode": self.match_mode,
            "textValue": self.text_value,
            "reason": self.reason,
            "score": self.score,
            "unique": self.unique,
            "matchCount": self.match_count,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        data["source"] = self.source
        return data


@dataclass
class EvaluationResult:
    """Live-page outcome for one candidate, produced by the page evaluator."""

    selector: str
    type: Optional[str] = None
    match_count: Optional[int] = None
    error: Any = None
    unique: Optional[bool] = None

    @property
    def key(self) -> str:
        return identity_key(self.selector, self.type)

    @property
    def fallback_key(self) -> str:
        """Selector-only key used when the candidate type does not line up."""
        return identity_key(self.selector, None)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["EvaluationResult"]:
        """Create from the evaluator's dictionary, or None if unusable."""
        if not isinstance(data, dict) or not isinstance(data.get("selector"), str):
            return None
        match_count = data.get("matchCount")
        return cls(
            selector=data["selector"],
            type=data.get("type") if isinstance(data.get("type"), str) else None,
            match_count=match_count if is_number(match_count) and match_count >= 0 else None,
            error=data.get("error") or None,
            unique=data.get("unique") if isinstance(data.get("unique"), bool) else None,
        )


@dataclass
class RecordedEvent:
    """One captured user interaction."""

    action: str
    timestamp: int = 0  # Epoch milliseconds
    tag: Optional[str] = None
    value: Optional[str] = None
    primary_selector: Optional[str] = None
    selector_candidates: list[SelectorCandidate] = field(default_factory=list)
    iframe_context: Optional[dict] = None
    extra: dict = field(default_factory=dict)  # Untouched recorder fields

    _KNOWN_KEYS = (
        "action",
        "timestamp",
        "tag",
        "value",
        "primarySelector",
        "selectorCandidates",
        "iframeContext",
    )

    @classmethod
    def from_dict(cls, data: dict) -> "RecordedEvent":
        """Create a RecordedEvent from the recorder's dictionary format."""
        raw_candidates = data.get("selectorCandidates")
        if not isinstance(raw_candidates, list):
            raw_candidates = []
        candidates = [
            c
            for c in (SelectorCandidate.from_dict(item) for item in raw_candidates)
            if c is not None
        ]
        value = data.get("value")
        timestamp = data.get("timestamp")
        primary = data.get("primarySelector")
        return cls(
            action=str(data.get("action") or ""),
            timestamp=int(timestamp) if is_number(timestamp) else 0,
            tag=data.get("tag") if isinstance(data.get("tag"), str) else None,
            value=None if value is None else str(value),
            primary_selector=primary if isinstance(primary, str) and primary.strip() else None,
            selector_candidates=candidates,
            iframe_context=data.get("iframeContext") if isinstance(data.get("iframeContext"), dict) else None,
            extra={k: v for k, v in data.items() if k not in cls._KNOWN_KEYS},
        )

    def to_dict(self) -> dict:
        """Convert back to the recorder's dictionary format."""
        data = dict(self.extra)
        data.update({
            "action": self.action,
            "timestamp": self.timestamp,
            "tag": self.tag,
            "value": self.value,
            "selectorCandidates": [c.to_dict() for c in self.selector_candidates],
            "iframeContext": self.iframe_context,
        })
        if self.primary_selector:
            data["primarySelector"] = self.primary_selector
        return data

    @property
    def primary_selector_type(self) -> Optional[str]:
        """Type of the applied selector, taken from its candidate or inferred."""
        if not self.primary_selector:
            return None
        for candidate in self.selector_candidates:
            if candidate.selector == self.primary_selector and candidate.type:
                return candidate.type
        return infer_selector_type(self.primary_selector)

    def apply_selector(self, candidate: SelectorCandidate | str) -> None:
        """Make the given candidate the selector used for codegen."""
        selector = candidate.selector if isinstance(candidate, SelectorCandidate) else candidate
        if not isinstance(selector, str) or not selector.strip():
            raise ValueError("Cannot apply an empty selector")
        self.primary_selector = selector.strip()

    def resolved_selector(self) -> str:
        """Selector used for codegen: primary, then first candidate, then tag."""
        if self.primary_selector:
            return self.primary_selector
        if self.selector_candidates and self.selector_candidates[0].selector:
            return self.selector_candidates[0].selector
        return self.tag or ""

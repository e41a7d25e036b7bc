"""Build outbound payloads for the selector suggestion and code review endpoints."""

import json
import random
import string
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Optional

import structlog

from .._version import __version__
from ..config import AiSettings

logger = structlog.get_logger()

CLIENT_NAME = "ai_test_recorder"

_BASE36_ALPHABET = string.digits + string.ascii_lowercase

SELECTOR_GUIDANCE = [
    "Prefer meaningful attributes (id, data-*, aria-*) and avoid depending on dynamic classes.",
    "Use nth-child or index-based paths only when unavoidable.",
    "Use text-based selectors carefully since content may change.",
    "Suggest selectors that match a single element whenever possible.",
    "Take iframe and parent/child context into account.",
]

CODE_REVIEW_INSTRUCTIONS = (
    "You are an expert test automation reviewer. Review the provided test case description "
    "and Playwright/Selenium code. Return pure JSON with keys \"updatedCode\", \"summary\", "
    "and \"suggestions\". updatedCode must contain the complete revised code. suggestions "
    "should be an array of short improvement notes. Do not wrap the response in markdown fences."
)

CODE_REVIEW_GUIDANCE = [
    "Ensure selectors remain stable and robust against UI changes.",
    "Optimize waits and synchronization for reliability.",
    "Keep the code idiomatic for the specified framework/language.",
    "Explain the most important improvements succinctly.",
]


@dataclass
class SelectorContext:
    """Where a selector request comes from and what it is for."""

    tab_id: Optional[int] = None
    ai_model: Optional[str] = None  # Per-call model override
    test_case: str = ""
    test_url: str = ""
    framework: str = ""
    language: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "SelectorContext":
        """Create from the panel's camelCase context, ignoring malformed values."""
        data = data if isinstance(data, dict) else {}

        def text(key: str) -> str:
            return data[key] if isinstance(data.get(key), str) else ""

        tab_id = data.get("tabId")
        return cls(
            tab_id=tab_id if isinstance(tab_id, int) and not isinstance(tab_id, bool) else None,
            ai_model=data.get("aiModel") if isinstance(data.get("aiModel"), str) else None,
            test_case=text("testCase"),
            test_url=text("testUrl"),
            framework=text("framework"),
            language=text("language"),
        )


@dataclass
class AiRequest:
    """An outbound request body plus local-only routing data."""

    request_id: str
    payload: dict
    tab_id: Optional[int] = None  # Never sent; used for page evaluation

    @property
    def model(self) -> str:
        return self.payload.get("model", "")


def _to_plain(value: Any) -> Any:
    if hasattr(value, "to_dict") and callable(value.to_dict):
        value = value.to_dict()
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items() if not callable(v)}
    if isinstance(value, (list, tuple)):
        return [None if callable(v) else _to_plain(v) for v in value]
    return value


def sanitize_for_transport(data: Any) -> Any:
    """JSON-safe deep copy of ``data``.

    Callables are dropped from objects and become null inside lists.
    Objects exposing ``to_dict`` are serialized through it.

    Returns:
        The copy, or None when the value cannot be serialized
    """
    try:
        return json.loads(json.dumps(_to_plain(data), allow_nan=False))
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning("Payload is not transport-safe", error=str(e))
        return None


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_request_id() -> str:
    """Correlation id for logs: ``req_<base36 ms>_<6 random chars>``.

    Not unique by construction and not suitable for anything security related.
    """
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36_ALPHABET, k=6))
    return f"req_{timestamp}_{suffix}"


def resolve_model(override: Any, settings: Optional[AiSettings]) -> str:
    """Per-call override, then the stored default, then an empty string."""
    if isinstance(override, str) and override.strip():
        return override.strip()
    if settings is not None and settings.model:
        return settings.model
    return ""


def _metadata(version: str, client_name: str) -> dict:
    requested_at = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {
        "extension": client_name,
        "version": version,
        "requestedAt": requested_at,
    }


def build_selector_request(
    event: Any,
    context: SelectorContext | dict | None,
    settings: Optional[AiSettings],
    version: str = __version__,
    client_name: str = CLIENT_NAME,
) -> AiRequest:
    """Assemble a selector suggestion request.

    Args:
        event: RecordedEvent or its dictionary form
        context: Request context (tab, model override, test metadata)
        settings: Stored AI settings (model default)
        version: Client version reported in metadata
        client_name: Client identity reported in metadata

    Returns:
        AiRequest; ``payload`` is the JSON body, ``tab_id`` stays local
    """
    if not isinstance(context, SelectorContext):
        context = SelectorContext.from_dict(context)

    sanitized = sanitize_for_transport(event)
    if not isinstance(sanitized, dict):
        sanitized = {}
    candidates = sanitized.get("selectorCandidates")

    request_id = generate_request_id()
    payload = {
        "requestId": request_id,
        "testCase": context.test_case,
        "testUrl": context.test_url,
        "framework": context.framework,
        "language": context.language,
        "model": resolve_model(context.ai_model, settings),
        "event": sanitized,
        "selectorCandidates": candidates if isinstance(candidates, list) else [],
        "guidance": list(SELECTOR_GUIDANCE),
        "metadata": _metadata(version, client_name),
    }
    return AiRequest(request_id=request_id, payload=payload, tab_id=context.tab_id)


def build_code_review_request(
    message: Any,
    settings: Optional[AiSettings],
    version: str = __version__,
    client_name: str = CLIENT_NAME,
) -> AiRequest:
    """Assemble a code review request.

    Args:
        message: Panel message with ``code``, ``testCase``, ``framework``,
            ``language``, ``events``, ``manualActions`` and ``aiModel``
        settings: Stored AI settings (model default)
        version: Client version reported in metadata
    """
    message = message if isinstance(message, dict) else {}

    def text(key: str) -> str:
        return message[key] if isinstance(message.get(key), str) else ""

    def sanitized_list(key: str) -> list:
        value = message.get(key)
        if not isinstance(value, (list, tuple)):
            return []
        return sanitize_for_transport(value) or []

    request_id = generate_request_id()
    payload = {
        "requestId": request_id,
        "type": "code_review",
        "model": resolve_model(message.get("aiModel"), settings),
        "testCase": text("testCase"),
        "framework": text("framework"),
        "language": text("language"),
        "code": text("code"),
        "events": sanitized_list("events"),
        "manualActions": sanitized_list("manualActions"),
        "instructions": CODE_REVIEW_INSTRUCTIONS,
        "guidance": list(CODE_REVIEW_GUIDANCE),
        "metadata": _metadata(version, client_name),
    }
    return AiRequest(request_id=request_id, payload=payload)

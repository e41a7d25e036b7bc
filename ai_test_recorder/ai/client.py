"""
AI Client - selector suggestions and code review over HTTP.

One POST per call, bounded by a timeout, never retried. Every failure is
returned as a result with ``ok=False`` and a human-readable ``reason``.

USAGE:
    settings = AiSettings(endpoint="https://ai.example.com/suggest", api_key="...")
    client = AiClient(settings, page_evaluator=evaluate_in_tab)

    result = await client.suggest_selectors(event, SelectorContext(tab_id=7))
    if result.ok:
        for candidate in result.candidates:
            print(candidate.selector, candidate.score, candidate.reason)
"""

import asyncio
import hashlib
import json
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Optional

import httpx
import structlog

from .._version import __version__
from ..candidates import (
    MAX_CANDIDATES,
    CodeReviewResult,
    build_evaluation_payload,
    merge_evaluations,
    normalize_code_review_response,
    normalize_selector_response,
    parse_evaluation_response,
    parse_json_from_text,
)
from ..config import AI_REQUEST_TIMEOUT_SECONDS, AiSettings, Settings
from ..recording.models import EvaluationResult, SelectorCandidate
from ..utils.logging import LogContext, log_operation
from .errors import AiClientError, AiConfigurationError, AiTimeoutError, AiTransportError
from .requests import (
    CLIENT_NAME,
    AiRequest,
    SelectorContext,
    build_code_review_request,
    build_selector_request,
)

logger = structlog.get_logger()

# (tab_id, [{selector, type, matchMode}]) -> {"ok": bool, "results": [...]}
PageEvaluator = Callable[[Optional[int], list[dict]], Awaitable[Any]]

MISSING_ENDPOINT_REASON = "AI API endpoint is not configured."
MISSING_CODE_REASON = "No code was provided for review."
NO_CANDIDATES_REASON = "The AI response contained no selector candidates."
TIMEOUT_REASON = "AI API request timed out"
TRANSPORT_FAILURE_REASON = "AI API request failed."
SELECTOR_FAILURE_REASON = "Failed to process the AI selector request."
REVIEW_FAILURE_REASON = "Failed to process the AI code review request."


@dataclass
class SelectorSuggestionResult:
    """Outcome of a selector suggestion request."""

    ok: bool
    candidates: list[SelectorCandidate] = field(default_factory=list)
    reason: Optional[str] = None
    meta: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        if not self.ok:
            return {"ok": False, "reason": self.reason}
        return {
            "ok": True,
            "candidates": [c.to_dict() for c in self.candidates],
            "meta": self.meta,
        }

    def copy(self) -> "SelectorSuggestionResult":
        """Independent copy; candidates and meta are not shared."""
        return replace(
            self,
            candidates=[c.copy() for c in self.candidates],
            meta=dict(self.meta),
        )


def extract_error_message(status_code: int, body: str) -> str:
    """Best-effort message for a non-2xx response.

    Uses a JSON ``message`` or ``error`` field (or a JSON string body), then
    the trimmed raw body, then a generic HTTP status message.
    """
    message = f"AI API call failed (HTTP {status_code})"
    if not body:
        return message

    parsed = parse_json_from_text(body)
    if parsed is not None:
        if isinstance(parsed, str):
            return parsed
        if isinstance(parsed, dict):
            if isinstance(parsed.get("message"), str):
                return parsed["message"]
            if isinstance(parsed.get("error"), str):
                return parsed["error"]
        return message

    return body.strip() or message


class AiClient:
    """Client for the configured AI endpoint.

    Settings and timeout are fixed per client instance; nothing is read from
    global state. Concurrent selector requests for the same event share one
    outbound call.
    """

    def __init__(
        self,
        settings: AiSettings,
        timeout: float = AI_REQUEST_TIMEOUT_SECONDS,
        page_evaluator: Optional[PageEvaluator] = None,
        max_candidates: int = MAX_CANDIDATES,
        version: str = __version__,
        client_name: str = CLIENT_NAME,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the AI client.

        Args:
            settings: Endpoint, API key and default model
            timeout: Seconds before an outbound request is abandoned
            page_evaluator: Optional collaborator that counts live DOM matches
            max_candidates: Upper bound on returned candidates
            version: Client version reported in request metadata
            client_name: Client identity reported in request metadata
            transport: Optional httpx transport (tests, proxies)
        """
        self.settings = settings
        self.timeout = timeout
        self.page_evaluator = page_evaluator
        self.max_candidates = max_candidates
        self.version = version
        self.client_name = client_name
        self._transport = transport
        self._inflight: dict[str, asyncio.Task] = {}
        self.log = logger.bind(component="ai_client")

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "AiClient":
        """Create a client from application settings."""
        return cls(
            settings.ai_settings(),
            timeout=settings.request_timeout_seconds,
            max_candidates=settings.max_candidates,
            version=settings.extension_version,
            client_name=settings.extension_name,
            **kwargs,
        )

    def _require_endpoint(self) -> None:
        if not self.settings.endpoint:
            raise AiConfigurationError(MISSING_ENDPOINT_REASON)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        api_key = self.settings.api_key_value
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
            headers["x-api-key"] = api_key
        return headers

    async def _post(self, request: AiRequest) -> str:
        """Send one request and return the response body.

        Raises:
            AiTimeoutError: The request exceeded the timeout
            AiTransportError: Network failure or non-2xx status
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await asyncio.wait_for(
                    client.post(
                        self.settings.endpoint,
                        content=json.dumps(request.payload),
                        headers=self._headers(),
                    ),
                    timeout=self.timeout,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise AiTimeoutError(TIMEOUT_REASON) from e
        except httpx.HTTPError as e:
            raise AiTransportError(str(e) or TRANSPORT_FAILURE_REASON) from e

        if not response.is_success:
            raise AiTransportError(
                extract_error_message(response.status_code, response.text),
                status_code=response.status_code,
            )
        return response.text

    async def _evaluate(
        self,
        tab_id: Optional[int],
        candidates: list[SelectorCandidate],
    ) -> Optional[list[EvaluationResult]]:
        """Ask the page evaluator for match counts; None when unavailable."""
        if self.page_evaluator is None or not isinstance(tab_id, int) or not candidates:
            return None
        try:
            response = await self.page_evaluator(tab_id, build_evaluation_payload(candidates))
        except Exception as e:
            self.log.warning("Page evaluation failed", tab_id=tab_id, error=str(e))
            return None

        results = parse_evaluation_response(response)
        if results is None:
            self.log.warning("Page evaluation returned no usable results", tab_id=tab_id)
        return results

    def _inflight_key(self, request: AiRequest) -> str:
        identity = json.dumps(
            [request.payload["event"], request.tab_id, request.model],
            sort_keys=True,
        )
        return hashlib.sha256(identity.encode()).hexdigest()

    async def suggest_selectors(
        self,
        event: Any,
        context: SelectorContext | dict | None = None,
    ) -> SelectorSuggestionResult:
        """Request selector candidates for a recorded event.

        Args:
            event: RecordedEvent or its dictionary form
            context: Tab, model override and test metadata

        Returns:
            SelectorSuggestionResult with at most ``max_candidates`` entries
        """
        try:
            self._require_endpoint()
        except AiConfigurationError as e:
            return SelectorSuggestionResult(ok=False, reason=e.reason)

        request = build_selector_request(
            event, context, self.settings, version=self.version, client_name=self.client_name
        )
        key = self._inflight_key(request)

        pending = self._inflight.get(key)
        if pending is not None:
            self.log.debug("Joining in-flight selector request", request_id=request.request_id)
            shared = await asyncio.shield(pending)
            return shared.copy()

        task = asyncio.ensure_future(self._suggest(request))
        self._inflight[key] = task
        try:
            return await task
        finally:
            self._inflight.pop(key, None)

    async def _suggest(self, request: AiRequest) -> SelectorSuggestionResult:
        with LogContext(request_id=request.request_id, tab_id=request.tab_id):
            try:
                with log_operation("selector_request", self.log, model=request.model) as op:
                    body = await self._post(request)
                    op["bytes"] = len(body)
            except AiClientError as e:
                self.log.warning("Selector request failed", reason=e.reason)
                return SelectorSuggestionResult(ok=False, reason=e.reason)

            try:
                parsed: Any = json.loads(body) if body else None
            except RecursionError:
                self.log.warning("Selector response nested too deeply", bytes=len(body))
                parsed = None
            except ValueError:
                parsed = body

            try:
                candidates = normalize_selector_response(parsed, self.max_candidates).candidates
                if not candidates:
                    return SelectorSuggestionResult(ok=False, reason=NO_CANDIDATES_REASON)

                evaluations = await self._evaluate(request.tab_id, candidates)
                if evaluations is not None:
                    candidates = merge_evaluations(candidates, evaluations)
            except Exception as e:
                self.log.error("Selector response handling failed", error=str(e))
                return SelectorSuggestionResult(ok=False, reason=SELECTOR_FAILURE_REASON)

            self.log.info(
                "Selector suggestions ready",
                candidates=len(candidates),
                validated=evaluations is not None,
            )
            return SelectorSuggestionResult(
                ok=True,
                candidates=candidates,
                meta={
                    "model": request.model or None,
                    "validated": evaluations is not None,
                    "requestId": request.request_id,
                },
            )

    async def review_code(self, message: Any) -> CodeReviewResult:
        """Request a review of generated test code.

        Args:
            message: Dict with ``code`` plus optional ``testCase``,
                ``framework``, ``language``, ``events``, ``manualActions``
                and ``aiModel``

        Returns:
            CodeReviewResult; unparseable answers are treated as code
        """
        try:
            self._require_endpoint()
        except AiConfigurationError as e:
            return CodeReviewResult(ok=False, reason=e.reason)

        code = message.get("code") if isinstance(message, dict) else None
        if not isinstance(code, str) or not code.strip():
            return CodeReviewResult(ok=False, reason=MISSING_CODE_REASON)

        request = build_code_review_request(
            message, self.settings, version=self.version, client_name=self.client_name
        )

        with LogContext(request_id=request.request_id):
            try:
                with log_operation("code_review_request", self.log, model=request.model) as op:
                    body = await self._post(request)
                    op["bytes"] = len(body)
            except AiClientError as e:
                self.log.warning("Code review request failed", reason=e.reason)
                return CodeReviewResult(ok=False, reason=e.reason)

            try:
                parsed = parse_json_from_text(body)
                if parsed is None and body.strip():
                    parsed = {"updatedCode": body.strip()}
                return normalize_code_review_response(parsed or {}, request.payload["code"])
            except Exception as e:
                self.log.error("Code review response handling failed", error=str(e))
                return CodeReviewResult(ok=False, reason=REVIEW_FAILURE_REASON)


async def suggest_selectors(
    event: Any,
    context: SelectorContext | dict | None = None,
    settings: Optional[AiSettings] = None,
    **client_kwargs,
) -> SelectorSuggestionResult:
    """Convenience wrapper building a one-off AiClient."""
    client = AiClient(settings or AiSettings(), **client_kwargs)
    return await client.suggest_selectors(event, context)


async def review_code(
    message: Any,
    settings: Optional[AiSettings] = None,
    **client_kwargs,
) -> CodeReviewResult:
    """Convenience wrapper building a one-off AiClient."""
    client = AiClient(settings or AiSettings(), **client_kwargs)
    return await client.review_code(message)

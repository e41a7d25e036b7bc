"""Walk an arbitrary AI response and collect selector candidates."""

import re
from typing import Any

import structlog

from ..recording.models import SelectorCandidate
from .coercer import coerce_candidate

logger = structlog.get_logger()

# Keys that usually hold candidate lists, scanned before any other key
CONTAINER_KEYS = (
    "candidates",
    "selectors",
    "suggestions",
    "results",
    "items",
    "data",
    "options",
    "alternatives",
)

_LINE_SPLIT_RE = re.compile(r"(?:\r?\n)+")


def _children(node: dict) -> list:
    """Nested values of a non-candidate object, in scan order."""
    children = [node[key] for key in CONTAINER_KEYS if isinstance(node.get(key), (list, tuple))]
    for key, value in node.items():
        if key in CONTAINER_KEYS:
            continue
        if value and isinstance(value, (list, tuple, dict)):
            children.append(value)
    return children


def extract_candidates(source: Any) -> list[SelectorCandidate]:
    """Collect candidates from a JSON-like value.

    Strings are split into lines and each line is tried as a selector.
    Objects that coerce directly are terminal; other objects are searched
    through CONTAINER_KEYS first and then through every other nested value.
    Containers already visited are skipped, so cyclic input terminates.

    Args:
        source: Parsed response body (dict, list, str or None)

    Returns:
        Candidates in discovery order, possibly with duplicates
    """
    found: list[SelectorCandidate] = []
    visited: set[int] = set()
    stack = [source]

    while stack:
        node = stack.pop()
        if not node:
            continue

        if isinstance(node, (dict, list, tuple)):
            if id(node) in visited:
                continue
            visited.add(id(node))

        if isinstance(node, (list, tuple)):
            stack.extend(reversed(node))
        elif isinstance(node, str):
            for line in _LINE_SPLIT_RE.split(node):
                candidate = coerce_candidate(line)
                if candidate:
                    found.append(candidate)
        elif isinstance(node, dict):
            candidate = coerce_candidate(node)
            if candidate:
                found.append(candidate)
            else:
                stack.extend(reversed(_children(node)))

    logger.debug("Extracted selector candidates", count=len(found), visited=len(visited))
    return found

"""Collapse selector candidates to one entry per identity key."""

from typing import Iterable, Optional

from ..recording.models import SelectorCandidate, identity_key


def candidate_key(selector: str, selector_type: Optional[str] = None) -> str:
    """Identity key for a selector/type pair ("selector::type")."""
    return identity_key(selector.strip(), selector_type)


def dedupe_candidates(candidates: Iterable[Optional[SelectorCandidate]]) -> list[SelectorCandidate]:
    """Drop blank and repeated candidates, keeping the first occurrence.

    Selectors are trimmed on the returned copies; inputs are not modified.
    """
    seen: set[str] = set()
    unique: list[SelectorCandidate] = []
    for candidate in candidates:
        if candidate is None or not isinstance(candidate.selector, str):
            continue
        selector = candidate.selector.strip()
        if not selector:
            continue
        key = candidate_key(selector, candidate.type)
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate.copy(selector=selector))
    return unique

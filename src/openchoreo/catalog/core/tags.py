# openchoreo/catalog/core/tags.py
"""Deterministic catalog tag derivation."""
from __future__ import annotations

from typing import Iterable


def derive_tags(
    fixed: Iterable[str],
    inferred_from: Iterable[str | None] = (),
    extra: Iterable[str] = (),
) -> list[str]:
    """Build an ordered, duplicate-free tag list.

    Tags are the ``fixed`` category tags, then the hyphen-separated tokens
    of every value in ``inferred_from`` (names, types), then ``extra``.
    Tokens are lower-cased and stripped; empty and whitespace-only tokens
    are dropped and only the first occurrence of a tag is kept.

    Example:
        >>> derive_tags(["openchoreo"], ["web-service", "deployment"])
        ['openchoreo', 'web', 'service', 'deployment']
    """
    candidates: list[str] = list(fixed)
    for source in inferred_from:
        if source:
            candidates.extend(source.split("-"))
    candidates.extend(extra)

    tags: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        if not isinstance(candidate, str):
            continue
        tag = candidate.strip().lower()
        if not tag or tag in seen:
            continue
        seen.add(tag)
        tags.append(tag)
    return tags

"""
Ordering of active automation suggestions for display.

Display order is priority rank descending, then creation instant descending
(newest first), then id ascending so equal-rank suggestions created in the
same millisecond land in the same order on every run. The store's
"active suggestions" query orders by the same three keys.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from moodhome.core.errors import InvalidInput

log = logging.getLogger(__name__)

PRIORITY_RANKS = {
    "URGENT": 4,
    "HIGH": 3,
    "MEDIUM": 2,
    "LOW": 1,
}

DEFAULT_TOP_LIMIT = 5


def priority_rank(priority: Any) -> int:
    """
    Numeric rank of a priority tag; anything unrecognized ranks 0.
    Accepts plain strings or str-valued enums. Matching is exact: stored
    tags are always uppercase because SuggestionDraft normalizes them.
    """
    value = getattr(priority, "value", priority)
    if not isinstance(value, str):
        return 0
    return PRIORITY_RANKS.get(value, 0)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _created_at(item: Any) -> int:
    value = _field(item, "created_at")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"suggestion {_field(item, 'id')!r} has no numeric created_at")
    return int(value)


def ranking_key(item: Any) -> tuple[int, int, str]:
    """
    Sort key implementing the display order. A missing or non-numeric
    creation instant sorts as the oldest possible entry.
    """
    try:
        created = _created_at(item)
    except InvalidInput as e:
        log.warning("Ranking with default instant: %s", e)
        created = 0
    return (-priority_rank(_field(item, "priority")), -created, str(_field(item, "id") or ""))


def is_active(item: Any) -> bool:
    status = _field(item, "status")
    if status is not None:
        return getattr(status, "value", status) == "ACTIVE"
    return not (_field(item, "is_dismissed") or _field(item, "is_executed"))


def rank_suggestions(items: Iterable[Any]) -> list[Any]:
    """Active suggestions in display order."""
    return sorted((s for s in items if is_active(s)), key=ranking_key)


def top_suggestions(items: Iterable[Any], limit: int = DEFAULT_TOP_LIMIT) -> list[Any]:
    if limit < 0:
        raise InvalidInput("limit must be non-negative")
    return rank_suggestions(items)[:limit]


def headline_priority(items: Iterable[Any]) -> Optional[str]:
    """
    Priority of the highest-ranked active suggestion; among equal ranks the
    first in display order wins. None when nothing is active.
    """
    return _headline(rank_suggestions(items))


def _headline(ranked: Sequence[Any]) -> Optional[str]:
    if not ranked:
        return None
    p = _field(ranked[0], "priority")
    return getattr(p, "value", p)


@dataclass(slots=True)
class SuggestionSummary:
    items: list[Any] = field(default_factory=list)
    headline: Optional[str] = None
    total_active: int = 0


def summarize(items: Sequence[Any], limit: int = DEFAULT_TOP_LIMIT) -> SuggestionSummary:
    if limit < 0:
        raise InvalidInput("limit must be non-negative")
    ranked = rank_suggestions(items)
    return SuggestionSummary(items=ranked[:limit], headline=_headline(ranked), total_active=len(ranked))

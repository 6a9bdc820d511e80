from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from ..models.items import AggregatedItem, ValidatedItem

"""Aggregation of validated items by normalized description.

The normalized key (trimmed, lower-cased, whitespace collapsed) is the only
identity criterion. Quantities are summed, occurrences counted, and the first
non-empty unit seen for a key is kept. Units are never converted or compared.
Output order is the order in which keys were first seen.
"""

__all__ = [
    "normalize_key",
    "aggregate",
]

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_key(description: str) -> str:
    """Return the deduplication key for a description."""
    return _WHITESPACE_RE.sub(" ", description.strip().lower())


def aggregate(items: Iterable[ValidatedItem]) -> list[AggregatedItem]:
    """Merge validated items sharing a normalized key.

    Args:
        items: Validated items in input order

    Returns:
        One AggregatedItem per distinct key, in first-seen order
    """
    merged: dict[str, AggregatedItem] = {}
    unit_conflicts = 0

    for item in items:
        key = normalize_key(item.description)
        existing = merged.get(key)
        if existing is None:
            merged[key] = AggregatedItem(
                id=key,
                description=item.description.strip(),
                total_quantity=item.quantity,
                unit=item.unit or "",
                occurrence_count=1,
            )
            continue

        existing.total_quantity += item.quantity
        existing.occurrence_count += 1
        if not existing.unit and item.unit:
            existing.unit = item.unit
        elif item.unit and item.unit != existing.unit:
            unit_conflicts += 1

    if unit_conflicts:
        logger.debug(f"aggregate: {unit_conflicts} later unit value(s) ignored for already-set units")
    return list(merged.values())

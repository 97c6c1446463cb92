"""Lenient comparison of stored holiday dates against a calendar day.

Pool and configured holidays are entered through several screens, so the
stored strings come as ``2025-01-15``, ``-01-15``, ``2025-01-15T00:00:00``,
``15/01/2025``-ish free text and so on. Matching never raises: anything that
cannot be interpreted is simply not a match.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

logger = logging.getLogger(__name__)


def matches(candidate: Any, target: date) -> bool:
    if candidate is None or candidate == "":
        return False

    if isinstance(candidate, datetime):
        return candidate.date() == _as_day(target)
    if isinstance(candidate, date):
        return candidate == _as_day(target)

    try:
        text = str(candidate).strip()
        target_day = _as_day(target)
    except (TypeError, ValueError, AttributeError):
        logger.debug("Unreadable holiday date %r", candidate)
        return False
    if not text:
        return False

    full = target_day.strftime("%Y-%m-%d")
    month_day = target_day.strftime("-%m-%d")

    # 1. Exact YYYY-MM-DD anywhere in the string.
    if full in text:
        return True

    date_part = text.split(" ")[0].split("T")[0]

    # 2. Year-agnostic -MM-DD, only as the tail of the date part.
    if date_part.endswith(month_day):
        return True

    # 3. Pool fragments that start with '-', matched as a suffix of the full date.
    if text.startswith("-"):
        return full.endswith(text)

    # 4. Separator-free fallback: "2025/01/15", "20250115".
    compact_target = full.replace("-", "")
    compact_text = date_part.replace("-", "").replace("/", "")
    return bool(compact_text) and compact_target in compact_text


def _as_day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value

"""
core/menu_parser.py
────────────────────────────────────────────────────────────────────────
Pull the weekly menu object out of the generator's raw text.

Only the shape is checked (five weekday keys, each a list).  Dish
counts and tags are left to `core.menu_audit`.
"""

from __future__ import annotations

import json
import logging
import re

from core.models.menu import WEEKDAYS, WeekMenu

_LOG = logging.getLogger(__name__)

# greedy: first "{" to last "}"
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_object(raw: str | dict) -> dict | None:
    if isinstance(raw, dict):
        return raw
    match = _JSON_OBJECT.search(raw or "")
    if not match:
        _LOG.warning("no JSON object found in generator response")
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        _LOG.warning("generator JSON did not decode: %s", exc)
        return None
    return data if isinstance(data, dict) else None


def parse_week_menu(raw: str | dict) -> WeekMenu | None:
    """Return a `WeekMenu`, or None when the text holds no valid weekly menu."""
    data = extract_json_object(raw)
    if data is None:
        return None
    for day in WEEKDAYS:
        if not isinstance(data.get(day), list):
            _LOG.warning("invalid menu structure for %s", day)
            return None
    return WeekMenu(**{day: [str(dish) for dish in data[day]] for day in WEEKDAYS})

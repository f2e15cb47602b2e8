"""Opt-in back-fill of a fixed key set in a recovered plan.

Models asked for a full week often return only the first few days, either
because the prompt asked for fewer to stay under the token limit or because
the response was truncated. Callers that want seven days can copy the days
they did get onto the missing ones.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping, Sequence


WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def backfill_missing_keys(mapping: Mapping[str, Any], keys: Sequence[str]) -> dict[str, Any]:
    """Return a copy of mapping in which every key in keys is present.

    The i-th missing key (in the order of keys) receives a deep copy of the
    value under present[i % len(present)], where present lists the keys of
    mapping that appear in keys, in mapping order. If none of keys is
    present, the mapping is returned as a plain copy with nothing added.
    """
    filled = dict(mapping)
    present = [key for key in mapping if key in keys]
    if not present:
        return filled

    missing = [key for key in keys if key not in mapping]
    for index, key in enumerate(missing):
        source = present[index % len(present)]
        filled[key] = copy.deepcopy(mapping[source])
    return filled


def backfill_weekly_plan(
    plan: Mapping[str, Any],
    days: Sequence[str] = WEEKDAYS,
    section: str = "weeklyPlan",
) -> dict[str, Any]:
    """Fill in missing days of plan[section]. The input is left untouched."""
    result = dict(plan)
    week = plan.get(section)
    if not isinstance(week, Mapping) or not week:
        return result

    result[section] = backfill_missing_keys(week, days)
    return result

"""
Reviewer-facing summaries of a proposed change: compares before/after snapshots of an entity
and returns short human-readable lines. Pure and synchronous; never raises. Values that cannot
be serialized degrade to placeholder text.
"""
import json
from datetime import datetime
from typing import Any

PLACEHOLDER = "—"
ARROW = "→"

# Bookkeeping fields never shown for a created entity
CREATE_EXCLUDED = frozenset({"id", "created_at", "updated_at", "user_id", "email", "full_name", "entity_id"})
# ...and for updates, reviewer identity as well
UPDATE_EXCLUDED = CREATE_EXCLUDED | {"reviewer_id", "reviewer_email"}

MAX_CREATE_LINES = 4
MAX_LIST_PREVIEW = 3
MAX_OBJECT_CHARS = 60
MAX_VALUE_CHARS = 40

_MISSING = object()


def _is_nullish(value: Any) -> bool:
    return value is None or value is _MISSING


def _canonical(value: Any) -> Any:
    """Integral floats become ints so 12 and 12.0 compare equal, as they would in the browser."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def _try_json(value: Any, sort_keys: bool = True) -> str | None:
    """JSON text of value, or None when it cannot be serialized."""
    try:
        return json.dumps(_canonical(value), sort_keys=sort_keys, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return None


def _scalar_str(value: Any) -> str:
    if value is None or value is _MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dict):
        return _format_object(value)
    return str(value)


def _identity(value: Any) -> Any:
    """Hashable key for set semantics over list elements (dicts and lists keyed by their JSON)."""
    if isinstance(value, bool):
        # True == 1 for hashing; keep them distinct members
        return ("bool", value)
    if isinstance(value, (dict, list)):
        text = _try_json(value)
        return ("json", text if text is not None else id(value))
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _unique(values: list) -> list:
    seen = set()
    out = []
    for v in values:
        key = _identity(v)
        if key in seen:
            continue
        seen.add(key)
        out.append(v)
    return out


def _set_string(values: list) -> str | None:
    uniq = sorted(_unique(values), key=_scalar_str)
    return _try_json(uniq)


def is_same(a: Any, b: Any) -> bool:
    """null/missing are equal; lists compare as sets; everything else structurally."""
    if _is_nullish(a) and _is_nullish(b):
        return True
    if isinstance(a, list) and isinstance(b, list):
        sa = _set_string(a)
        sb = _set_string(b)
        return sa is not None and sa == sb
    if _is_nullish(a) or _is_nullish(b):
        return False
    sa = _try_json(a)
    sb = _try_json(b)
    if sa is None or sb is None:
        return False
    return sa == sb


def _format_object(value: dict) -> str:
    name = value.get("name")
    if name:
        return str(name)
    text = _try_json(value, sort_keys=False)
    if text is None:
        return "[object]"
    return f"{text[:MAX_OBJECT_CHARS - 3]}..." if len(text) > MAX_OBJECT_CHARS else text


def format_value(value: Any) -> str:
    if _is_nullish(value):
        return PLACEHOLDER
    if isinstance(value, list):
        uniq = _unique(value)
        preview = ", ".join(_scalar_str(v) for v in uniq[:MAX_LIST_PREVIEW])
        if len(uniq) > MAX_LIST_PREVIEW:
            return f"{preview}, …"
        return preview or PLACEHOLDER
    if isinstance(value, dict):
        return _format_object(value)
    text = _scalar_str(value)
    return f"{text[:MAX_VALUE_CHARS - 3]}..." if len(text) > MAX_VALUE_CHARS else text


def describe_list_change(prev: Any, next_: Any) -> str | None:
    """'+added -removed' (up to 3 each), or None when neither side has set members the other lacks."""
    prev_list = _unique(prev) if isinstance(prev, list) else []
    next_list = _unique(next_) if isinstance(next_, list) else []
    prev_keys = {_identity(v) for v in prev_list}
    next_keys = {_identity(v) for v in next_list}
    added = [v for v in next_list if _identity(v) not in prev_keys]
    removed = [v for v in prev_list if _identity(v) not in next_keys]
    parts = []
    if added:
        parts.append("+" + ", ".join(_scalar_str(v) for v in added[:MAX_LIST_PREVIEW]))
    if removed:
        parts.append("-" + ", ".join(_scalar_str(v) for v in removed[:MAX_LIST_PREVIEW]))
    if not parts:
        return None
    return " ".join(parts)


def summarize(before: dict | None, after: dict | None, action: str) -> list[str]:
    """
    Human-readable lines describing what changed between two snapshots.

    - created (no before): up to 4 "field: value" lines, or ["Created"]
    - deleted (no after): ["Deleted <name|id|item>"]
    - otherwise one line per changed field. A field present in before but missing
      from after is a partial update, not a clear, and is skipped.
    """
    if before is None and after is not None:
        keys = [k for k in after if k not in CREATE_EXCLUDED]
        lines = [f"{k}: {format_value(after[k])}" for k in keys[:MAX_CREATE_LINES]]
        return lines or ["Created"]

    if before is not None and after is None:
        label = before.get("name") or before.get("id") or "item"
        return [f"Deleted {_scalar_str(label)}"]

    before = before or {}
    after = after or {}
    keys = list(before) + [k for k in after if k not in before]
    diffs = []
    for key in keys:
        if key in UPDATE_EXCLUDED:
            continue
        has_prev = key in before
        has_next = key in after
        if not has_prev and not has_next:
            continue
        if has_prev and not has_next:
            continue
        prev = before[key] if has_prev else _MISSING
        next_ = after[key]
        if is_same(prev, next_):
            continue
        if isinstance(prev, list) or isinstance(next_, list):
            desc = describe_list_change(prev, next_)
            if desc:
                diffs.append(f"{key}: {desc}")
                continue
        diffs.append(f"{key}: {format_value(prev)} {ARROW} {format_value(next_)}")

    if not diffs and action == "update":
        return ["No field changes detected"]
    return diffs


def target_name(before: dict | None, after: dict | None) -> str | None:
    return (after or {}).get("name") or (before or {}).get("name") or None


_AGO_UNITS = (
    ("year", 60 * 60 * 24 * 365),
    ("month", 60 * 60 * 24 * 30),
    ("day", 60 * 60 * 24),
    ("hour", 60 * 60),
    ("minute", 60),
    ("second", 1),
)


def format_ago(value: datetime | None, now: datetime | None = None) -> str:
    """'3 minutes ago' style age of a naive-UTC timestamp; '' for None."""
    if value is None:
        return ""
    now = now or datetime.utcnow()
    seconds = max(1, int((now - value).total_seconds()))
    for label, size in _AGO_UNITS:
        if seconds >= size or label == "second":
            n = seconds // size
            return f"{n} {label}{'s' if n != 1 else ''} ago"
    return ""

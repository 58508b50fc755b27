"""Coercion helpers for submitted form values."""


def clean(value):
    return (value or "").strip()


def to_float(value, default=0.0):
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return default


def to_int(value, default=0):
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError):
        return default


def to_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "on", "yes")


def split_list(value):
    """'wifi, tv ,,ac' -> ['wifi', 'tv', 'ac']"""
    if isinstance(value, (list, tuple)):
        return [clean(v) for v in value if clean(v)]
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())

"""
Ready-made setters for ``register(..., setter=...)``.

A setter receives the raw assigned value and returns what gets stored. The
coercing setters parse with pydantic's lax mode and store the raw value
unchanged when it cannot be parsed, leaving the complaint to validation.
"""
from datetime import date, datetime, time
from functools import lru_cache

from pydantic import TypeAdapter, ValidationError


@lru_cache(maxsize=None)
def _adapter(python_type):
    return TypeAdapter(python_type)


def coerce(python_type):
    def setter(raw):
        if raw is None or isinstance(raw, python_type) and type(raw) is not bool:
            return raw
        try:
            return _adapter(python_type).validate_python(raw)
        except ValidationError:
            return raw

    setter.__name__ = f"to_{python_type.__name__}"
    return setter


def to_date(raw):
    if isinstance(raw, datetime):
        return raw.date()
    if raw is None or isinstance(raw, date):
        return raw
    try:
        return _adapter(date).validate_python(raw)
    except ValidationError:
        return raw


to_datetime = coerce(datetime)
to_time = coerce(time)
to_int = coerce(int)
to_float = coerce(float)
to_bool = coerce(bool)


def strip(raw):
    return raw.strip() if isinstance(raw, str) else raw

"""Shared serialization utilities for sinks.

Money stays fixed-point across the JSON boundary: ``Decimal`` values are
written as strings, never floats.
"""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a dataclass to a dict, recursing into nested dataclasses.

    Uses ``fields()`` + ``getattr`` rather than ``asdict()`` so that
    back-references such as ``Loan.applicant`` are serialized once, without
    a deep copy of the whole object graph.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {_serialize_key(k): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def _serialize_key(key: Any) -> Any:
    if isinstance(key, (date, Enum)):
        return serialize_value(key)
    return key

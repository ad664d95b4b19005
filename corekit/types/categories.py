# corekit/types/categories.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Semantic type categories.

Membership is exact: a type belongs to a category only if it is listed, never
because it subclasses a listed type. That keeps bool out of the numeric sets
and user subclasses out of every set. Nullable forms (Optional[X], X | None)
are normalised before lookup so both spellings behave the same.
"""

from __future__ import annotations

import ctypes
import enum
import math
import types
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, FrozenSet, Iterable, Optional, Union, get_args, get_origin

_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)


def nullable(type_: Any) -> Any:
    """Return the nullable form of a type descriptor."""
    return Optional[type_]


def unwrap_nullable(type_: Any) -> Optional[Any]:
    """
    Return X for Optional[X] or X | None, otherwise None.
    """
    if get_origin(type_) not in _UNION_ORIGINS:
        return None
    args = get_args(type_)
    if len(args) != 2 or _NONE_TYPE not in args:
        return None
    return args[0] if args[1] is _NONE_TYPE else args[1]


def _with_nullable(members: Iterable[Any]) -> FrozenSet[Any]:
    members = list(members)
    return frozenset(members + [nullable(m) for m in members])


# ctypes aliases (c_int8, c_int64, ...) resolve to these classes, so the set
# covers every fixed width.
INTEGER_TYPES: FrozenSet[Any] = _with_nullable(
    [
        int,
        ctypes.c_byte,
        ctypes.c_ubyte,
        ctypes.c_short,
        ctypes.c_ushort,
        ctypes.c_int,
        ctypes.c_uint,
        ctypes.c_long,
        ctypes.c_ulong,
        ctypes.c_longlong,
        ctypes.c_ulonglong,
    ]
)

FLOAT_TYPES: FrozenSet[Any] = _with_nullable(
    [float, Decimal, ctypes.c_float, ctypes.c_double, ctypes.c_longdouble]
)

NUMERIC_TYPES: FrozenSet[Any] = INTEGER_TYPES | FLOAT_TYPES

BOOLEAN_TYPES: FrozenSet[Any] = _with_nullable([bool, ctypes.c_bool])

BASIC_TYPES: FrozenSet[Any] = (
    NUMERIC_TYPES
    | BOOLEAN_TYPES
    | frozenset([str, timedelta, enum.Enum])
    | _with_nullable([datetime, uuid.UUID, ctypes.c_char, ctypes.c_wchar])
)

NULL_VALUES = (None, float("nan"))


def _lookup_key(type_: Any) -> Any:
    inner = unwrap_nullable(type_)
    return type_ if inner is None else nullable(inner)


def _contains(category: FrozenSet[Any], type_: Any) -> bool:
    try:
        return _lookup_key(type_) in category
    except TypeError:
        # unhashable descriptors are never registered
        return False


def is_integer(type_: Any) -> bool:
    return _contains(INTEGER_TYPES, type_)


def is_float(type_: Any) -> bool:
    return _contains(FLOAT_TYPES, type_)


def is_numeric(type_: Any) -> bool:
    """True for integer, floating-point and decimal types, nullable or not."""
    return _contains(NUMERIC_TYPES, type_)


def is_boolean(type_: Any) -> bool:
    return _contains(BOOLEAN_TYPES, type_)


def is_basic(type_: Any) -> bool:
    """
    True for primitive-like types: numeric, boolean, text, timestamp, duration,
    identifier, character, and the enumeration marker enum.Enum itself.
    """
    return _contains(BASIC_TYPES, type_)


def is_null_value(value: Any) -> bool:
    """
    True for values the framework treats as null: None and NaN.
    """
    if value is None:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False

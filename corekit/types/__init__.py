"""
Types package for classification, instance creation and introspection.

Architecture:
- categories.py holds the immutable category sets
- introspection.py answers structural questions about classes and members
- registry.py ties both to the constructor cache behind TypeRegistry
"""

from .categories import (
    BASIC_TYPES,
    BOOLEAN_TYPES,
    FLOAT_TYPES,
    INTEGER_TYPES,
    NULL_VALUES,
    NUMERIC_TYPES,
    is_basic,
    is_boolean,
    is_float,
    is_integer,
    is_null_value,
    is_numeric,
)
from .introspection import MemberRef, get_base_types, get_collection_item_type, get_root_type, member_of
from .registry import DEFAULT_INTERFACE_MAP, TypeRegistry, default_registry

__all__ = [
    "BASIC_TYPES",
    "BOOLEAN_TYPES",
    "DEFAULT_INTERFACE_MAP",
    "FLOAT_TYPES",
    "INTEGER_TYPES",
    "MemberRef",
    "NULL_VALUES",
    "NUMERIC_TYPES",
    "TypeRegistry",
    "default_registry",
    "get_base_types",
    "get_collection_item_type",
    "get_root_type",
    "is_basic",
    "is_boolean",
    "is_float",
    "is_integer",
    "is_null_value",
    "is_numeric",
    "member_of",
]

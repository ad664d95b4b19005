# corekit/types/introspection.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Structural questions about types: ancestors, collection element types, and the
outermost class a member is declared in.
"""

from __future__ import annotations

import abc
import collections.abc
import ctypes
import functools
import inspect
import sys
import typing
from typing import Any, List, NamedTuple, Optional, get_args, get_origin

# Implicit roots every class reaches; the walk never reports them.
ROOT_TYPES = frozenset([object, abc.ABC, typing.Generic, typing.Protocol])

_CAPABILITY_MODULES = frozenset(["collections.abc", "_collections_abc"])

# Class hooks and interpreter-added namespace entries; never counted as members.
_CLASS_MACHINERY = frozenset(
    [
        "__subclasshook__",
        "__init_subclass__",
        "__class_getitem__",
        "__annotate__",
        "__annotate_func__",
        "_is_protocol",
        "_is_runtime_protocol",
    ]
)


class MemberRef(NamedTuple):
    """
    A field-like member identified by name and the class that declares it.
    Used for members that carry no owner reference of their own, such as
    dataclass fields or plain class attributes.
    """

    name: str
    declaring_type: type


def member_of(owner: type, name: str) -> MemberRef:
    """
    Build a MemberRef for 'name', attributed to the class in owner's MRO whose
    namespace (or annotations) actually declares it.

    :raises AttributeError: If no class in the MRO declares the name.
    """
    for klass in owner.__mro__:
        if name in vars(klass) or name in inspect.get_annotations(klass):
            return MemberRef(name, klass)
    raise AttributeError(f"{owner.__qualname__} has no member {name!r}")


def is_interface(type_: Any) -> bool:
    """
    True for classes that describe a capability rather than a base class.

    That is typing.Protocol classes, the collections.abc ABCs, and abstract
    classes that only declare abstract members and only derive from other
    interfaces. An abstract class carrying any implementation of its own, or
    sitting on a concrete base, is an ordinary base class.
    """
    if not isinstance(type_, type) or type_ in ROOT_TYPES:
        return False
    if getattr(type_, "_is_protocol", False):
        return True
    if not inspect.isabstract(type_):
        return False
    if type_.__module__ in _CAPABILITY_MODULES:
        return True
    if any(base not in ROOT_TYPES and not is_interface(base) for base in type_.__bases__):
        return False
    return not any(_implements(name, value) for name, value in vars(type_).items())


def _implements(name: str, value: Any) -> bool:
    """True when a class namespace entry is concrete behaviour or state."""
    if name in _CLASS_MACHINERY or getattr(value, "__isabstractmethod__", False):
        return False
    if name.startswith("__") and name.endswith("__"):
        # class metadata (__module__, __slots__, __abstractmethods__, ...)
        return inspect.isfunction(value) or isinstance(value, (classmethod, staticmethod, property))
    return not name.startswith("_abc_")


def primary_base(type_: type) -> Optional[type]:
    """
    The first listed base that is neither an interface nor a universal root,
    or None when the class has no such base.
    """
    for base in getattr(type_, "__bases__", ()):
        if base in ROOT_TYPES or is_interface(base):
            continue
        return base
    return None


def interfaces_of(type_: type) -> List[type]:
    """Interface classes in type_'s MRO, excluding type_ itself, in MRO order."""
    return [klass for klass in type_.__mro__[1:] if is_interface(klass)]


def get_base_types(type_: Any, include_self: bool = False, include_interfaces: bool = False) -> List[type]:
    """
    Collect the ancestors of a class along its primary base chain, nearest first.

    :param type_: The class to inspect.
    :param include_self: Append type_ itself at the end of the result.
    :param include_interfaces: Append the interfaces of the most distant
        ancestor found. Interfaces introduced only by type_ or a nearer
        ancestor are not included.
    :return: Ancestors, then interfaces, then type_; empty for non-classes.
    """
    if not isinstance(type_, type):
        return []

    base_types: List[type] = []
    current = type_
    parent = primary_base(current)
    while parent is not None:
        current = parent
        base_types.append(current)
        parent = primary_base(current)

    if include_interfaces:
        # TODO: interfaces come from the last class walked, not type_. Confirm
        # with consumers before switching to interfaces_of(type_).
        base_types.extend(interfaces_of(current))
    if include_self:
        base_types.append(type_)
    return base_types


def get_collection_item_type(type_: Any) -> Optional[Any]:
    """
    Infer the element type of a collection type.

    - ctypes arrays and homogeneous tuples (tuple[T, ...]) give their element type
    - mappings with at least two type arguments give the value type
    - any other parameterised generic gives its first type argument
    - everything else gives None
    """
    if type_ is None:
        return None

    if isinstance(type_, type) and issubclass(type_, ctypes.Array):
        return getattr(type_, "_type_", None)

    origin = get_origin(type_)
    args = get_args(type_)
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return args[0]

    if _is_mapping(origin) and len(args) > 1:
        return args[1]
    if args:
        return args[0]
    return None


def _is_mapping(origin: Any) -> bool:
    return isinstance(origin, type) and issubclass(origin, collections.abc.Mapping)


def get_root_type(member: Any) -> Optional[type]:
    """
    Return the outermost class enclosing the class that declares 'member'.

    Accepts functions and methods, property, functools.cached_property,
    classmethod, staticmethod, nested classes and MemberRef. Returns None when
    the member has no resolvable declaring class.
    """
    root = declaring_type(member)
    if root is None:
        return None
    enclosing = _enclosing_type(root)
    while enclosing is not None:
        root = enclosing
        enclosing = _enclosing_type(root)
    return root


def declaring_type(member: Any) -> Optional[type]:
    """The class that directly declares 'member', or None."""
    if isinstance(member, MemberRef):
        return member.declaring_type
    if isinstance(member, type):
        return _enclosing_type(member)
    return _enclosing_type(_unwrap_member(member))


def _unwrap_member(member: Any) -> Any:
    if isinstance(member, property):
        return member.fget
    if isinstance(member, functools.cached_property):
        return member.func
    if isinstance(member, (classmethod, staticmethod)):
        return member.__func__
    if inspect.ismethod(member):
        return member.__func__
    return member


def _enclosing_type(obj: Any) -> Optional[type]:
    """
    Resolve the class that lexically contains obj from its __qualname__.
    Objects defined inside a function body ("<locals>") cannot be reached.
    """
    qualname = getattr(obj, "__qualname__", None)
    module = sys.modules.get(getattr(obj, "__module__", None) or "")
    if not qualname or module is None:
        return None

    path = qualname.split(".")[:-1]
    if not path or "<locals>" in path:
        return None

    target: Any = module
    for part in path:
        target = getattr(target, part, None)
        if target is None:
            return None
    return target if isinstance(target, type) else None

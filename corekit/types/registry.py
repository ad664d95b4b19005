# corekit/types/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
TypeRegistry: a process-scoped catalog of what the framework knows about types.

It answers category questions, builds default instances through a cache of
zero-argument factories, and exposes the structural helpers from
corekit.types.introspection behind one injectable object.
"""

from __future__ import annotations

import collections.abc
import inspect
import logging
import threading
import types
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union, get_args, get_origin

from corekit.core.errors import InstantiationError, RegistrationError
from corekit.core.hooks import HookManager, HookProtocol
from corekit.runtime.concurrency import get_lock, with_lock
from corekit.types import categories, introspection

logger = logging.getLogger(__name__)

Factory = Callable[[], Any]

DEFAULT_INTERFACE_MAP: Mapping[Any, type] = MappingProxyType(
    {
        collections.abc.Iterable: list,
        collections.abc.Collection: list,
        collections.abc.Sequence: list,
        collections.abc.MutableSequence: list,
        collections.abc.Set: set,
        collections.abc.MutableSet: set,
        collections.abc.Mapping: dict,
        collections.abc.MutableMapping: dict,
    }
)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_UNION_ORIGINS = (Union, types.UnionType)


class TypeRegistry:
    """
    Classifies types, creates default instances, and answers structural queries.

    Thread safety: category sets are immutable; the interface map is replaced
    wholesale on registration so readers never see it half-updated; the
    constructor cache is read without locking and written first-writer-wins
    under a short lock. Two threads missing on the same type may both build a
    factory, but only one is stored and reported to hooks.
    """

    def __init__(
        self,
        interface_map: Optional[Mapping[Any, type]] = None,
        hooks: Optional[List[HookProtocol]] = None,
    ) -> None:
        """
        :param interface_map: Abstract-to-concrete substitutions used by
            create_instance. Defaults to DEFAULT_INTERFACE_MAP.
        :param hooks: Observers notified when factories are compiled or fail.
        :raises RegistrationError: If an interface_map entry would be rejected
            by register_interface.
        """
        if interface_map is None:
            self._interface_map: Dict[Any, type] = dict(DEFAULT_INTERFACE_MAP)
        else:
            self._interface_map = dict(_checked_mapping(k, v) for k, v in interface_map.items())
        self._ctor_cache: Dict[Any, Factory] = {}
        self._hooks = HookManager(hooks)
        self._lock = get_lock()

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------
    numeric_types = categories.NUMERIC_TYPES
    integer_types = categories.INTEGER_TYPES
    float_types = categories.FLOAT_TYPES
    boolean_types = categories.BOOLEAN_TYPES
    basic_types = categories.BASIC_TYPES

    def is_numeric(self, type_: Any) -> bool:
        return categories.is_numeric(type_)

    def is_integer(self, type_: Any) -> bool:
        return categories.is_integer(type_)

    def is_float(self, type_: Any) -> bool:
        return categories.is_float(type_)

    def is_boolean(self, type_: Any) -> bool:
        return categories.is_boolean(type_)

    def is_basic(self, type_: Any) -> bool:
        return categories.is_basic(type_)

    # ------------------------------------------------------------------
    # Interface map and explicit factories
    # ------------------------------------------------------------------
    @property
    def interface_map(self) -> Mapping[Any, type]:
        """Read-only view of the current interface-to-concrete substitutions."""
        return MappingProxyType(self._interface_map)

    def register_interface(self, interface: Any, concrete: Any) -> None:
        """
        Map an abstract type to a concrete type used when the abstract one is
        requested from create_instance.

        :raises RegistrationError: If the interface can be instantiated
            directly, or the concrete type has no zero-argument constructor.
        """
        interface, concrete = _checked_mapping(interface, concrete)
        with with_lock(self._lock):
            updated = dict(self._interface_map)
            updated[interface] = concrete
            self._interface_map = updated
        logger.debug("Registered interface mapping %r -> %r", interface, concrete)

    def register_factory(self, type_: Any, factory: Factory) -> None:
        """
        Supply the constructor for a concrete type explicitly, replacing any
        cached factory. Useful for types whose initializer takes arguments.

        :raises RegistrationError: If factory is not callable, type_ is not
            hashable, or type_ is substituted through the interface map and
            would never be looked up.
        """
        if not callable(factory):
            raise RegistrationError(f"Factory for {type_!r} must be callable")
        try:
            hash(type_)
        except TypeError as exc:
            raise RegistrationError(f"Cannot register a factory for {type_!r}: not hashable") from exc
        if self.resolve_concrete(type_) != type_:
            raise RegistrationError(f"{type_!r} is resolved through the interface map; register the concrete type")
        with with_lock(self._lock):
            self._ctor_cache[type_] = factory
        logger.debug("Registered explicit factory for %r", type_)

    def add_hook(self, hook: HookProtocol) -> None:
        self._hooks.register_hook(hook)

    # ------------------------------------------------------------------
    # Instance factory
    # ------------------------------------------------------------------
    def resolve_concrete(self, type_: Any) -> Any:
        """
        Substitute an interface (bare or parameterised) with its mapped
        concrete type, carrying over type arguments. Other types are returned
        unchanged.
        """
        origin = get_origin(type_)
        key = type_ if origin is None else origin
        try:
            concrete = self._interface_map.get(key)
        except TypeError:
            return type_
        if concrete is None:
            return type_

        args = get_args(type_)
        if not args:
            return concrete
        try:
            return concrete[args]
        except TypeError:
            return concrete

    def create_instance(self, type_: Any) -> Any:
        """
        Build a fresh default instance of type_.

        :raises InstantiationError: If the resolved type has no accessible
            zero-argument constructor.
        """
        concrete = self.resolve_concrete(type_)
        try:
            factory = self._ctor_cache.get(concrete)
        except TypeError as exc:
            raise InstantiationError(type_, "type descriptor is not hashable") from exc
        if factory is None:
            factory = self._compile(type_, concrete)
        return factory()

    def is_cached(self, type_: Any) -> bool:
        try:
            return self.resolve_concrete(type_) in self._ctor_cache
        except TypeError:
            return False

    @property
    def cache_size(self) -> int:
        return len(self._ctor_cache)

    def _compile(self, requested: Any, concrete: Any) -> Factory:
        try:
            built = _build_factory(concrete)
        except InstantiationError as exc:
            logger.debug("Instantiation of %r failed: %s", requested, exc.reason)
            self._hooks.execute_on_error(requested, exc)
            raise

        with with_lock(self._lock):
            stored = self._ctor_cache.setdefault(concrete, built)
        if stored is built:
            logger.debug("Compiled zero-argument factory for %r", concrete)
            self._hooks.execute_on_compile(concrete)
        return stored

    # ------------------------------------------------------------------
    # Structural introspection
    # ------------------------------------------------------------------
    def get_base_types(self, type_: Any, include_self: bool = False, include_interfaces: bool = False) -> List[type]:
        return introspection.get_base_types(type_, include_self, include_interfaces)

    def get_collection_item_type(self, type_: Any) -> Optional[Any]:
        return introspection.get_collection_item_type(type_)

    def get_root_type(self, member: Any) -> Optional[type]:
        return introspection.get_root_type(member)


def _checked_mapping(interface: Any, concrete: Any) -> Tuple[Any, Any]:
    """
    Normalise an interface-map entry to its generic origins and check that the
    key cannot be built directly while the value can.
    """
    interface = get_origin(interface) or interface
    concrete = get_origin(concrete) or concrete
    try:
        hash(interface)
    except TypeError as exc:
        raise RegistrationError(f"{interface!r} is not hashable and cannot be an interface key") from exc
    if _instantiation_problem(interface) is None:
        raise RegistrationError(f"{interface!r} is directly instantiable and cannot be an interface key")
    try:
        _build_factory(concrete)
    except InstantiationError as exc:
        raise RegistrationError(f"Cannot map {interface!r} to {concrete!r}: {exc.reason}") from exc
    return interface, concrete


def _instantiation_problem(target: Any) -> Optional[str]:
    """
    Return why target cannot be called with no arguments, or None if it can
    (or if that can only be decided by calling it).
    """
    if not isinstance(target, type):
        return "not a class"
    if getattr(target, "_is_protocol", False):
        return "protocol has no interface mapping"
    if inspect.isabstract(target):
        return "class is abstract"
    required = _required_parameters(target)
    if required:
        return f"constructor requires arguments: {', '.join(required)}"
    return None


def _required_parameters(target: type) -> Optional[List[str]]:
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        return None
    return [
        name
        for name, param in signature.parameters.items()
        if param.default is param.empty and param.kind not in _VARIADIC
    ]


def _build_factory(concrete: Any) -> Factory:
    """
    Synthesize the zero-argument constructor for a concrete type descriptor.
    Parameterised generics (list[int], typing.List[int]) construct their origin.
    """
    origin = get_origin(concrete)
    if origin in _UNION_ORIGINS:
        raise InstantiationError(concrete, "not a class")
    target = origin or concrete
    problem = _instantiation_problem(target)
    if problem is not None:
        raise InstantiationError(concrete, problem)

    if _required_parameters(target) is None:
        # builtins and extension types without an introspectable signature
        try:
            target()
        except TypeError as exc:
            raise InstantiationError(concrete, str(exc)) from exc

    def factory() -> Any:
        return target()

    factory.__qualname__ = f"create_{getattr(target, '__name__', 'instance')}"
    return factory


_default_registry: Optional[TypeRegistry] = None
_default_registry_lock = threading.Lock()


def default_registry() -> TypeRegistry:
    """
    Return the process-wide TypeRegistry, creating it on first use.
    """
    global _default_registry
    if _default_registry is None:
        with with_lock(_default_registry_lock):
            if _default_registry is None:
                _default_registry = TypeRegistry()
                logger.debug("Created process-wide type registry")
    return _default_registry

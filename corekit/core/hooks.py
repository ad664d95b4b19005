# corekit/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class HookProtocol(Protocol):
    """
    Observer of the type registry's factory cache. Hooks may implement any
    subset of these methods; missing ones are skipped.
    """

    def on_compile(self, type_: Any) -> None:
        """Called once a zero-argument factory for type_ has been stored in the cache."""
        ...

    def on_error(self, type_: Any, error: Exception) -> None:
        """Called before an InstantiationError for type_ is raised to the caller."""
        ...


class HookManager:
    """
    Manages the registration and execution of hooks that listen to registry
    events (on_compile, on_error). Users can attach counters, logging or other
    instrumentation without altering the factory logic.
    """

    def __init__(self, hooks: Optional[List[HookProtocol]] = None) -> None:
        self._hooks: List[HookProtocol] = list(hooks or [])

    def register_hook(self, hook: HookProtocol) -> None:
        """
        Add a new hook to the manager's list of hooks.

        :param hook: An object implementing some of the HookProtocol methods.
        """
        self._hooks.append(hook)

    def execute_on_compile(self, type_: Any) -> None:
        _HookInvoker(self._hooks).invoke_on_compile(type_)

    def execute_on_error(self, type_: Any, error: Exception) -> None:
        _HookInvoker(self._hooks).invoke_on_error(type_, error)

    def __len__(self) -> int:
        return len(self._hooks)


class _HookInvoker:
    """
    Internal helper that iterates through a snapshot of hooks in registration
    order and calls whichever lifecycle methods each one provides.
    """

    def __init__(self, hooks: List[HookProtocol]) -> None:
        self._hooks = list(hooks)

    def invoke_on_compile(self, type_: Any) -> None:
        for hook in self._hooks:
            callback = getattr(hook, "on_compile", None)
            if callback is not None:
                callback(type_)

    def invoke_on_error(self, type_: Any, error: Exception) -> None:
        for hook in self._hooks:
            callback = getattr(hook, "on_error", None)
            if callback is not None:
                callback(type_, error)

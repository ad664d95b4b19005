# corekit/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any


class CoreKitError(Exception):
    """
    Base exception class for errors raised by the runtime type and clock utilities.
    """


class InstantiationError(CoreKitError):
    """
    Raised when a resolved type cannot be constructed without arguments: it is
    abstract, a protocol with no interface mapping, not a class at all, or its
    constructor requires arguments.
    """

    def __init__(self, type_: Any, reason: str) -> None:
        self.type = type_
        self.reason = reason
        super().__init__(f"Cannot create an instance of {_describe(type_)}: {reason}")


class RegistrationError(CoreKitError):
    """
    Raised when an interface mapping or explicit factory cannot be registered.
    """


def _describe(type_: Any) -> str:
    if isinstance(type_, type):
        return f"{type_.__module__}.{type_.__qualname__}"
    return repr(type_)

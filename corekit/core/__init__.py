"""
Core package: error hierarchy and instrumentation hooks shared by the services.
"""

from .errors import CoreKitError, InstantiationError, RegistrationError
from .hooks import HookManager, HookProtocol

__all__ = [
    "CoreKitError",
    "InstantiationError",
    "RegistrationError",
    "HookManager",
    "HookProtocol",
]

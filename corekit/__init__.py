"""corekit: runtime type and clock utilities

Low-level, process-wide services consumed by the rest of the framework.

Responsibilities:
    - Strictly increasing high-resolution timestamps across threads
    - Semantic classification of types (numeric, boolean, basic)
    - Cached zero-argument instance factories with interface substitution
    - Structural introspection (base types, collection item types, root types)

Interactions:
    - Client code through the ClockService and TypeRegistry services
    - Python type system for runtime introspection
    - Operating system clock for wall-time readings

Cross-cutting Concerns:
    Thread Safety:
        - ClockService advances its state with a compare-and-swap retry loop
        - TypeRegistry reads its caches without locking and publishes
          first-writer-wins

    Error Handling:
        - Structured error hierarchy rooted at CoreKitError
        - Queries return None or False for unknown input; only instance
          creation and registration raise

    Logging:
        - Standard library logging under the "corekit" namespace
        - No handlers installed by the library
"""

from corekit.core.errors import CoreKitError, InstantiationError, RegistrationError
from corekit.runtime.clock import ClockService, default_clock
from corekit.types.registry import TypeRegistry, default_registry

__version__ = "0.1.0"

__all__ = [
    "ClockService",
    "CoreKitError",
    "InstantiationError",
    "RegistrationError",
    "TypeRegistry",
    "default_clock",
    "default_registry",
]

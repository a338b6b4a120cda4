"""Small dependency injection container.

This package wires class constructors together: it creates shared or fresh
instances of classes, injects their dependencies positionally and lets
interfaces be mapped to implementations at configuration time.

Exports:
- `Container`: The injector (`get`, `create`, `configure`, `set_implementation`, `clear`).
- `ConfigurationError`: Raised when configuration would make the container inconsistent.
- `Value`: Marks a dependency to be injected as-is instead of resolved.
- `DEFAULT_DEPENDENCIES_PROPERTY_NAME`: Default name of the class attribute
  holding a class's own default dependencies (`"dependencies"`).
"""

from ._container import DEFAULT_DEPENDENCIES_PROPERTY_NAME, ConfigurationError, Container, Value


__all__ = ["DEFAULT_DEPENDENCIES_PROPERTY_NAME", "ConfigurationError", "Container", "Value"]

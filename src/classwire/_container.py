from __future__ import annotations

import inspect
import logging
import threading
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    TypeVar,
    overload,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    T = TypeVar("T")

    Constructor = type[T] | Callable[..., T]


DEFAULT_DEPENDENCIES_PROPERTY_NAME = "dependencies"


class ConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class Value:
    """Literal dependency: injected as-is, even when it is a class or a function."""

    value: object


class Container:
    """Dependency injector with interfaces, configured and self-declared dependencies.

    - `get` returns the shared instance of a class or interface
    - `create` returns a new instance, optionally with explicit dependencies
    - `configure` sets the default dependencies of a class (once, before first use)
    - `set_implementation` maps an interface to a class or another interface
    - `clear` drops the shared instances.
    """

    def __init__(self) -> None:
        self._dependencies_property_name = DEFAULT_DEPENDENCIES_PROPERTY_NAME
        self._dependencies_property_name_changed = False
        self._dependencies: dict[Any, tuple[object, ...]] = {}
        self._implementations: dict[Any, Any] = {}
        self._instances: dict[Any, object] = {}
        self._instantiated: set[Any] = set()
        self._lock = threading.RLock()

    @property
    def dependencies_property_name(self) -> str:
        """Name of the class attribute holding a class's own default dependencies."""
        return self._dependencies_property_name

    @dependencies_property_name.setter
    def dependencies_property_name(self, new_name: str) -> None:
        """Change the attribute name.

        Allowed only once, and only before this container created any instance.
        Setting the current name again is a no-op.
        """
        with self._lock:
            if new_name == self._dependencies_property_name:
                return

            if self._dependencies_property_name_changed:
                msg = (
                    "The dependencies property name has already been changed once on this container "
                    f"(currently {self._dependencies_property_name!r}, attempted {new_name!r})."
                )
                raise ConfigurationError(msg)

            if self._instantiated:
                msg = "The dependencies property name cannot be changed after this container has created instances."
                raise ConfigurationError(msg)

            self._dependencies_property_name = new_name
            self._dependencies_property_name_changed = True

    @overload
    def get(self, cls: type[T]) -> T: ...

    @overload
    def get(self, cls: Callable[..., T]) -> T: ...

    def get(self, cls: Constructor[T]) -> T:
        """Return the shared instance of a class or interface.

        The instance is created on first request with the configured or
        self-declared dependencies of the implementation and reused until
        `clear()` is called. Interfaces share the instance of the class they
        resolve to.
        """
        with self._lock:
            impl = self._get_implementation(cls)

            if impl in self._instances:
                return self._instances[impl]

            instance = self._instantiate(cls, impl, ())
            self._instances[impl] = instance
            logger.debug("Created shared instance of %s", _name(impl))
            return instance

    @overload
    def create(self, cls: type[T], *dependencies: object) -> T: ...

    @overload
    def create(self, cls: Callable[..., T], *dependencies: object) -> T: ...

    def create(self, cls: Constructor[T], *dependencies: object) -> T:
        """Create a new instance of a class or interface.

        Example:
          container.create(Repo)  # configured or self-declared dependencies
          container.create(Repo, Database, "users")  # shared Database, literal "users"

        Classes and functions among `dependencies` are replaced by their shared
        instances. Wrap them in `Value` to pass them as-is.
        """
        with self._lock:
            return self._instantiate(cls, self._get_implementation(cls), dependencies)

    def configure(self, cls: Constructor[Any], *dependencies: object) -> None:
        """Set the default dependencies of a class.

        Configured dependencies win over the ones the class declares itself.
        They can be set only once per class, never for an interface, and not
        after the container has created an instance of the class.
        """
        with self._lock:
            if cls in self._dependencies:
                msg = f"The {_name(cls)} class has already been configured in this container."
                raise ConfigurationError(msg)

            if cls in self._implementations:
                msg = f"The {_name(cls)} class is already registered as an interface in this container."
                raise ConfigurationError(msg)

            if cls in self._instantiated:
                msg = (
                    f"The {_name(cls)} class cannot have its dependencies configured "
                    "since an instance of it has already been created."
                )
                raise ConfigurationError(msg)

            self._dependencies[cls] = dependencies
            logger.debug("Configured %d dependencies for %s", len(dependencies), _name(cls))

    def set_implementation(self, interface: Constructor[Any], impl: Constructor[Any]) -> None:
        """Map an interface to its implementation.

        `impl` may be another interface; the chain is followed on resolution.
        No check is made that `impl` actually implements `interface`.
        """
        with self._lock:
            if interface in self._implementations:
                msg = (
                    f"The implementation of the {_name(interface)} interface is already set to "
                    f"{_name(self._implementations[interface])}."
                )
                raise ConfigurationError(msg)

            if interface in self._dependencies:
                msg = (
                    f"The {_name(interface)} class is already configured with dependencies in this "
                    "container, thus it cannot be used as an interface."
                )
                raise ConfigurationError(msg)

            self._implementations[interface] = impl
            logger.debug("Set %s as implementation of %s", _name(impl), _name(interface))

    def clear(self) -> None:
        """Drop all shared instances created by `get`."""
        with self._lock:
            self._instances.clear()

    def _get_implementation(self, cls: Constructor[T]) -> Constructor[T]:
        if cls not in self._implementations:
            return cls

        return self._get_implementation(self._implementations[cls])

    def _instantiate(self, requested: Constructor[Any], impl: Constructor[T], dependencies: Iterable[object]) -> T:
        """Call `impl` with explicit, else configured, else declared dependencies, else none (with a warning)."""
        dependencies = tuple(dependencies)

        if not dependencies:
            dependencies = self._dependencies.get(impl, ())

        if not dependencies:
            declared = self._get_declared_dependencies(impl)
            if declared is not None:
                dependencies = tuple(declared)
            else:
                logger.warning(
                    "No dependencies were provided for %s (implemented by %s), none were configured "
                    "for the implementation, and it declares none in its '%s' attribute. "
                    "It will be called with no arguments.",
                    _name(requested),
                    _name(impl),
                    self._dependencies_property_name,
                )

        args = [self._resolve_dependency(dependency) for dependency in dependencies]
        instance = impl(*args)

        # marked even for explicit dependencies so a later configure() fails early
        self._instantiated.add(impl)

        return instance

    def _resolve_dependency(self, dependency: object) -> object:
        """Unwrap `Value`, replace classes and functions by their shared instance."""
        if isinstance(dependency, Value):
            return dependency.value

        if _is_constructor(dependency):
            return self.get(dependency)

        return dependency

    def _get_declared_dependencies(self, impl: Constructor[Any]) -> Iterable[object] | None:
        """Return the dependencies `impl` declares on itself, or None.

        Only data attributes and static/class methods defined directly on `impl` count.
        Instance methods, properties and inherited attributes are ignored.
        """
        name = self._dependencies_property_name
        try:
            own = vars(impl)
        except TypeError:
            # builtins without a __dict__
            return None

        if name not in own:
            return None

        declared = own[name]
        if isinstance(declared, (staticmethod, classmethod)):
            return getattr(impl, name)()

        if hasattr(declared, "__get__"):
            # instance methods, properties
            return None

        return declared


def _is_constructor(dependency: object) -> bool:
    return inspect.isclass(dependency) or inspect.isfunction(dependency)


def _name(cls: object) -> str:
    return getattr(cls, "__qualname__", None) or repr(cls)

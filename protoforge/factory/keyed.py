"""
Keyed factories: resolve an opaque key to a freshly constructed product.

Two structures are provided:

- KeyedFactory: centralized lookup from key to construction capability.
- Creator: delegated structure where each subclass returns one fixed variant
  and the shared operate() helper works with any of them.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Type, Union

from protoforge.core.metadata import ObjectMetadata
from protoforge.exceptions import InvalidOperationError, RegistrationError, UnknownKeyError

logger = logging.getLogger(__name__)


class Creator(ABC):
    """Delegated factory base.

    Subclasses implement factory_method() to return exactly one fixed variant.
    operate() is shared by every subclass: it asks the subclass for a product
    and invokes the product's capability contract on the payload. Adding a
    variant means adding a subclass, nothing here changes.

    Examples:
        >>> class SmsCreator(Creator):
        ...     def factory_method(self, **kwargs):
        ...         return SmsNotification(**kwargs)
        >>> SmsCreator().operate("Hello")
    """

    @abstractmethod
    def factory_method(self, **kwargs: Any) -> Any:
        """Create the product variant for this creator."""

    def create(self, **kwargs: Any) -> Any:
        """Create a product (alias used by KeyedFactory)."""
        return self.factory_method(**kwargs)

    def operate(self, payload: Any, **kwargs: Any) -> Any:
        """Create a product and perform its action on payload.

        Raises:
            InvalidOperationError: If the product does not implement perform().
        """
        product = self.factory_method(**kwargs)
        perform = getattr(product, "perform", None)
        if not callable(perform):
            raise InvalidOperationError(
                f"{type(self).__name__} produced {type(product).__name__}, "
                "which does not implement perform()"
            )
        return perform(payload)


class KeyedFactory:
    """Centralized factory mapping keys to construction capabilities.

    A binding is one of:
    - a class: instantiated with the create() keyword arguments
    - a Creator instance or subclass: its create() is called
    - any other callable: called with the create() keyword arguments

    Rebinding a key replaces the previous binding. All access is guarded by a
    re-entrant lock, so dynamic registration is safe alongside create().

    Examples:
        >>> factory = KeyedFactory(name="notifications")
        >>> factory.register("email", EmailNotification, description="Sends email")
        >>> factory.register("sms", SmsCreator())
        >>> factory.create("email").perform("Hello")
    """

    _instance: Optional["KeyedFactory"] = None
    _lock = threading.Lock()

    def __init__(self, name: str = "factory"):
        self.name = name
        self._registry: Dict[Hashable, Dict[str, Any]] = {}
        self._registry_lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> "KeyedFactory":
        """Get the process-wide shared factory, creating it on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(name="global")
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared factory (intended for tests)."""
        with cls._lock:
            cls._instance = None

    def register(
        self,
        key: Hashable,
        builder: Union[Type, Creator, Callable[..., Any]],
        description: str = "",
        metadata: Optional[ObjectMetadata] = None,
    ) -> None:
        """Bind a key to a construction capability.

        Args:
            key: Unique key (string or enum member).
            builder: Class, Creator (instance or subclass) or callable producing the product.
            description: Human-readable description.
            metadata: Optional ObjectMetadata. If provided, overrides description.

        Raises:
            RegistrationError: If key is empty or builder is not usable.
        """
        if key is None or key == "":
            raise RegistrationError("Factory key cannot be empty")
        if builder is None:
            raise RegistrationError("Builder cannot be None")

        if isinstance(builder, type) and issubclass(builder, Creator):
            builder = builder()
            kind = "creator"
        elif isinstance(builder, type):
            kind = "class"
        elif isinstance(builder, Creator):
            kind = "creator"
        elif callable(builder):
            kind = "callable"
        else:
            raise RegistrationError(
                f"Builder for '{key}' must be a class, Creator or callable, "
                f"got {type(builder).__name__}"
            )

        entry = {
            "type": kind,
            "builder": builder,
            "metadata": metadata
            or ObjectMetadata.for_object(str(key), builder, description),
        }

        with self._registry_lock:
            if key in self._registry:
                logger.debug("%s: replacing binding for key %r", self.name, key)
            self._registry[key] = entry
        logger.debug("%s: registered %s binding for key %r", self.name, kind, key)

    def create(self, key: Hashable, **kwargs: Any) -> Any:
        """Create a product for key.

        Args:
            key: Registered key.
            **kwargs: Passed through to the bound construction capability.

        Returns:
            New product instance.

        Raises:
            UnknownKeyError: If nothing is bound to key.
        """
        with self._registry_lock:
            entry = self._registry.get(key)
            if entry is None:
                raise UnknownKeyError(key, self._registry.keys(), registry=self.name)
            kind = entry["type"]
            builder = entry["builder"]

        if kind == "creator":
            return builder.create(**kwargs)
        return builder(**kwargs)

    def unregister(self, key: Hashable) -> None:
        """Remove the binding for key.

        Raises:
            UnknownKeyError: If nothing is bound to key.
        """
        with self._registry_lock:
            if key not in self._registry:
                raise UnknownKeyError(key, self._registry.keys(), registry=self.name)
            del self._registry[key]

    def clear(self) -> None:
        """Remove all bindings."""
        with self._registry_lock:
            self._registry.clear()

    def keys(self) -> List[Hashable]:
        """Return registered keys in registration order."""
        with self._registry_lock:
            return list(self._registry.keys())

    def __contains__(self, key: object) -> bool:
        with self._registry_lock:
            return key in self._registry

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._registry)

    def list_available(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        """List all bindings.

        Args:
            category: Optional category filter.

        Returns:
            List of dictionaries with binding information.
        """
        with self._registry_lock:
            results = []
            for key, entry in self._registry.items():
                metadata = entry["metadata"]
                if not metadata.matches(category):
                    continue
                info = metadata.to_dict()
                info["name"] = str(key)
                info["type"] = entry["type"]
                results.append(info)
            return results

    def get_metadata(self, key: Hashable) -> Optional[ObjectMetadata]:
        """Get metadata for a binding, or None if key is not registered."""
        with self._registry_lock:
            entry = self._registry.get(key)
            return entry["metadata"] if entry else None


def variant_table(
    variants: Mapping[Hashable, Callable[..., Any]], name: str = "variants"
) -> KeyedFactory:
    """Build a KeyedFactory from a tag -> constructor mapping.

    Lets callers dispatch on a variant tag with plain closures instead of a
    class hierarchy.

    Example:
        >>> shapes = variant_table({"circle": lambda r=1: Circle(r), "square": Square})
        >>> shapes.create("circle", r=2)
    """
    factory = KeyedFactory(name=name)
    for tag, constructor in variants.items():
        factory.register(tag, constructor)
    return factory

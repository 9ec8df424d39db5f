"""
Prototype registry: produce new products by cloning registered templates.
"""

import logging
import threading
from typing import Any, Dict, Hashable, List, Optional

from protoforge.core.metadata import ObjectMetadata
from protoforge.exceptions import InvalidOperationError, RegistrationError, UnknownKeyError
from protoforge.factory.cloning import apply_overrides, clone_product

logger = logging.getLogger(__name__)


class PrototypeRegistry:
    """Registry of named template instances.

    The registry exclusively owns its templates: register() stores a private
    copy and create() only ever hands out clones, never the template itself.
    Registering the same key again replaces the template.

    Thread-safe: register() and create() on the same key are serialized by a
    re-entrant lock, so a caller never sees a partially replaced template.

    Examples:
        >>> registry = PrototypeRegistry.get_instance()
        >>> registry.register("report", Report("Monthly Report", "Finance Team"))
        >>> report = registry.create("report")
        >>> report.describe()
        'Report: "Monthly Report" by Finance Team'
        >>> draft = registry.create("report", title="Draft")
    """

    _instance: Optional["PrototypeRegistry"] = None
    _lock = threading.Lock()

    def __init__(self, name: str = "prototypes"):
        self.name = name
        self._registry: Dict[Hashable, Dict[str, Any]] = {}
        self._registry_lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> "PrototypeRegistry":
        """Get the process-wide shared registry, creating it on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(name="global prototypes")
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared registry (intended for tests)."""
        with cls._lock:
            cls._instance = None

    def register(
        self,
        key: Hashable,
        template: Any,
        description: str = "",
        metadata: Optional[ObjectMetadata] = None,
    ) -> None:
        """Register a template under key, replacing any previous one.

        Args:
            key: Unique key.
            template: Product instance to copy from. The registry keeps its
                own copy, so later changes to the caller's object are not seen.
            description: Human-readable description.
            metadata: Optional ObjectMetadata. If provided, overrides description.

        Raises:
            RegistrationError: If key is empty, template is None or a class.
            InvalidOperationError: If the template cannot be cloned.
        """
        if key is None or key == "":
            raise RegistrationError("Prototype key cannot be empty")
        if template is None:
            raise RegistrationError("Template cannot be None")
        if isinstance(template, type):
            raise RegistrationError(
                f"Template for '{key}' must be an instance, got class {template.__name__}"
            )

        # Copy outside the lock; a failing clone leaves the registry untouched.
        owned = clone_product(template)
        entry = {
            "template": owned,
            "metadata": metadata
            or ObjectMetadata.for_object(str(key), type(template), description),
        }

        with self._registry_lock:
            if key in self._registry:
                logger.debug("%s: replacing template for key %r", self.name, key)
            self._registry[key] = entry
        logger.debug("%s: registered %s template for key %r", self.name, type(owned).__name__, key)

    def create(self, key: Hashable, **overrides: Any) -> Any:
        """Create an independent copy of the template registered under key.

        Args:
            key: Registered key.
            **overrides: Attribute values to set on the copy only.

        Returns:
            New product, value-equal to the template apart from overrides.

        Raises:
            UnknownKeyError: If no template is registered under key.
            InvalidOperationError: If cloning fails or an override is invalid.
        """
        with self._registry_lock:
            entry = self._registry.get(key)
            if entry is None:
                raise UnknownKeyError(key, self._registry.keys(), registry=self.name)
            product = clone_product(entry["template"])

        if overrides:
            apply_overrides(product, overrides)
        return product

    def unregister(self, key: Hashable) -> None:
        """Remove the template registered under key.

        Raises:
            UnknownKeyError: If no template is registered under key.
        """
        with self._registry_lock:
            if key not in self._registry:
                raise UnknownKeyError(key, self._registry.keys(), registry=self.name)
            del self._registry[key]

    def clear(self) -> None:
        """Remove all templates."""
        with self._registry_lock:
            self._registry.clear()

    def keys(self) -> List[Hashable]:
        with self._registry_lock:
            return list(self._registry.keys())

    def __contains__(self, key: object) -> bool:
        with self._registry_lock:
            return key in self._registry

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._registry)

    def list_available(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        """List all registered templates.

        Args:
            category: Optional category filter.

        Returns:
            List of dictionaries with template information.
        """
        with self._registry_lock:
            results = []
            for key, entry in self._registry.items():
                metadata = entry["metadata"]
                if not metadata.matches(category):
                    continue
                info = metadata.to_dict()
                info["name"] = str(key)
                info["type"] = type(entry["template"]).__name__
                info["summary"] = _summary(entry["template"])
                results.append(info)
            return results

    def get_metadata(self, key: Hashable) -> Optional[ObjectMetadata]:
        """Get metadata for a template, or None if key is not registered."""
        with self._registry_lock:
            entry = self._registry.get(key)
            return entry["metadata"] if entry else None


def _summary(template: Any) -> str:
    describe = getattr(template, "describe", None)
    if not callable(describe):
        return ""
    try:
        return describe()
    except InvalidOperationError:
        # Incomplete template.
        return ""

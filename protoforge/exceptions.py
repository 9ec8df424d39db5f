"""
Exception hierarchy for protoforge.

Every error raised by the construction subsystem derives from ProtoforgeError.
They all signal a caller programming error (bad key, wrong call order) and are
never retried by the library.
"""

from typing import Any, Iterable, Optional


class ProtoforgeError(Exception):
    """Base class for all protoforge errors."""


class RegistrationError(ProtoforgeError, ValueError):
    """Raised when a registration call receives invalid input.

    The registry is left untouched when this is raised.
    """


class UnknownKeyError(ProtoforgeError, LookupError):
    """Raised when a factory or prototype registry has nothing bound to a key.

    Attributes:
        key: The key that was looked up.
        available: Keys that were registered at the time of the lookup.
    """

    kind = "Key"

    def __init__(self, key: Any, available: Optional[Iterable[Any]] = None, registry: str = ""):
        self.key = key
        self.available = sorted(str(k) for k in (available or ()))
        self.registry = registry
        where = f" in {registry}" if registry else ""
        super().__init__(f"{self.kind} '{key}' not found{where}. Available: {self.available}")


class UnknownFamilyError(UnknownKeyError):
    """Raised when a family factory has no kit bound to a family key."""

    kind = "Family"


class InvalidOperationError(ProtoforgeError):
    """Raised when a capability contract is invoked on a malformed or incomplete product."""


class BuilderFinalizedError(InvalidOperationError):
    """Raised by a strict builder when it is used again after build()."""


class ConfigurationError(ProtoforgeError):
    """Raised when a settings or bootstrap file cannot be read or is invalid."""

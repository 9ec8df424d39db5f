"""Protocol-based capability contracts.

Products are opaque to the factories that create them. Consumers only rely on
the operations below, so any class with the right methods satisfies a contract
regardless of inheritance. Never downcast a product to its concrete variant.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Performer(Protocol):
    """Something that carries out its variant-specific action on a payload.

    Implementations raise InvalidOperationError for malformed input instead of
    failing with an arbitrary exception.
    """

    def perform(self, payload: Any) -> Any:
        """Perform the action for this variant."""
        ...


@runtime_checkable
class Renderable(Protocol):
    """A family role product that can produce its presentation."""

    def render(self) -> str:
        """Return a textual rendering."""
        ...


@runtime_checkable
class Cloneable(Protocol[T_co]):
    """A product that can produce an independent deep copy of itself.

    The copy must not share any owned mutable state (lists, dicts, nested
    products) with the original.
    """

    def clone(self) -> T_co:
        """Return a deep, independent copy."""
        ...

    def describe(self) -> str:
        """Return a one-line human-readable summary."""
        ...

"""
Step-wise construction: builders and directors.

A Builder accumulates configuration through chained setter calls and
materializes a product in build(). A Director replays one fixed sequence of
setter calls for a common recipe, taking only the variable leaf data.

Builder lifecycle::

    EMPTY --setter--> CONFIGURING --setter--> CONFIGURING
      |                    |
      +------build()-------+----> BUILT (terminal)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from protoforge.exceptions import BuilderFinalizedError, InvalidOperationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BuildStatus(Enum):
    """Builder state."""

    EMPTY = "empty"
    CONFIGURING = "configuring"
    BUILT = "built"


class Builder(ABC, Generic[T]):
    """Base class for fluent builders.

    Subclasses write one method per configuration field on top of _set(),
    which returns self for chaining. The last call for a field wins. build()
    hands the collected fields to _assemble() exactly once.

    Args:
        strict: When True, using the builder after build() raises
            BuilderFinalizedError. When False the call is ignored with a
            warning and build() returns the product already built. Defaults
            to the strict_builders setting.
    """

    def __init__(self, strict: Optional[bool] = None) -> None:
        if strict is None:
            from protoforge.config import get_settings

            strict = get_settings().strict_builders
        self.strict = strict
        self._fields: Dict[str, Any] = {}
        self._status = BuildStatus.EMPTY
        self._product: Optional[T] = None

    @property
    def status(self) -> BuildStatus:
        return self._status

    @property
    def is_built(self) -> bool:
        return self._status is BuildStatus.BUILT

    def configured_fields(self) -> Dict[str, Any]:
        """Return a shallow copy of the fields set so far."""
        return dict(self._fields)

    def _check_open(self, action: str) -> bool:
        if self._status is not BuildStatus.BUILT:
            return True
        message = f"{type(self).__name__} already built; cannot {action}. Use a new builder."
        if self.strict:
            raise BuilderFinalizedError(message)
        logger.warning(message)
        return False

    def _set(self, field: str, value: Any) -> "Builder[T]":
        """Record value for field and return self."""
        if self._check_open(f"set '{field}'"):
            self._fields[field] = value
            self._status = BuildStatus.CONFIGURING
        return self

    def _set_item(self, field: str, key: str, value: Any) -> "Builder[T]":
        """Record value under key inside a mapping-valued field and return self."""
        if self._check_open(f"set '{field}[{key}]'"):
            self._fields.setdefault(field, {})[key] = value
            self._status = BuildStatus.CONFIGURING
        return self

    def build(self) -> T:
        """Materialize the product.

        Raises:
            BuilderFinalizedError: In strict mode, if build() was already called.
            InvalidOperationError: If the configured fields do not form a
                valid product (raised by _assemble()). The builder stays open
                so the caller can fix the configuration.
        """
        if not self._check_open("build again"):
            return self._product  # type: ignore[return-value]
        product = self._assemble(dict(self._fields))
        self._product = product
        self._status = BuildStatus.BUILT
        self._fields = {}
        return product

    @abstractmethod
    def _assemble(self, fields: Dict[str, Any]) -> T:
        """Turn the collected fields into a finished product."""


class Director(ABC, Generic[T]):
    """Encapsulates one reusable recipe of builder calls.

    Subclasses implement _steps() to drive the builder; construct() finishes
    with build().
    """

    def construct(self, builder: Builder[T], **leaf: Any) -> T:
        """Drive builder through the recipe and return the built product."""
        self._steps(builder, **leaf)
        return builder.build()

    @abstractmethod
    def _steps(self, builder: Builder[T], **leaf: Any) -> None:
        """Apply the recipe's setter calls to builder."""


class Leaf:
    """Placeholder in a RecipeDirector step, filled from construct() leaf data."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"Leaf({self.name!r})"


Step = Tuple[Any, ...]


class RecipeDirector(Director[T]):
    """Data-driven director.

    Each step is ``(setter_name, *args)``; any argument may be a Leaf that is
    resolved from the keyword arguments of construct(). All leaves are checked
    before the builder is touched.

    Example:
        >>> post_json = RecipeDirector([
        ...     ("method", "POST"),
        ...     ("url", Leaf("url")),
        ...     ("header", "Content-Type", "application/json"),
        ...     ("body", Leaf("body")),
        ... ], name="post_json")
        >>> request = post_json.construct(HttpRequestBuilder(), url="https://x", body="{}")
    """

    def __init__(self, steps: Iterable[Step], name: str = "recipe"):
        self.name = name
        self.steps: List[Step] = [tuple(step) for step in steps]
        for step in self.steps:
            if not step or not isinstance(step[0], str):
                raise InvalidOperationError(f"Recipe '{name}' has an invalid step: {step!r}")

    @property
    def leaves(self) -> List[str]:
        """Names of the leaf values construct() requires, in recipe order."""
        names: List[str] = []
        for step in self.steps:
            for arg in step[1:]:
                if isinstance(arg, Leaf) and arg.name not in names:
                    names.append(arg.name)
        return names

    def _resolve(self, leaf: Dict[str, Any]) -> List[Tuple[str, Sequence[Any]]]:
        missing = [name for name in self.leaves if name not in leaf]
        if missing:
            raise InvalidOperationError(f"Recipe '{self.name}' is missing leaf data {missing}")
        unexpected = sorted(set(leaf) - set(self.leaves))
        if unexpected:
            raise InvalidOperationError(f"Recipe '{self.name}' got unexpected leaf data {unexpected}")
        return [
            (step[0], [leaf[arg.name] if isinstance(arg, Leaf) else arg for arg in step[1:]])
            for step in self.steps
        ]

    def _steps(self, builder: Builder[T], **leaf: Any) -> None:
        bound = []
        for setter_name, args in self._resolve(leaf):
            setter = getattr(builder, setter_name, None)
            if setter_name.startswith("_") or not callable(setter):
                raise InvalidOperationError(
                    f"{type(builder).__name__} has no setter '{setter_name}' "
                    f"required by recipe '{self.name}'"
                )
            bound.append((setter, args))
        for setter, args in bound:
            setter(*args)

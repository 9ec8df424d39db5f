"""
Cloning utilities for prototype templates.
"""

import copy
from typing import Any, Dict

from pydantic import ValidationError

from protoforge.exceptions import InvalidOperationError


def clone_product(product: Any) -> Any:
    """Return a deep, independent copy of product.

    Products that implement clone() are trusted to copy every owned mutable
    field themselves. Everything else falls back to copy.deepcopy().

    Args:
        product: Template to copy.

    Returns:
        New product that shares no mutable state with product.

    Raises:
        InvalidOperationError: If the product's clone() fails or hands back
            the product itself.
    """
    clone = getattr(product, "clone", None)
    if callable(clone):
        try:
            duplicate = clone()
        except InvalidOperationError:
            raise
        except Exception as e:
            raise InvalidOperationError(
                f"clone() failed for {type(product).__name__}: {e}"
            ) from e
    else:
        duplicate = copy.deepcopy(product)

    if duplicate is product:
        raise InvalidOperationError(
            f"clone() of {type(product).__name__} returned the template itself"
        )
    return duplicate


def apply_overrides(product: Any, overrides: Dict[str, Any]) -> Any:
    """Assign override attributes on a freshly cloned product.

    Values are deep-copied so the caller's objects are not aliased either.

    Raises:
        InvalidOperationError: If the product has no such attribute, is
            read-only (frozen dataclass or pydantic model) or rejects the value.
    """
    for attr, value in overrides.items():
        if attr.startswith("_") or not hasattr(product, attr):
            raise InvalidOperationError(
                f"{type(product).__name__} has no public attribute '{attr}' to override"
            )
        try:
            setattr(product, attr, copy.deepcopy(value))
        except (AttributeError, TypeError, ValidationError) as e:
            raise InvalidOperationError(
                f"Cannot override '{attr}' on {type(product).__name__}: {e}"
            ) from e
    return product

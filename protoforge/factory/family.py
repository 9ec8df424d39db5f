"""
Family factories: build a consistent set of products from one family key.

Every family shares the same declared role set. A family's kit supplies one
constructor per role and create_family() uses only that kit, so products from
different families are never mixed in one ProductFamily.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Optional

from protoforge.exceptions import RegistrationError, UnknownFamilyError

logger = logging.getLogger(__name__)


class ProductFamily(Mapping):
    """Read-only mapping of role name to product, all from one family.

    Roles are also reachable as attributes:

        >>> family = themes.create_family("dark")
        >>> family.family
        'dark'
        >>> family.button.render()
        'Dark button'
    """

    def __init__(self, family: Hashable, products: Mapping[str, Any]):
        self._family = family
        self._products: Dict[str, Any] = dict(products)

    @property
    def family(self) -> Hashable:
        """Family key every product in this set was built from."""
        return self._family

    @property
    def roles(self) -> List[str]:
        return list(self._products)

    def __getitem__(self, role: str) -> Any:
        return self._products[role]

    def __iter__(self) -> Iterator[str]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __getattr__(self, role: str) -> Any:
        # Only called when normal lookup fails.
        products = self.__dict__.get("_products", {})
        if role in products:
            return products[role]
        raise AttributeError(f"Family '{self.__dict__.get('_family')}' has no role '{role}'")

    def __repr__(self) -> str:
        return f"ProductFamily(family={self._family!r}, roles={self.roles!r})"


class FamilyFactory:
    """Factory producing ProductFamily instances for registered family keys.

    A kit is either a mapping of role to constructor, or any object exposing a
    create_<role>() method for every declared role (a classic abstract
    factory class works as-is).

    Examples:
        >>> themes = FamilyFactory(roles=["button", "modal"], name="themes")
        >>> themes.register("light", {"button": LightButton, "modal": LightModal})
        >>> themes.register("dark", DarkThemeKit())
        >>> family = themes.create_family("dark")
    """

    def __init__(self, roles: Iterable[str], name: str = "families"):
        roles = list(roles)
        if not roles:
            raise RegistrationError("A family factory needs at least one role")
        if len(set(roles)) != len(roles):
            raise RegistrationError(f"Duplicate roles in {roles}")
        shadowed = [role for role in roles if hasattr(ProductFamily, role)]
        if shadowed:
            raise RegistrationError(
                f"Role names {shadowed} clash with ProductFamily attributes"
            )
        self.name = name
        self._roles = tuple(roles)
        self._kits: Dict[Hashable, Dict[str, Callable[[], Any]]] = {}
        self._lock = threading.RLock()

    @property
    def roles(self) -> tuple:
        return self._roles

    def _resolve_kit(self, family_key: Hashable, kit: Any) -> Dict[str, Callable[[], Any]]:
        if isinstance(kit, Mapping):
            extra = sorted(set(kit) - set(self._roles))
            if extra:
                raise RegistrationError(
                    f"Family '{family_key}' defines undeclared roles {extra}; "
                    f"declared roles are {list(self._roles)}"
                )
            constructors = {role: kit.get(role) for role in self._roles}
        else:
            constructors = {role: getattr(kit, f"create_{role}", None) for role in self._roles}

        missing = [role for role, ctor in constructors.items() if ctor is None]
        if missing:
            raise RegistrationError(f"Family '{family_key}' is missing roles {missing}")
        not_callable = [role for role, ctor in constructors.items() if not callable(ctor)]
        if not_callable:
            raise RegistrationError(
                f"Family '{family_key}' has non-callable constructors for roles {not_callable}"
            )
        return constructors

    def register(self, family_key: Hashable, kit: Any) -> None:
        """Bind a family key to a kit, replacing any previous kit.

        Raises:
            RegistrationError: If the key is empty or the kit does not cover
                exactly the declared roles. The factory is left unchanged.
        """
        if family_key is None or family_key == "":
            raise RegistrationError("Family key cannot be empty")
        if kit is None:
            raise RegistrationError("Kit cannot be None")

        constructors = self._resolve_kit(family_key, kit)
        with self._lock:
            if family_key in self._kits:
                logger.debug("%s: replacing kit for family %r", self.name, family_key)
            self._kits[family_key] = constructors
        logger.debug("%s: registered family %r with roles %s", self.name, family_key, list(self._roles))

    def create_family(self, family_key: Hashable) -> ProductFamily:
        """Create one product per declared role from the family's kit.

        The family is assembled completely before it is returned; if any role
        constructor raises, the error propagates and nothing is handed out.

        Raises:
            UnknownFamilyError: If no kit is registered for family_key.
        """
        with self._lock:
            constructors = self._kits.get(family_key)
            if constructors is None:
                raise UnknownFamilyError(family_key, self._kits.keys(), registry=self.name)

        products = {role: constructors[role]() for role in self._roles}
        return ProductFamily(family_key, products)

    # Alias matching the createFamily() contract name.
    create = create_family

    def unregister(self, family_key: Hashable) -> None:
        """Remove a family.

        Raises:
            UnknownFamilyError: If no kit is registered for family_key.
        """
        with self._lock:
            if family_key not in self._kits:
                raise UnknownFamilyError(family_key, self._kits.keys(), registry=self.name)
            del self._kits[family_key]

    def clear(self) -> None:
        with self._lock:
            self._kits.clear()

    def families(self) -> List[Hashable]:
        """Return registered family keys in registration order."""
        with self._lock:
            return list(self._kits)

    def __contains__(self, family_key: object) -> bool:
        with self._lock:
            return family_key in self._kits

    def __len__(self) -> int:
        with self._lock:
            return len(self._kits)

    def describe_family(self, family_key: Hashable) -> Optional[Dict[str, str]]:
        """Return role -> constructor name for a family, or None if unknown."""
        with self._lock:
            constructors = self._kits.get(family_key)
            if constructors is None:
                return None
            return {
                role: getattr(ctor, "__qualname__", type(ctor).__name__)
                for role, ctor in constructors.items()
            }

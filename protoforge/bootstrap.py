"""
Declarative registration of factories, prototypes and families.

Bootstrap code can describe its registrations as data instead of calls:

    factories:
      email: protoforge.builtin_products.notifications:EmailCreator
      sms:
        class: protoforge.builtin_products.notifications:SmsCreator
        description: Text message
        category: notifications
    prototypes:
      report:
        class: protoforge.builtin_products.documents:Report
        fields: {title: Monthly Report, author: Finance Team}
    families:
      roles: [button, modal]
      kits:
        light: protoforge.builtin_products.themes:LightThemeKit
        dark:
          button: protoforge.builtin_products.themes:DarkButton
          modal: protoforge.builtin_products.themes:DarkModal

Everything is validated and imported before the first registration, so an
invalid specification registers nothing.
"""

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from protoforge.core.metadata import ObjectMetadata
from protoforge.exceptions import ConfigurationError, ProtoforgeError
from protoforge.factory.cloning import clone_product
from protoforge.factory.family import FamilyFactory
from protoforge.factory.keyed import KeyedFactory
from protoforge.factory.prototype import PrototypeRegistry

logger = logging.getLogger(__name__)


class _ClassRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    class_path: str = Field(alias="class")
    description: str = ""
    category: str = ""
    tags: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"class": value}
        return value

    def metadata(
        self, name: str, obj: Any, example_config: Optional[Dict[str, Any]] = None
    ) -> ObjectMetadata:
        return ObjectMetadata.for_object(
            name,
            obj,
            self.description,
            category=self.category,
            tags=list(self.tags),
            example_config=dict(example_config or {}),
        )


class FactoryEntry(_ClassRef):
    """One keyed factory binding."""


class PrototypeEntry(_ClassRef):
    """One prototype template: class plus constructor fields."""

    template_fields: Dict[str, Any] = Field(default_factory=dict, alias="fields")


class FamiliesSection(BaseModel):
    """Shared role set plus one kit per family.

    A kit is either an import path to a kit class (instantiated without
    arguments) or a role -> import path mapping.
    """

    model_config = ConfigDict(extra="forbid")

    roles: List[str]
    kits: Dict[str, Union[str, Dict[str, str]]] = Field(default_factory=dict)

    @field_validator("roles")
    @classmethod
    def _non_empty_roles(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("families.roles must list at least one role")
        return value


class RegistrationSpec(BaseModel):
    """Top-level bootstrap document."""

    model_config = ConfigDict(extra="forbid")

    factories: Dict[str, FactoryEntry] = Field(default_factory=dict)
    prototypes: Dict[str, PrototypeEntry] = Field(default_factory=dict)
    families: Optional[FamiliesSection] = None


@dataclass
class BootstrapResult:
    """What load_registrations() registered."""

    factories: List[str] = field(default_factory=list)
    prototypes: List[str] = field(default_factory=list)
    families: List[str] = field(default_factory=list)
    family_factory: Optional[FamilyFactory] = None

    @property
    def total(self) -> int:
        return len(self.factories) + len(self.prototypes) + len(self.families)


def load_object(path: str) -> Any:
    """Import an object from ``package.module:Name`` or ``package.module.Name``.

    Raises:
        ConfigurationError: If the module or attribute cannot be found.
    """
    if ":" in path:
        module_path, _, attr_path = path.partition(":")
    else:
        module_path, _, attr_path = path.rpartition(".")
    if not module_path or not attr_path:
        raise ConfigurationError(f"Invalid import path '{path}'. Use 'package.module:Name'")

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_path}' for '{path}': {e}") from e

    obj: Any = module
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ConfigurationError(f"'{module_path}' has no attribute '{attr_path}'") from e
    return obj


def parse_registrations(spec: Dict[str, Any]) -> RegistrationSpec:
    """Validate a bootstrap dictionary.

    Raises:
        ConfigurationError: If the structure is invalid.
    """
    if not isinstance(spec, dict):
        raise ConfigurationError(f"Bootstrap specification must be a mapping, got {type(spec).__name__}")
    try:
        return RegistrationSpec.model_validate(spec)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid bootstrap specification: {e}") from e


def _build_kit(name: str, kit: Union[str, Dict[str, str]]) -> Any:
    if isinstance(kit, str):
        kit_obj = load_object(kit)
        if not isinstance(kit_obj, type):
            return kit_obj
        try:
            return kit_obj()
        except Exception as e:
            raise ConfigurationError(
                f"Cannot construct kit for family '{name}' from {kit}: {e}"
            ) from e
    return {role: load_object(path) for role, path in kit.items()}


def load_registrations(
    spec: Dict[str, Any],
    keyed: Optional[KeyedFactory] = None,
    prototypes: Optional[PrototypeRegistry] = None,
    families: Optional[FamilyFactory] = None,
) -> BootstrapResult:
    """Populate registries from a bootstrap dictionary.

    Args:
        spec: Bootstrap dictionary (see module docstring).
        keyed: Target keyed factory. Defaults to the shared instance.
        prototypes: Target prototype registry. Defaults to the shared instance.
        families: Target family factory. When None and the spec has a
            families section, a new FamilyFactory is created and returned in
            the result.

    Returns:
        BootstrapResult listing registered keys.

    Raises:
        ConfigurationError: If the spec is invalid, an import fails, a
            template cannot be constructed or a kit does not match the roles.
            Nothing is registered in that case.
    """
    parsed = parse_registrations(spec)
    if keyed is None:
        keyed = KeyedFactory.get_instance()
    if prototypes is None:
        prototypes = PrototypeRegistry.get_instance()

    # Resolve every import and template first.
    factory_bindings = []
    for key, entry in parsed.factories.items():
        builder = load_object(entry.class_path)
        if not callable(builder):
            raise ConfigurationError(f"Factory '{key}': {entry.class_path} is not callable")
        factory_bindings.append((key, builder, entry.metadata(key, builder)))

    templates = []
    for key, entry in parsed.prototypes.items():
        cls = load_object(entry.class_path)
        try:
            template = cls(**entry.template_fields)
            clone_product(template)
        except Exception as e:
            raise ConfigurationError(
                f"Cannot construct prototype '{key}' from {entry.class_path}: {e}"
            ) from e
        templates.append((key, template, entry.metadata(key, cls, entry.template_fields)))

    kits: Dict[str, Any] = {}
    if parsed.families is not None:
        if families is None:
            try:
                families = FamilyFactory(roles=parsed.families.roles, name="bootstrap families")
            except ProtoforgeError as e:
                raise ConfigurationError(f"Invalid family roles: {e}") from e
        elif list(families.roles) != list(parsed.families.roles):
            raise ConfigurationError(
                f"Bootstrap roles {parsed.families.roles} do not match "
                f"family factory roles {list(families.roles)}"
            )
        kits = {name: _build_kit(name, kit) for name, kit in parsed.families.kits.items()}
        # Validate every kit against the roles before touching the target.
        scratch = FamilyFactory(roles=families.roles)
        try:
            for name, kit in kits.items():
                scratch.register(name, kit)
        except ProtoforgeError as e:
            raise ConfigurationError(f"Invalid family kit: {e}") from e

    result = BootstrapResult(family_factory=families)
    for key, builder, metadata in factory_bindings:
        keyed.register(key, builder, metadata=metadata)
        result.factories.append(key)
    for key, template, metadata in templates:
        prototypes.register(key, template, metadata=metadata)
        result.prototypes.append(key)
    for name, kit in kits.items():
        families.register(name, kit)
        result.families.append(name)

    logger.info(
        "Bootstrap registered %d factories, %d prototypes, %d families",
        len(result.factories),
        len(result.prototypes),
        len(result.families),
    )
    return result


def load_registrations_file(
    path: Union[str, Path],
    keyed: Optional[KeyedFactory] = None,
    prototypes: Optional[PrototypeRegistry] = None,
    families: Optional[FamilyFactory] = None,
) -> BootstrapResult:
    """Load a bootstrap file (TOML, YAML or JSON) and apply it.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid.
    """
    from protoforge.config import ConfigLoader

    data = ConfigLoader().load(Path(path))
    return load_registrations(data, keyed=keyed, prototypes=prototypes, families=families)

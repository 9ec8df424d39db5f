"""
protoforge - object construction toolkit

Lets calling code obtain fully-formed objects without depending on their
concrete classes or construction sequence:

    from protoforge import KeyedFactory, FamilyFactory, PrototypeRegistry, Builder
"""

__version__ = "0.3.0"

from protoforge.builder import BuildStatus, Builder, Director, Leaf, RecipeDirector
from protoforge.core import Cloneable, ObjectMetadata, Performer, Renderable
from protoforge.exceptions import (
    BuilderFinalizedError,
    ConfigurationError,
    InvalidOperationError,
    ProtoforgeError,
    RegistrationError,
    UnknownFamilyError,
    UnknownKeyError,
)
from protoforge.factory import (
    Creator,
    FamilyFactory,
    KeyedFactory,
    ProductFamily,
    PrototypeRegistry,
    variant_table,
)

__all__ = [
    # Contracts
    "Performer",
    "Renderable",
    "Cloneable",
    "ObjectMetadata",
    # Keyed factories
    "KeyedFactory",
    "Creator",
    "variant_table",
    # Families
    "FamilyFactory",
    "ProductFamily",
    # Prototypes
    "PrototypeRegistry",
    # Builders
    "Builder",
    "BuildStatus",
    "Director",
    "RecipeDirector",
    "Leaf",
    # Exceptions
    "ProtoforgeError",
    "RegistrationError",
    "UnknownKeyError",
    "UnknownFamilyError",
    "InvalidOperationError",
    "BuilderFinalizedError",
    "ConfigurationError",
]

"""
Factory module for protoforge.

Provides keyed factories, family factories and the prototype registry.
"""

from protoforge.factory.family import FamilyFactory, ProductFamily
from protoforge.factory.keyed import Creator, KeyedFactory, variant_table
from protoforge.factory.prototype import PrototypeRegistry

__all__ = [
    "Creator",
    "FamilyFactory",
    "KeyedFactory",
    "ProductFamily",
    "PrototypeRegistry",
    "variant_table",
]

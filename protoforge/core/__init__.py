"""
Core contracts shared by all construction mechanisms.
"""

from protoforge.core.interfaces import Cloneable, Performer, Renderable
from protoforge.core.metadata import ObjectMetadata

__all__ = ["Cloneable", "Performer", "Renderable", "ObjectMetadata"]

"""
Registration metadata shared by keyed factories and prototype registries.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ObjectMetadata:
    """What a registry records about one key besides the bound object.

    Attributes:
        name: Registration key as a string.
        description: One-line summary shown by ``protoforge list``.
        category: Grouping used by list_available(category=...).
        tags: Free-form labels.
        example_config: Keyword arguments known to work with create(), such
            as the fields a bootstrap template was built from.
    """

    name: str
    description: str = ""
    category: str = ""
    tags: List[str] = field(default_factory=list)
    example_config: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_object(cls, name: str, obj: Any, description: str = "", **fields: Any) -> "ObjectMetadata":
        """Metadata for obj, summarizing its docstring when no description is given."""
        if not description:
            doc = inspect.getdoc(obj) or ""
            description = doc.splitlines()[0] if doc else ""
        return cls(name=name, description=description, **fields)

    def matches(self, category: Optional[str]) -> bool:
        return not category or self.category == category

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
            "example_config": dict(self.example_config),
        }

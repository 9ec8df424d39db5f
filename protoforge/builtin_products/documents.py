"""
Document templates: Cloneable products for the prototype registry.
"""

from dataclasses import dataclass, field
from typing import List

from protoforge.exceptions import InvalidOperationError


@dataclass
class Report:
    """A titled report with an author."""

    title: str = ""
    author: str = ""

    def clone(self) -> "Report":
        return Report(title=self.title, author=self.author)

    def describe(self) -> str:
        if not self.title or not self.author:
            raise InvalidOperationError("Report needs both a title and an author")
        return f'Report: "{self.title}" by {self.author}'


@dataclass
class Resume:
    """A person's name with a list of skills.

    clone() copies the skills list so clones never share it.
    """

    name: str = ""
    skills: List[str] = field(default_factory=list)

    def clone(self) -> "Resume":
        return Resume(name=self.name, skills=list(self.skills))

    def describe(self) -> str:
        if not self.name:
            raise InvalidOperationError("Resume needs a name")
        if not self.skills:
            return f"Resume: {self.name}"
        return f"Resume: {self.name} with skills {', '.join(self.skills)}"

"""
UI theme families: button and modal roles in light and dark variants.

Rendering produces a descriptive string only.
"""

from typing import Optional

from protoforge.factory.family import FamilyFactory

THEME_ROLES = ("button", "modal")


class ThemedWidget:
    theme = ""
    role = ""

    def render(self) -> str:
        return f"{self.theme.capitalize()} {self.role}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LightButton(ThemedWidget):
    theme, role = "light", "button"


class LightModal(ThemedWidget):
    theme, role = "light", "modal"


class DarkButton(ThemedWidget):
    theme, role = "dark", "button"


class DarkModal(ThemedWidget):
    theme, role = "dark", "modal"


class LightThemeKit:
    """Abstract-factory style kit for the light theme."""

    def create_button(self) -> LightButton:
        return LightButton()

    def create_modal(self) -> LightModal:
        return LightModal()


class DarkThemeKit:
    """Abstract-factory style kit for the dark theme."""

    def create_button(self) -> DarkButton:
        return DarkButton()

    def create_modal(self) -> DarkModal:
        return DarkModal()


def theme_factory(factory: Optional[FamilyFactory] = None) -> FamilyFactory:
    """Register the light and dark themes on factory (a new one by default)."""
    if factory is None:
        factory = FamilyFactory(roles=THEME_ROLES, name="themes")
    factory.register("light", LightThemeKit())
    factory.register("dark", DarkThemeKit())
    return factory

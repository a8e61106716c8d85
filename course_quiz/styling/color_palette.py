"""Color palette for the CourseQuiz desktop client in light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the student window."""

    TEXT_PRIMARY = ThemeColors(light="#0F172A", dark="#F5F7FF")
    TEXT_MUTED = ThemeColors(light="#64748B", dark="#94A3B8")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#0B1120")
    BACKGROUND_CARD = ThemeColors(light="#F1F5F9", dark="#111A30")

    # Quiz list and option buttons
    ACCENT = ThemeColors(light="#1F9AA5", dark="#1F9AA5")
    ACCENT_TEXT = ThemeColors(light="#FFFFFF", dark="#FFFFFF")
    OPTION_BG = ThemeColors(light="#FFFFFF", dark="#1C2745")
    OPTION_HOVER_BG = ThemeColors(light="#E0F2F4", dark="#16213D")
    BORDER = ThemeColors(light="#CBD5E1", dark="#334155")

    # Result badges
    SUCCESS = ThemeColors(light="#16A34A", dark="#4ADE80")
    ERROR = ThemeColors(light="#DC2626", dark="#F87171")

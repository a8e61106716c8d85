"""Styling module for the CourseQuiz desktop client."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]

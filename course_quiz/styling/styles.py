"""Qt stylesheets for the student window."""

from .color_palette import ColorPalette, Theme

class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QGroupBox {{
                background-color: {ColorPalette.BACKGROUND_CARD.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 8px;
                margin-top: 8px;
                padding-top: 12px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
            QPushButton {{
                background-color: {ColorPalette.OPTION_BG.get(theme)};
                border: 2px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 8px;
                padding: 8px 14px;
                text-align: left;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.OPTION_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.ACCENT.get(theme)};
                color: {ColorPalette.ACCENT_TEXT.get(theme)};
                border: 2px solid {ColorPalette.ACCENT.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
            QListWidget {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 8px;
            }}
            QListWidget::item:selected {{
                background-color: {ColorPalette.ACCENT.get(theme)};
                color: {ColorPalette.ACCENT_TEXT.get(theme)};
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_muted_label_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.TEXT_MUTED.get(theme)};"

    @staticmethod
    def get_tag_style(theme: Theme = Theme.LIGHT) -> str:
        return (
            f"color: {ColorPalette.ACCENT.get(theme)}; font-size: 9pt; "
            "font-weight: bold; text-transform: uppercase;"
        )

    @staticmethod
    def get_score_style(theme: Theme = Theme.LIGHT) -> str:
        return f"font-size: 28pt; font-weight: bold; color: {ColorPalette.SUCCESS.get(theme)};"

"""Styly a palety pro světlé a tmavé téma editoru."""
from PySide6.QtGui import QPalette, QColor


def make_light_palette() -> QPalette:
    """Vytvoří světlou paletu barev pro aplikaci."""
    palette = QPalette()

    # --- základní pozadí ---
    palette.setColor(QPalette.Window, QColor("#fafafa"))
    palette.setColor(QPalette.Base, QColor("white"))

    # --- texty ---
    palette.setColor(QPalette.WindowText, QColor("black"))
    palette.setColor(QPalette.Text, QColor("black"))
    palette.setColor(QPalette.ButtonText, QColor("black"))
    palette.setColor(QPalette.ToolTipText, QColor("black"))

    palette.setColor(QPalette.Button, QColor("#f0f0f0"))
    palette.setColor(QPalette.Highlight, QColor("#1976d2"))
    palette.setColor(QPalette.HighlightedText, QColor("white"))

    disabled_text = QColor(120, 120, 120)
    palette.setColor(QPalette.Disabled, QPalette.Text, disabled_text)
    palette.setColor(QPalette.Disabled, QPalette.WindowText, disabled_text)
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, disabled_text)
    return palette


def make_dark_palette() -> QPalette:
    """Vytvoří tmavou paletu barev pro aplikaci."""
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor("#121212"))
    palette.setColor(QPalette.Base, QColor("#1e1e1e"))

    palette.setColor(QPalette.WindowText, QColor("white"))
    palette.setColor(QPalette.Text, QColor("white"))
    palette.setColor(QPalette.ButtonText, QColor("white"))
    palette.setColor(QPalette.ToolTipText, QColor("white"))
    palette.setColor(QPalette.ToolTipBase, QColor("#2a2a2a"))

    palette.setColor(QPalette.Button, QColor("#2a2a2a"))
    palette.setColor(QPalette.Highlight, QColor("#90caf9"))
    palette.setColor(QPalette.HighlightedText, QColor("black"))

    disabled_text = QColor(110, 110, 110)
    palette.setColor(QPalette.Disabled, QPalette.Text, disabled_text)
    palette.setColor(QPalette.Disabled, QPalette.WindowText, disabled_text)
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, disabled_text)
    return palette


def make_palette(theme: str) -> QPalette:
    return make_dark_palette() if theme == "dark" else make_light_palette()


def get_application_stylesheet(theme: str = "light") -> str:
    """Vrátí stylesheet pro aplikaci v daném tématu."""
    if theme == "dark":
        bg, fg, border, hover, pressed, checked = (
            "#1e1e1e", "white", "#3a3a3a", "#2c2c2c", "#333333", "#1f3a56")
    else:
        bg, fg, border, hover, pressed, checked = (
            "white", "black", "#dcdcdc", "#f5f5f5", "#eaeaea", "#e6f0ff")
    return f"""
        QToolBar {{
            background: {bg};
            border: none;
        }}
        QToolBar QToolButton {{
            background: {bg};
            color: {fg};
            border: 1px solid {border};
            border-radius: 6px;
            padding: 4px 6px;
        }}
        QToolBar QToolButton:hover {{
            background: {hover};
        }}
        QToolBar QToolButton:pressed {{
            background: {pressed};
        }}
        QToolBar QToolButton:checked {{
            background: {checked};
            border-color: #699BFF;
        }}
        QToolBar QToolButton:disabled {{
            color: #888;
        }}
    """

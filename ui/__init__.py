"""UI modul pro Flowchart Editor."""
from .main_window import MainWindow
from .style import make_palette, get_application_stylesheet

__all__ = [
    'MainWindow',
    'make_palette',
    'get_application_stylesheet',
]

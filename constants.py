"""Globální konstanty pro Flowchart Editor."""
from __future__ import annotations

# === Typy uzlů ===
class NodeKind:
    """Výčet typů uzlů, které lze umístit na plátno."""
    START = "start"  # Začátek toku
    PROCESS = "process"  # Krok / akce
    DECISION = "decision"  # Rozhodnutí
    END = "end"  # Konec toku

    ALL = (START, PROCESS, DECISION, END)


# Popisky a tooltipy pro paletu uzlů
NODE_KIND_INFO = {
    NodeKind.START: ("Start", "Starting point of the flow"),
    NodeKind.PROCESS: ("Process", "Process or action step"),
    NodeKind.DECISION: ("Decision", "Decision or condition"),
    NodeKind.END: ("End", "End point of the flow"),
}

# === Rozměry uzlů (ve světových souřadnicích) ===
NODE_SIZES = {
    NodeKind.START: (80, 80),
    NodeKind.PROCESS: (150, 100),
    NodeKind.DECISION: (80, 80),
    NodeKind.END: (80, 80),
}
HANDLE_RADIUS = 6  # Poloměr připojovacího bodu uzlu (světové souřadnice)
NODE_CORNER_RADIUS = 8  # Zaoblení rohů procesního uzlu
EDGE_HIT_WIDTH = 12  # Šířka neviditelného pásu pro výběr hrany
ARROW_OFFSET = 15  # Odsazení šipky od cílového bodu hrany
GRID_SIZE = 25  # Velikost čtverce mřížky na pozadí

# === Výchozí barvy ===
DEFAULT_NODE_COLOR = "#1976d2"
DEFAULT_EDGE_COLOR = "#424242"

# === Zoom ===
MIN_SCALE = 0.1
MAX_SCALE = 3.0
ZOOM_STEP = 1.2  # Násobek pro tlačítka zoom in/out
WHEEL_ZOOM_IN = 1.1  # Násobek pro jeden krok kolečka nahoru
WHEEL_ZOOM_OUT = 0.9  # Násobek pro jeden krok kolečka dolů

# === Cíle ukazatele (co je pod kurzorem) ===
class TargetKind:
    """Výčet typů prvků, na které může uživatel kliknout."""
    BACKGROUND = "background"
    NODE = "node"
    HANDLE = "connection-handle"
    EDGE = "edge"

# === Témata ===
THEMES = ("light", "dark")

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from PySide6.QtCore import QCoreApplication

from canvas.session import EditorSession
from config import EditorConfig
from flowchart.store import DiagramStore


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def store():
    return DiagramStore()


@pytest.fixture
def session():
    s = EditorSession(EditorConfig())
    s.viewport.set_canvas_size(800, 600)
    return s

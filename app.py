"""Entry point pro Flowchart Editor aplikaci."""
from __future__ import annotations
import logging
import sys
import traceback

# Qt framework pro GUI
from PySide6.QtWidgets import QApplication, QMessageBox

# Načtení konfigurace (.env + proměnné prostředí)
from config import load_config
from canvas.session import EditorSession
from ui.main_window import MainWindow

logger = logging.getLogger("flowchart")


def exception_hook(exctype, value, tb):
    """Hook pro zachycení nekontrolovaných výjimek."""
    logger.critical("Uncaught exception", exc_info=(exctype, value, tb))

    # Zobraz dialog s chybou
    if QApplication.instance() is not None:
        error_msg = ''.join(traceback.format_exception(exctype, value, tb))
        QMessageBox.critical(None, "Application Error",
                             f"An unexpected error occurred:\n\n{error_msg}")


def main():
    """Hlavní funkce aplikace - inicializuje a spouští Flowchart Editor."""
    cfg = load_config()
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Nastavení handleru pro nekontrolované výjimky
    sys.excepthook = exception_hook

    # Vytvoření Qt aplikace (musí být před vytvořením jakýchkoli widgetů)
    app = QApplication(sys.argv)

    try:
        session = EditorSession(cfg)
        w = MainWindow(session)
        w.resize(1200, 800)
        w.show()

        # Spuštění Qt event loop a ukončení programu s návratovým kódem
        sys.exit(app.exec())
    except Exception as e:
        logger.exception("Fatal error")
        QMessageBox.critical(None, "Fatal Error",
                             f"The application cannot continue:\n\n{e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Konfigurace editoru načítaná z prostředí (a z .env souboru)."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv, find_dotenv

from constants import THEMES

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EditorConfig:
    """
    Nastavení editoru.

    Attributes:
        undo_limit: Maximální počet kroků zpět (0 = neomezeno)
        log_level: Úroveň logování ("DEBUG", "INFO", "WARNING", ...)
        theme: Výchozí téma ("light" nebo "dark")
        draw_grid: Zda kreslit mřížku na pozadí plátna
    """
    undo_limit: int = 0
    log_level: str = "WARNING"
    theme: str = "light"
    draw_grid: bool = True


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using %d", name, raw, default)
        return default
    if value < 0:
        logger.warning("Negative %s=%d, using %d", name, value, default)
        return default
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Invalid %s=%r, using %s", name, raw, default)
    return default


def load_config(use_dotenv: bool = True) -> EditorConfig:
    """Sestaví konfiguraci z proměnných prostředí FLOWCHART_*."""
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    level = os.getenv("FLOWCHART_LOG_LEVEL", "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unknown log level %r, using WARNING", level)
        level = "WARNING"

    theme = os.getenv("FLOWCHART_THEME", "light").strip().lower()
    if theme not in THEMES:
        logger.warning("Unknown theme %r, using light", theme)
        theme = "light"

    return EditorConfig(
        undo_limit=_int_env("FLOWCHART_UNDO_LIMIT", 0),
        log_level=level,
        theme=theme,
        draw_grid=_bool_env("FLOWCHART_GRID", True),
    )

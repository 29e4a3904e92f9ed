"""Logging setup.

Records go to stdout and to three rotating files under ``LOG_DIR``:
``app.log`` (everything), ``error.log`` (ERROR and above) and
``ai_analysis.log`` (records from the ``ai`` logger, i.e. Gemini round trips).
"""

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from .config import get_settings

settings = get_settings()

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<level>{level.name:<7}</level> "
    "<magenta>[{extra[name]}]</magenta> "
    "<cyan>{module}.{function}</cyan> - {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS ZZ} {level.name:<7} [{extra[name]}] {module}.{function}:{line} - {message}"

ROTATION = "10 MB"
RETENTION = "30 days"


def _is_ai_record(record: Dict[str, Any]) -> bool:
    return record["extra"].get("name") == "ai"


def _rotating_file(path: Path, level: str, record_filter: Optional[Callable] = None) -> Dict[str, Any]:
    handler = {
        "sink": path,
        "format": FILE_FORMAT,
        "level": level,
        "rotation": ROTATION,
        "retention": RETENTION,
        "compression": "zip",
        "encoding": "utf-8",
    }
    if record_filter is not None:
        handler["filter"] = record_filter
    return handler


def build_handlers(log_dir: Path) -> List[Dict[str, Any]]:
    """Handler definitions for logger.configure"""
    return [
        {
            "sink": sys.stdout,
            "format": CONSOLE_FORMAT,
            "level": settings.app.log_level.upper(),
            "colorize": True,
            "diagnose": settings.app.debug,
        },
        _rotating_file(log_dir / "app.log", "DEBUG"),
        _rotating_file(log_dir / "error.log", "ERROR"),
        _rotating_file(log_dir / "ai_analysis.log", "INFO", _is_ai_record),
    ]


def setup_logger():
    """Replace loguru's default handler with the application sinks"""
    log_dir = Path(settings.app.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # records logged without bind() still need extra[name] for the formats
    logger.configure(handlers=build_handlers(log_dir), extra={"name": "root"})
    return logger


def get_logger(name: str = None):
    """Return a logger bound to a name"""
    if name:
        return logger.bind(name=name)
    return logger


setup_logger()

app_logger = get_logger("app")
ai_logger = get_logger("ai")
api_logger = get_logger("api")

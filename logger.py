import os
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from loguru import logger

load_dotenv()


# ---------------------------------------------------------------------------
# Format helpers (two-level separators: | for zones, • for related items)
# ---------------------------------------------------------------------------


def _build_context(record) -> str:
    """Build context zone from extra fields set via bind() or contextualize().

    Returns string like: ``Backend=LOCAL``
    or empty string when no context is set.
    """
    extra = record["extra"]
    parts: list[str] = []
    for key, label in [
        ("backend", "Backend"),
    ]:
        val = extra.get(key)
        if val is not None:
            parts.append(f"{label}={val}")
    return " • ".join(parts)


_CONSOLE_TEMPLATE = (
    "<green>{time:YY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]: <25}</cyan> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
    "{ctx_zone} | <level>{message}</level>\n"
)
_FILE_TEMPLATE = (
    "{time:YY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]: <25} | "
    "{name}:{function}:{line}{ctx_zone} | {message}\n"
)


def _with_context(template: str):
    """Build a loguru format callable that appends the context zone when present."""

    def _format(record) -> str:
        ctx = _build_context(record)
        ctx_zone = f" | {ctx}" if ctx else ""
        return template.replace("{ctx_zone}", ctx_zone) + "{exception}"

    return _format


_console_format = _with_context(_CONSOLE_TEMPLATE)
_file_format = _with_context(_FILE_TEMPLATE)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def setup_logger(log_level: str | None = None, log_file: str | None = None) -> None:
    """Setup console logging and an optional rotating file sink (LOG_LEVEL, LOG_FILE)."""
    if log_level is None:
        console_level = os.getenv("LOG_LEVEL", "INFO")
    else:
        console_level = log_level

    if log_file is None:
        log_file = os.getenv("LOG_FILE")

    logger.remove()
    logger.configure(
        extra={
            "module": "file_storage",
            "backend": None,
        }
    )

    logger.add(
        sys.stderr,
        format=_console_format,
        level=console_level,
        colorize=True,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=_file_format,
            level="INFO",
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_logger(module_name: str | None = None):
    """Get configured logger, optionally bound to a module name."""
    if module_name:
        return logger.bind(module=module_name)
    return logger


def format_details(**kwargs: Any) -> str:
    """Format key=value pairs joined with • for the details zone.

    Example: "File saved | key=a/b.txt • size=5"
    """
    if not kwargs:
        return ""
    return " • ".join(f"{k}={v}" for k, v in kwargs.items())


setup_logger()

"""
X-Cash Logging

Root-logger setup shared by the ledger, the deploy helpers and the CLI.
Console output goes through `rich` with highlighting for addresses, amounts
and event names; an optional rotating file log can be switched on from
`.env` or config.toml.

Usage:
    >>> from xcash.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Token deployed")
"""

import logging
import logging.handlers
import re
import sys
import threading
import time
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler
from rich.theme import Theme

from .constants import (
    DEFAULT_LOG_FORMAT,
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_HIGHLIGHTING,
    LOG_DATE_FORMAT,
    LOG_FILE_OUTPUT,
    LOG_FORMAT,
    LOG_LEVEL,
    LOG_MAX_FILE_SIZE,
)

LOG_FILE_PATH = Path(__file__).parent.parent / "logs" / "xcash.log"

XCASH_THEME = Theme(
    {
        "xcash.address": "cyan",
        "xcash.amount":  "bold white",
        "xcash.arrow":   "bold yellow",
        "xcash.event":   "bold magenta",
        "xcash.symbol":  "bold green",
        "xcash.error":   "bold red",
        "xcash.warning": "bold yellow",
    }
)


class XCashLogHighlighter(RegexHighlighter):
    """Colors account addresses, token amounts, event names and levels."""

    base_style = "xcash."
    highlights = [
        r"(?P<address>\b0x[0-9a-fA-F]{40}\b)",
        r"(?P<arrow>→)",
        r"(?P<event>\b(Transfer|Approval|AdministrationTransferred)\b)",
        r"(?P<amount>(?<![\w.])\d+(?=\s+[A-Z]{2,}\b))",
        r"(?P<symbol>\bXCASH\b)",
        r"(?P<error>\b(ERROR|CRITICAL)\b)",
        r"(?P<warning>\bWARNING\b)",
    ]


class SafeFormatter(logging.Formatter):
    """
    Strips ANSI escapes and control characters from formatted records.

    Token names, symbols and config values end up in log lines verbatim, so
    they must not be able to drive the terminal.
    """

    _unsafe = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b[@-Z\\-_]|[\x00-\x08\x0B-\x1F\x7F]")

    def format(self, record: logging.LogRecord) -> str:
        return self._unsafe.sub("", super().format(record))


def _make_formatter() -> SafeFormatter:
    # A broken LOG_FORMAT in .env falls back to the default instead of
    # failing at the first log call.
    try:
        formatter = SafeFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT + " UTC", validate=True)
    except ValueError as e:
        print(f"xcash.logger: invalid LOG_FORMAT ({e}), using default", file=sys.stderr)
        formatter = SafeFormatter(fmt=DEFAULT_LOG_FORMAT, datefmt=LOG_DATE_FORMAT + " UTC")
    formatter.converter = time.gmtime
    return formatter


class LogManager:
    """Configures the root logger once per process (singleton)."""

    _instance: Optional["LogManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "LogManager":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._configured = False
        return cls._instance

    def configure(
        self,
        log_level: Optional[str] = None,
        log_file: Optional[Path] = None,
        console_output: bool = True,
        file_output: Optional[bool] = None,
        force: bool = False,
    ) -> None:
        """
        Install console and file handlers on the root logger.

        Args:
            log_level: Level name; defaults to LOG_LEVEL from `.env`
            log_file: Rotating log path; defaults to `logs/xcash.log`
            console_output: Log to stderr
            file_output: Enable the file log; defaults to LOG_FILE_OUTPUT
            force: Replace an existing configuration (used by the CLI)
        """
        with self._lock:
            if self._configured and not force:
                return

            level = getattr(logging, str(log_level or LOG_LEVEL).upper(), logging.INFO)
            root = logging.getLogger()
            root.setLevel(level)
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()

            formatter = _make_formatter()
            handlers = []

            if console_output:
                if LOG_CONSOLE_HIGHLIGHTING:
                    console = Console(theme=XCASH_THEME, highlight=False, stderr=True)
                    handlers.append(RichHandler(
                        console=console,
                        highlighter=XCashLogHighlighter(),
                        keywords=[],
                        rich_tracebacks=True,
                        show_path=False,
                        show_time=False,
                        show_level=False,
                        markup=False,
                    ))
                else:
                    handlers.append(logging.StreamHandler(sys.stderr))

            if LOG_FILE_OUTPUT if file_output is None else file_output:
                path = Path(log_file) if log_file else LOG_FILE_PATH
                path.parent.mkdir(parents=True, exist_ok=True)
                handlers.append(logging.handlers.RotatingFileHandler(
                    filename=str(path),
                    maxBytes=LOG_MAX_FILE_SIZE,
                    backupCount=LOG_BACKUP_COUNT,
                    encoding="utf-8",
                ))

            for handler in handlers:
                handler.setLevel(level)
                handler.setFormatter(formatter)
                root.addHandler(handler)

            self._configured = True

    def get_logger(self, name: str) -> logging.Logger:
        if not self._configured:
            self.configure()
        return logging.getLogger(name)


_manager = LogManager()


def get_logger(name: str) -> logging.Logger:
    """Return a logger for *name*, configuring logging on first use."""
    return _manager.get_logger(name)


def configure_logging(**kwargs) -> None:
    """Reconfigure logging, e.g. from the CLI's [logging] settings."""
    _manager.configure(force=True, **kwargs)

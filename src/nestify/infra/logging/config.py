from __future__ import annotations

"""
Logging Settings.

Holds the knobs the CLI passes to configure_logging: verbosity, the
stderr stream and an optional rotating log file for long graph runs.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Level names accepted from the command line and saved sessions
_LEVEL_MAP: Dict[str, int] = {
    name: getattr(logging, name)
    for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
}
_LEVEL_MAP["WARN"] = logging.WARNING


@dataclass(frozen=True)
class LoggingConfig:
    """
    How nestify reports progress, unresolved imports and failures.

    Attributes:
        level: Level name; unknown names fall back to INFO.
        console: Write records to stderr, keeping stdout free for the mapping.
        log_file: Optional path of a rotating log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the active one.
        console_fmt: Format of stderr records.
        file_fmt: Format of log file records.
        datefmt: Timestamp format of log file records.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool, log_file: Optional[str] = None) -> LoggingConfig:
        """Settings for one CLI run: DEBUG traces every resolved import."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file)

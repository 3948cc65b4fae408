"""
Logging setup for docsearch entry points.

Library modules only create `logging.getLogger(__name__)` loggers; handlers
are installed here, once, by whatever runs the service (scripts, tests of
the real stack). Console output stays brief; the optional log file gets
the full DEBUG trail of ranking decisions.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

# Third-party loggers that flood DEBUG output while a model loads
NOISY_LOGGERS = ("sentence_transformers", "urllib3", "filelock", "huggingface_hub")


def setup_logging(
    log_file: Optional[str] = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Optional[Path]:
    """
    Replace root handlers with a console handler and, if asked, a log file.

    Args:
        log_file: Path of the log file; None logs to the console only.
            Rotated at 5MB, keeping 3 backups.
        console_level: Level for stdout
        file_level: Level for the file

    Returns:
        Path of the log file, or None without one
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    log_path = None
    levels = [console_level]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(file_handler)
        levels.append(file_level)

    root.setLevel(min(levels))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Logging configured (log file: {log_path or 'none'})")
    return log_path

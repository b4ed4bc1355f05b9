"""
Run logs for modulartype.

One log file per processed stylesheet, written to the logs directory the
caller passes in (the CLI uses `logs/` under the user config directory, see
`modulartype --show-config-dir`). File name:
modulartype_{stylesheet_name}_{timestamp}.log

The CLI reports errors on stderr itself, so nothing is logged to the console.
Only the newest KEEP_LOGS files are kept.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
KEEP_LOGS = 5


class ModularTypeLogger:
    """Class-level logger shared by the generator, engine and CLI.

    Calls are no-ops until setup_logger() has run, so library users who never
    set it up get no files and no output.
    """

    _logger: Optional[logging.Logger] = None
    _current_log_file: Optional[Path] = None

    @staticmethod
    def _prune(logs_dir: Path, keep: int) -> None:
        log_files = sorted(
            logs_dir.glob("modulartype_*.log"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        for old_log in log_files[keep:]:
            old_log.unlink(missing_ok=True)

    @classmethod
    def setup_logger(
        cls, stylesheet_path: str, logs_dir: Path, log_level: int = logging.INFO
    ) -> Path:
        """
        Start a log file for processing one stylesheet.

        Args:
            stylesheet_path: Stylesheet being processed, names the log file
            logs_dir: Directory for log files, created when missing
            log_level: Lowest level written to the file

        Returns:
            Path of the new log file
        """
        cls.cleanup()

        stylesheet_name = Path(stylesheet_path).stem
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:17]

        logs_dir.mkdir(parents=True, exist_ok=True)
        log_path = logs_dir / f"modulartype_{stylesheet_name}_{timestamp}.log"

        handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

        logger = logging.getLogger("modulartype")
        logger.setLevel(log_level)
        logger.propagate = False
        logger.addHandler(handler)

        cls._logger = logger
        cls._current_log_file = log_path
        logger.info(f"Processing {stylesheet_path}")

        # New file counts toward the kept logs
        cls._prune(logs_dir, KEEP_LOGS)
        return log_path

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        return cls._current_log_file

    @classmethod
    def info(cls, message: str) -> None:
        if cls._logger:
            cls._logger.info(message)

    @classmethod
    def error(cls, message: str) -> None:
        if cls._logger:
            cls._logger.error(message)

    @classmethod
    def debug(cls, message: str) -> None:
        if cls._logger:
            cls._logger.debug(message)

    @classmethod
    def success(cls, message: str) -> None:
        """Info-level message marked with a check mark"""
        if cls._logger:
            cls._logger.info(f"✓ {message}")

    @classmethod
    def cleanup(cls) -> None:
        """Close the log file and return to no-op mode"""
        if cls._logger:
            for handler in cls._logger.handlers[:]:
                cls._logger.removeHandler(handler)
                handler.close()
        cls._logger = None
        cls._current_log_file = None

"""
component_15_logging_config.py

Logging setup shared by every SRS module.

Handlers installed by setup_logging():
- console (coloured, INFO and above)
- logs/srs.log (rotating, DEBUG and above)
- logs/srs_errors.log (rotating, ERROR and above)
- logs/srs_performance.log (rotating, fed only by the "srs.performance" logger)

Structured context is passed through 'extra' and rendered as key=value
pairs after the message:

    from component_15_logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Shape inserted", extra={"shape_id": 3, "kind": "circle"})
    # [2026-10-16 10:00:00] [INFO    ] [component_42_shape_store] Shape inserted | shape_id=3 | kind=circle
"""

import logging
import logging.handlers
import os
import sys
import time
import traceback
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, Literal, MutableMapping, Optional, Tuple, Type

LOG_DIR: Path = Path(os.environ.get("SRS_LOG_DIR", "logs"))

DEFAULT_LOG_FILE: Path = LOG_DIR / "srs.log"
ERROR_LOG_FILE: Path = LOG_DIR / "srs_errors.log"
PERFORMANCE_LOG_FILE: Path = LOG_DIR / "srs_performance.log"

PERFORMANCE_LOGGER_NAME: str = "srs.performance"

CONSOLE_LOG_LEVEL: int = logging.INFO
FILE_LOG_LEVEL: int = logging.DEBUG

_MB = 1024 * 1024


class SRSLogFormatter(logging.Formatter):
    """
    "[time] [LEVEL] [logger] message | k=v | ..." formatter.

    The key=value suffix comes from the record's 'extra_info' dict, which
    StructuredLogger fills from the 'extra' argument.
    """

    COLORS: Dict[str, str] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = False, include_extra: bool = True) -> None:
        super().__init__(
            fmt="[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.use_colors = use_colors
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)

        extra_info = getattr(record, "extra_info", None)
        if self.include_extra and extra_info:
            text += " | " + " | ".join(f"{k}={v}" for k, v in extra_info.items())

        if self.use_colors:
            text = f"{self.COLORS.get(record.levelname, self.COLORS['RESET'])}{text}{self.COLORS['RESET']}"
        return text


class StructuredLogger(logging.LoggerAdapter):
    """Adapter that nests the caller's 'extra' dict under 'extra_info'."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.get("extra")
        if extra:
            kwargs["extra"] = {"extra_info": extra}
        return msg, kwargs

    def log_exception(self, exc: Exception, message: str = "", **context: Any) -> None:
        """Log exc at ERROR level with its traceback and the given context."""
        tb_text = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self.error(f"{message}: {type(exc).__name__}: {exc}\n{tb_text}", extra=context)


class PerformanceLogger:
    """
    Times a block and reports the duration.

    The duration goes to the wrapped logger at DEBUG and to the
    "srs.performance" logger at INFO. Failures are logged at ERROR and
    re-raised.

        with PerformanceLogger(logger.logger, "classify", shape_a=1, shape_b=2):
            engine.classify(a, b)
    """

    def __init__(self, logger: logging.Logger, operation_name: str, **context: Any) -> None:
        self.logger = logger
        self.operation_name = operation_name
        self.context: Dict[str, Any] = context
        self.start_time: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = time.perf_counter()
        self.logger.debug(
            f"START: {self.operation_name}", extra={"extra_info": self.context}
        )
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> Literal[False]:
        elapsed_ms = (time.perf_counter() - (self.start_time or 0.0)) * 1000
        info = {**self.context, "duration_ms": round(elapsed_ms, 3)}

        if exc_type is not None:
            info["error"] = str(exc_val)
            self.logger.error(
                f"FAILED: {self.operation_name} after {elapsed_ms:.2f}ms",
                extra={"extra_info": info},
            )
            return False

        self.logger.debug(
            f"END: {self.operation_name} ({elapsed_ms:.2f}ms)", extra={"extra_info": info}
        )
        logging.getLogger(PERFORMANCE_LOGGER_NAME).info(
            f"{self.operation_name}: {elapsed_ms:.2f}ms", extra={"extra_info": info}
        )
        return False


def _rotating_handler(
    path: Path, level: int, max_bytes: int, backup_count: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(SRSLogFormatter(use_colors=False))
    return handler


def setup_logging(
    console_level: int = CONSOLE_LOG_LEVEL,
    file_level: int = FILE_LOG_LEVEL,
    log_file: Optional[Path] = None,
    enable_performance_logging: bool = True,
) -> None:
    """
    (Re)configure the root logger and the performance logger.

    Calling it again replaces the previously installed handlers.

    Args:
        console_level: Minimum level printed to stdout
        file_level: Minimum level written to the main log file
        log_file: Main log file (default: logs/srs.log)
        enable_performance_logging: Write timings to logs/srs_performance.log
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    main_file = log_file or DEFAULT_LOG_FILE

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level)
    console.setFormatter(SRSLogFormatter(use_colors=True))
    root.addHandler(console)
    root.addHandler(_rotating_handler(main_file, file_level, 10 * _MB, 5))
    root.addHandler(_rotating_handler(ERROR_LOG_FILE, logging.ERROR, 5 * _MB, 3))

    perf = logging.getLogger(PERFORMANCE_LOGGER_NAME)
    perf.handlers.clear()
    perf.propagate = False
    if enable_performance_logging:
        perf.setLevel(logging.INFO)
        perf.addHandler(_rotating_handler(PERFORMANCE_LOG_FILE, logging.INFO, 5 * _MB, 3))
    else:
        perf.addHandler(logging.NullHandler())

    logging.getLogger("srs.logging_config").info(
        "Logging configured",
        extra={
            "extra_info": {
                "console_level": logging.getLevelName(console_level),
                "file_level": logging.getLevelName(file_level),
                "log_file": str(main_file),
                "performance_logging": enable_performance_logging,
            }
        },
    )


def get_logger(name: str) -> StructuredLogger:
    """StructuredLogger for a module (pass __name__)."""
    return StructuredLogger(logging.getLogger(name), {})


# Configure on first import unless the host application already did
if not logging.getLogger().handlers:
    setup_logging()

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_dir: Union[str, Path, None] = None,
) -> None:
    """Set up logging for the engine and its host application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
        log_dir: Directory for log files (defaults to config logging.dir)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            # JSON formatting for file logs
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_to_file:
        if log_dir is None:
            from ..core.defaults_loader import get_log_dir

            log_dir = get_log_dir()
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)

        app_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "app.log", maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        app_handler.setLevel(logging.INFO)
        app_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(app_handler)

        # Error-only log file
        error_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "errors.log", maxBytes=5 * 1024 * 1024, backupCount=10  # 5MB
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s - %(exc_info)s"
            )
        )
        root_logger.addHandler(error_handler)


def setup_logging_from_settings() -> None:
    """Configure logging from environment settings over the YAML ``logging`` section."""
    from ..core.config import get_settings

    setup_logging(**get_settings().logging_options())


def get_engine_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Get a structured logger for engine events.

    Args:
        name: Logger name (defaults to "mindsetu.engine")

    Returns:
        Structured logger
    """
    if name is None:
        name = "mindsetu.engine"
    return structlog.get_logger(name)


def log_engine_event(
    event: str,
    details: Dict[str, Any],
    logger: Optional[structlog.BoundLogger] = None,
) -> None:
    """Log a structured engine event (check-in resolved, habit completed, ...).

    Args:
        event: Event name
        details: Event-specific fields
        logger: Logger to use (creates one if not provided)
    """
    if logger is None:
        logger = get_engine_logger()

    logger.info(
        f"Engine event: {event}",
        engine_event=event,
        timestamp=datetime.now().isoformat(),
        **details,
    )

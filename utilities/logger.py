"""
Structured logging for the catalog service using structlog.
Provides JSON or console output and catalog event helpers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import structlog
from structlog.stdlib import LoggerFactory


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[Union[str, Path]] = None,
    debug: bool = False
) -> None:
    """
    Set up structured logging with configurable output formats.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        log_file: Optional log file path
        debug: Add call-site parameters to every event
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if log_file:
        log_path = Path(log_file).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        # one handler per file, however many times the app starts
        attached = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path
            for h in root_logger.handlers
        )
        if not attached:
            file_handler = logging.FileHandler(log_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter('%(message)s'))
            root_logger.addHandler(file_handler)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging system initialized",
        level=log_level,
        format=log_format,
        file=str(log_file) if log_file else None,
        debug=debug
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class CatalogLogger:
    """
    Logger for catalog lifecycle events with bound context.
    """

    def __init__(self, name: str = "catalog"):
        self.logger = structlog.get_logger(name)
        self.context = {}

    def bind_context(self, **kwargs) -> 'CatalogLogger':
        """
        Bind context variables to the logger.

        Args:
            **kwargs: Context variables to bind

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def log_book_added(self, book_id: int, title: str, author: str) -> None:
        self.logger.info(
            "Book added",
            book_id=book_id,
            title=title,
            author=author,
            **self.context
        )

    def log_borrowed(self, book_id: int) -> None:
        self.logger.info("Book borrowed", book_id=book_id, **self.context)

    def log_returned(self, book_id: int) -> None:
        self.logger.info("Book returned", book_id=book_id, **self.context)

    def log_transition_rejected(self, book_id: int, operation: str, reason: str) -> None:
        """Log a borrow or return that was refused."""
        self.logger.warning(
            "Book transition rejected",
            book_id=book_id,
            operation=operation,
            reason=reason,
            **self.context
        )

    def log_store_operation(self, operation: str, success: bool, count: Optional[int] = None) -> None:
        level = "debug" if success else "error"
        getattr(self.logger, level)(
            "Store operation",
            operation=operation,
            success=success,
            count=count,
            **self.context
        )

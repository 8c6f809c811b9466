"""Logging utilities for textplaque."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from textplaque.domain import Dimensions, ValidationReport


@dataclass
class RenderStats:
    """Statistics from one render."""

    contour_count: int = 0
    shape_count: int = 0
    hole_count: int = 0
    foreground_triangles: int = 0
    background_triangles: int = 0
    warnings: list[str] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate render duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("textplaque")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RenderLogger:
    """Logger for tracking render progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_render_start(self, text: str) -> None:
        """Log start of a render and reset statistics."""
        self._stats = RenderStats(start_time=time.time())
        self._logger.debug("Rendering text", text=text, length=len(text))

    def log_classification(self, contours: int, shapes: int, holes: int) -> None:
        """Log contour classification results."""
        self._stats.contour_count = contours
        self._stats.shape_count = shapes
        self._stats.hole_count = holes
        self._logger.debug(
            "Contour classification",
            contours=contours,
            shapes=shapes,
            holes=holes,
        )

    def log_validation(self, part: str, report: ValidationReport) -> None:
        """Log mesh validation findings for a part."""
        for warning in report.warnings:
            self._logger.warning("Mesh validation warning", part=part, warning=warning)
            self._stats.warnings.append(f"{part}: {warning}")

    def log_render_complete(
        self,
        foreground_triangles: int,
        background_triangles: int,
        dimensions: Dimensions,
    ) -> None:
        """Log successful render."""
        self._stats.end_time = time.time()
        self._stats.foreground_triangles = foreground_triangles
        self._stats.background_triangles = background_triangles
        self._logger.info(
            "Render complete",
            foreground_triangles=foreground_triangles,
            background_triangles=background_triangles,
            width=round(dimensions.width, 3),
            height=round(dimensions.height, 3),
            depth=round(dimensions.depth, 3),
            duration_ms=round(self._stats.duration_seconds * 1000, 2),
        )

    def log_render_error(self, text: str, error: Exception) -> None:
        """Log a failed render."""
        self._stats.end_time = time.time()
        self._logger.error(
            "Render failed",
            text=text,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> RenderStats:
        """Get statistics of the most recent render."""
        return self._stats

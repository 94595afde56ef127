"""
Logging configuration for pulse-stats.
Provides readable console output for the acquisition and aggregation steps,
with one summary line per served request.
"""
import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import StatisticsRecord


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for terminal formatting."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    WHITE = "\033[37m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_CYAN = "\033[96m"


# Short tags shown next to each module name
MODULE_TAGS = {
    "github_client": "fetch",
    "extraction": "parse",
    "api": "http ",
    "default": "     ",
}


class StatsFormatter(logging.Formatter):
    """
    Compact formatter: time, level, module tag and message on one line.
    Colors are only used when stdout is a terminal.
    """

    LEVEL_FORMATS = {
        logging.DEBUG: (Colors.DIM, "DEBUG"),
        logging.INFO: (Colors.BRIGHT_CYAN, "INFO "),
        logging.WARNING: (Colors.BRIGHT_YELLOW, "WARN "),
        logging.ERROR: (Colors.BRIGHT_RED, "ERROR"),
        logging.CRITICAL: (Colors.BOLD + Colors.BRIGHT_RED, "CRIT "),
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        color, level_text = self.LEVEL_FORMATS.get(
            record.levelno,
            (Colors.WHITE, record.levelname[:5])
        )

        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        module = record.name.split(".")[-1] if record.name else "root"
        tag = MODULE_TAGS.get(module, MODULE_TAGS["default"])

        if self.use_colors:
            level_str = f"{color}{level_text}{Colors.RESET}"
            time_str = f"{Colors.DIM}{timestamp}{Colors.RESET}"
            module_str = f"{Colors.BRIGHT_BLUE}{module:14}{Colors.RESET}"
            formatted = f"{time_str} | {level_str} | {tag} {module_str} | {record.getMessage()}"
        else:
            formatted = f"{timestamp} | {level_text} | {tag} {module:14} | {record.getMessage()}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    use_colors: bool = True
) -> None:
    """
    Configure logging for the service.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        use_colors: Whether to use ANSI colors in console output
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(StatsFormatter(use_colors=use_colors))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(StatsFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def log_request_summary(
    record: "StatisticsRecord",
    logger: logging.Logger,
    duration_ms: Optional[float] = None,
    output_format: str = "json",
) -> None:
    """Log how many statistics fields a request managed to populate."""
    populated = record.populated_fields()
    total = len(type(record).model_fields)
    duration_str = f" in {duration_ms:.0f}ms" if duration_ms is not None else ""
    summary = f"Served {output_format} with {len(populated)}/{total} fields{duration_str}"

    if len(populated) == total:
        logger.info(summary)
    else:
        missing = [name for name in type(record).model_fields if name not in populated]
        logger.warning(f"{summary}; missing: {', '.join(missing)}")

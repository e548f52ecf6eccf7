"""Colorful console logging formatter."""

import logging
import re
import sys
from datetime import datetime

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

# Log level colors
LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "sshsession_mcp.server": COLORS["bright_cyan"],
    "sshsession_mcp.services.pool": COLORS["bright_magenta"],
    "sshsession_mcp.services.manager": COLORS["bright_magenta"],
    "sshsession_mcp.services.dispatcher": COLORS["bright_blue"],
    "sshsession_mcp.tools": COLORS["bright_blue"],
    "sshsession_mcp.middleware": COLORS["yellow"],
    "sshsession_mcp.config": COLORS["green"],
    "default": COLORS["white"],
}

_PREFIX = "sshsession_mcp."
_SSH_TARGET = re.compile(r"(\w[\w.\-]*@[\w.\-]+:\d+)")
_DURATION = re.compile(r"(\d+\.?\d*ms)")
_POOL_SIZE = re.compile(r"(pool_size=\d+)")


class ColorfulFormatter(logging.Formatter):
    """Log formatter with fixed-width columns and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        """Get color for a logger name/component."""
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt:%H:%M:%S}.{int(record.msecs):03d} {dt:%m/%d}"

    def _format_level(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(_PREFIX):
            name = name[len(_PREFIX):]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<22}", color)

    def _highlight_message(self, message: str) -> str:
        """Highlight user@host:port targets, durations and pool sizes."""
        if not self.use_colors:
            return message
        message = _SSH_TARGET.sub(
            f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message
        )
        message = _DURATION.sub(
            f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message
        )
        return _POOL_SIZE.sub(f"{COLORS['cyan']}\\1{COLORS['reset']}", message)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


# Third-party loggers kept at WARNING
NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "asyncssh",
    "httpx",
    "httpcore",
    "fastmcp",
    "starlette",
    "anyio",
)


def configure_logging(
    level: str | None = None,
    use_colors: bool = True,
    default_level: str = "INFO",
) -> None:
    """Attach a ColorfulFormatter handler to the sshsession_mcp logger.

    Args:
        level: Level name from settings; ``default_level`` applies when None
        use_colors: ANSI colors, forced off when stderr is not a tty
        default_level: Level used when ``level`` is unset

    Safe to call more than once; the level is reapplied each time.
    """
    log_level = (level or default_level).upper()
    if not sys.stderr.isatty():
        use_colors = False

    package_logger = logging.getLogger("sshsession_mcp")
    package_logger.setLevel(getattr(logging, log_level, logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

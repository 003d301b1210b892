import logging
import os
import sys

# Import Rich components
from rich.console import Console
from rich.text import Text
from rich.logging import RichHandler

# --- 1. Custom Log Level and Subclassed Logger ---
# Define the custom level (must be done before setting LoggerClass)
SECTION_LEVEL_NUM = 25
logging.addLevelName(SECTION_LEVEL_NUM, 'SECTION')

# Console levels indexed by verbosity; anything above the last entry is DEBUG
VERBOSITY_LEVELS = (
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)


class AppLogger(logging.Logger):
    """
    Subclasses logging.Logger to add a custom method for the SECTION level.
    """

    def section(self, msg, *args, **kwargs):
        """Logs a message at the SECTION level."""
        if self.isEnabledFor(SECTION_LEVEL_NUM):
            self._log(SECTION_LEVEL_NUM, msg, args, **kwargs)


# Set the custom logger class globally
logging.setLoggerClass(AppLogger)


def verbosity_to_level(verbosity: int, verbose: bool = False) -> int:
    """Maps a verbosity count to a logging level. `verbose` always wins with DEBUG."""
    if verbose:
        return logging.DEBUG
    index = min(max(verbosity, 0), len(VERBOSITY_LEVELS) - 1)
    return VERBOSITY_LEVELS[index]


# --- 2. File Formatter (For consistent file structure) ---
class FileFormatter(logging.Formatter):
    """
    Detailed formatter for file output.
    """

    def format(self, record):
        # Prepare fixed-width attributes for consistent file structure
        record.levelname_fixed = f"{record.levelname:<9}"
        record.name_fixed = f"{record.name:<15}"
        record.filename_fixed = f"{record.filename:<20}"
        record.lineno_fixed = f"{record.lineno:<5}"

        fmt = '%(asctime)s - %(levelname_fixed)s - %(name_fixed)s - %(filename_fixed)s:%(lineno_fixed)s - %(message)s'
        self._style._fmt = fmt

        return super().format(record)


# --- 3. RichAppLogger Wrapper (Focuses on TUI presentation) ---
class RichAppLogger:
    """
    Manages TUI output via Rich Console and wraps the AppLogger instance.
    """

    def __init__(self, console: Console, logger: AppLogger):
        self.console = console
        self.logger: AppLogger = logger

    @property
    def console_level(self) -> int:
        for handler in self.logger.handlers:
            if isinstance(handler, RichHandler):
                return handler.level
        return logging.NOTSET

    @property
    def log_file(self):
        """Path of the log file, or None when file logging is disabled."""
        for handler in self.logger.handlers:
            if isinstance(handler, logging.FileHandler):
                return handler.baseFilename
        return None

    def section(self, message: str, *args, **kwargs):
        """Logs a message with the custom SECTION level and prints a styled header to TUI."""
        console_msg = Text(f"SECTION: {message}", style="bold yellow")
        self.console.print(console_msg)

        self.logger.section(f"SECTION: {message}", *args, **kwargs)

    # --- Standard Logging Wrappers (Simple pass-through to logger) ---

    def info(self, message, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def warning(self, message, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def error(self, message, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    def debug(self, message, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)

    def critical(self, message, *args, **kwargs):
        self.logger.critical(message, *args, **kwargs)

    def exception(self, message, *args, **kwargs):
        """Logs an ERROR with traceback and prints a rich traceback to the console."""
        self.logger.exception(message, *args, **kwargs)
        self.console.print(f"[bold red]FATAL ERROR: {message}[/bold red]")
        self.console.print_exception(show_locals=False)

    def close(self):
        """Detaches and closes every handler (releases the log file)."""
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            handler.close()


# --- 4. Custom Filter to Exclude SECTION Level ---

class SectionFilter(logging.Filter):
    """
    Excludes SECTION records from the console handler, since section() already
    prints its own styled header.
    """
    def filter(self, record):
        return record.levelno != SECTION_LEVEL_NUM


# --- 5. Initialization Routine ---
def initialize_app_logger(
    app_name: str,
    log_directory: str = "logs",
    log_file_name: str = "application.log",
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.INFO,
    enable_file: bool = True,
    append_file: bool = True,
) -> RichAppLogger:
    """
    Initializes and configures the AppLogger for file output and Rich Console for TUI.

    The file handler is only attached when `enable_file` is set; `append_file`
    selects append mode over truncating an existing log file.
    """
    logger: AppLogger = logging.getLogger(app_name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    # 1. File Handler Setup
    if enable_file:
        os.makedirs(log_directory, exist_ok=True)
        log_file_path = os.path.join(log_directory, log_file_name)

        file_handler = logging.FileHandler(log_file_path, mode='a' if append_file else 'w', encoding='utf-8')
        file_handler.setLevel(file_log_level)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)

    # 2. Rich Console Setup
    console = Console(file=sys.stderr, soft_wrap=True)

    # 3. Rich Handler Setup (For standard logs: INFO, WARNING, ERROR, etc.)
    stream_handler = RichHandler(
        console=console,
        show_time=False,
        show_level=True,
        show_path=False,
        keywords=[],
        level=console_log_level
    )
    stream_handler.addFilter(SectionFilter())
    logger.addHandler(stream_handler)

    # 4. Instantiate and return the wrapper
    return RichAppLogger(console, logger)
